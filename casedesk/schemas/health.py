"""Response schema for GET /health."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus the result of Store.check_connected()."""

    status: Literal["ok"] = "ok"
    environment: str = Field(description="APP_ENV the service runs with (dev or prod)")
    database: Literal["connected", "disconnected"] = Field(
        description="Whether a SELECT 1 against the store succeeded for this request",
    )
