"""Health check endpoint with store connectivity check."""

from typing import Annotated

from fastapi import Depends

from casedesk.api.auth import get_app_settings
from casedesk.core.config import Settings
from casedesk.core.database import Store, get_store
from casedesk.schemas.health import HealthResponse


def get_health(
    store: Annotated[Store, Depends(get_store)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    db_status = "connected" if store.check_connected() else "disconnected"

    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database=db_status,
    )
