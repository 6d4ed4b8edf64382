"""Response schemas for case endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CaseOut(BaseModel):
    """A case as returned by GET /api/cases."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    title: str
    category: str
    description: str
    image: str = Field(
        default="",
        validation_alias="image_path",
        description="Public path of the uploaded image, empty when none.",
    )
    owner_id: str
    created_at: datetime
