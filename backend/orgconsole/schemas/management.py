"""Management record schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ManagementIn(BaseModel):
    """Full record body for create and update."""
    name: str = Field(min_length=1, max_length=200)
    position: str = Field(min_length=1, max_length=100)
    division: str | None = None
    email: str | None = None
    phone: str | None = None
    photo: str | None = None
    period_id: str | None = None
    order: int = 0


class ManagementOut(ManagementIn):
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
