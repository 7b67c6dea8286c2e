"""Period schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

PeriodStatus = Literal["ACTIVE", "INACTIVE"]


class PeriodIn(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    start_year: int
    end_year: int
    status: PeriodStatus = "ACTIVE"
    description: str | None = None

    @model_validator(mode="after")
    def _check_years(self) -> "PeriodIn":
        if self.end_year < self.start_year:
            raise ValueError("end_year must not be before start_year")
        return self


class PeriodOut(PeriodIn):
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime | None = None


class BulkDeleteRequest(BaseModel):
    ids: list[str] = Field(min_length=1)
