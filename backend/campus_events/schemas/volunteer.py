"""
Pydantic schemas for volunteer assignments.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ValidationInfo, field_validator

from campus_events.models.enums import VolunteerStatus
from campus_events.schemas.validation import as_utc, require_after


class VolunteerCreate(BaseModel):
    user_id: int = Field(..., gt=0)
    event_id: int = Field(..., gt=0)
    role: str = Field(..., min_length=2, max_length=100)
    responsibilities: list[str] = Field(default_factory=list)
    shift_start: Optional[datetime] = None
    shift_end: Optional[datetime] = None
    status: VolunteerStatus = VolunteerStatus.PENDING
    notes: Optional[str] = None

    @field_validator("shift_start")
    @classmethod
    def normalize_start(cls, value: Optional[datetime]) -> Optional[datetime]:
        return None if value is None else as_utc(value)

    @field_validator("shift_end")
    @classmethod
    def end_after_start(cls, value: Optional[datetime], info: ValidationInfo) -> Optional[datetime]:
        if value is None:
            return None
        return require_after(as_utc(value), info.data.get("shift_start"), "Shift end", "Shift start")


class VolunteerUpdate(BaseModel):
    status: Optional[VolunteerStatus] = None
    hours_worked: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None


class VolunteerResponse(BaseModel):
    id: int
    user_id: int
    event_id: int
    role: str
    responsibilities: list[str]
    shift_start: Optional[datetime]
    shift_end: Optional[datetime]
    status: str
    hours_worked: float
    notes: Optional[str]

    model_config = {"from_attributes": True}
