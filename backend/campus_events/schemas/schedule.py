"""
Pydantic schemas for schedule items.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ValidationInfo, field_validator

from campus_events.models.enums import ScheduleStatus
from campus_events.schemas.validation import as_utc, require_after


class ScheduleItemCreate(BaseModel):
    event_id: int = Field(..., gt=0)
    title: str = Field(..., min_length=3, max_length=200)
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime
    location: Optional[str] = Field(None, max_length=255)
    speaker: Optional[str] = Field(None, max_length=200)
    category: Optional[str] = Field(None, max_length=50)
    priority: Optional[int] = Field(None, ge=1, le=5)
    status: ScheduleStatus = ScheduleStatus.PLANNED

    @field_validator("start_time")
    @classmethod
    def normalize_start(cls, value: datetime) -> datetime:
        return as_utc(value)

    @field_validator("end_time")
    @classmethod
    def end_after_start(cls, value: datetime, info: ValidationInfo) -> datetime:
        return require_after(as_utc(value), info.data.get("start_time"), "End time", "Start time")


class ScheduleItemUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=3, max_length=200)
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    location: Optional[str] = Field(None, max_length=255)
    speaker: Optional[str] = Field(None, max_length=200)
    category: Optional[str] = Field(None, max_length=50)
    priority: Optional[int] = Field(None, ge=1, le=5)
    status: Optional[ScheduleStatus] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize(cls, value: Optional[datetime]) -> Optional[datetime]:
        return None if value is None else as_utc(value)


class ScheduleItemResponse(BaseModel):
    id: int
    event_id: int
    title: str
    description: Optional[str]
    start_time: datetime
    end_time: datetime
    location: Optional[str]
    speaker: Optional[str]
    category: Optional[str]
    priority: Optional[int]
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}
