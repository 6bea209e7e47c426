"""
Pydantic schemas for event-related request/response validation.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from campus_events.models.enums import EventStatus
from campus_events.schemas.budget import BudgetSummary
from campus_events.schemas.validation import reject_bool, require_after, require_future


class EventCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=100)
    description: str = Field(..., min_length=10)
    location: str = Field(..., min_length=3, max_length=255)
    start_date: datetime
    end_date: datetime
    capacity: int = Field(..., gt=0)
    price: float = Field(0, ge=0)
    category: str = Field(..., min_length=1, max_length=50)
    image_url: Optional[str] = Field(None, max_length=500)
    status: EventStatus = EventStatus.PUBLISHED

    @field_validator("capacity", mode="before")
    @classmethod
    def capacity_not_bool(cls, value):
        return reject_bool(value)

    @field_validator("start_date")
    @classmethod
    def start_in_future(cls, value: datetime) -> datetime:
        return require_future(value, "Start date")

    @field_validator("end_date")
    @classmethod
    def end_in_future_and_after_start(cls, value: datetime, info: ValidationInfo) -> datetime:
        value = require_future(value, "End date")
        return require_after(value, info.data.get("start_date"), "End date", "Start date")

    @field_validator("status")
    @classmethod
    def creatable_status(cls, value: EventStatus) -> EventStatus:
        if value not in (EventStatus.DRAFT, EventStatus.PUBLISHED):
            raise PydanticCustomError("status_not_creatable", "New events must be draft or published")
        return value


class EventUpdate(BaseModel):
    """Partial update; only the fields present in the payload are applied."""

    title: Optional[str] = Field(None, min_length=3, max_length=100)
    description: Optional[str] = Field(None, min_length=10)
    location: Optional[str] = Field(None, min_length=3, max_length=255)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    capacity: Optional[int] = Field(None, gt=0)
    price: Optional[float] = Field(None, ge=0)
    category: Optional[str] = Field(None, min_length=1, max_length=50)
    image_url: Optional[str] = Field(None, max_length=500)
    status: Optional[EventStatus] = None

    @field_validator("capacity", mode="before")
    @classmethod
    def capacity_not_bool(cls, value):
        return reject_bool(value)

    @field_validator("start_date")
    @classmethod
    def start_in_future(cls, value: Optional[datetime]) -> Optional[datetime]:
        return None if value is None else require_future(value, "Start date")

    @field_validator("end_date")
    @classmethod
    def end_in_future_and_after_start(cls, value: Optional[datetime], info: ValidationInfo) -> Optional[datetime]:
        if value is None:
            return None
        value = require_future(value, "End date")
        return require_after(value, info.data.get("start_date"), "End date", "Start date")


class EventResponse(BaseModel):
    id: int
    organizer_id: int
    title: str
    description: str
    location: str
    start_date: datetime
    end_date: datetime
    capacity: int
    price: float
    category: str
    image_url: Optional[str]
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class EventOverview(BaseModel):
    """Organizer dashboard numbers for one event."""

    event: EventResponse
    registrations_by_status: dict[str, int]
    active_registrations: int
    checked_in: int
    capacity: int
    utilization_percent: float
    revenue: float
    budget: BudgetSummary
