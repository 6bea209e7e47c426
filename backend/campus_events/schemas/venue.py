"""
Pydantic schemas for venues and venue bookings.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ValidationInfo, field_validator

from campus_events.models.enums import BookingStatus, BookingPaymentStatus
from campus_events.schemas.validation import reject_bool, require_after, require_future


class VenueCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=200)
    address: str = Field(..., min_length=5, max_length=500)
    capacity: int = Field(..., gt=0)
    facilities: list[str] = Field(default_factory=list)
    contact_info: str = Field(..., min_length=5, max_length=255)
    cost_per_hour: float = Field(..., ge=0)
    rating: Optional[float] = Field(None, ge=0, le=5)

    @field_validator("capacity", mode="before")
    @classmethod
    def capacity_not_bool(cls, value):
        return reject_bool(value)


class VenueResponse(BaseModel):
    id: int
    name: str
    address: str
    capacity: int
    facilities: list[str]
    contact_info: str
    cost_per_hour: float
    rating: Optional[float]

    model_config = {"from_attributes": True}


class VenueBookingCreate(BaseModel):
    venue_id: int = Field(..., gt=0)
    event_id: int = Field(..., gt=0)
    booking_start: datetime
    booking_end: datetime
    status: BookingStatus = BookingStatus.PENDING
    payment_status: BookingPaymentStatus = BookingPaymentStatus.PENDING
    notes: Optional[str] = None

    @field_validator("booking_start")
    @classmethod
    def start_in_future(cls, value: datetime) -> datetime:
        return require_future(value, "Booking start time")

    @field_validator("booking_end")
    @classmethod
    def end_in_future_and_after_start(cls, value: datetime, info: ValidationInfo) -> datetime:
        value = require_future(value, "Booking end time")
        return require_after(value, info.data.get("booking_start"), "Booking end time", "Booking start time")


class VenueBookingResponse(BaseModel):
    id: int
    venue_id: int
    event_id: int
    booking_start: datetime
    booking_end: datetime
    status: str
    total_cost: float
    payment_status: str
    notes: Optional[str]

    model_config = {"from_attributes": True}
