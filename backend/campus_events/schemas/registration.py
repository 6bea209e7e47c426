"""
Pydantic schemas for registration request/response validation.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from campus_events.models.enums import PaymentStatus


class RegistrationCreate(BaseModel):
    event_id: int = Field(..., gt=0)
    ticket_type: str = Field(..., min_length=1, max_length=50)
    amount_paid: float = Field(0, ge=0)
    payment_status: PaymentStatus = PaymentStatus.COMPLETED
    special_requirements: Optional[str] = Field(None, max_length=1000)


class RegistrationResponse(BaseModel):
    id: int
    user_id: int
    event_id: int
    registration_date: datetime
    status: str
    payment_status: str
    ticket_type: str
    amount_paid: float
    special_requirements: Optional[str]
    check_in_status: bool
    check_in_time: Optional[datetime]
    created_at: datetime

    model_config = {"from_attributes": True}
