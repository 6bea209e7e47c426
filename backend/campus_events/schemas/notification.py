"""
Pydantic schemas for notification request/response validation.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from campus_events.models.enums import NotificationType, TargetAudience


class NotificationCreate(BaseModel):
    """Either addressed to one `user_id` or fanned out to a `target_audience`."""

    user_id: Optional[int] = Field(None, gt=0)
    title: str = Field(..., min_length=2, max_length=200)
    message: str = Field(..., min_length=5)
    type: NotificationType
    event_id: Optional[int] = Field(None, gt=0)
    target_audience: Optional[TargetAudience] = None
    expiry_date: Optional[datetime] = None


class NotificationResponse(BaseModel):
    id: int
    user_id: Optional[int]
    title: str
    message: str
    type: str
    read: bool
    event_id: Optional[int]
    is_announcement: bool
    target_audience: Optional[str]
    expiry_date: Optional[datetime]
    created_at: datetime

    model_config = {"from_attributes": True}
