"""
Notification inbox and announcement endpoints.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.security import get_current_user
from campus_events.db.session import get_db
from campus_events.models.user import User
from campus_events.schemas.notification import NotificationCreate, NotificationResponse
from campus_events.schemas.validation import validated
from campus_events.services import notification_service
from campus_events.services.authorization import Action, ensure_allowed

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("")
async def list_notifications_endpoint(
    unread_only: bool = Query(False),
    limit: Optional[int] = Query(None, ge=1, le=200),
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    notifications, unread_count = await notification_service.list_user_notifications(
        db, current_user, unread_only=unread_only, limit=limit
    )
    return {
        "notifications": [NotificationResponse.model_validate(n) for n in notifications],
        "unread_count": unread_count,
    }


@router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_notification_endpoint(
    payload: Any = Body(None),
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Send to one user, or announce to an audience. Admins and organizers only."""
    ensure_allowed(current_user, Action.BROADCAST_NOTIFICATION)
    data = validated(NotificationCreate, payload)
    created = await notification_service.send_notification(db, current_user, data)
    return {
        "message": "Notification sent successfully",
        "notifications": [NotificationResponse.model_validate(n) for n in created],
        "count": len(created),
    }


@router.patch("/read/{notification_id}")
async def mark_read_endpoint(
    notification_id: int,
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    notification = await notification_service.mark_read(db, current_user, notification_id)
    return {
        "message": "Notification marked as read",
        "notification": NotificationResponse.model_validate(notification),
    }


@router.post("/read-all")
async def mark_all_read_endpoint(
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    count = await notification_service.mark_all_read(db, current_user)
    return {"message": "All notifications marked as read", "count": count}
