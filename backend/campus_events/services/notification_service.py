"""
Notification service: the best-effort emitter used after other mutations,
plus the user-facing inbox operations.

The emitter writes through its own session so that a failed insert can never
roll back or fail the mutation that triggered it. It runs after that
mutation has committed, does not retry, and only logs and counts failures.
"""

from typing import Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from campus_events.core.errors import DomainRejection, RejectionReason
from campus_events.core.logging import get_logger
from campus_events.core.metrics import record_notification
from campus_events.db.session import get_session_factory
from campus_events.models.enums import NotificationType, TargetAudience, UserRole
from campus_events.models.notification import Notification
from campus_events.models.user import User
from campus_events.schemas.notification import NotificationCreate
from campus_events.schemas.validation import field_values
from campus_events.services.authorization import Action, ensure_allowed
from campus_events.stores import notifications as notification_store
from campus_events.stores import users as user_store
from campus_events.stores.base import StoreFailure

logger = get_logger(__name__)

AUDIENCE_ROLES: dict[TargetAudience, Optional[tuple[str, ...]]] = {
    TargetAudience.ALL: None,
    TargetAudience.PARTICIPANTS: (UserRole.PARTICIPANT.value,),
    TargetAudience.ORGANIZERS: (UserRole.ORGANIZER.value,),
    TargetAudience.SPONSORS: (UserRole.SPONSOR.value,),
    TargetAudience.STAFF: (UserRole.ADMIN.value, UserRole.ORGANIZER.value),
}


class NotificationEmitter:
    """Fire-and-forget notification writes triggered by other mutations."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def emit(
        self,
        user_id: int,
        title: str,
        message: str,
        type: NotificationType = NotificationType.INFO,
        event_id: Optional[int] = None,
    ) -> Optional[Notification]:
        fields = {
            "user_id": user_id,
            "title": title,
            "message": message,
            "type": type.value,
            "read": False,
            "event_id": event_id,
        }
        try:
            async with self._session_factory() as session:
                result = await notification_store.create_notification(session, fields)
        except Exception as e:
            # Never propagate: the triggering mutation already succeeded
            record_notification(emitted=False)
            logger.error("notification_emit_failed", user_id=user_id, title=title, error=str(e))
            return None

        if isinstance(result, StoreFailure):
            record_notification(emitted=False)
            logger.warning(
                "notification_emit_failed",
                user_id=user_id,
                title=title,
                code=result.code,
                error=result.message,
            )
            return None

        record_notification(emitted=True)
        logger.info("notification_emitted", notification_id=result.id, user_id=user_id, title=title)
        return result


async def list_user_notifications(
    db: AsyncSession, current_user: Optional[User], unread_only: bool = False, limit: Optional[int] = None
) -> tuple[list[Notification], int]:
    """The user's notifications (newest first) and how many are unread."""
    user = ensure_allowed(current_user, Action.VIEW_OWN)
    notifications = await notification_store.list_notifications(db, user.id, unread_only=unread_only, limit=limit)
    unread_count = await notification_store.count_unread_notifications(db, user.id)
    return notifications, unread_count


async def _audience_user_ids(db: AsyncSession, data: NotificationCreate) -> list[int]:
    if data.event_id is not None and data.target_audience in (None, TargetAudience.PARTICIPANTS):
        users = await user_store.list_event_participants(db, data.event_id)
    else:
        audience = data.target_audience or TargetAudience.ALL
        users = await user_store.list_users(db, roles=AUDIENCE_ROLES[audience])
    return [user.id for user in users]


async def send_notification(
    db: AsyncSession, current_user: Optional[User], data: NotificationCreate
) -> list[Notification]:
    """
    Send a notification on behalf of an admin or organizer.

    With `user_id` one row is created for that user. Without it the message is
    an announcement fanned out to every user of `target_audience`; an
    `event_id` alone targets that event's registered participants.
    """
    user = ensure_allowed(current_user, Action.BROADCAST_NOTIFICATION)
    base = field_values(data)

    if data.user_id is not None:
        recipient = await user_store.get_user(db, data.user_id)
        if isinstance(recipient, StoreFailure):
            raise DomainRejection(RejectionReason.NOT_FOUND, "Recipient not found")
        created = await notification_store.create_notification(db, {**base, "read": False, "is_announcement": False})
        if isinstance(created, StoreFailure):
            raise DomainRejection(RejectionReason.CONSTRAINT_VIOLATION, created.message)
        logger.info("notification_sent", sender_id=user.id, recipient_id=data.user_id, notification_id=created.id)
        return [created]

    recipient_ids = await _audience_user_ids(db, data)
    rows = [
        {**base, "user_id": recipient_id, "read": False, "is_announcement": True}
        for recipient_id in recipient_ids
    ]
    if not rows:
        logger.info("announcement_no_recipients", sender_id=user.id, audience=base.get("target_audience"))
        return []

    created = await notification_store.create_notifications(db, rows)
    if isinstance(created, StoreFailure):
        raise DomainRejection(RejectionReason.CONSTRAINT_VIOLATION, created.message)
    logger.info(
        "announcement_sent",
        sender_id=user.id,
        audience=base.get("target_audience"),
        event_id=data.event_id,
        recipients=len(created),
    )
    return created


async def mark_read(db: AsyncSession, current_user: Optional[User], notification_id: int) -> Notification:
    ensure_allowed(current_user, Action.VIEW_OWN)
    notification = await notification_store.get_notification(db, notification_id)
    if isinstance(notification, StoreFailure):
        raise DomainRejection(RejectionReason.NOT_FOUND, "Notification not found")

    ensure_allowed(current_user, Action.READ_NOTIFICATION, notification)

    updated = await notification_store.mark_notification_read(db, notification_id)
    if isinstance(updated, StoreFailure):
        raise DomainRejection(RejectionReason.NOT_FOUND, "Notification not found")
    return updated


async def mark_all_read(db: AsyncSession, current_user: Optional[User]) -> int:
    user = ensure_allowed(current_user, Action.VIEW_OWN)
    user_id = user.id
    changed = await notification_store.mark_all_notifications_read(db, user_id)
    logger.info("notifications_marked_read", user_id=user_id, count=len(changed))
    return len(changed)


def get_notification_emitter(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> NotificationEmitter:
    """FastAPI dependency; the emitter never shares the request's session."""
    return NotificationEmitter(session_factory)
