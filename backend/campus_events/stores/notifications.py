"""
Notification queries and mutations.
"""

from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.db.base import utcnow
from campus_events.models.notification import Notification
from campus_events.stores.base import StoreFailure, apply_changes, insert, not_found, store_operation


@store_operation
async def get_notification(db: AsyncSession, notification_id: int) -> Notification | StoreFailure:
    notification = await db.get(Notification, notification_id)
    return notification if notification is not None else not_found("Notification", notification_id)


@store_operation
async def list_notifications(
    db: AsyncSession,
    user_id: int,
    unread_only: bool = False,
    limit: Optional[int] = None,
) -> list[Notification]:
    """A user's notifications, newest first."""
    query = select(Notification).where(Notification.user_id == user_id)
    if unread_only:
        query = query.where(Notification.read.is_(False))
    query = query.order_by(Notification.created_at.desc(), Notification.id.desc())
    if limit:
        query = query.limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())


@store_operation
async def count_unread_notifications(db: AsyncSession, user_id: int) -> int:
    result = await db.execute(
        select(func.count())
        .select_from(Notification)
        .where(Notification.user_id == user_id, Notification.read.is_(False))
    )
    return result.scalar_one()


@store_operation
async def create_notification(db: AsyncSession, fields: dict) -> Notification | StoreFailure:
    now = utcnow()
    return await insert(db, Notification(**fields, created_at=now, updated_at=now))


@store_operation
async def create_notifications(db: AsyncSession, rows: list[dict]) -> list[Notification] | StoreFailure:
    """Insert several notifications in one commit (audience fan-out)."""
    now = utcnow()
    notifications = [Notification(**fields, created_at=now, updated_at=now) for fields in rows]
    db.add_all(notifications)
    await db.commit()
    for notification in notifications:
        await db.refresh(notification)
    return notifications


@store_operation
async def mark_notification_read(db: AsyncSession, notification_id: int) -> Notification | StoreFailure:
    notification = await db.get(Notification, notification_id)
    if notification is None:
        return not_found("Notification", notification_id)
    return await apply_changes(db, notification, {"read": True})


@store_operation
async def mark_all_notifications_read(db: AsyncSession, user_id: int) -> list[int]:
    """Flip every unread notification of the user; returns the ids changed."""
    result = await db.execute(
        update(Notification)
        .where(Notification.user_id == user_id, Notification.read.is_(False))
        .values(read=True, updated_at=utcnow())
        .returning(Notification.id)
        .execution_options(synchronize_session=False)
    )
    ids = list(result.scalars().all())
    await db.commit()
    return ids
