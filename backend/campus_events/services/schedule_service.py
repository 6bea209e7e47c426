"""
Event agenda: schedule items owned through their event.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.errors import DomainRejection, RejectionReason, ValidationFailed
from campus_events.core.logging import get_logger
from campus_events.models.schedule import ScheduleItem
from campus_events.models.user import User
from campus_events.schemas.schedule import ScheduleItemCreate, ScheduleItemUpdate
from campus_events.schemas.validation import FieldIssue, as_utc, field_values
from campus_events.services.authorization import Action, ensure_allowed
from campus_events.stores import events as event_store
from campus_events.stores import schedules as schedule_store
from campus_events.stores.base import StoreFailure

logger = get_logger(__name__)


async def _load_item(db: AsyncSession, item_id: int) -> ScheduleItem:
    item = await schedule_store.get_schedule_item(db, item_id)
    if isinstance(item, StoreFailure):
        raise DomainRejection(RejectionReason.NOT_FOUND, "Schedule item not found")
    return item


async def list_schedule(db: AsyncSession, event_id: int) -> list[ScheduleItem]:
    event = await event_store.get_event(db, event_id)
    if isinstance(event, StoreFailure):
        raise DomainRejection(RejectionReason.EVENT_NOT_FOUND)
    return await schedule_store.list_schedule_items(db, event_id)


async def create_schedule_item(
    db: AsyncSession, current_user: Optional[User], data: ScheduleItemCreate
) -> ScheduleItem:
    ensure_allowed(current_user, Action.VIEW_OWN)
    event = await event_store.get_event(db, data.event_id)
    if isinstance(event, StoreFailure):
        raise DomainRejection(RejectionReason.EVENT_NOT_FOUND)
    ensure_allowed(current_user, Action.MANAGE_SCHEDULE, event)

    item = await schedule_store.create_schedule_item(db, field_values(data))
    if isinstance(item, StoreFailure):
        raise DomainRejection(RejectionReason.CONSTRAINT_VIOLATION, item.message)

    logger.info("schedule_item_created", schedule_item_id=item.id, event_id=item.event_id)
    return item


async def update_schedule_item(
    db: AsyncSession, current_user: Optional[User], item_id: int, data: ScheduleItemUpdate
) -> ScheduleItem:
    ensure_allowed(current_user, Action.VIEW_OWN)
    item = await _load_item(db, item_id)
    ensure_allowed(current_user, Action.MANAGE_SCHEDULE, item)

    changes = {key: value for key, value in field_values(data, only_set=True).items() if value is not None}
    if "start_time" in changes or "end_time" in changes:
        start = as_utc(changes.get("start_time") or item.start_time)
        end = as_utc(changes.get("end_time") or item.end_time)
        if end <= start:
            raise ValidationFailed([FieldIssue("end_time", "End time must be after start time")])

    updated = await schedule_store.update_schedule_item(db, item_id, changes)
    if isinstance(updated, StoreFailure):
        raise DomainRejection(RejectionReason.CONSTRAINT_VIOLATION, updated.message)

    logger.info("schedule_item_updated", schedule_item_id=item_id, fields=sorted(changes))
    return updated


async def delete_schedule_item(db: AsyncSession, current_user: Optional[User], item_id: int) -> int:
    ensure_allowed(current_user, Action.VIEW_OWN)
    item = await _load_item(db, item_id)
    ensure_allowed(current_user, Action.MANAGE_SCHEDULE, item)

    deleted = await schedule_store.delete_schedule_item(db, item_id)
    if isinstance(deleted, StoreFailure):
        raise DomainRejection(RejectionReason.NOT_FOUND, "Schedule item not found")

    logger.info("schedule_item_deleted", schedule_item_id=item_id)
    return item_id
