"""
Schedule item queries and mutations.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.db.base import utcnow
from campus_events.models.schedule import ScheduleItem
from campus_events.stores.base import StoreFailure, apply_changes, insert, not_found, store_operation


@store_operation
async def get_schedule_item(db: AsyncSession, item_id: int) -> ScheduleItem | StoreFailure:
    item = await db.get(ScheduleItem, item_id)
    return item if item is not None else not_found("Schedule item", item_id)


@store_operation
async def list_schedule_items(db: AsyncSession, event_id: int) -> list[ScheduleItem]:
    """An event's agenda in start order."""
    result = await db.execute(
        select(ScheduleItem)
        .where(ScheduleItem.event_id == event_id)
        .order_by(ScheduleItem.start_time.asc(), ScheduleItem.id.asc())
    )
    return list(result.scalars().all())


@store_operation
async def create_schedule_item(db: AsyncSession, fields: dict) -> ScheduleItem | StoreFailure:
    now = utcnow()
    return await insert(db, ScheduleItem(**fields, created_at=now, updated_at=now))


@store_operation
async def update_schedule_item(db: AsyncSession, item_id: int, changes: dict) -> ScheduleItem | StoreFailure:
    item = await db.get(ScheduleItem, item_id)
    if item is None:
        return not_found("Schedule item", item_id)
    return await apply_changes(db, item, changes)


@store_operation
async def delete_schedule_item(db: AsyncSession, item_id: int) -> ScheduleItem | StoreFailure:
    item = await db.get(ScheduleItem, item_id)
    if item is None:
        return not_found("Schedule item", item_id)
    await db.delete(item)
    await db.commit()
    return item
