"""
Event queries and mutations.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.db.base import utcnow
from campus_events.models.event import Event
from campus_events.stores.base import StoreFailure, apply_changes, insert, not_found, store_operation


@store_operation
async def get_event(db: AsyncSession, event_id: int, for_update: bool = False) -> Event | StoreFailure:
    """
    Fetch one event. `for_update` takes a row lock (PostgreSQL) held until the
    session's transaction ends and bypasses any stale copy in the identity map.
    """
    query = select(Event).where(Event.id == event_id)
    if for_update:
        query = query.with_for_update().execution_options(populate_existing=True)
    event = (await db.execute(query)).scalar_one_or_none()
    return event if event is not None else not_found("Event", event_id)


@store_operation
async def list_events(
    db: AsyncSession,
    category: Optional[str] = None,
    status: Optional[str] = None,
    organizer_id: Optional[int] = None,
    limit: Optional[int] = None,
) -> list[Event]:
    """Events matching every given filter, earliest start first."""
    query = select(Event)
    if category:
        query = query.where(Event.category == category)
    if status:
        query = query.where(Event.status == status)
    if organizer_id is not None:
        query = query.where(Event.organizer_id == organizer_id)

    query = query.order_by(Event.start_date.asc(), Event.id.asc())
    if limit:
        query = query.limit(limit)

    result = await db.execute(query)
    return list(result.scalars().all())


@store_operation
async def create_event(db: AsyncSession, organizer_id: int, fields: dict) -> Event | StoreFailure:
    now = utcnow()
    event = Event(**fields, organizer_id=organizer_id, created_at=now, updated_at=now)
    return await insert(db, event)


@store_operation
async def update_event(db: AsyncSession, event_id: int, changes: dict) -> Event | StoreFailure:
    event = await db.get(Event, event_id)
    if event is None:
        return not_found("Event", event_id)
    return await apply_changes(db, event, changes)


@store_operation
async def set_event_status(db: AsyncSession, event_id: int, status: str) -> Event | StoreFailure:
    event = await db.get(Event, event_id)
    if event is None:
        return not_found("Event", event_id)
    return await apply_changes(db, event, {"status": status})
