"""
Volunteer assignment queries and mutations.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.db.base import utcnow
from campus_events.models.volunteer import Volunteer
from campus_events.stores.base import StoreFailure, apply_changes, insert, not_found, store_operation


@store_operation
async def get_volunteer(db: AsyncSession, volunteer_id: int) -> Volunteer | StoreFailure:
    volunteer = await db.get(Volunteer, volunteer_id)
    return volunteer if volunteer is not None else not_found("Volunteer", volunteer_id)


@store_operation
async def list_volunteers(db: AsyncSession, event_id: int) -> list[Volunteer]:
    result = await db.execute(
        select(Volunteer).where(Volunteer.event_id == event_id).order_by(Volunteer.id.asc())
    )
    return list(result.scalars().all())


@store_operation
async def create_volunteer(db: AsyncSession, fields: dict) -> Volunteer | StoreFailure:
    now = utcnow()
    return await insert(db, Volunteer(**fields, hours_worked=0, created_at=now, updated_at=now))


@store_operation
async def update_volunteer(db: AsyncSession, volunteer_id: int, changes: dict) -> Volunteer | StoreFailure:
    volunteer = await db.get(Volunteer, volunteer_id)
    if volunteer is None:
        return not_found("Volunteer", volunteer_id)
    return await apply_changes(db, volunteer, changes)
