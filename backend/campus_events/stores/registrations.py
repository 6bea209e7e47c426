"""
Registration queries and mutations.

"Active" means any status other than cancelled; only active rows count
against an event's capacity.
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.db.base import utcnow
from campus_events.models.enums import RegistrationStatus
from campus_events.models.registration import Registration
from campus_events.stores.base import StoreFailure, apply_changes, insert, not_found, store_operation

_ACTIVE = Registration.status != RegistrationStatus.CANCELLED.value


@store_operation
async def get_registration(db: AsyncSession, registration_id: int) -> Registration | StoreFailure:
    registration = await db.get(Registration, registration_id)
    return registration if registration is not None else not_found("Registration", registration_id)


@store_operation
async def find_active_registration(db: AsyncSession, user_id: int, event_id: int) -> Optional[Registration]:
    result = await db.execute(
        select(Registration).where(
            Registration.user_id == user_id,
            Registration.event_id == event_id,
            _ACTIVE,
        )
    )
    return result.scalars().first()


@store_operation
async def count_active_registrations(db: AsyncSession, event_id: int) -> int:
    result = await db.execute(
        select(func.count(Registration.id)).where(Registration.event_id == event_id, _ACTIVE)
    )
    return result.scalar_one()


@store_operation
async def count_registrations_by_status(db: AsyncSession, event_id: int) -> dict[str, int]:
    result = await db.execute(
        select(Registration.status, func.count(Registration.id))
        .where(Registration.event_id == event_id)
        .group_by(Registration.status)
    )
    return {status: count for status, count in result.all()}


@store_operation
async def list_registrations(
    db: AsyncSession,
    user_id: Optional[int] = None,
    event_id: Optional[int] = None,
    status: Optional[str] = None,
) -> list[Registration]:
    """Registrations matching every given filter, newest first."""
    query = select(Registration)
    if user_id is not None:
        query = query.where(Registration.user_id == user_id)
    if event_id is not None:
        query = query.where(Registration.event_id == event_id)
    if status:
        query = query.where(Registration.status == status)
    result = await db.execute(query.order_by(Registration.registration_date.desc(), Registration.id.desc()))
    return list(result.scalars().all())


@store_operation
async def create_registration(db: AsyncSession, fields: dict) -> Registration | StoreFailure:
    now = utcnow()
    registration = Registration(**fields, registration_date=now, created_at=now, updated_at=now)
    return await insert(db, registration)


@store_operation
async def update_registration(db: AsyncSession, registration_id: int, changes: dict) -> Registration | StoreFailure:
    registration = await db.get(Registration, registration_id)
    if registration is None:
        return not_found("Registration", registration_id)
    return await apply_changes(db, registration, changes)


@store_operation
async def set_registration_status(db: AsyncSession, registration_id: int, status: str) -> Registration | StoreFailure:
    registration = await db.get(Registration, registration_id)
    if registration is None:
        return not_found("Registration", registration_id)
    return await apply_changes(db, registration, {"status": status})
