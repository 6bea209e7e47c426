"""
User queries. Users are created at signup and otherwise only read here.
"""

from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.models.enums import RegistrationStatus
from campus_events.models.registration import Registration
from campus_events.models.user import User
from campus_events.stores.base import StoreFailure, insert, not_found, store_operation


@store_operation
async def get_user(db: AsyncSession, user_id: int) -> User | StoreFailure:
    user = await db.get(User, user_id)
    return user if user is not None else not_found("User", user_id)


@store_operation
async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


@store_operation
async def list_users(db: AsyncSession, roles: Optional[Iterable[str]] = None) -> list[User]:
    query = select(User).where(User.is_active.is_(True))
    if roles is not None:
        query = query.where(User.role.in_(list(roles)))
    result = await db.execute(query.order_by(User.id))
    return list(result.scalars().all())


@store_operation
async def list_event_participants(db: AsyncSession, event_id: int) -> list[User]:
    """Active users holding a non-cancelled registration for the event."""
    result = await db.execute(
        select(User)
        .join(Registration, Registration.user_id == User.id)
        .where(
            Registration.event_id == event_id,
            Registration.status != RegistrationStatus.CANCELLED.value,
            User.is_active.is_(True),
        )
        .order_by(User.id)
    )
    return list(result.scalars().all())


@store_operation
async def create_user(db: AsyncSession, fields: dict) -> User | StoreFailure:
    return await insert(db, User(**fields))
