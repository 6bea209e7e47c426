"""
Volunteer assignments for an event, managed by its organizer.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.errors import DomainRejection, RejectionReason
from campus_events.core.logging import get_logger
from campus_events.models.user import User
from campus_events.models.volunteer import Volunteer
from campus_events.schemas.validation import field_values
from campus_events.schemas.volunteer import VolunteerCreate, VolunteerUpdate
from campus_events.services.authorization import Action, ensure_allowed
from campus_events.stores import events as event_store
from campus_events.stores import users as user_store
from campus_events.stores import volunteers as volunteer_store
from campus_events.stores.base import StoreFailure

logger = get_logger(__name__)


async def assign_volunteer(db: AsyncSession, current_user: Optional[User], data: VolunteerCreate) -> Volunteer:
    ensure_allowed(current_user, Action.VIEW_OWN)
    event = await event_store.get_event(db, data.event_id)
    if isinstance(event, StoreFailure):
        raise DomainRejection(RejectionReason.EVENT_NOT_FOUND)
    ensure_allowed(current_user, Action.MANAGE_VOLUNTEERS, event)

    volunteer_user = await user_store.get_user(db, data.user_id)
    if isinstance(volunteer_user, StoreFailure):
        raise DomainRejection(RejectionReason.NOT_FOUND, "User not found")

    volunteer = await volunteer_store.create_volunteer(db, field_values(data))
    if isinstance(volunteer, StoreFailure):
        raise DomainRejection(
            RejectionReason.CONSTRAINT_VIOLATION, "User is already a volunteer for this event"
        )

    logger.info("volunteer_assigned", volunteer_id=volunteer.id, user_id=data.user_id, event_id=data.event_id)
    return volunteer


async def list_event_volunteers(db: AsyncSession, current_user: Optional[User], event_id: int) -> list[Volunteer]:
    ensure_allowed(current_user, Action.VIEW_OWN)
    event = await event_store.get_event(db, event_id)
    if isinstance(event, StoreFailure):
        raise DomainRejection(RejectionReason.EVENT_NOT_FOUND)
    ensure_allowed(current_user, Action.MANAGE_VOLUNTEERS, event)
    return await volunteer_store.list_volunteers(db, event_id)


async def update_volunteer(
    db: AsyncSession, current_user: Optional[User], volunteer_id: int, data: VolunteerUpdate
) -> Volunteer:
    ensure_allowed(current_user, Action.VIEW_OWN)
    volunteer = await volunteer_store.get_volunteer(db, volunteer_id)
    if isinstance(volunteer, StoreFailure):
        raise DomainRejection(RejectionReason.NOT_FOUND, "Volunteer not found")
    ensure_allowed(current_user, Action.MANAGE_VOLUNTEERS, volunteer)

    changes = {key: value for key, value in field_values(data, only_set=True).items() if value is not None}
    updated = await volunteer_store.update_volunteer(db, volunteer_id, changes)
    if isinstance(updated, StoreFailure):
        raise DomainRejection(RejectionReason.CONSTRAINT_VIOLATION, updated.message)

    logger.info("volunteer_updated", volunteer_id=volunteer_id, fields=sorted(changes))
    return updated
