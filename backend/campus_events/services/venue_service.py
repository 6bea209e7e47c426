"""
Venues and venue bookings.

A booking's total cost is computed here from the venue's hourly rate and
the booked window; callers never send it.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.errors import DomainRejection, RejectionReason
from campus_events.core.logging import get_logger
from campus_events.models.user import User
from campus_events.models.venue import Venue, VenueBooking
from campus_events.schemas.validation import field_values
from campus_events.schemas.venue import VenueBookingCreate, VenueCreate
from campus_events.services.authorization import Action, ensure_allowed
from campus_events.stores import events as event_store
from campus_events.stores import venues as venue_store
from campus_events.stores.base import StoreFailure

logger = get_logger(__name__)


def booking_cost(cost_per_hour: float, start: datetime, end: datetime) -> float:
    hours = (end - start).total_seconds() / 3600
    return round(cost_per_hour * hours, 2)


async def create_venue(db: AsyncSession, current_user: Optional[User], data: VenueCreate) -> Venue:
    ensure_allowed(current_user, Action.MANAGE_VENUES)
    venue = await venue_store.create_venue(db, field_values(data))
    if isinstance(venue, StoreFailure):
        raise DomainRejection(RejectionReason.CONSTRAINT_VIOLATION, venue.message)

    logger.info("venue_created", venue_id=venue.id, name=venue.name, capacity=venue.capacity)
    return venue


async def get_venue(db: AsyncSession, venue_id: int) -> Venue:
    venue = await venue_store.get_venue(db, venue_id)
    if isinstance(venue, StoreFailure):
        raise DomainRejection(RejectionReason.NOT_FOUND, "Venue not found")
    return venue


async def list_venues(
    db: AsyncSession, min_capacity: Optional[int] = None, limit: Optional[int] = None
) -> list[Venue]:
    return await venue_store.list_venues(db, min_capacity=min_capacity, limit=limit)


async def book_venue(db: AsyncSession, current_user: Optional[User], data: VenueBookingCreate) -> VenueBooking:
    """Reserve a venue for an event the caller organizes."""
    ensure_allowed(current_user, Action.VIEW_OWN)
    event = await event_store.get_event(db, data.event_id)
    if isinstance(event, StoreFailure):
        raise DomainRejection(RejectionReason.EVENT_NOT_FOUND)
    ensure_allowed(current_user, Action.BOOK_VENUE, event)

    venue = await get_venue(db, data.venue_id)

    fields = field_values(data)
    fields["total_cost"] = booking_cost(venue.cost_per_hour, data.booking_start, data.booking_end)
    booking = await venue_store.create_venue_booking(db, fields)
    if isinstance(booking, StoreFailure):
        raise DomainRejection(RejectionReason.CONSTRAINT_VIOLATION, booking.message)

    logger.info(
        "venue_booked",
        venue_booking_id=booking.id,
        venue_id=booking.venue_id,
        event_id=booking.event_id,
        total_cost=booking.total_cost,
    )
    return booking


async def list_event_venue_bookings(
    db: AsyncSession, current_user: Optional[User], event_id: int
) -> list[VenueBooking]:
    ensure_allowed(current_user, Action.VIEW_OWN)
    event = await event_store.get_event(db, event_id)
    if isinstance(event, StoreFailure):
        raise DomainRejection(RejectionReason.EVENT_NOT_FOUND)
    ensure_allowed(current_user, Action.BOOK_VENUE, event)
    return await venue_store.list_venue_bookings(db, event_id=event_id)
