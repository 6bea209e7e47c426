"""
Venue and venue booking queries and mutations.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.db.base import utcnow
from campus_events.models.venue import Venue, VenueBooking
from campus_events.stores.base import StoreFailure, apply_changes, insert, not_found, store_operation


@store_operation
async def get_venue(db: AsyncSession, venue_id: int) -> Venue | StoreFailure:
    venue = await db.get(Venue, venue_id)
    return venue if venue is not None else not_found("Venue", venue_id)


@store_operation
async def list_venues(
    db: AsyncSession,
    min_capacity: Optional[int] = None,
    limit: Optional[int] = None,
) -> list[Venue]:
    query = select(Venue)
    if min_capacity:
        query = query.where(Venue.capacity >= min_capacity)
    query = query.order_by(Venue.name.asc(), Venue.id.asc())
    if limit:
        query = query.limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())


@store_operation
async def create_venue(db: AsyncSession, fields: dict) -> Venue | StoreFailure:
    now = utcnow()
    return await insert(db, Venue(**fields, created_at=now, updated_at=now))


@store_operation
async def get_venue_booking(db: AsyncSession, booking_id: int) -> VenueBooking | StoreFailure:
    booking = await db.get(VenueBooking, booking_id)
    return booking if booking is not None else not_found("Venue booking", booking_id)


@store_operation
async def list_venue_bookings(
    db: AsyncSession,
    event_id: Optional[int] = None,
    venue_id: Optional[int] = None,
) -> list[VenueBooking]:
    query = select(VenueBooking)
    if event_id is not None:
        query = query.where(VenueBooking.event_id == event_id)
    if venue_id is not None:
        query = query.where(VenueBooking.venue_id == venue_id)
    result = await db.execute(query.order_by(VenueBooking.booking_start.asc(), VenueBooking.id.asc()))
    return list(result.scalars().all())


@store_operation
async def create_venue_booking(db: AsyncSession, fields: dict) -> VenueBooking | StoreFailure:
    now = utcnow()
    return await insert(db, VenueBooking(**fields, created_at=now, updated_at=now))


@store_operation
async def set_venue_booking_status(db: AsyncSession, booking_id: int, status: str) -> VenueBooking | StoreFailure:
    booking = await db.get(VenueBooking, booking_id)
    if booking is None:
        return not_found("Venue booking", booking_id)
    return await apply_changes(db, booking, {"status": status})
