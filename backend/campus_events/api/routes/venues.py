"""
Venue catalogue and venue booking endpoints.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.security import get_current_user
from campus_events.db.session import get_db
from campus_events.models.user import User
from campus_events.schemas.validation import validated
from campus_events.schemas.venue import VenueBookingCreate, VenueBookingResponse, VenueCreate, VenueResponse
from campus_events.services import venue_service
from campus_events.services.authorization import Action, ensure_allowed

router = APIRouter(prefix="/venues", tags=["Venues"])


@router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_venue_endpoint(
    payload: Any = Body(None),
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    ensure_allowed(current_user, Action.MANAGE_VENUES)
    data = validated(VenueCreate, payload)
    venue = await venue_service.create_venue(db, current_user, data)
    return {"message": "Venue created successfully", "venue": VenueResponse.model_validate(venue)}


@router.get("")
async def list_venues_endpoint(
    min_capacity: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    venues = await venue_service.list_venues(db, min_capacity=min_capacity, limit=limit)
    return {"venues": [VenueResponse.model_validate(v) for v in venues], "total": len(venues)}


@router.post("/bookings/create", status_code=status.HTTP_201_CREATED)
async def book_venue_endpoint(
    payload: Any = Body(None),
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Book a venue for an event; total cost comes from the venue's hourly rate."""
    ensure_allowed(current_user, Action.VIEW_OWN)
    data = validated(VenueBookingCreate, payload)
    booking = await venue_service.book_venue(db, current_user, data)
    return {"message": "Venue booked successfully", "booking": VenueBookingResponse.model_validate(booking)}


@router.get("/bookings/event/{event_id}")
async def event_venue_bookings_endpoint(
    event_id: int,
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    bookings = await venue_service.list_event_venue_bookings(db, current_user, event_id)
    return {"bookings": [VenueBookingResponse.model_validate(b) for b in bookings], "total": len(bookings)}


@router.get("/{venue_id}")
async def get_venue_endpoint(venue_id: int, db: AsyncSession = Depends(get_db)):
    venue = await venue_service.get_venue(db, venue_id)
    return {"venue": VenueResponse.model_validate(venue)}
