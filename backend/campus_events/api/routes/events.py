"""
Event endpoints: create, browse, edit, cancel and the organizer overview.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.security import get_current_user
from campus_events.db.session import get_db
from campus_events.models.enums import EventStatus
from campus_events.models.user import User
from campus_events.schemas.event import EventCreate, EventOverview, EventResponse, EventUpdate
from campus_events.schemas.validation import validated
from campus_events.services import event_service
from campus_events.services.authorization import Action, ensure_allowed
from campus_events.services.interfaces.admission import AdmissionGate
from campus_events.services.notification_service import NotificationEmitter, get_notification_emitter
from campus_events.services.strategy_factory import get_admission_gate

router = APIRouter(prefix="/events", tags=["Events"])


@router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_event_endpoint(
    payload: Any = Body(None),
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    emitter: NotificationEmitter = Depends(get_notification_emitter),
):
    """Create a new event. Organizers and admins only."""
    ensure_allowed(current_user, Action.CREATE_EVENT)
    event_data = validated(EventCreate, payload)
    event = await event_service.create_event(db, current_user, event_data, emitter)
    return {"message": "Event created successfully", "event": EventResponse.model_validate(event)}


@router.get("")
async def list_events_endpoint(
    category: Optional[str] = Query(None),
    status: Optional[EventStatus] = Query(None),
    organizer_id: Optional[int] = Query(None, gt=0),
    limit: Optional[int] = Query(None, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    """List events ordered by start date, optionally filtered."""
    events = await event_service.list_events(
        db,
        category=category,
        status=status.value if status else None,
        organizer_id=organizer_id,
        limit=limit,
    )
    return {"events": [EventResponse.model_validate(e) for e in events], "total": len(events)}


@router.get("/{event_id}")
async def get_event_endpoint(event_id: int, db: AsyncSession = Depends(get_db)):
    event = await event_service.get_event(db, event_id)
    return {"event": EventResponse.model_validate(event)}


@router.patch("/update/{event_id}")
async def update_event_endpoint(
    event_id: int,
    payload: Any = Body(None),
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    gate: AdmissionGate = Depends(get_admission_gate),
):
    """Partially update an event. Organizer of the event or admin."""
    ensure_allowed(current_user, Action.VIEW_OWN)
    event_data = validated(EventUpdate, payload)
    event = await event_service.update_event(db, current_user, event_id, event_data, gate)
    return {"message": "Event updated successfully", "event": EventResponse.model_validate(event)}


@router.delete("/{event_id}")
async def cancel_event_endpoint(
    event_id: int,
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Cancel an event. The record is kept with status cancelled."""
    event = await event_service.cancel_event(db, current_user, event_id)
    return {"message": "Event cancelled successfully", "event": EventResponse.model_validate(event)}


@router.get("/{event_id}/overview", response_model=EventOverview)
async def event_overview_endpoint(
    event_id: int,
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await event_service.event_overview(db, current_user, event_id)
