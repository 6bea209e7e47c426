"""
Volunteer assignment endpoints (event organizer or admin).
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.security import get_current_user
from campus_events.db.session import get_db
from campus_events.models.user import User
from campus_events.schemas.validation import validated
from campus_events.schemas.volunteer import VolunteerCreate, VolunteerResponse, VolunteerUpdate
from campus_events.services import volunteer_service
from campus_events.services.authorization import Action, ensure_allowed

router = APIRouter(prefix="/volunteers", tags=["Volunteers"])


@router.post("/create", status_code=status.HTTP_201_CREATED)
async def assign_volunteer_endpoint(
    payload: Any = Body(None),
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    ensure_allowed(current_user, Action.VIEW_OWN)
    data = validated(VolunteerCreate, payload)
    volunteer = await volunteer_service.assign_volunteer(db, current_user, data)
    return {"message": "Volunteer assigned successfully", "volunteer": VolunteerResponse.model_validate(volunteer)}


@router.patch("/update/{volunteer_id}")
async def update_volunteer_endpoint(
    volunteer_id: int,
    payload: Any = Body(None),
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    ensure_allowed(current_user, Action.VIEW_OWN)
    data = validated(VolunteerUpdate, payload)
    volunteer = await volunteer_service.update_volunteer(db, current_user, volunteer_id, data)
    return {"message": "Volunteer updated successfully", "volunteer": VolunteerResponse.model_validate(volunteer)}


@router.get("/event/{event_id}")
async def event_volunteers_endpoint(
    event_id: int,
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    volunteers = await volunteer_service.list_event_volunteers(db, current_user, event_id)
    return {"volunteers": [VolunteerResponse.model_validate(v) for v in volunteers], "total": len(volunteers)}
