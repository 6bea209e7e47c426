"""
Event agenda endpoints.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.security import get_current_user
from campus_events.db.session import get_db
from campus_events.models.user import User
from campus_events.schemas.schedule import ScheduleItemCreate, ScheduleItemResponse, ScheduleItemUpdate
from campus_events.schemas.validation import validated
from campus_events.services import schedule_service
from campus_events.services.authorization import Action, ensure_allowed

router = APIRouter(prefix="/schedules", tags=["Schedules"])


@router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_schedule_item_endpoint(
    payload: Any = Body(None),
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    ensure_allowed(current_user, Action.VIEW_OWN)
    data = validated(ScheduleItemCreate, payload)
    item = await schedule_service.create_schedule_item(db, current_user, data)
    return {"message": "Schedule item created successfully", "schedule_item": ScheduleItemResponse.model_validate(item)}


@router.patch("/update/{item_id}")
async def update_schedule_item_endpoint(
    item_id: int,
    payload: Any = Body(None),
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    ensure_allowed(current_user, Action.VIEW_OWN)
    data = validated(ScheduleItemUpdate, payload)
    item = await schedule_service.update_schedule_item(db, current_user, item_id, data)
    return {"message": "Schedule item updated successfully", "schedule_item": ScheduleItemResponse.model_validate(item)}


@router.delete("/{item_id}")
async def delete_schedule_item_endpoint(
    item_id: int,
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    deleted_id = await schedule_service.delete_schedule_item(db, current_user, item_id)
    return {"message": "Schedule item deleted successfully", "id": deleted_id}


@router.get("/{event_id}")
async def event_schedule_endpoint(event_id: int, db: AsyncSession = Depends(get_db)):
    """Public agenda for an event, in start order."""
    items = await schedule_service.list_schedule(db, event_id)
    return {"schedule": [ScheduleItemResponse.model_validate(item) for item in items], "total": len(items)}
