"""
Budget endpoints. Every operation is limited to the event's organizer or an admin.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.security import get_current_user
from campus_events.db.session import get_db
from campus_events.models.user import User
from campus_events.schemas.budget import BudgetItemCreate, BudgetItemResponse, BudgetItemUpdate
from campus_events.schemas.validation import validated
from campus_events.services import budget_service
from campus_events.services.authorization import Action, ensure_allowed
from campus_events.services.notification_service import NotificationEmitter, get_notification_emitter

router = APIRouter(prefix="/budgets", tags=["Budgets"])


@router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_budget_item_endpoint(
    payload: Any = Body(None),
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    ensure_allowed(current_user, Action.VIEW_OWN)
    data = validated(BudgetItemCreate, payload)
    item = await budget_service.create_budget_item(db, current_user, data)
    return {"message": "Budget item created successfully", "budget_item": BudgetItemResponse.model_validate(item)}


@router.patch("/update/{item_id}")
async def update_budget_item_endpoint(
    item_id: int,
    payload: Any = Body(None),
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    emitter: NotificationEmitter = Depends(get_notification_emitter),
):
    """Partial update; a changed actual cost notifies the caller."""
    ensure_allowed(current_user, Action.VIEW_OWN)
    data = validated(BudgetItemUpdate, payload)
    item = await budget_service.update_budget_item(db, current_user, item_id, data, emitter)
    return {"message": "Budget item updated successfully", "budget_item": BudgetItemResponse.model_validate(item)}


@router.delete("/{item_id}")
async def delete_budget_item_endpoint(
    item_id: int,
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    deleted_id = await budget_service.delete_budget_item(db, current_user, item_id)
    return {"message": "Budget item deleted successfully", "id": deleted_id}


@router.get("/{event_id}")
async def event_budget_endpoint(
    event_id: int,
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """An event's budget items, newest first, with totals per category."""
    items, summary = await budget_service.list_event_budget(db, current_user, event_id)
    return {
        "budget_items": [BudgetItemResponse.model_validate(item) for item in items],
        "summary": summary,
    }
