"""
Budget line items for an event, plus the per-category summary.
"""

from typing import Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.errors import DomainRejection, RejectionReason
from campus_events.core.logging import get_logger
from campus_events.models.budget import BudgetItem
from campus_events.models.enums import NotificationType
from campus_events.models.event import Event
from campus_events.models.user import User
from campus_events.schemas.budget import BudgetItemCreate, BudgetItemUpdate, BudgetSummary, CategoryTotals
from campus_events.schemas.validation import field_values
from campus_events.services.authorization import Action, ensure_allowed
from campus_events.services.notification_service import NotificationEmitter
from campus_events.stores import budgets as budget_store
from campus_events.stores import events as event_store
from campus_events.stores.base import StoreFailure

logger = get_logger(__name__)


def summarize_budget(items: Iterable[BudgetItem]) -> BudgetSummary:
    """Totals overall and per category; a missing cost counts as 0."""
    total_estimated = 0.0
    total_actual = 0.0
    by_category: dict[str, CategoryTotals] = {}

    for item in items:
        estimated = item.estimated_cost or 0.0
        actual = item.actual_cost or 0.0
        total_estimated += estimated
        total_actual += actual

        totals = by_category.setdefault(item.category, CategoryTotals())
        totals.estimated += estimated
        totals.actual += actual

    return BudgetSummary(
        total_estimated_cost=total_estimated,
        total_actual_cost=total_actual,
        budget_by_category=by_category,
    )


def actual_cost_message(item_name: str, actual_cost: Optional[float]) -> str:
    if actual_cost is None:
        return f'Actual cost for "{item_name}" has been cleared'
    return f'Actual cost for "{item_name}" has been updated to ${actual_cost}'


async def _load_event(db: AsyncSession, event_id: int) -> Event:
    event = await event_store.get_event(db, event_id)
    if isinstance(event, StoreFailure):
        raise DomainRejection(RejectionReason.EVENT_NOT_FOUND)
    return event


async def _load_item(db: AsyncSession, item_id: int) -> BudgetItem:
    item = await budget_store.get_budget_item(db, item_id)
    if isinstance(item, StoreFailure):
        raise DomainRejection(RejectionReason.NOT_FOUND, "Budget item not found")
    return item


async def list_event_budget(
    db: AsyncSession, current_user: Optional[User], event_id: int
) -> tuple[list[BudgetItem], BudgetSummary]:
    ensure_allowed(current_user, Action.VIEW_OWN)
    event = await _load_event(db, event_id)
    ensure_allowed(current_user, Action.VIEW_BUDGET, event)

    items = await budget_store.list_budget_items(db, event_id)
    return items, summarize_budget(items)


async def create_budget_item(db: AsyncSession, current_user: Optional[User], data: BudgetItemCreate) -> BudgetItem:
    user = ensure_allowed(current_user, Action.VIEW_OWN)
    event = await _load_event(db, data.event_id)
    ensure_allowed(current_user, Action.MANAGE_BUDGET, event)

    user_id = user.id
    item = await budget_store.create_budget_item(db, field_values(data))
    if isinstance(item, StoreFailure):
        raise DomainRejection(RejectionReason.CONSTRAINT_VIOLATION, item.message)

    logger.info("budget_item_created", budget_item_id=item.id, event_id=item.event_id, created_by=user_id)
    return item


async def update_budget_item(
    db: AsyncSession,
    current_user: Optional[User],
    item_id: int,
    data: BudgetItemUpdate,
    emitter: NotificationEmitter,
) -> BudgetItem:
    """
    Apply a partial update. When the payload carries an `actual_cost` that
    differs from the stored one, the acting user gets a "Budget Updated"
    notification once the update has committed.
    """
    user = ensure_allowed(current_user, Action.VIEW_OWN)
    item = await _load_item(db, item_id)
    ensure_allowed(current_user, Action.MANAGE_BUDGET, item)

    user_id = user.id
    previous_actual = item.actual_cost
    changes = field_values(data, only_set=True)

    updated = await budget_store.update_budget_item(db, item_id, changes)
    if isinstance(updated, StoreFailure):
        raise DomainRejection(RejectionReason.CONSTRAINT_VIOLATION, updated.message)

    logger.info("budget_item_updated", budget_item_id=item_id, fields=sorted(changes))

    if "actual_cost" in changes and changes["actual_cost"] != previous_actual:
        await emitter.emit(
            user_id=user_id,
            title="Budget Updated",
            message=actual_cost_message(updated.item_name, changes["actual_cost"]),
            type=NotificationType.INFO,
            event_id=updated.event_id,
        )
    return updated


async def delete_budget_item(db: AsyncSession, current_user: Optional[User], item_id: int) -> int:
    ensure_allowed(current_user, Action.VIEW_OWN)
    item = await _load_item(db, item_id)
    ensure_allowed(current_user, Action.MANAGE_BUDGET, item)

    deleted = await budget_store.delete_budget_item(db, item_id)
    if isinstance(deleted, StoreFailure):
        raise DomainRejection(RejectionReason.NOT_FOUND, "Budget item not found")

    logger.info("budget_item_deleted", budget_item_id=item_id)
    return item_id
