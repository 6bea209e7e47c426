"""
Budget line item queries and mutations.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.db.base import utcnow
from campus_events.models.budget import BudgetItem
from campus_events.stores.base import StoreFailure, apply_changes, insert, not_found, store_operation


@store_operation
async def get_budget_item(db: AsyncSession, item_id: int) -> BudgetItem | StoreFailure:
    item = await db.get(BudgetItem, item_id)
    return item if item is not None else not_found("Budget item", item_id)


@store_operation
async def list_budget_items(db: AsyncSession, event_id: int) -> list[BudgetItem]:
    """An event's budget items, newest first."""
    result = await db.execute(
        select(BudgetItem)
        .where(BudgetItem.event_id == event_id)
        .order_by(BudgetItem.created_at.desc(), BudgetItem.id.desc())
    )
    return list(result.scalars().all())


@store_operation
async def create_budget_item(db: AsyncSession, fields: dict) -> BudgetItem | StoreFailure:
    now = utcnow()
    return await insert(db, BudgetItem(**fields, created_at=now, updated_at=now))


@store_operation
async def update_budget_item(db: AsyncSession, item_id: int, changes: dict) -> BudgetItem | StoreFailure:
    item = await db.get(BudgetItem, item_id)
    if item is None:
        return not_found("Budget item", item_id)
    return await apply_changes(db, item, changes)


@store_operation
async def delete_budget_item(db: AsyncSession, item_id: int) -> BudgetItem | StoreFailure:
    item = await db.get(BudgetItem, item_id)
    if item is None:
        return not_found("Budget item", item_id)
    await db.delete(item)
    await db.commit()
    return item
