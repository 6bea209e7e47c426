"""
Pydantic schemas for budget line items.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from campus_events.models.enums import BudgetCategory, BudgetStatus


class BudgetItemCreate(BaseModel):
    event_id: int = Field(..., gt=0)
    item_name: str = Field(..., min_length=3, max_length=200)
    category: BudgetCategory
    estimated_cost: float = Field(..., ge=0)
    actual_cost: Optional[float] = Field(None, ge=0)
    status: BudgetStatus = BudgetStatus.PLANNED
    notes: Optional[str] = None
    receipt_url: Optional[str] = Field(None, max_length=500)


class BudgetItemUpdate(BaseModel):
    item_name: Optional[str] = Field(None, min_length=3, max_length=200)
    category: Optional[BudgetCategory] = None
    estimated_cost: Optional[float] = Field(None, ge=0)
    actual_cost: Optional[float] = Field(None, ge=0)
    status: Optional[BudgetStatus] = None
    notes: Optional[str] = None
    receipt_url: Optional[str] = Field(None, max_length=500)


class BudgetItemResponse(BaseModel):
    id: int
    event_id: int
    item_name: str
    category: str
    estimated_cost: float
    actual_cost: Optional[float]
    status: str
    notes: Optional[str]
    receipt_url: Optional[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CategoryTotals(BaseModel):
    estimated: float = 0
    actual: float = 0


class BudgetSummary(BaseModel):
    total_estimated_cost: float
    total_actual_cost: float
    budget_by_category: dict[str, CategoryTotals]
