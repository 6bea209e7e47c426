"""
Budget line item: event-scoped cost tracking row.
"""

from sqlalchemy import Column, Integer, String, Text, Numeric, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship

from campus_events.db.base import Base, TimestampMixin
from campus_events.models.enums import BudgetCategory, BudgetStatus, check_in


class BudgetItem(Base, TimestampMixin):
    __tablename__ = "budget_items"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False)
    item_name = Column(String(200), nullable=False)
    category = Column(String(20), nullable=False)
    estimated_cost = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    actual_cost = Column(Numeric(12, 2, asdecimal=False), nullable=True)
    status = Column(String(20), nullable=False, default=BudgetStatus.PLANNED.value)
    notes = Column(Text, nullable=True)
    receipt_url = Column(String(500), nullable=True)

    event = relationship("Event", lazy="joined")

    __table_args__ = (
        CheckConstraint("estimated_cost >= 0", name="check_budget_estimated_non_negative"),
        CheckConstraint("actual_cost IS NULL OR actual_cost >= 0", name="check_budget_actual_non_negative"),
        CheckConstraint(check_in("category", BudgetCategory), name="check_budget_category"),
        CheckConstraint(check_in("status", BudgetStatus), name="check_budget_status"),
        Index("ix_budget_items_event_created", "event_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<BudgetItem(id={self.id}, event={self.event_id}, item={self.item_name})>"
