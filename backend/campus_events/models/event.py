"""
Event model: the organizer-owned record whose capacity bounds registrations.

Key design decisions:
- `capacity` is the admission boundary; active registrations are counted,
  not denormalized into a seats-left column
- Index on `start_date` backs the "ordered by start" listings
- Composite index on (`organizer_id`, `start_date`) for "my events"
"""

from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime, ForeignKey, Index, CheckConstraint

from campus_events.db.base import Base, TimestampMixin
from campus_events.models.enums import EventStatus, check_in


class Event(Base, TimestampMixin):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    organizer_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String(255), nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    capacity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False, default=0)
    category = Column(String(50), nullable=False)
    image_url = Column(String(500), nullable=True)
    status = Column(String(20), nullable=False, default=EventStatus.PUBLISHED.value)

    __table_args__ = (
        CheckConstraint("capacity > 0", name="check_event_capacity_positive"),
        CheckConstraint("price >= 0", name="check_event_price_non_negative"),
        CheckConstraint(check_in("status", EventStatus), name="check_event_status"),
        Index("ix_events_start_date", "start_date"),
        Index("ix_events_organizer_start", "organizer_id", "start_date"),
    )

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, title={self.title}, capacity={self.capacity}, status={self.status})>"
