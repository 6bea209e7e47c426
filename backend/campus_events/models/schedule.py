"""
Schedule item: one session/slot in an event's agenda.
"""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship

from campus_events.db.base import Base, TimestampMixin
from campus_events.models.enums import ScheduleStatus, check_in


class ScheduleItem(Base, TimestampMixin):
    __tablename__ = "schedule_items"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    location = Column(String(255), nullable=True)
    speaker = Column(String(200), nullable=True)
    category = Column(String(50), nullable=True)
    priority = Column(Integer, nullable=True)
    status = Column(String(20), nullable=False, default=ScheduleStatus.PLANNED.value)

    event = relationship("Event", lazy="joined")

    __table_args__ = (
        CheckConstraint("end_time > start_time", name="check_schedule_time_order"),
        CheckConstraint("priority IS NULL OR priority BETWEEN 1 AND 5", name="check_schedule_priority"),
        CheckConstraint(check_in("status", ScheduleStatus), name="check_schedule_status"),
        Index("ix_schedule_items_event_start", "event_id", "start_time"),
    )

    def __repr__(self) -> str:
        return f"<ScheduleItem(id={self.id}, event={self.event_id}, title={self.title})>"
