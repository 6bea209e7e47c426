"""
Volunteer assignment of a user to an event.
"""

from sqlalchemy import (
    Column, Integer, String, Text, Float, DateTime, ForeignKey, JSON, UniqueConstraint, CheckConstraint,
)
from sqlalchemy.orm import relationship

from campus_events.db.base import Base, TimestampMixin
from campus_events.models.enums import VolunteerStatus, check_in


class Volunteer(Base, TimestampMixin):
    __tablename__ = "volunteers"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    role = Column(String(100), nullable=False)
    responsibilities = Column(JSON, nullable=False, default=list)
    shift_start = Column(DateTime(timezone=True), nullable=True)
    shift_end = Column(DateTime(timezone=True), nullable=True)
    status = Column(String(20), nullable=False, default=VolunteerStatus.PENDING.value)
    hours_worked = Column(Float, nullable=False, default=0)
    notes = Column(Text, nullable=True)

    event = relationship("Event", lazy="joined")

    __table_args__ = (
        UniqueConstraint("user_id", "event_id", name="uq_volunteer_user_event"),
        CheckConstraint("hours_worked >= 0", name="check_volunteer_hours_non_negative"),
        CheckConstraint(check_in("status", VolunteerStatus), name="check_volunteer_status"),
    )

    def __repr__(self) -> str:
        return f"<Volunteer(id={self.id}, user={self.user_id}, event={self.event_id}, status={self.status})>"
