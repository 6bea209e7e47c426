"""
Registration model linking one user to one event.

Key design decisions:
- Partial unique index on (user_id, event_id) for non-cancelled rows: a user
  can hold at most one active registration per event, and may register again
  after cancelling
- Cancellation flips status; rows are never deleted
- Index on (event_id, status) backs the active-registration count used by
  admission control
"""

from sqlalchemy import (
    Column, Integer, String, Text, Boolean, Numeric, DateTime, ForeignKey, Index, CheckConstraint, text,
)
from sqlalchemy.orm import relationship

from campus_events.db.base import Base, TimestampMixin, utcnow
from campus_events.models.enums import RegistrationStatus, PaymentStatus, check_in

ACTIVE_REGISTRATION = text("status <> 'cancelled'")


class Registration(Base, TimestampMixin):
    __tablename__ = "registrations"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False)
    registration_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    status = Column(String(20), nullable=False, default=RegistrationStatus.CONFIRMED.value)
    payment_status = Column(String(20), nullable=False, default=PaymentStatus.COMPLETED.value)
    ticket_type = Column(String(50), nullable=False)
    amount_paid = Column(Numeric(10, 2, asdecimal=False), nullable=False, default=0)
    special_requirements = Column(Text, nullable=True)
    check_in_status = Column(Boolean, nullable=False, default=False)
    check_in_time = Column(DateTime(timezone=True), nullable=True)

    # Always loaded: ownership checks resolve through the parent event
    event = relationship("Event", lazy="joined")

    __table_args__ = (
        Index(
            "uq_registrations_active_user_event",
            "user_id",
            "event_id",
            unique=True,
            postgresql_where=ACTIVE_REGISTRATION,
            sqlite_where=ACTIVE_REGISTRATION,
        ),
        Index("ix_registrations_event_status", "event_id", "status"),
        CheckConstraint("amount_paid >= 0", name="check_registration_amount_non_negative"),
        CheckConstraint(check_in("status", RegistrationStatus), name="check_registration_status"),
        CheckConstraint(check_in("payment_status", PaymentStatus), name="check_registration_payment_status"),
    )

    def __repr__(self) -> str:
        return f"<Registration(id={self.id}, user={self.user_id}, event={self.event_id}, status={self.status})>"
