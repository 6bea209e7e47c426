"""
Venues and the bookings that tie a venue to an event for a time window.
"""

from sqlalchemy import Column, Integer, String, Text, Float, Numeric, DateTime, ForeignKey, JSON, Index, CheckConstraint
from sqlalchemy.orm import relationship

from campus_events.db.base import Base, TimestampMixin
from campus_events.models.enums import BookingStatus, BookingPaymentStatus, check_in


class Venue(Base, TimestampMixin):
    __tablename__ = "venues"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    address = Column(String(500), nullable=False)
    capacity = Column(Integer, nullable=False)
    facilities = Column(JSON, nullable=False, default=list)
    contact_info = Column(String(255), nullable=False)
    cost_per_hour = Column(Numeric(10, 2, asdecimal=False), nullable=False, default=0)
    rating = Column(Float, nullable=True)

    __table_args__ = (
        CheckConstraint("capacity > 0", name="check_venue_capacity_positive"),
        CheckConstraint("cost_per_hour >= 0", name="check_venue_cost_non_negative"),
        Index("ix_venues_capacity", "capacity"),
    )

    def __repr__(self) -> str:
        return f"<Venue(id={self.id}, name={self.name}, capacity={self.capacity})>"


class VenueBooking(Base, TimestampMixin):
    __tablename__ = "venue_bookings"

    id = Column(Integer, primary_key=True, index=True)
    venue_id = Column(Integer, ForeignKey("venues.id"), nullable=False, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    booking_start = Column(DateTime(timezone=True), nullable=False)
    booking_end = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(20), nullable=False, default=BookingStatus.PENDING.value)
    total_cost = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    payment_status = Column(String(20), nullable=False, default=BookingPaymentStatus.PENDING.value)
    notes = Column(Text, nullable=True)

    venue = relationship("Venue", lazy="joined")
    event = relationship("Event", lazy="joined")

    __table_args__ = (
        CheckConstraint("booking_end > booking_start", name="check_venue_booking_time_order"),
        CheckConstraint(check_in("status", BookingStatus), name="check_venue_booking_status"),
        CheckConstraint(
            check_in("payment_status", BookingPaymentStatus), name="check_venue_booking_payment_status"
        ),
    )

    def __repr__(self) -> str:
        return f"<VenueBooking(id={self.id}, venue={self.venue_id}, event={self.event_id}, status={self.status})>"
