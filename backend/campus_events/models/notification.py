"""
Notification model: a user-addressed message with a read flag.
"""

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Index, CheckConstraint

from campus_events.db.base import Base, TimestampMixin
from campus_events.models.enums import NotificationType, TargetAudience, check_in


class Notification(Base, TimestampMixin):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(20), nullable=False, default=NotificationType.INFO.value)
    read = Column(Boolean, nullable=False, default=False)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=True)
    is_announcement = Column(Boolean, nullable=False, default=False)
    target_audience = Column(String(20), nullable=True)
    expiry_date = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        CheckConstraint(check_in("type", NotificationType), name="check_notification_type"),
        CheckConstraint(
            f"target_audience IS NULL OR {check_in('target_audience', TargetAudience)}",
            name="check_notification_target_audience",
        ),
        # Inbox query: one user's notifications, newest first
        Index("ix_notifications_user_created", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Notification(id={self.id}, user={self.user_id}, type={self.type}, read={self.read})>"
