"""
Enumerated column values shared by models, schemas and the authorization gate.
"""

from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    ORGANIZER = "organizer"
    PARTICIPANT = "participant"
    SPONSOR = "sponsor"


class EventStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class RegistrationStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    REFUNDED = "refunded"


class NotificationType(str, Enum):
    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"
    ERROR = "error"


class TargetAudience(str, Enum):
    ALL = "all"
    PARTICIPANTS = "participants"
    ORGANIZERS = "organizers"
    SPONSORS = "sponsors"
    STAFF = "staff"


class BudgetCategory(str, Enum):
    VENUE = "venue"
    CATERING = "catering"
    MARKETING = "marketing"
    EQUIPMENT = "equipment"
    STAFF = "staff"
    OTHER = "other"


class BudgetStatus(str, Enum):
    PLANNED = "planned"
    APPROVED = "approved"
    SPENT = "spent"
    CANCELLED = "cancelled"


class ScheduleStatus(str, Enum):
    PLANNED = "planned"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class BookingPaymentStatus(str, Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    COMPLETED = "completed"
    REFUNDED = "refunded"


class VolunteerStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"


def check_in(column: str, enum: type[Enum]) -> str:
    """SQL CHECK expression restricting `column` to the enum's values."""
    values = ", ".join(f"'{member.value}'" for member in enum)
    return f"{column} IN ({values})"
