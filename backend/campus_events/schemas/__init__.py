from campus_events.schemas.validation import FieldIssue, ValidationFailure, validate, validated
from campus_events.schemas.user import UserCreate, UserResponse, UserLogin, Token
from campus_events.schemas.event import EventCreate, EventUpdate, EventResponse, EventOverview
from campus_events.schemas.registration import RegistrationCreate, RegistrationResponse
from campus_events.schemas.notification import NotificationCreate, NotificationResponse
from campus_events.schemas.budget import BudgetItemCreate, BudgetItemUpdate, BudgetItemResponse, BudgetSummary
from campus_events.schemas.schedule import ScheduleItemCreate, ScheduleItemUpdate, ScheduleItemResponse
from campus_events.schemas.venue import VenueCreate, VenueResponse, VenueBookingCreate, VenueBookingResponse
from campus_events.schemas.volunteer import VolunteerCreate, VolunteerUpdate, VolunteerResponse

__all__ = [
    "FieldIssue", "ValidationFailure", "validate", "validated",
    "UserCreate", "UserResponse", "UserLogin", "Token",
    "EventCreate", "EventUpdate", "EventResponse", "EventOverview",
    "RegistrationCreate", "RegistrationResponse",
    "NotificationCreate", "NotificationResponse",
    "BudgetItemCreate", "BudgetItemUpdate", "BudgetItemResponse", "BudgetSummary",
    "ScheduleItemCreate", "ScheduleItemUpdate", "ScheduleItemResponse",
    "VenueCreate", "VenueResponse", "VenueBookingCreate", "VenueBookingResponse",
    "VolunteerCreate", "VolunteerUpdate", "VolunteerResponse",
]
