from campus_events.models.user import User
from campus_events.models.event import Event
from campus_events.models.registration import Registration
from campus_events.models.notification import Notification
from campus_events.models.budget import BudgetItem
from campus_events.models.schedule import ScheduleItem
from campus_events.models.venue import Venue, VenueBooking
from campus_events.models.volunteer import Volunteer

__all__ = [
    "User", "Event", "Registration", "Notification", "BudgetItem",
    "ScheduleItem", "Venue", "VenueBooking", "Volunteer",
]
