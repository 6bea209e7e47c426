"""
Authorization gate: decide whether the current user may perform an action.

Rules, in priority order:
  1. No authenticated user                 -> Denied("unauthenticated")
  2. Role-gated action, role not allowed   -> Denied("forbidden-role")
  3. Ownership-gated action, not the owner -> Denied("forbidden-owner")

The gate is pure: the caller passes the identity and the loaded resource.
Child entities (budget items, schedule items, registrations...) resolve their
owner through the parent `event` relationship, which the models always load.
Decisions are never cached; every request is evaluated afresh.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from campus_events.core.errors import AuthFailure
from campus_events.models.enums import UserRole
from campus_events.models.user import User


class Action(str, Enum):
    # Role-gated
    CREATE_EVENT = "create_event"
    BROADCAST_NOTIFICATION = "broadcast_notification"
    MANAGE_VENUES = "manage_venues"
    # Ownership-gated (event organizer or admin)
    EDIT_EVENT = "edit_event"
    DELETE_EVENT = "delete_event"
    VIEW_EVENT_REPORT = "view_event_report"
    MANAGE_BUDGET = "manage_budget"
    VIEW_BUDGET = "view_budget"
    MANAGE_SCHEDULE = "manage_schedule"
    MANAGE_VOLUNTEERS = "manage_volunteers"
    VIEW_REGISTRATIONS = "view_registrations"
    CHECK_IN = "check_in"
    BOOK_VENUE = "book_venue"
    # Recipient / registrant gated
    READ_NOTIFICATION = "read_notification"
    CANCEL_REGISTRATION = "cancel_registration"
    # Any authenticated user
    REGISTER_FOR_EVENT = "register_for_event"
    VIEW_OWN = "view_own"


ROLE_GATES: dict[Action, frozenset[str]] = {
    Action.CREATE_EVENT: frozenset({UserRole.ORGANIZER.value, UserRole.ADMIN.value}),
    Action.BROADCAST_NOTIFICATION: frozenset({UserRole.ADMIN.value, UserRole.ORGANIZER.value}),
    Action.MANAGE_VENUES: frozenset({UserRole.ORGANIZER.value, UserRole.ADMIN.value}),
}

OWNER_GATED = frozenset({
    Action.EDIT_EVENT,
    Action.DELETE_EVENT,
    Action.VIEW_EVENT_REPORT,
    Action.MANAGE_BUDGET,
    Action.VIEW_BUDGET,
    Action.MANAGE_SCHEDULE,
    Action.MANAGE_VOLUNTEERS,
    Action.VIEW_REGISTRATIONS,
    Action.CHECK_IN,
    Action.BOOK_VENUE,
})


@dataclass(frozen=True)
class Allowed:
    allowed = True


@dataclass(frozen=True)
class Denied:
    reason: str
    allowed = False

    @property
    def status_code(self) -> int:
        return 401 if self.reason == AuthFailure.UNAUTHENTICATED else 403


Decision = Union[Allowed, Denied]


def resolve_organizer_id(resource: Any) -> Optional[int]:
    """Organizer of an event, or of the event a child entity belongs to."""
    if resource is None:
        return None
    organizer_id = getattr(resource, "organizer_id", None)
    if organizer_id is not None:
        return organizer_id
    parent = getattr(resource, "event", None)
    return getattr(parent, "organizer_id", None) if parent is not None else None


def is_admin(user: User) -> bool:
    return user.role == UserRole.ADMIN.value


def authorize(current_user: Optional[User], action: Action, resource: Any = None) -> Decision:
    if current_user is None:
        return Denied(AuthFailure.UNAUTHENTICATED)

    allowed_roles = ROLE_GATES.get(action)
    if allowed_roles is not None and current_user.role not in allowed_roles:
        return Denied(AuthFailure.FORBIDDEN_ROLE)

    if action in OWNER_GATED:
        if is_admin(current_user) or resolve_organizer_id(resource) == current_user.id:
            return Allowed()
        return Denied(AuthFailure.FORBIDDEN_OWNER)

    if action is Action.READ_NOTIFICATION:
        if getattr(resource, "user_id", None) == current_user.id:
            return Allowed()
        return Denied(AuthFailure.FORBIDDEN_OWNER)

    if action is Action.CANCEL_REGISTRATION:
        if (
            getattr(resource, "user_id", None) == current_user.id
            or is_admin(current_user)
            or resolve_organizer_id(resource) == current_user.id
        ):
            return Allowed()
        return Denied(AuthFailure.FORBIDDEN_OWNER)

    return Allowed()


def ensure_allowed(current_user: Optional[User], action: Action, resource: Any = None) -> User:
    """Authorize or raise AuthFailure; returns the (now known) user."""
    decision = authorize(current_user, action, resource)
    if isinstance(decision, Denied):
        raise AuthFailure(decision.reason)
    return current_user
