"""
Error taxonomy shared by services and route handlers.

Each exception carries everything the HTTP layer needs to build a response;
the mapping to status codes and bodies lives in api/exception_handlers.py.

- ValidationFailed: payload shape/range violated (400, field-level issues)
- AuthFailure: unauthenticated (401) vs authenticated-but-forbidden (403)
- DomainRejection: duplicate, capacity, not-found and similar (400/404/409)
- StoreUnavailable: the backing store could not be reached or misbehaved (500)
"""

from enum import Enum


class RejectionReason(str, Enum):
    """Reason strings surfaced verbatim to API callers."""

    ALREADY_REGISTERED = "already-registered"
    EVENT_NOT_FOUND = "event-not-found"
    CAPACITY_EXCEEDED = "capacity-exceeded"
    NOT_FOUND = "not-found"
    EMAIL_TAKEN = "email-taken"
    CONSTRAINT_VIOLATION = "constraint-violation"
    INVALID_STATE = "invalid-state"


_REJECTION_STATUS = {
    RejectionReason.EVENT_NOT_FOUND: 404,
    RejectionReason.NOT_FOUND: 404,
    RejectionReason.EMAIL_TAKEN: 409,
}

_REJECTION_MESSAGES = {
    RejectionReason.ALREADY_REGISTERED: "You are already registered for this event",
    RejectionReason.EVENT_NOT_FOUND: "Event not found",
    RejectionReason.CAPACITY_EXCEEDED: "Event is at full capacity",
    RejectionReason.NOT_FOUND: "Resource not found",
    RejectionReason.EMAIL_TAKEN: "Email already registered",
    RejectionReason.CONSTRAINT_VIOLATION: "The change conflicts with existing data",
    RejectionReason.INVALID_STATE: "The operation is not allowed in the current state",
}


class AppError(Exception):
    """Base for errors that map onto an API response."""

    status_code = 500


class ValidationFailed(AppError):
    status_code = 400

    def __init__(self, issues: list) -> None:
        super().__init__(f"{len(issues)} validation issue(s)")
        self.issues = issues


class AuthFailure(AppError):
    """Raised when the authorization gate denies an action."""

    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN_ROLE = "forbidden-role"
    FORBIDDEN_OWNER = "forbidden-owner"

    def __init__(self, reason: str, message: str | None = None) -> None:
        self.reason = reason
        self.message = message or (
            "Unauthorized" if reason == self.UNAUTHENTICATED
            else "You do not have permission to perform this action"
        )
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return 401 if self.reason == self.UNAUTHENTICATED else 403


class DomainRejection(AppError):
    """A business rule refused the request."""

    def __init__(self, reason: RejectionReason, message: str | None = None) -> None:
        self.reason = reason
        self.message = message or _REJECTION_MESSAGES[reason]
        super().__init__(f"{reason.value}: {self.message}")

    @property
    def status_code(self) -> int:
        return _REJECTION_STATUS.get(self.reason, 400)


class StoreUnavailable(AppError):
    """The backing store failed below the data access layer."""

    status_code = 500

    def __init__(self, operation: str, detail: str) -> None:
        super().__init__(f"{operation}: {detail}")
        self.operation = operation
        self.detail = detail
