"""
Event service handling CRUD operations and the organizer overview.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.errors import DomainRejection, RejectionReason, ValidationFailed
from campus_events.core.logging import get_logger
from campus_events.models.enums import EventStatus, NotificationType, PaymentStatus, RegistrationStatus
from campus_events.models.event import Event
from campus_events.models.user import User
from campus_events.schemas.event import EventCreate, EventOverview, EventResponse, EventUpdate
from campus_events.schemas.validation import FieldIssue, as_utc, field_values
from campus_events.services.authorization import Action, ensure_allowed
from campus_events.services.budget_service import summarize_budget
from campus_events.services.interfaces.admission import AdmissionGate
from campus_events.services.notification_service import NotificationEmitter
from campus_events.stores import budgets as budget_store
from campus_events.stores import events as event_store
from campus_events.stores import registrations as registration_store
from campus_events.stores.base import StoreFailure

logger = get_logger(__name__)


async def create_event(
    db: AsyncSession, current_user: Optional[User], data: EventCreate, emitter: NotificationEmitter
) -> Event:
    """Create an event owned by the caller and tell them it exists."""
    user = ensure_allowed(current_user, Action.CREATE_EVENT)
    user_id = user.id

    event = await event_store.create_event(db, user_id, field_values(data))
    if isinstance(event, StoreFailure):
        raise DomainRejection(RejectionReason.CONSTRAINT_VIOLATION, event.message)

    logger.info("event_created", event_id=event.id, title=event.title, capacity=event.capacity)

    await emitter.emit(
        user_id=user_id,
        title="Event Created",
        message=f'Your event "{event.title}" has been created successfully.',
        type=NotificationType.SUCCESS,
        event_id=event.id,
    )
    return event


async def get_event(db: AsyncSession, event_id: int) -> Event:
    event = await event_store.get_event(db, event_id)
    if isinstance(event, StoreFailure):
        raise DomainRejection(RejectionReason.EVENT_NOT_FOUND)
    return event


async def list_events(
    db: AsyncSession,
    category: Optional[str] = None,
    status: Optional[str] = None,
    organizer_id: Optional[int] = None,
    limit: Optional[int] = None,
) -> list[Event]:
    return await event_store.list_events(
        db, category=category, status=status, organizer_id=organizer_id, limit=limit
    )


def _date_order_issues(event: Event, changes: dict) -> list[FieldIssue]:
    """Dates in the payload checked against the stored ones they pair with."""
    if "start_date" not in changes and "end_date" not in changes:
        return []
    start = as_utc(changes.get("start_date") or event.start_date)
    end = as_utc(changes.get("end_date") or event.end_date)
    if end <= start:
        return [FieldIssue("end_date", "End date must be after start date")]
    return []


async def update_event(
    db: AsyncSession,
    current_user: Optional[User],
    event_id: int,
    data: EventUpdate,
    gate: AdmissionGate,
) -> Event:
    """
    Apply a partial update (organizer or admin).

    A capacity change is checked and written under the event's admission
    gate: capacity may not drop below the number of active registrations.
    """
    ensure_allowed(current_user, Action.VIEW_OWN)
    event = await get_event(db, event_id)
    ensure_allowed(current_user, Action.EDIT_EVENT, event)

    changes = {key: value for key, value in field_values(data, only_set=True).items() if value is not None}
    issues = _date_order_issues(event, changes)
    if issues:
        raise ValidationFailed(issues)

    if "capacity" in changes:
        async with gate.hold(event_id):
            active = await registration_store.count_active_registrations(db, event_id)
            if changes["capacity"] < active:
                raise ValidationFailed([
                    FieldIssue("capacity", f"Capacity cannot be lower than the {active} active registrations")
                ])
            updated = await event_store.update_event(db, event_id, changes)
    else:
        updated = await event_store.update_event(db, event_id, changes)

    if isinstance(updated, StoreFailure):
        if updated.not_found:
            raise DomainRejection(RejectionReason.EVENT_NOT_FOUND)
        raise DomainRejection(RejectionReason.CONSTRAINT_VIOLATION, updated.message)

    logger.info("event_updated", event_id=event_id, fields=sorted(changes))
    return updated


async def cancel_event(db: AsyncSession, current_user: Optional[User], event_id: int) -> Event:
    """Soft delete: the event stays, with status cancelled."""
    ensure_allowed(current_user, Action.VIEW_OWN)
    event = await get_event(db, event_id)
    ensure_allowed(current_user, Action.DELETE_EVENT, event)

    if event.status == EventStatus.CANCELLED.value:
        raise DomainRejection(RejectionReason.INVALID_STATE, "Event is already cancelled")

    cancelled = await event_store.set_event_status(db, event_id, EventStatus.CANCELLED.value)
    if isinstance(cancelled, StoreFailure):
        raise DomainRejection(RejectionReason.EVENT_NOT_FOUND)

    logger.info("event_cancelled", event_id=event_id)
    return cancelled


async def event_overview(db: AsyncSession, current_user: Optional[User], event_id: int) -> EventOverview:
    """Registration, check-in, revenue and budget figures for one event."""
    ensure_allowed(current_user, Action.VIEW_OWN)
    event = await get_event(db, event_id)
    ensure_allowed(current_user, Action.VIEW_EVENT_REPORT, event)

    registrations = await registration_store.list_registrations(db, event_id=event_id)
    budget_items = await budget_store.list_budget_items(db, event_id)

    by_status = {status.value: 0 for status in RegistrationStatus}
    checked_in = 0
    revenue = 0.0
    for registration in registrations:
        by_status[registration.status] = by_status.get(registration.status, 0) + 1
        if registration.status == RegistrationStatus.CANCELLED.value:
            continue
        if registration.check_in_status:
            checked_in += 1
        if registration.payment_status == PaymentStatus.COMPLETED.value:
            revenue += registration.amount_paid or 0.0

    active = len(registrations) - by_status[RegistrationStatus.CANCELLED.value]
    return EventOverview(
        event=EventResponse.model_validate(event),
        registrations_by_status=by_status,
        active_registrations=active,
        checked_in=checked_in,
        capacity=event.capacity,
        utilization_percent=round(active / event.capacity * 100, 2) if event.capacity else 0.0,
        revenue=round(revenue, 2),
        budget=summarize_budget(budget_items),
    )
