"""
Registration admission control: the only place seats are handed out.

CONCURRENCY STRATEGY: per-event serialization + storage backstop
================================================================

Problem:
  Two users ask for the last seat at the same time. Both count the active
  registrations, both see one seat left, both insert. Result: overbooking.
  The same interleaving lets one user hold two active registrations.

Solution:
  1. Steps 1-5 of an admission (duplicate check, event lookup, count,
     capacity compare, insert) run while holding the admission gate for the
     event. The gate is pluggable: an asyncio.Lock per event in-process, or a
     Redis lock shared by every API process.
  2. The event row is read FOR UPDATE inside the admission transaction, so
     on PostgreSQL two processes that somehow both pass the gate still queue
     on the row until the first insert commits.
  3. A partial unique index on (user_id, event_id) for non-cancelled rows
     rejects a second active registration outright; the violation is
     reported as already-registered.

Rejections are values (`Rejected`), not exceptions: the route decides how
to surface them. Store faults raise StoreUnavailable and are not retried.
"""

import time
from dataclasses import dataclass
from typing import Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.errors import DomainRejection, RejectionReason
from campus_events.core.logging import get_logger
from campus_events.core.metrics import admission_latency, record_admission
from campus_events.db.base import utcnow
from campus_events.models.enums import RegistrationStatus
from campus_events.models.registration import Registration
from campus_events.models.user import User
from campus_events.services.authorization import Action, ensure_allowed
from campus_events.services.interfaces.admission import AdmissionGate
from campus_events.stores import events as event_store
from campus_events.stores import registrations as registration_store
from campus_events.stores.base import StoreFailure

logger = get_logger(__name__)


@dataclass(frozen=True)
class Rejected:
    reason: RejectionReason


AdmissionResult = Union[Registration, Rejected]


async def _reject(db: AsyncSession, reason: RejectionReason, **context) -> Rejected:
    # Ends the admission transaction so the event row lock is released
    if db.in_transaction():
        await db.commit()
    record_admission(reason.value)
    logger.info("registration_rejected", reason=reason.value, **context)
    return Rejected(reason)


async def admit(
    db: AsyncSession,
    gate: AdmissionGate,
    user_id: int,
    event_id: int,
    ticket_type: str,
    amount_paid: float,
    payment_status: str = "completed",
    special_requirements: Optional[str] = None,
) -> AdmissionResult:
    """
    Admit `user_id` to `event_id` or say why not.

    Rejection reasons, in the order they are checked:
    already-registered, event-not-found, capacity-exceeded.
    """
    started = time.perf_counter()
    try:
        async with gate.hold(event_id):
            existing = await registration_store.find_active_registration(db, user_id, event_id)
            if existing is not None:
                return await _reject(
                    db, RejectionReason.ALREADY_REGISTERED,
                    user_id=user_id, event_id=event_id, registration_id=existing.id,
                )

            event = await event_store.get_event(db, event_id, for_update=True)
            if isinstance(event, StoreFailure):
                return await _reject(db, RejectionReason.EVENT_NOT_FOUND, user_id=user_id, event_id=event_id)

            capacity = event.capacity
            active = await registration_store.count_active_registrations(db, event_id)
            if active >= capacity:
                return await _reject(
                    db, RejectionReason.CAPACITY_EXCEEDED,
                    user_id=user_id, event_id=event_id, capacity=capacity, active=active,
                )

            registration = await registration_store.create_registration(db, {
                "user_id": user_id,
                "event_id": event_id,
                "status": RegistrationStatus.CONFIRMED.value,
                "payment_status": payment_status,
                "ticket_type": ticket_type,
                "amount_paid": amount_paid,
                "special_requirements": special_requirements,
                "check_in_status": False,
            })
            if isinstance(registration, StoreFailure):
                # Unique index caught a duplicate that slipped past the gate
                return await _reject(
                    db, RejectionReason.ALREADY_REGISTERED,
                    user_id=user_id, event_id=event_id, code=registration.code,
                )
    finally:
        admission_latency.observe(time.perf_counter() - started)

    record_admission("admitted")
    logger.info(
        "registration_admitted",
        registration_id=registration.id,
        user_id=user_id,
        event_id=event_id,
        seats_taken=active + 1,
        capacity=capacity,
    )
    return registration


async def list_my_registrations(db: AsyncSession, current_user: Optional[User]) -> list[Registration]:
    user = ensure_allowed(current_user, Action.VIEW_OWN)
    return await registration_store.list_registrations(db, user_id=user.id)


async def list_event_registrations(
    db: AsyncSession, current_user: Optional[User], event_id: int, status: Optional[str] = None
) -> list[Registration]:
    ensure_allowed(current_user, Action.VIEW_OWN)
    event = await event_store.get_event(db, event_id)
    if isinstance(event, StoreFailure):
        raise DomainRejection(RejectionReason.EVENT_NOT_FOUND)
    ensure_allowed(current_user, Action.VIEW_REGISTRATIONS, event)
    return await registration_store.list_registrations(db, event_id=event_id, status=status)


async def _load_registration(db: AsyncSession, registration_id: int) -> Registration:
    registration = await registration_store.get_registration(db, registration_id)
    if isinstance(registration, StoreFailure):
        raise DomainRejection(RejectionReason.NOT_FOUND, "Registration not found")
    return registration


async def cancel_registration(
    db: AsyncSession, current_user: Optional[User], registration_id: int
) -> Registration:
    """
    Soft-cancel: the row stays, its seat is freed and the user may register
    again. Allowed for the registrant, the event organizer and admins.
    """
    user = ensure_allowed(current_user, Action.VIEW_OWN)
    registration = await _load_registration(db, registration_id)
    ensure_allowed(current_user, Action.CANCEL_REGISTRATION, registration)

    if registration.status == RegistrationStatus.CANCELLED.value:
        raise DomainRejection(RejectionReason.INVALID_STATE, "Registration is already cancelled")

    user_id = user.id
    cancelled = await registration_store.set_registration_status(
        db, registration_id, RegistrationStatus.CANCELLED.value
    )
    if isinstance(cancelled, StoreFailure):
        raise DomainRejection(RejectionReason.NOT_FOUND, "Registration not found")

    logger.info(
        "registration_cancelled",
        registration_id=registration_id,
        event_id=cancelled.event_id,
        cancelled_by=user_id,
    )
    return cancelled


async def check_in(db: AsyncSession, current_user: Optional[User], registration_id: int) -> Registration:
    """Mark a confirmed registration as checked in (event organizer or admin)."""
    ensure_allowed(current_user, Action.VIEW_OWN)
    registration = await _load_registration(db, registration_id)
    ensure_allowed(current_user, Action.CHECK_IN, registration)

    if registration.status != RegistrationStatus.CONFIRMED.value:
        raise DomainRejection(RejectionReason.INVALID_STATE, "Only confirmed registrations can be checked in")
    if registration.check_in_status:
        raise DomainRejection(RejectionReason.INVALID_STATE, "Registration is already checked in")

    checked_in = await registration_store.update_registration(
        db, registration_id, {"check_in_status": True, "check_in_time": utcnow()}
    )
    if isinstance(checked_in, StoreFailure):
        raise DomainRejection(RejectionReason.NOT_FOUND, "Registration not found")

    logger.info("registration_checked_in", registration_id=registration_id, event_id=checked_in.event_id)
    return checked_in
