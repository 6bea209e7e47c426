"""
Registration endpoints. Seats are only ever handed out by `admit`.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.errors import DomainRejection
from campus_events.core.security import get_current_user
from campus_events.db.session import get_db
from campus_events.models.enums import RegistrationStatus
from campus_events.models.user import User
from campus_events.schemas.registration import RegistrationCreate, RegistrationResponse
from campus_events.schemas.validation import validated
from campus_events.services import registration_service
from campus_events.services.authorization import Action, ensure_allowed
from campus_events.services.interfaces.admission import AdmissionGate
from campus_events.services.strategy_factory import get_admission_gate

router = APIRouter(prefix="/registrations", tags=["Registrations"])


@router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_registration_endpoint(
    payload: Any = Body(None),
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    gate: AdmissionGate = Depends(get_admission_gate),
):
    """
    Register the caller for an event.

    Rejections: already-registered (400), event-not-found (404),
    capacity-exceeded (400).
    """
    user = ensure_allowed(current_user, Action.REGISTER_FOR_EVENT)
    data = validated(RegistrationCreate, payload)

    result = await registration_service.admit(
        db,
        gate,
        user_id=user.id,
        event_id=data.event_id,
        ticket_type=data.ticket_type,
        amount_paid=data.amount_paid,
        payment_status=data.payment_status.value,
        special_requirements=data.special_requirements,
    )
    if isinstance(result, registration_service.Rejected):
        raise DomainRejection(result.reason)

    return {
        "message": "Registration successful",
        "registration": RegistrationResponse.model_validate(result),
    }


@router.get("")
async def list_my_registrations_endpoint(
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    registrations = await registration_service.list_my_registrations(db, current_user)
    return {
        "registrations": [RegistrationResponse.model_validate(r) for r in registrations],
        "total": len(registrations),
    }


@router.get("/event/{event_id}")
async def list_event_registrations_endpoint(
    event_id: int,
    registration_status: Optional[RegistrationStatus] = Query(None, alias="status"),
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """All registrations for an event. Organizer of the event or admin."""
    registrations = await registration_service.list_event_registrations(
        db,
        current_user,
        event_id,
        status=registration_status.value if registration_status else None,
    )
    return {
        "registrations": [RegistrationResponse.model_validate(r) for r in registrations],
        "total": len(registrations),
    }


@router.post("/{registration_id}/cancel")
async def cancel_registration_endpoint(
    registration_id: int,
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    registration = await registration_service.cancel_registration(db, current_user, registration_id)
    return {
        "message": "Registration cancelled successfully",
        "registration": RegistrationResponse.model_validate(registration),
    }


@router.post("/{registration_id}/check-in")
async def check_in_endpoint(
    registration_id: int,
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    registration = await registration_service.check_in(db, current_user, registration_id)
    return {
        "message": "Checked in successfully",
        "registration": RegistrationResponse.model_validate(registration),
    }
