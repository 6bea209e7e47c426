"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from campus_events.api.routes import (
    auth, events, registrations, budgets, notifications, schedules, venues, volunteers,
)

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(events.router)
api_router.include_router(registrations.router)
api_router.include_router(budgets.router)
api_router.include_router(notifications.router)
api_router.include_router(schedules.router)
api_router.include_router(venues.router)
api_router.include_router(volunteers.router)
