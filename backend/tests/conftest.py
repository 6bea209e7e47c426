"""
Pytest fixtures for test database, client, and authentication.

Each test gets a fresh SQLite database file (via aiosqlite) with all tables
created from the models; set TEST_DATABASE_URL to run against PostgreSQL
instead. Every request gets its own session from the test factory, exactly
like production, so commits made by one request are visible to the next.
"""

import os

os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("ADMISSION_STRATEGY", "local")
os.environ.setdefault("ENVIRONMENT", "test")

from datetime import datetime, timezone, timedelta
from typing import AsyncGenerator

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from campus_events.main import app
from campus_events.db.base import Base
from campus_events.db.session import get_db, get_session_factory
from campus_events.core.security import create_access_token, hash_password
from campus_events.models.enums import UserRole
from campus_events.models.event import Event
from campus_events.models.user import User
from campus_events.services.interfaces.local_admission import InProcessAdmissionGate
from campus_events.services.strategy_factory import get_admission_gate

USER_PASSWORD = "testpassword123"


def future(days: int = 30, hours: int = 0) -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=days, hours=hours)


def event_payload(**overrides) -> dict:
    """A valid create-event body; override any field."""
    payload = {
        "title": "Python Conference",
        "description": "Annual gathering of campus Python users",
        "location": "Engineering Hall",
        "start_date": future(30).isoformat(),
        "end_date": future(30, hours=4).isoformat(),
        "capacity": 100,
        "price": 15,
        "category": "conference",
    }
    payload.update(overrides)
    return payload


def bearer(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(data={'sub': str(user.id)})}"}


@pytest_asyncio.fixture
async def engine(tmp_path):
    """Create tables, yield the engine, then drop tables for isolation."""
    url = os.environ.get("TEST_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'campus_events.db'}")
    test_engine = create_async_engine(url, echo=False)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session for arranging and inspecting data directly."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def admission_gate() -> InProcessAdmissionGate:
    return InProcessAdmissionGate()


@pytest_asyncio.fixture
async def client(session_factory, admission_gate) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client with the DB, session factory and admission gate overridden."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_admission_gate] = lambda: admission_gate

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def make_user(db_session: AsyncSession):
    """Factory: create a user with the given role."""
    counter = {"n": 0}

    async def _make_user(role: UserRole = UserRole.PARTICIPANT, email: str | None = None) -> User:
        counter["n"] += 1
        user = User(
            email=email or f"{role.value}{counter['n']}@campus.edu",
            full_name=f"Test {role.value.title()} {counter['n']}",
            role=role.value,
            hashed_password=hash_password(USER_PASSWORD),
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _make_user


@pytest_asyncio.fixture
async def organizer(make_user) -> User:
    return await make_user(UserRole.ORGANIZER, email="organizer@campus.edu")


@pytest_asyncio.fixture
async def other_organizer(make_user) -> User:
    return await make_user(UserRole.ORGANIZER, email="rival@campus.edu")


@pytest_asyncio.fixture
async def participant(make_user) -> User:
    return await make_user(UserRole.PARTICIPANT, email="student@campus.edu")


@pytest_asyncio.fixture
async def admin(make_user) -> User:
    return await make_user(UserRole.ADMIN, email="admin@campus.edu")


@pytest_asyncio.fixture
async def organizer_headers(organizer: User) -> dict:
    return bearer(organizer)


@pytest_asyncio.fixture
async def participant_headers(participant: User) -> dict:
    return bearer(participant)


@pytest_asyncio.fixture
async def admin_headers(admin: User) -> dict:
    return bearer(admin)


async def create_event(db_session: AsyncSession, organizer: User, capacity: int, title: str) -> Event:
    event = Event(
        organizer_id=organizer.id,
        title=title,
        description="An event created by the test fixtures",
        location="Student Union",
        start_date=future(30),
        end_date=future(30, hours=3),
        capacity=capacity,
        price=10,
        category="social",
        status="published",
    )
    db_session.add(event)
    await db_session.commit()
    await db_session.refresh(event)
    return event


@pytest_asyncio.fixture
async def test_event(db_session: AsyncSession, organizer: User) -> Event:
    """Create a published event with 100 seats."""
    return await create_event(db_session, organizer, capacity=100, title="Spring Mixer")


@pytest_asyncio.fixture
async def single_seat_event(db_session: AsyncSession, organizer: User) -> Event:
    """Create an event with exactly one seat."""
    return await create_event(db_session, organizer, capacity=1, title="Private Workshop")
