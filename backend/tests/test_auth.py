"""
Tests for authentication endpoints: signup, login and identity.
"""

import pytest
from httpx import AsyncClient

from conftest import USER_PASSWORD


@pytest.mark.asyncio
async def test_register_user(client: AsyncClient):
    """Successful signup returns the user without the password hash."""
    response = await client.post("/api/auth/register", json={
        "email": "New.Student@Campus.edu",
        "password": "securepassword123",
        "full_name": "New Student",
    })
    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "User registered successfully"
    assert data["user"]["email"] == "new.student@campus.edu"
    assert data["user"]["role"] == "participant"
    assert "hashed_password" not in data["user"]  # Never expose password hash


@pytest.mark.asyncio
async def test_register_with_role(client: AsyncClient):
    response = await client.post("/api/auth/register", json={
        "email": "planner@campus.edu",
        "password": "securepassword123",
        "full_name": "Event Planner",
        "role": "organizer",
    })
    assert response.status_code == 201
    assert response.json()["user"]["role"] == "organizer"


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, participant):
    """Duplicate email returns 409, case-insensitively."""
    response = await client.post("/api/auth/register", json={
        "email": "STUDENT@campus.edu",
        "password": "securepassword123",
        "full_name": "Someone Else",
    })
    assert response.status_code == 409
    assert response.json()["reason"] == "email-taken"


@pytest.mark.asyncio
async def test_register_invalid_payload(client: AsyncClient):
    """Every violated field is reported, with a 400."""
    response = await client.post("/api/auth/register", json={
        "email": "not-an-email",
        "password": "short",
        "full_name": "X",
        "role": "superuser",
    })
    assert response.status_code == 400
    fields = [issue["field_path"] for issue in response.json()["error"]]
    assert fields == ["email", "password", "full_name", "role"]


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, participant):
    """Valid credentials return JWT token."""
    response = await client.post("/api/auth/login", json={
        "email": "student@campus.edu",
        "password": USER_PASSWORD,
    })
    assert response.status_code == 200
    data = response.json()
    assert "access_token" in data
    assert data["token_type"] == "bearer"


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, participant):
    """Wrong password returns 401."""
    response = await client.post("/api/auth/login", json={
        "email": "student@campus.edu",
        "password": "wrongpassword",
    })
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_login_nonexistent_email(client: AsyncClient):
    """Non-existent email returns 401."""
    response = await client.post("/api/auth/login", json={
        "email": "nobody@campus.edu",
        "password": "anypassword123",
    })
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_returns_token_owner(client: AsyncClient, participant, participant_headers):
    response = await client.get("/api/auth/me", headers=participant_headers)
    assert response.status_code == 200
    assert response.json()["user"]["id"] == participant.id


@pytest.mark.asyncio
async def test_me_with_garbage_token(client: AsyncClient):
    response = await client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["reason"] == "unauthenticated"


@pytest.mark.asyncio
async def test_login_then_use_token(client: AsyncClient, organizer):
    login = await client.post("/api/auth/login", json={
        "email": "organizer@campus.edu",
        "password": USER_PASSWORD,
    })
    token = login.json()["access_token"]

    response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["user"]["role"] == "organizer"
