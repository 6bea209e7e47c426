"""
Tests for the venue catalogue and venue bookings.
"""

from datetime import datetime, timezone

import pytest
from httpx import AsyncClient

from campus_events.services.venue_service import booking_cost

from conftest import bearer, future


def venue_body(**overrides) -> dict:
    body = {
        "name": "Main Auditorium",
        "address": "1 College Green",
        "capacity": 500,
        "facilities": ["projector", "stage"],
        "contact_info": "facilities@campus.edu",
        "cost_per_hour": 120,
    }
    body.update(overrides)
    return body


async def create_venue(client: AsyncClient, headers: dict, **overrides) -> dict:
    response = await client.post("/api/venues/create", json=venue_body(**overrides), headers=headers)
    assert response.status_code == 201
    return response.json()["venue"]


def test_booking_cost_uses_hourly_rate():
    start = datetime(2030, 5, 1, 9, 0, tzinfo=timezone.utc)
    end = datetime(2030, 5, 1, 11, 30, tzinfo=timezone.utc)
    assert booking_cost(100.0, start, end) == 250.0


@pytest.mark.asyncio
async def test_create_and_get_venue(client: AsyncClient, organizer_headers):
    venue = await create_venue(client, organizer_headers)
    assert venue["facilities"] == ["projector", "stage"]

    response = await client.get(f"/api/venues/{venue['id']}")
    assert response.status_code == 200
    assert response.json()["venue"]["name"] == "Main Auditorium"


@pytest.mark.asyncio
async def test_participant_cannot_create_venue(client: AsyncClient, participant_headers):
    response = await client.post("/api/venues/create", json=venue_body(), headers=participant_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_list_venues_by_capacity(client: AsyncClient, organizer_headers):
    await create_venue(client, organizer_headers, name="Seminar Room", capacity=30)
    await create_venue(client, organizer_headers)

    response = await client.get("/api/venues?min_capacity=100")
    assert [v["name"] for v in response.json()["venues"]] == ["Main Auditorium"]

    everything = await client.get("/api/venues")
    assert everything.json()["total"] == 2


@pytest.mark.asyncio
async def test_unknown_venue(client: AsyncClient):
    response = await client.get("/api/venues/99999")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_book_venue_computes_total_cost(client: AsyncClient, organizer_headers, test_event):
    venue = await create_venue(client, organizer_headers)

    response = await client.post(
        "/api/venues/bookings/create",
        json={
            "venue_id": venue["id"],
            "event_id": test_event.id,
            "booking_start": future(30).isoformat(),
            "booking_end": future(30, hours=3).isoformat(),
            "total_cost": 1,
        },
        headers=organizer_headers,
    )
    assert response.status_code == 201
    booking = response.json()["booking"]
    assert booking["total_cost"] == 360.0
    assert booking["status"] == "pending"
    assert booking["payment_status"] == "pending"

    listing = await client.get(f"/api/venues/bookings/event/{test_event.id}", headers=organizer_headers)
    assert listing.json()["total"] == 1


@pytest.mark.asyncio
async def test_book_venue_for_someone_elses_event(
    client: AsyncClient, organizer_headers, other_organizer, test_event
):
    venue = await create_venue(client, organizer_headers)
    response = await client.post(
        "/api/venues/bookings/create",
        json={
            "venue_id": venue["id"],
            "event_id": test_event.id,
            "booking_start": future(30).isoformat(),
            "booking_end": future(30, hours=3).isoformat(),
        },
        headers=bearer(other_organizer),
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_booking_window_validated(client: AsyncClient, organizer_headers, test_event):
    venue = await create_venue(client, organizer_headers)
    response = await client.post(
        "/api/venues/bookings/create",
        json={
            "venue_id": venue["id"],
            "event_id": test_event.id,
            "booking_start": future(30, hours=3).isoformat(),
            "booking_end": future(30).isoformat(),
        },
        headers=organizer_headers,
    )
    assert response.status_code == 400
    assert response.json()["error"][0]["field_path"] == "booking_end"
