"""
Tests for budget items and the per-category summary.
"""

from types import SimpleNamespace

import pytest
from httpx import AsyncClient

from campus_events.services.budget_service import actual_cost_message, summarize_budget

from conftest import bearer


def budget_body(event_id: int, **overrides) -> dict:
    body = {
        "event_id": event_id,
        "item_name": "Sound system",
        "category": "equipment",
        "estimated_cost": 400,
    }
    body.update(overrides)
    return body


async def create_item(client: AsyncClient, headers: dict, event_id: int, **overrides) -> dict:
    response = await client.post("/api/budgets/create", json=budget_body(event_id, **overrides), headers=headers)
    assert response.status_code == 201
    return response.json()["budget_item"]


def test_summarize_budget_groups_by_category():
    items = [
        SimpleNamespace(category="catering", estimated_cost=500.0, actual_cost=450.0),
        SimpleNamespace(category="catering", estimated_cost=100.0, actual_cost=None),
        SimpleNamespace(category="venue", estimated_cost=1000.0, actual_cost=1200.0),
    ]
    summary = summarize_budget(items)

    assert summary.total_estimated_cost == 1600.0
    assert summary.total_actual_cost == 1650.0
    assert summary.budget_by_category["catering"].estimated == 600.0
    assert summary.budget_by_category["catering"].actual == 450.0
    assert summary.budget_by_category["venue"].actual == 1200.0


def test_summarize_empty_budget():
    summary = summarize_budget([])
    assert summary.total_estimated_cost == 0
    assert summary.budget_by_category == {}


@pytest.mark.asyncio
async def test_create_budget_item(client: AsyncClient, organizer_headers, test_event):
    item = await create_item(client, organizer_headers, test_event.id, notes="Rented from AV club")
    assert item["event_id"] == test_event.id
    assert item["status"] == "planned"
    assert item["actual_cost"] is None
    assert item["notes"] == "Rented from AV club"


@pytest.mark.asyncio
async def test_create_budget_item_for_unknown_event(client: AsyncClient, organizer_headers):
    response = await client.post("/api/budgets/create", json=budget_body(99999), headers=organizer_headers)
    assert response.status_code == 404
    assert response.json()["reason"] == "event-not-found"


@pytest.mark.asyncio
async def test_create_budget_item_invalid(client: AsyncClient, organizer_headers, test_event):
    response = await client.post(
        "/api/budgets/create",
        json=budget_body(test_event.id, category="snacks", estimated_cost=-1),
        headers=organizer_headers,
    )
    assert response.status_code == 400
    assert [issue["field_path"] for issue in response.json()["error"]] == ["category", "estimated_cost"]


@pytest.mark.asyncio
async def test_budget_restricted_to_event_owner(
    client: AsyncClient, other_organizer, participant_headers, organizer_headers, test_event
):
    response = await client.post(
        "/api/budgets/create", json=budget_body(test_event.id), headers=bearer(other_organizer)
    )
    assert response.status_code == 403
    assert response.json()["reason"] == "forbidden-owner"

    item = await create_item(client, organizer_headers, test_event.id)
    listing = await client.get(f"/api/budgets/{test_event.id}", headers=participant_headers)
    assert listing.status_code == 403

    update = await client.patch(
        f"/api/budgets/update/{item['id']}", json={"actual_cost": 10}, headers=participant_headers
    )
    assert update.status_code == 403


@pytest.mark.asyncio
async def test_list_budget_with_summary(client: AsyncClient, organizer_headers, test_event):
    await create_item(client, organizer_headers, test_event.id, category="catering", estimated_cost=300, actual_cost=280)
    await create_item(client, organizer_headers, test_event.id, item_name="Posters", category="marketing", estimated_cost=50)

    response = await client.get(f"/api/budgets/{test_event.id}", headers=organizer_headers)
    assert response.status_code == 200
    data = response.json()
    assert [item["item_name"] for item in data["budget_items"]] == ["Posters", "Sound system"]
    assert data["summary"]["total_estimated_cost"] == 350.0
    assert data["summary"]["total_actual_cost"] == 280.0
    assert data["summary"]["budget_by_category"]["marketing"] == {"estimated": 50.0, "actual": 0.0}


@pytest.mark.asyncio
async def test_actual_cost_change_notifies(client: AsyncClient, organizer_headers, test_event):
    item = await create_item(client, organizer_headers, test_event.id)

    response = await client.patch(
        f"/api/budgets/update/{item['id']}", json={"actual_cost": 425.5}, headers=organizer_headers
    )
    assert response.status_code == 200
    assert response.json()["budget_item"]["actual_cost"] == 425.5

    inbox = (await client.get("/api/notifications", headers=organizer_headers)).json()["notifications"]
    budget_notes = [n for n in inbox if n["title"] == "Budget Updated"]
    assert len(budget_notes) == 1
    assert budget_notes[0]["message"] == 'Actual cost for "Sound system" has been updated to $425.5'
    assert budget_notes[0]["type"] == "info"
    assert budget_notes[0]["event_id"] == test_event.id


@pytest.mark.asyncio
async def test_unchanged_actual_cost_is_silent(client: AsyncClient, organizer_headers, test_event):
    item = await create_item(client, organizer_headers, test_event.id, actual_cost=100)

    await client.patch(f"/api/budgets/update/{item['id']}", json={"actual_cost": 100}, headers=organizer_headers)
    await client.patch(f"/api/budgets/update/{item['id']}", json={"notes": "Paid in cash"}, headers=organizer_headers)

    inbox = (await client.get("/api/notifications", headers=organizer_headers)).json()["notifications"]
    assert not [n for n in inbox if n["title"] == "Budget Updated"]


@pytest.mark.asyncio
async def test_cleared_actual_cost_notifies(client: AsyncClient, organizer_headers, test_event):
    item = await create_item(client, organizer_headers, test_event.id, actual_cost=100)

    response = await client.patch(
        f"/api/budgets/update/{item['id']}", json={"actual_cost": None}, headers=organizer_headers
    )
    assert response.status_code == 200
    assert response.json()["budget_item"]["actual_cost"] is None

    inbox = (await client.get("/api/notifications", headers=organizer_headers)).json()["notifications"]
    messages = [n["message"] for n in inbox if n["title"] == "Budget Updated"]
    assert messages == ['Actual cost for "Sound system" has been cleared']


def test_actual_cost_message():
    assert actual_cost_message("Posters", 75) == 'Actual cost for "Posters" has been updated to $75'
    assert "None" not in actual_cost_message("Posters", None)


@pytest.mark.asyncio
async def test_delete_budget_item(client: AsyncClient, organizer_headers, test_event):
    item = await create_item(client, organizer_headers, test_event.id)

    response = await client.delete(f"/api/budgets/{item['id']}", headers=organizer_headers)
    assert response.status_code == 200
    assert response.json()["id"] == item["id"]

    again = await client.delete(f"/api/budgets/{item['id']}", headers=organizer_headers)
    assert again.status_code == 404
