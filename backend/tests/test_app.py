"""
Tests for the health, metrics and root endpoints.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["admission_strategy"] == "local"
    assert data["redis"] == {"status": "disabled"}


@pytest.mark.asyncio
async def test_metrics_exposes_admission_counters(client: AsyncClient, participant_headers, test_event):
    await client.post(
        "/api/registrations/create",
        json={"event_id": test_event.id, "ticket_type": "general"},
        headers=participant_headers,
    )

    response = await client.get("/metrics")
    assert response.status_code == 200
    assert 'admission_requests_total{result="admitted"}' in response.text
    assert "admission_latency_seconds_bucket" in response.text


@pytest.mark.asyncio
async def test_request_id_round_trip(client: AsyncClient):
    response = await client.get("/", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
    assert "X-Response-Time" in response.headers


@pytest.mark.asyncio
async def test_unknown_route_uses_error_body(client: AsyncClient):
    response = await client.get("/api/nowhere")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}
