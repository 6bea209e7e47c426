"""
Tests for the notification inbox, announcements and the post-commit emitter.
"""

import pytest
from httpx import AsyncClient

from campus_events.models.enums import UserRole
from campus_events.services.notification_service import NotificationEmitter

from conftest import bearer


def notification_body(**overrides) -> dict:
    body = {"title": "Room change", "message": "We moved to the Main Auditorium.", "type": "warning"}
    body.update(overrides)
    return body


@pytest.mark.asyncio
async def test_send_to_single_user(client: AsyncClient, participant, participant_headers, organizer_headers):
    response = await client.post(
        "/api/notifications/create",
        json=notification_body(user_id=participant.id),
        headers=organizer_headers,
    )
    assert response.status_code == 201
    data = response.json()
    assert data["count"] == 1
    assert data["notifications"][0]["is_announcement"] is False

    inbox = await client.get("/api/notifications", headers=participant_headers)
    assert inbox.json()["unread_count"] == 1
    assert inbox.json()["notifications"][0]["title"] == "Room change"


@pytest.mark.asyncio
async def test_send_to_unknown_user(client: AsyncClient, organizer_headers):
    response = await client.post(
        "/api/notifications/create", json=notification_body(user_id=99999), headers=organizer_headers
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_participants_cannot_send(client: AsyncClient, participant, participant_headers):
    response = await client.post(
        "/api/notifications/create",
        json=notification_body(user_id=participant.id),
        headers=participant_headers,
    )
    assert response.status_code == 403
    assert response.json()["reason"] == "forbidden-role"


@pytest.mark.asyncio
async def test_announcement_to_audience(client: AsyncClient, make_user, admin_headers, organizer, admin):
    students = [await make_user() for _ in range(3)]

    response = await client.post(
        "/api/notifications/create",
        json=notification_body(target_audience="participants"),
        headers=admin_headers,
    )
    assert response.status_code == 201
    data = response.json()
    assert data["count"] == 3
    assert sorted(n["user_id"] for n in data["notifications"]) == sorted(s.id for s in students)
    assert all(n["is_announcement"] for n in data["notifications"])

    staff = await client.post(
        "/api/notifications/create",
        json=notification_body(target_audience="staff"),
        headers=admin_headers,
    )
    assert sorted(n["user_id"] for n in staff.json()["notifications"]) == sorted([organizer.id, admin.id])


@pytest.mark.asyncio
async def test_announcement_to_event_participants(
    client: AsyncClient, make_user, organizer_headers, test_event
):
    attendee = await make_user()
    bystander = await make_user()
    await client.post(
        "/api/registrations/create",
        json={"event_id": test_event.id, "ticket_type": "general"},
        headers=bearer(attendee),
    )

    response = await client.post(
        "/api/notifications/create",
        json=notification_body(event_id=test_event.id),
        headers=organizer_headers,
    )
    recipients = [n["user_id"] for n in response.json()["notifications"]]
    assert recipients == [attendee.id]
    assert bystander.id not in recipients


@pytest.mark.asyncio
async def test_announcement_without_recipients(client: AsyncClient, organizer_headers):
    response = await client.post(
        "/api/notifications/create",
        json=notification_body(target_audience="sponsors"),
        headers=organizer_headers,
    )
    assert response.status_code == 201
    assert response.json()["count"] == 0


@pytest.mark.asyncio
async def test_mark_read_by_recipient_only(
    client: AsyncClient, participant, participant_headers, organizer_headers, make_user
):
    sent = await client.post(
        "/api/notifications/create",
        json=notification_body(user_id=participant.id),
        headers=organizer_headers,
    )
    notification_id = sent.json()["notifications"][0]["id"]

    stranger = await make_user()
    denied = await client.patch(f"/api/notifications/read/{notification_id}", headers=bearer(stranger))
    assert denied.status_code == 403

    response = await client.patch(f"/api/notifications/read/{notification_id}", headers=participant_headers)
    assert response.status_code == 200
    assert response.json()["notification"]["read"] is True

    missing = await client.patch("/api/notifications/read/99999", headers=participant_headers)
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_mark_all_read(client: AsyncClient, participant, participant_headers, organizer_headers):
    for title in ("First notice", "Second notice"):
        await client.post(
            "/api/notifications/create",
            json=notification_body(user_id=participant.id, title=title),
            headers=organizer_headers,
        )

    response = await client.post("/api/notifications/read-all", headers=participant_headers)
    assert response.json()["count"] == 2

    inbox = await client.get("/api/notifications", headers=participant_headers)
    assert inbox.json()["unread_count"] == 0

    again = await client.post("/api/notifications/read-all", headers=participant_headers)
    assert again.json()["count"] == 0


@pytest.mark.asyncio
async def test_unread_only_filter(client: AsyncClient, participant, participant_headers, organizer_headers):
    first = await client.post(
        "/api/notifications/create",
        json=notification_body(user_id=participant.id, title="Old news"),
        headers=organizer_headers,
    )
    await client.post(
        "/api/notifications/create",
        json=notification_body(user_id=participant.id, title="Fresh news"),
        headers=organizer_headers,
    )
    await client.patch(
        f"/api/notifications/read/{first.json()['notifications'][0]['id']}", headers=participant_headers
    )

    response = await client.get("/api/notifications?unread_only=true", headers=participant_headers)
    assert [n["title"] for n in response.json()["notifications"]] == ["Fresh news"]


@pytest.mark.asyncio
async def test_unread_count_ignores_page_size(
    client: AsyncClient, participant, participant_headers, organizer_headers
):
    for title in ("First notice", "Second notice", "Third notice"):
        await client.post(
            "/api/notifications/create",
            json=notification_body(user_id=participant.id, title=title),
            headers=organizer_headers,
        )

    response = await client.get("/api/notifications?limit=1", headers=participant_headers)
    data = response.json()
    assert len(data["notifications"]) == 1
    assert data["unread_count"] == 3

    await client.patch(f"/api/notifications/read/{data['notifications'][0]['id']}", headers=participant_headers)
    unread_page = await client.get("/api/notifications?unread_only=true&limit=1", headers=participant_headers)
    assert unread_page.json()["unread_count"] == 2


@pytest.mark.asyncio
async def test_inbox_requires_login(client: AsyncClient):
    response = await client.get("/api/notifications")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_emitter_writes_notification(session_factory, make_user):
    user = await make_user(UserRole.ORGANIZER)
    emitter = NotificationEmitter(session_factory)

    notification = await emitter.emit(user.id, "Event Created", "Your event is live.")
    assert notification is not None
    assert notification.type == "info"
    assert notification.read is False


@pytest.mark.asyncio
async def test_emitter_swallows_store_failures(session_factory):
    """A broken write is logged and counted; the caller still gets control back."""
    emitter = NotificationEmitter(session_factory)

    # NOT NULL on title rejects the row
    assert await emitter.emit(1, None, "Nobody will read this.") is None


@pytest.mark.asyncio
async def test_emitter_survives_unreachable_store():
    def broken_factory():
        raise ConnectionRefusedError("database is down")

    emitter = NotificationEmitter(broken_factory)
    assert await emitter.emit(1, "Event Created", "Your event is live.") is None
