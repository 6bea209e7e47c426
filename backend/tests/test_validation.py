"""
Boundary validation: payloads become schema instances or ordered field issues.
"""

from datetime import datetime, timezone, timedelta

import pytest

from campus_events.core.errors import ValidationFailed
from campus_events.schemas.event import EventCreate, EventUpdate
from campus_events.schemas.notification import NotificationCreate
from campus_events.schemas.schedule import ScheduleItemCreate
from campus_events.schemas.venue import VenueCreate
from campus_events.schemas.validation import FieldIssue, ValidationFailure, validate, validated

from conftest import event_payload, future


def issue_fields(result) -> list[str]:
    assert isinstance(result, ValidationFailure)
    return [issue.field_path for issue in result.issues]


def test_valid_event_payload():
    result = validate(EventCreate, event_payload())
    assert isinstance(result, EventCreate)
    assert result.capacity == 100
    assert result.start_date.tzinfo is not None


def test_missing_fields_reported_in_schema_order():
    result = validate(EventCreate, {})
    assert issue_fields(result) == [
        "title", "description", "location", "start_date", "end_date", "capacity", "category",
    ]
    assert all(issue.message == "Field required" for issue in result.issues)


@pytest.mark.parametrize("payload", [None, "a string", [1, 2, 3], 42])
def test_non_mapping_payload_is_one_body_issue(payload):
    result = validate(EventCreate, payload)
    assert issue_fields(result) == ["body"]


def test_numeric_string_is_coerced():
    result = validate(EventCreate, event_payload(capacity="50", price="9.99"))
    assert isinstance(result, EventCreate)
    assert result.capacity == 50
    assert result.price == 9.99


def test_fractional_capacity_rejected():
    result = validate(EventCreate, event_payload(capacity=1.5))
    assert issue_fields(result) == ["capacity"]


@pytest.mark.parametrize("flag", [True, False])
def test_boolean_capacity_rejected(flag):
    result = validate(EventCreate, event_payload(capacity=flag))
    assert issue_fields(result) == ["capacity"]
    assert result.issues[0].message == "Must be a number, not a boolean"

    assert issue_fields(validate(EventUpdate, {"capacity": flag})) == ["capacity"]

    venue = {
        "name": "Main Hall",
        "address": "1 Campus Road",
        "capacity": flag,
        "contact_info": "hall@campus.edu",
        "cost_per_hour": 50,
    }
    assert issue_fields(validate(VenueCreate, venue)) == ["capacity"]
    assert validate(VenueCreate, {**venue, "capacity": "200"}).capacity == 200


def test_end_before_start():
    result = validate(
        EventCreate,
        event_payload(start_date=future(10).isoformat(), end_date=future(9).isoformat()),
    )
    assert result.issues == [FieldIssue("end_date", "End date must be after start date")]


def test_naive_dates_read_as_utc():
    start = (datetime.now(timezone.utc) + timedelta(days=3)).replace(tzinfo=None)
    result = validate(
        EventCreate,
        event_payload(start_date=start.isoformat(), end_date=(start + timedelta(hours=1)).isoformat()),
    )
    assert isinstance(result, EventCreate)
    assert result.start_date.utcoffset() == timedelta(0)


def test_past_start_date():
    past = datetime.now(timezone.utc) - timedelta(hours=1)
    result = validate(EventCreate, event_payload(start_date=past.isoformat()))
    assert result.issues[0] == FieldIssue("start_date", "Start date must be in the future")


def test_only_draft_or_published_on_create():
    result = validate(EventCreate, event_payload(status="completed"))
    assert result.issues == [FieldIssue("status", "New events must be draft or published")]


def test_unknown_enum_value():
    result = validate(EventCreate, event_payload(status="archived"))
    assert issue_fields(result) == ["status"]


def test_partial_update_keeps_only_given_fields():
    result = validate(EventUpdate, {"title": "Renamed Event"})
    assert isinstance(result, EventUpdate)
    assert result.model_dump(exclude_unset=True) == {"title": "Renamed Event"}


def test_update_checks_dates_given_together():
    result = validate(
        EventUpdate,
        {"start_date": future(5).isoformat(), "end_date": future(4).isoformat()},
    )
    assert issue_fields(result) == ["end_date"]


def test_schedule_item_times():
    start = future(5)
    result = validate(ScheduleItemCreate, {
        "event_id": 1,
        "title": "Keynote",
        "start_time": start.isoformat(),
        "end_time": start.isoformat(),
    })
    assert result.issues == [FieldIssue("end_time", "End time must be after start time")]


def test_notification_type_required():
    result = validate(NotificationCreate, {"title": "Hello", "message": "Welcome aboard"})
    assert issue_fields(result) == ["type"]


def test_validated_raises_with_issues():
    with pytest.raises(ValidationFailed) as exc_info:
        validated(EventCreate, event_payload(title="ab"))
    assert exc_info.value.status_code == 400
    assert [issue.field_path for issue in exc_info.value.issues] == ["title"]


def test_validated_returns_instance():
    assert isinstance(validated(EventCreate, event_payload()), EventCreate)
