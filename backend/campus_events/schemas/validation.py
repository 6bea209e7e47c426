"""
Boundary validation: turn an untrusted payload into a typed schema instance
or an ordered list of field-level issues.

`validate` never raises for bad input. A caller that wants the exception
flow uses `validated`, which raises `ValidationFailed` carrying the issues.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticCustomError

from campus_events.core.errors import ValidationFailed

SchemaT = TypeVar("SchemaT", bound=BaseModel)


@dataclass(frozen=True)
class FieldIssue:
    field_path: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field_path": self.field_path, "message": self.message}


@dataclass(frozen=True)
class ValidationFailure:
    issues: list[FieldIssue]


def field_path(loc: tuple) -> str:
    """Dotted path for a pydantic error location; "body" for the payload itself."""
    return ".".join(str(part) for part in loc) or "body"


def issues_from_error(exc: ValidationError) -> list[FieldIssue]:
    return [
        FieldIssue(field_path=field_path(tuple(error["loc"])), message=error["msg"])
        for error in exc.errors()
    ]


def validate(schema: type[SchemaT], payload: Any) -> SchemaT | ValidationFailure:
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        return ValidationFailure(issues=issues_from_error(exc))


def validated(schema: type[SchemaT], payload: Any) -> SchemaT:
    result = validate(schema, payload)
    if isinstance(result, ValidationFailure):
        raise ValidationFailed(result.issues)
    return result


def field_values(payload: BaseModel, only_set: bool = False) -> dict[str, Any]:
    """Column-ready values: enums become their plain values."""
    data = payload.model_dump(exclude_unset=only_set)
    return {key: value.value if isinstance(value, Enum) else value for key, value in data.items()}


# Reusable field rules

def reject_bool(value: Any) -> Any:
    """JSON `true` would otherwise pass as the integer 1."""
    if isinstance(value, bool):
        raise PydanticCustomError("bool_not_number", "Must be a number, not a boolean")
    return value


def as_utc(value: datetime) -> datetime:
    """Naive timestamps from forms are read as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def require_future(value: datetime, label: str) -> datetime:
    value = as_utc(value)
    if value <= datetime.now(timezone.utc):
        raise PydanticCustomError("date_not_future", "{label} must be in the future", {"label": label})
    return value


def require_after(value: datetime, start: datetime | None, label: str, start_label: str) -> datetime:
    if start is not None and value <= start:
        raise PydanticCustomError(
            "date_order",
            "{label} must be after {start_label}",
            {"label": label, "start_label": start_label.lower()},
        )
    return value
