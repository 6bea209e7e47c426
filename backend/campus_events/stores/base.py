"""
Shared plumbing for the data access functions.
"""

import functools
from dataclasses import dataclass
from enum import Enum
from typing import Any

from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.errors import StoreUnavailable
from campus_events.core.logging import get_logger
from campus_events.core.metrics import record_store_failure
from campus_events.db.base import utcnow

logger = get_logger(__name__)


class FailureKind(str, Enum):
    NOT_FOUND = "not-found"
    CONSTRAINT_VIOLATION = "constraint-violation"


@dataclass(frozen=True)
class StoreFailure:
    kind: FailureKind
    code: str
    message: str

    @property
    def not_found(self) -> bool:
        return self.kind is FailureKind.NOT_FOUND


def not_found(entity: str, record_id: Any) -> StoreFailure:
    record_store_failure(FailureKind.NOT_FOUND.value)
    return StoreFailure(FailureKind.NOT_FOUND, "not_found", f"{entity} {record_id} not found")


def stamped(fields: dict[str, Any]) -> dict[str, Any]:
    """Copy of `fields` with `updated_at` set; callers never pass one."""
    return {**fields, "updated_at": utcnow()}


def _driver_code(exc: DBAPIError) -> str:
    orig = exc.orig
    return str(getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None) or type(orig).__name__)


def store_operation(func):
    """
    Translate driver exceptions for one data access function.

    IntegrityError -> StoreFailure(constraint-violation), session rolled back.
    Any other DBAPIError or socket error -> StoreUnavailable.
    """

    @functools.wraps(func)
    async def wrapper(db: AsyncSession, *args, **kwargs):
        try:
            return await func(db, *args, **kwargs)
        except IntegrityError as exc:
            await db.rollback()
            failure = StoreFailure(FailureKind.CONSTRAINT_VIOLATION, _driver_code(exc), str(exc.orig))
            record_store_failure(failure.kind.value)
            logger.warning(
                "store_constraint_violation",
                operation=func.__name__,
                code=failure.code,
                error=failure.message,
            )
            return failure
        except (DBAPIError, OSError) as exc:
            record_store_failure("unavailable")
            logger.error("store_unavailable", operation=func.__name__, error=str(exc))
            raise StoreUnavailable(func.__name__, str(exc)) from exc

    return wrapper


async def insert(db: AsyncSession, instance):
    db.add(instance)
    await db.commit()
    await db.refresh(instance)
    return instance


async def apply_changes(db: AsyncSession, instance, changes: dict[str, Any]):
    for field, value in stamped(changes).items():
        setattr(instance, field, value)
    await db.commit()
    await db.refresh(instance)
    return instance
