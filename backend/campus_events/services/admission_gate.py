"""
Redis-backed admission gate shared by every API process.

Fallback:
  If Redis cannot be reached the gate serializes in-process instead and
  counts the fallback. Admissions keep working; cross-process ordering then
  rests on the event row lock and the unique index in the database.

  A lock that cannot be acquired within ADMISSION_LOCK_WAIT while Redis is
  healthy is reported as StoreUnavailable: the request fails rather than
  skipping the serialization point.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from redis.exceptions import LockError, RedisError

from campus_events.core.config import get_settings
from campus_events.core.errors import StoreUnavailable
from campus_events.core.logging import get_logger
from campus_events.core.metrics import admission_gate_fallbacks
from campus_events.infrastructure.redis_client import get_redis
from campus_events.services.interfaces.admission import AdmissionGate
from campus_events.services.interfaces.local_admission import InProcessAdmissionGate

logger = get_logger(__name__)


class RedisAdmissionGate(AdmissionGate):
    """
    Use when:
    - Several API processes or hosts serve registrations
    - Popular events see bursts of simultaneous signups
    """

    def __init__(self):
        self.settings = get_settings()
        self.fallback = InProcessAdmissionGate()

    @staticmethod
    def lock_name(event_id: int) -> str:
        return f"admission:event:{event_id}"

    @asynccontextmanager
    async def hold(self, event_id: int) -> AsyncIterator[None]:
        client = await get_redis()
        lock = None
        if client is not None:
            lock = client.lock(
                self.lock_name(event_id),
                timeout=self.settings.ADMISSION_LOCK_TIMEOUT,
                blocking_timeout=self.settings.ADMISSION_LOCK_WAIT,
            )
            try:
                acquired = await lock.acquire()
            except RedisError as e:
                logger.warning("admission_lock_unreachable", event_id=event_id, error=str(e))
                lock = None
            else:
                if not acquired:
                    raise StoreUnavailable("admission_lock", f"timed out waiting for event {event_id}")

        if lock is None:
            admission_gate_fallbacks.inc()
            async with self.fallback.hold(event_id):
                yield
            return

        try:
            yield
        finally:
            try:
                await lock.release()
            except (LockError, RedisError) as e:
                # Lock expired under us or Redis went away; the DB constraints still hold
                logger.warning("admission_lock_release_failed", event_id=event_id, error=str(e))
