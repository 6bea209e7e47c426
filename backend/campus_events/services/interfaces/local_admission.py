"""
In-process admission gate: one asyncio.Lock per event.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator
from weakref import WeakValueDictionary

from campus_events.services.interfaces.admission import AdmissionGate


class InProcessAdmissionGate(AdmissionGate):
    """
    Serializes admissions per event within this process.

    Use when:
    - A single API process serves all traffic
    - Tests and local development

    Locks live only while someone holds or waits on them, so the map does
    not grow with the number of events ever seen.
    """

    def __init__(self):
        self._locks: WeakValueDictionary[int, asyncio.Lock] = WeakValueDictionary()

    def _lock_for(self, event_id: int) -> asyncio.Lock:
        lock = self._locks.get(event_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[event_id] = lock
        return lock

    @asynccontextmanager
    async def hold(self, event_id: int) -> AsyncIterator[None]:
        lock = self._lock_for(event_id)
        async with lock:
            yield
