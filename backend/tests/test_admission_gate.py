"""
Tests for the per-event admission gates.
"""

import asyncio

import fakeredis
import pytest

from campus_events.core.config import get_settings
from campus_events.core.errors import StoreUnavailable
from campus_events.services import admission_gate
from campus_events.services.admission_gate import RedisAdmissionGate
from campus_events.services.interfaces.local_admission import InProcessAdmissionGate
from campus_events.services.strategy_factory import get_admission_strategy


async def overlap_seen(gate, event_ids) -> bool:
    """Run one holder per event id; report whether two holders of the same id overlapped."""
    inside: dict[int, int] = {}
    overlapped = False

    async def holder(event_id: int):
        nonlocal overlapped
        async with gate.hold(event_id):
            inside[event_id] = inside.get(event_id, 0) + 1
            if inside[event_id] > 1:
                overlapped = True
            await asyncio.sleep(0.01)
            inside[event_id] -= 1

    await asyncio.gather(*(holder(event_id) for event_id in event_ids))
    return overlapped


@pytest.mark.asyncio
async def test_same_event_is_serialized():
    assert await overlap_seen(InProcessAdmissionGate(), [1] * 5) is False


@pytest.mark.asyncio
async def test_different_events_run_side_by_side():
    gate = InProcessAdmissionGate()
    started = asyncio.Event()

    async def first():
        async with gate.hold(1):
            started.set()
            await asyncio.sleep(0.05)

    async def second():
        await started.wait()
        # Would wait out the first holder if events shared a lock
        async with gate.hold(2):
            return asyncio.get_running_loop().time()

    loop = asyncio.get_running_loop()
    begin = loop.time()
    _, entered_at = await asyncio.gather(first(), second())
    assert entered_at - begin < 0.05


@pytest.mark.asyncio
async def test_locks_are_released_when_idle():
    gate = InProcessAdmissionGate()
    async with gate.hold(7):
        assert 7 in gate._locks
    assert 7 not in gate._locks


@pytest.mark.asyncio
async def test_redis_gate_falls_back_in_process():
    """REDIS_ENABLED=false in tests, so the shared lock is never available."""
    gate = RedisAdmissionGate()
    assert await overlap_seen(gate, [3, 3, 3]) is False


def test_strategy_selection(monkeypatch):
    monkeypatch.setenv("ADMISSION_STRATEGY", "redis")
    get_settings.cache_clear()
    try:
        assert isinstance(get_admission_strategy(), RedisAdmissionGate)
    finally:
        monkeypatch.undo()
        get_settings.cache_clear()

    assert isinstance(get_admission_strategy(), InProcessAdmissionGate)


@pytest.fixture
def shared_redis(monkeypatch):
    """Point the Redis gate at an in-memory server that every gate instance shares."""
    server = fakeredis.FakeServer()
    client = fakeredis.FakeAsyncRedis(server=server)

    async def fake_get_redis():
        return client

    monkeypatch.setattr(admission_gate, "get_redis", fake_get_redis)
    return client


@pytest.mark.asyncio
async def test_redis_gate_serializes_same_event(shared_redis):
    # Two gate instances stand in for two API processes
    first, second = RedisAdmissionGate(), RedisAdmissionGate()

    inside = 0
    overlapped = False

    async def holder(gate):
        nonlocal inside, overlapped
        async with gate.hold(9):
            inside += 1
            overlapped = overlapped or inside > 1
            await asyncio.sleep(0.02)
            inside -= 1

    await asyncio.gather(holder(first), holder(second), holder(first))
    assert overlapped is False


@pytest.mark.asyncio
async def test_redis_gate_releases_lock(shared_redis):
    gate = RedisAdmissionGate()
    name = gate.lock_name(4)

    async with gate.hold(4):
        assert await shared_redis.exists(name) == 1
    assert await shared_redis.exists(name) == 0


@pytest.mark.asyncio
async def test_redis_gate_times_out_waiting(shared_redis):
    gate = RedisAdmissionGate()
    gate.settings = get_settings().model_copy(update={"ADMISSION_LOCK_WAIT": 0.2})

    # Another process holds the lock for event 5
    held = shared_redis.lock(gate.lock_name(5), timeout=10)
    assert await held.acquire()

    with pytest.raises(StoreUnavailable):
        async with gate.hold(5):
            pass

    await held.release()
    async with gate.hold(5):
        pass
