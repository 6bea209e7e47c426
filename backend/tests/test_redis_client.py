"""
Tests for the shared Redis connection and its reconnect backoff.
"""

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from campus_events.core.config import get_settings
from campus_events.infrastructure import redis_client


class UnreachableRedis:
    def __init__(self, attempts: list):
        attempts.append(self)

    async def ping(self):
        raise RedisConnectionError("Connection refused")

    async def aclose(self):
        pass


@pytest.fixture
def redis_down(monkeypatch):
    """Enable Redis against a server that refuses every connection; yields the attempts made."""
    attempts: list = []
    monkeypatch.setenv("REDIS_ENABLED", "true")
    monkeypatch.setattr(redis_client, "_redis_client", None)
    monkeypatch.setattr(redis_client, "_last_failure", None)
    monkeypatch.setattr(redis_client.redis, "from_url", lambda *args, **kwargs: UnreachableRedis(attempts))
    get_settings.cache_clear()
    yield attempts
    monkeypatch.undo()
    get_settings.cache_clear()


@pytest.mark.asyncio
async def test_failed_ping_is_not_retried_immediately(redis_down):
    assert await redis_client.get_redis() is None
    assert await redis_client.get_redis() is None
    assert await redis_client.redis_status() == {"status": "unreachable"}
    assert len(redis_down) == 1


@pytest.mark.asyncio
async def test_reconnect_after_retry_interval(redis_down, monkeypatch):
    monkeypatch.setenv("REDIS_RETRY_INTERVAL", "0")
    get_settings.cache_clear()

    assert await redis_client.get_redis() is None
    assert await redis_client.get_redis() is None
    assert len(redis_down) == 2


@pytest.mark.asyncio
async def test_close_clears_backoff(redis_down):
    assert await redis_client.get_redis() is None
    await redis_client.close_redis()
    assert await redis_client.get_redis() is None
    assert len(redis_down) == 2
