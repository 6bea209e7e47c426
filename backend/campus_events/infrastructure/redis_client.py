"""
Async Redis client used for cross-process admission locks.
Separated from business logic for clean architecture.
"""

import time
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from campus_events.core.config import get_settings
from campus_events.core.logging import get_logger

logger = get_logger(__name__)

_redis_client: Optional[redis.Redis] = None
_last_failure: Optional[float] = None


async def get_redis() -> Optional[redis.Redis]:
    """
    Get or create the Redis connection. Returns None if disabled or unreachable.

    After a failed ping no reconnect is attempted for REDIS_RETRY_INTERVAL
    seconds, so an outage costs one connect timeout rather than one per call.
    """
    global _redis_client, _last_failure
    settings = get_settings()

    if not settings.REDIS_ENABLED:
        return None

    if _redis_client is None:
        if _last_failure is not None and time.monotonic() - _last_failure < settings.REDIS_RETRY_INTERVAL:
            return None

        client = redis.from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
            health_check_interval=30,
        )
        try:
            await client.ping()
        except (RedisError, OSError) as e:
            logger.error("redis_connection_failed", error=str(e), retry_in=settings.REDIS_RETRY_INTERVAL)
            _last_failure = time.monotonic()
            await client.aclose()
            return None
        logger.info("redis_connected", url=settings.REDIS_URL)
        _redis_client = client
        _last_failure = None

    return _redis_client


async def close_redis() -> None:
    """Close Redis connection on shutdown."""
    global _redis_client, _last_failure
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None
    _last_failure = None


async def redis_status() -> dict:
    """Connection state for the health endpoint."""
    if not get_settings().REDIS_ENABLED:
        return {"status": "disabled"}
    client = await get_redis()
    return {"status": "connected" if client is not None else "unreachable"}
