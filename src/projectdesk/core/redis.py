"""Shared Redis client for the wizard state store.

Redis is optional. ``get_redis()`` returns ``None`` while it is not configured
or not reachable, and the wizard keeps its state in the cookie session
instead. After a failed connection the next attempt waits for
``redis_retry_interval_seconds``.
"""

import time

from redis.asyncio import Redis

from src.projectdesk.core.config import get_settings
from src.projectdesk.core.logging import get_logger

logger = get_logger(__name__)

_redis: Redis | None = None
_retry_after: float = 0.0


async def get_redis() -> Redis | None:
    """Get the shared Redis client, connecting on first use."""
    global _redis, _retry_after

    if _redis is not None:
        return _redis

    settings = get_settings()
    if not settings.redis_url or time.monotonic() < _retry_after:
        return None

    client = Redis.from_url(
        settings.redis_url,
        max_connections=settings.redis_pool_size,
        decode_responses=True,
    )
    try:
        await client.ping()  # type: ignore[misc]
    except Exception as e:
        await client.aclose()
        _retry_after = time.monotonic() + settings.redis_retry_interval_seconds
        logger.warning(
            "Redis unavailable, wizard state falls back to the session cookie",
            error=str(e),
            retry_in_seconds=settings.redis_retry_interval_seconds,
        )
        return None

    _redis = client
    logger.info("Redis connected")
    return _redis


async def close_redis() -> None:
    """Close the shared client and forget any failed attempt."""
    global _redis, _retry_after

    if _redis is not None:
        await _redis.aclose()
        logger.info("Redis connection closed")
    _redis = None
    _retry_after = 0.0
