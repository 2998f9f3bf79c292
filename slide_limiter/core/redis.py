"""Process-wide async Redis client used by the shared rate limit store.

The store itself never connects or disconnects; this module owns the
client's lifecycle so the application can close it on shutdown.
"""

from __future__ import annotations

import logging

from redis.asyncio import Redis

from slide_limiter.core.config import RedisSettings, settings

logger = logging.getLogger(__name__)

_redis_client: Redis | None = None


def _build_redis_client(redis_settings: RedisSettings) -> Redis:
    return Redis.from_url(
        redis_settings.url,
        socket_timeout=redis_settings.socket_timeout_seconds,
        socket_connect_timeout=redis_settings.socket_timeout_seconds,
    )


def get_redis_client() -> Redis:
    """Get or create the shared async Redis client.

    Connections are opened lazily by redis-py on the first command, so this
    function never blocks and never fails on an unreachable server.

    Returns:
        Redis: Shared async client configured from settings.redis.
    """
    global _redis_client

    if _redis_client is None:
        _redis_client = _build_redis_client(settings.redis)
        logger.info(
            "redis.client_initialized",
            extra={"redis_url": settings.redis.url},
        )

    return _redis_client


async def close_redis_client() -> None:
    """Close the shared Redis client if one was created."""
    global _redis_client

    if _redis_client is not None:
        await _redis_client.aclose()
        _redis_client = None
        logger.info("redis.client_closed")
