"""Redis-backed sliding window store.

Every hit runs one Lua script, so trimming, counting and the conditional
insert are a single indivisible operation on the Redis server. Concurrent
callers for the same (bucket, key), on any number of machines, are
serialized by Redis and can never admit more than ``max_limit`` hits per
window. Timestamps come from Redis ``TIME``, not from the calling process.
"""

from __future__ import annotations

import logging
import uuid

from redis.asyncio import Redis
from redis.exceptions import RedisError

from slide_limiter.adapters.rate_limit.base import HitResult, RateLimiterStore, WindowOptions
from slide_limiter.core.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

# KEYS[1]: window key
# ARGV[1]: window length (ms), ARGV[2]: max hits, ARGV[3]: member tiebreaker
# Returns {allowed, remaining, retry_after_ms}; retry_after_ms is -1 when allowed.
SLIDING_WINDOW_SCRIPT = """
local key = KEYS[1]
local window_ms = tonumber(ARGV[1])
local limit = tonumber(ARGV[2])

local current_time = redis.call('TIME')
local now_ms = tonumber(current_time[1]) * 1000 + tonumber(current_time[2]) / 1000

redis.call('ZREMRANGEBYSCORE', key, '-inf', now_ms - window_ms)
local request_count = redis.call('ZCARD', key)

if request_count < limit then
    local member = current_time[1] .. '.' .. current_time[2] .. ':' .. ARGV[3]
    redis.call('ZADD', key, now_ms, member)
    redis.call('PEXPIRE', key, ARGV[1])
    return {1, limit - request_count - 1, -1}
end

local retry_after = window_ms
local oldest = redis.call('ZRANGE', key, 0, 0, 'WITHSCORES')
if oldest[2] then
    retry_after = math.max(0, math.ceil(tonumber(oldest[2]) + window_ms - now_ms))
end
return {0, 0, retry_after}
"""


class RedisSlidingWindowStore(RateLimiterStore):
    """Store keeping one sorted set per (bucket, key) in Redis.

    The client handle is created and owned by the caller (see
    ``slide_limiter.core.redis``); this class never connects or closes it.
    """

    def __init__(self, db: Redis, *, key_prefix: str = "") -> None:
        """Initialize the Redis store.

        Args:
            db: Ready-to-use async Redis client.
            key_prefix: Optional namespace prepended to every window key.
        """
        self._db = db
        self._key_prefix = key_prefix
        self._script = db.register_script(SLIDING_WINDOW_SCRIPT)

    @property
    def db(self) -> Redis:
        return self._db

    def window_key(self, bucket: str, key: str) -> str:
        """Build the Redis key holding the window for (bucket, key).

        The bucket is length-prefixed so a ":" inside a bucket or key can never
        make two different pairs share a window.
        """
        window_key = f"{len(bucket)}:{bucket}:{key}"
        if self._key_prefix:
            return f"{self._key_prefix}:{window_key}"
        return window_key

    async def hit(self, bucket: str, key: str, options: WindowOptions) -> int:
        result = await self.consume(bucket, key, options)
        return result.remaining

    async def consume(self, bucket: str, key: str, options: WindowOptions) -> HitResult:
        """Run the sliding window script for (bucket, key).

        Args:
            bucket: Rate limit namespace.
            key: Identity being limited.
            options: Window length and max admitted hits.

        Returns:
            HitResult with the admission decision and remaining quota.

        Raises:
            StoreUnavailableError: If Redis is unreachable or the script fails.
        """
        try:
            allowed, remaining, retry_after_ms = await self._script(
                keys=[self.window_key(bucket, key)],
                args=[options.window_ms, options.max_limit, uuid.uuid4().hex],
            )
        except RedisError as exc:
            raise StoreUnavailableError(
                code="store_unavailable",
                message="Rate limit store is unavailable",
                details={
                    "backend": "redis",
                    "error_type": type(exc).__name__,
                    "hint": "Check Redis connectivity (REDIS_URL) and server health",
                },
            ) from exc

        result = HitResult(
            allowed=bool(int(allowed)),
            limit=options.max_limit,
            remaining=int(remaining),
            retry_after_ms=None if int(retry_after_ms) < 0 else int(retry_after_ms),
        )
        logger.debug(
            "rate_limit.redis.hit",
            extra={
                "bucket": bucket,
                "allowed": result.allowed,
                "remaining": result.remaining,
                "window_ms": options.window_ms,
            },
        )
        return result
