"""Sliding window rate limiting with in-process and Redis stores."""

from slide_limiter.adapters.rate_limit.base import (
    DEFAULT_MAX_LIMIT,
    DEFAULT_WINDOW_MS,
    HitResult,
    RateLimiterOptions,
    RateLimiterStore,
    WindowOptions,
)
from slide_limiter.adapters.rate_limit.in_memory import InMemorySlidingWindowStore
from slide_limiter.adapters.rate_limit.redis_store import RedisSlidingWindowStore
from slide_limiter.limiter import SlideLimiter

__all__ = [
    "DEFAULT_MAX_LIMIT",
    "DEFAULT_WINDOW_MS",
    "HitResult",
    "InMemorySlidingWindowStore",
    "RateLimiterOptions",
    "RateLimiterStore",
    "RedisSlidingWindowStore",
    "SlideLimiter",
    "WindowOptions",
]
