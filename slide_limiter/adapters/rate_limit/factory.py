"""Factory functions for building stores and limiters from settings."""

from slide_limiter.adapters.rate_limit.base import RateLimiterOptions, RateLimiterStore
from slide_limiter.adapters.rate_limit.in_memory import InMemorySlidingWindowStore
from slide_limiter.adapters.rate_limit.redis_store import RedisSlidingWindowStore
from slide_limiter.core.config import LimiterSettings, settings
from slide_limiter.core.errors import ValidationAppError
from slide_limiter.core.redis import get_redis_client
from slide_limiter.limiter import SlideLimiter

SUPPORTED_BACKENDS = ("memory", "redis")


def create_store(limiter_settings: LimiterSettings | None = None) -> RateLimiterStore:
    """Instantiate the store selected by ``limiter.backend``.

    Args:
        limiter_settings: Optional settings; defaults to global settings.

    Returns:
        RateLimiterStore: Configured store instance.

    Raises:
        ValidationAppError: If the backend name is unknown.
    """
    cfg = limiter_settings or settings.limiter
    backend = cfg.backend.lower()

    if backend == "memory":
        return InMemorySlidingWindowStore()

    if backend == "redis":
        return RedisSlidingWindowStore(get_redis_client(), key_prefix=cfg.key_prefix)

    raise ValidationAppError(
        code="limiter_unknown_backend",
        message=(
            f"Unknown rate limiter backend: '{backend}'. "
            f"Supported backends: {', '.join(SUPPORTED_BACKENDS)}"
        ),
    )


def create_limiter(limiter_settings: LimiterSettings | None = None) -> SlideLimiter:
    """Build a SlideLimiter whose defaults come from settings."""
    cfg = limiter_settings or settings.limiter
    return SlideLimiter(
        create_store(cfg),
        RateLimiterOptions(window_ms=cfg.window_ms, max_limit=cfg.max_limit),
    )
