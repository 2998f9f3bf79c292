"""Sliding window rate limiter façade."""

from __future__ import annotations

from slide_limiter.adapters.rate_limit.base import (
    HitResult,
    RateLimiterOptions,
    RateLimiterStore,
    WindowOptions,
)


class SlideLimiter:
    """Rate limiter bound to one store and one set of default options.

    Example:
        >>> limiter = SlideLimiter(InMemorySlidingWindowStore())
        >>> remaining = await limiter.hit("login-attempts", "203.0.113.7")
    """

    def __init__(
        self,
        store: RateLimiterStore,
        options: RateLimiterOptions | None = None,
    ) -> None:
        self._store = store
        self._options = options or RateLimiterOptions()

    @property
    def options(self) -> RateLimiterOptions:
        return self._options

    @property
    def store(self) -> RateLimiterStore:
        return self._store

    def _resolve(self, options: WindowOptions | None) -> WindowOptions:
        # Call-level options replace the defaults as a whole.
        return options if options is not None else self._options

    async def hit(
        self,
        bucket: str,
        key: str,
        options: WindowOptions | None = None,
    ) -> int:
        """Hit the limiter for ``key`` in ``bucket``.

        Args:
            bucket: Rate limit namespace.
            key: Identity being limited.
            options: Per-call window options; limiter defaults when omitted.

        Returns:
            Remaining hits in the window (0 when denied or just exhausted).
        """
        return await self._store.hit(bucket, key, self._resolve(options))

    async def consume(
        self,
        bucket: str,
        key: str,
        options: WindowOptions | None = None,
    ) -> HitResult:
        """Like ``hit`` but returns the full HitResult, including ``allowed``."""
        return await self._store.consume(bucket, key, self._resolve(options))
