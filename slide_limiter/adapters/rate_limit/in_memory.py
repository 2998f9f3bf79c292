"""In-memory sliding window store.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: trim, count and append happen under one lock.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from typing import Callable

from slide_limiter.adapters.rate_limit.base import HitResult, RateLimiterStore, WindowOptions

logger = logging.getLogger(__name__)


def _epoch_ms() -> int:
    return int(time.time() * 1000)


class InMemorySlidingWindowStore(RateLimiterStore):
    """Store keeping an ordered log of admission timestamps per (bucket, key).

    Each window is a deque of epoch-millisecond timestamps in insertion order.
    Timestamps are read once per call under the lock, so insertion order is
    also chronological order and expired entries can be trimmed from the left.

    Important:
        Windows are never deleted. A (bucket, key) that stops receiving hits
        keeps its (stale) deque until the process exits.
    """

    def __init__(self, *, clock: Callable[[], int] = _epoch_ms) -> None:
        """Initialize the in-memory store.

        Args:
            clock: Time source returning UNIX time in milliseconds.
        """
        self._clock = clock
        self._lock = threading.RLock()
        self._windows: dict[tuple[str, str], deque[int]] = {}

    @property
    def buckets(self) -> dict[str, dict[str, list[int]]]:
        """Snapshot of the stored windows as ``{bucket: {key: [timestamps]}}``."""

        with self._lock:
            snapshot: dict[str, dict[str, list[int]]] = {}
            for (bucket, key), window in self._windows.items():
                snapshot.setdefault(bucket, {})[key] = list(window)
            return snapshot

    @staticmethod
    def _slide_window(window: deque[int], now: int, window_ms: int) -> None:
        trim_time = now - window_ms
        while window and window[0] <= trim_time:
            window.popleft()

    async def hit(self, bucket: str, key: str, options: WindowOptions) -> int:
        result = await self.consume(bucket, key, options)
        return result.remaining

    async def consume(self, bucket: str, key: str, options: WindowOptions) -> HitResult:
        """Trim the window, then admit the hit if there is room left.

        Args:
            bucket: Rate limit namespace.
            key: Identity being limited.
            options: Window length and max admitted hits.

        Returns:
            HitResult with the admission decision and remaining quota.
        """
        with self._lock:
            now = self._clock()
            window = self._windows.setdefault((bucket, key), deque())
            self._slide_window(window, now, options.window_ms)

            allowed = len(window) < options.max_limit
            if allowed:
                window.append(now)

            remaining = max(0, options.max_limit - len(window))
            retry_after_ms = None
            if not allowed:
                retry_after_ms = max(0, window[0] + options.window_ms - now)

        logger.debug(
            "rate_limit.memory.hit",
            extra={
                "bucket": bucket,
                "allowed": allowed,
                "remaining": remaining,
                "window_ms": options.window_ms,
            },
        )
        return HitResult(
            allowed=allowed,
            limit=options.max_limit,
            remaining=remaining,
            retry_after_ms=retry_after_ms,
        )
