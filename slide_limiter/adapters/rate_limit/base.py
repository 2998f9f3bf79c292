"""Rate limiter store interfaces.

The limiter façade depends on this abstraction (not a concrete backend) so
the same call sites work against the in-process store or a shared Redis
store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

DEFAULT_WINDOW_MS = 60_000
DEFAULT_MAX_LIMIT = 10


@dataclass(frozen=True)
class WindowOptions:
    """Sliding window configuration for a single hit.

    Attributes:
        window_ms: Length of the trailing window in milliseconds.
        max_limit: Maximum admitted hits within any such window.
    """

    window_ms: int
    max_limit: int

    def __post_init__(self) -> None:
        for name in ("window_ms", "max_limit"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer")
            if value < 1:
                raise ValueError(f"{name} must be >= 1")


@dataclass(frozen=True)
class RateLimiterOptions(WindowOptions):
    """Limiter-level defaults applied when a call omits its own options."""

    window_ms: int = DEFAULT_WINDOW_MS
    max_limit: int = DEFAULT_MAX_LIMIT


@dataclass(frozen=True)
class HitResult:
    """Outcome of a single hit.

    Attributes:
        allowed: Whether this hit was admitted (recorded in the window).
        limit: Max hits per window used for the decision.
        remaining: Remaining hits in the window after this call (0 when blocked).
        retry_after_ms: Milliseconds until the oldest counted hit leaves the
            window. Only set when the hit was denied.
    """

    allowed: bool
    limit: int
    remaining: int
    retry_after_ms: int | None = None


class RateLimiterStore(ABC):
    """Interface for sliding window stores."""

    @abstractmethod
    async def hit(self, bucket: str, key: str, options: WindowOptions) -> int:
        """Record a hit for ``key`` inside ``bucket`` if the window allows it.

        Args:
            bucket: Rate limit namespace (e.g., "login-attempts").
            key: Identity being limited (e.g., IP address, account id).
            options: Window length and max admitted hits.

        Returns:
            Remaining hits in the window after this call.
        """
        raise NotImplementedError

    @abstractmethod
    async def consume(self, bucket: str, key: str, options: WindowOptions) -> HitResult:
        """Same as ``hit`` but reports whether the hit was admitted."""
        raise NotImplementedError
