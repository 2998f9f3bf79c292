"""Rate limiting dependency for FastAPI routes.

This module wires the limiter into the HTTP layer.

Design goals:
- Minimal coupling: routes depend on a dependency function only.
- Swap-friendly: the store behind the limiter is chosen by settings.
- One limiter per process so in-memory windows survive across requests.

Keying strategy:
- Per API key when the X-API-Key header is present.
- Otherwise fall back to the client IP.
"""

from __future__ import annotations

import logging
from typing import Annotated, Awaitable, Callable

from fastapi import Depends, Header, HTTPException, Request, Response, status

from slide_limiter.adapters.rate_limit.base import HitResult, WindowOptions
from slide_limiter.adapters.rate_limit.factory import create_limiter
from slide_limiter.core.config import settings
from slide_limiter.core.logging import hash_identifier
from slide_limiter.limiter import SlideLimiter

logger = logging.getLogger(__name__)


_limiter: SlideLimiter | None = None


def get_limiter() -> SlideLimiter:
    """Return the process-wide limiter, building it on first use."""

    global _limiter

    if _limiter is None:
        _limiter = create_limiter()
        logger.info(
            "rate_limit.limiter_initialized",
            extra={
                "backend": settings.limiter.backend,
                "window_ms": _limiter.options.window_ms,
                "max_limit": _limiter.options.max_limit,
            },
        )

    return _limiter


def reset_limiter() -> None:
    """Drop the cached limiter (primarily for tests and settings reloads)."""

    global _limiter
    _limiter = None


def build_rate_limit_key(request: Request, x_api_key: str | None) -> str:
    """Build the limiter key for the current request.

    Args:
        request: FastAPI request.
        x_api_key: API key value from the X-API-Key header.

    Returns:
        str: Namespaced limiter key.
    """

    if x_api_key:
        return f"api_key:{x_api_key}"

    client_host = request.client.host if request.client else "unknown"
    return f"ip:{client_host}"


def rate_limit_headers(result: HitResult) -> dict[str, str]:
    """Headers describing the caller's quota after a hit."""

    headers = {
        "X-RateLimit-Limit": str(result.limit),
        "X-RateLimit-Remaining": str(result.remaining),
    }
    if result.retry_after_ms is not None:
        # Retry-After is whole seconds; round up so clients never retry early.
        headers["Retry-After"] = str(-(-result.retry_after_ms // 1000))
    return headers


def rate_limit(
    bucket: str,
    *,
    window_ms: int | None = None,
    max_limit: int | None = None,
) -> Callable[..., Awaitable[None]]:
    """Create a dependency enforcing a sliding window limit on ``bucket``.

    Args:
        bucket: Rate limit namespace for the protected route(s).
        window_ms: Optional window override; limiter default when omitted.
        max_limit: Optional limit override; limiter default when omitted.

    Returns:
        Async dependency raising HTTP 429 when the caller is over the limit.

    Raises:
        ValueError: If an override is not positive.

    Example:
        >>> @router.post("/login", dependencies=[Depends(rate_limit("login", max_limit=5))])
        ... async def login(): ...
    """
    for name, value in (("window_ms", window_ms), ("max_limit", max_limit)):
        if value is not None and value < 1:
            raise ValueError(f"{name} must be >= 1")

    async def enforce_rate_limit(
        request: Request,
        response: Response,
        limiter: Annotated[SlideLimiter, Depends(get_limiter)],
        x_api_key: Annotated[str | None, Header(alias="X-API-Key")] = None,
    ) -> None:
        options = None
        if window_ms is not None or max_limit is not None:
            options = WindowOptions(
                window_ms=window_ms if window_ms is not None else limiter.options.window_ms,
                max_limit=max_limit if max_limit is not None else limiter.options.max_limit,
            )

        key = build_rate_limit_key(request, x_api_key)
        result = await limiter.consume(bucket, key, options)

        log_extra = {
            "bucket": bucket,
            "key_type": "api_key" if x_api_key else "ip",
            "key_hash": hash_identifier(key),
            "limit": result.limit,
            "remaining": result.remaining,
        }
        headers = rate_limit_headers(result) if settings.limiter.include_headers else {}

        if result.allowed:
            logger.info("rate_limit.allowed", extra=log_extra)
            response.headers.update(headers)
            return

        logger.warning(
            "rate_limit.exceeded",
            extra={**log_extra, "retry_after_ms": result.retry_after_ms},
        )
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Rate limit exceeded. Try again later.",
            headers=headers or None,
        )

    return enforce_rate_limit
