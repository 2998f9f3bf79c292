from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from slide_limiter.adapters.rate_limit.base import WindowOptions
from slide_limiter.core.rate_limit import get_limiter
from slide_limiter.limiter import SlideLimiter
from slide_limiter.schemas.hit import HitResponse

router = APIRouter(tags=["Limits"])


@router.post("/buckets/{bucket}/keys/{key}/hits", response_model=HitResponse)
async def hit_window(
    bucket: str,
    key: str,
    limiter: Annotated[SlideLimiter, Depends(get_limiter)],
    window_ms: Annotated[int | None, Query(ge=1)] = None,
    max_limit: Annotated[int | None, Query(ge=1)] = None,
) -> HitResponse:
    """Record a hit for ``key`` in ``bucket`` and report the remaining quota.

    A denied hit is not an HTTP error here: callers use this endpoint to ask
    for a decision, so the response always has status 200 and ``allowed``
    carries the answer.

    Args:
        bucket: Rate limit namespace.
        key: Identity being limited.
        window_ms: Optional window override (limiter default when omitted).
        max_limit: Optional limit override (limiter default when omitted).

    Returns:
        HitResponse describing the decision.

    Raises:
        StoreUnavailableError: If the backing store cannot be reached (503).
    """
    options = None
    if window_ms is not None or max_limit is not None:
        options = WindowOptions(
            window_ms=window_ms if window_ms is not None else limiter.options.window_ms,
            max_limit=max_limit if max_limit is not None else limiter.options.max_limit,
        )

    result = await limiter.consume(bucket, key, options)
    return HitResponse(
        bucket=bucket,
        key=key,
        allowed=result.allowed,
        limit=result.limit,
        remaining=result.remaining,
        retry_after_ms=result.retry_after_ms,
    )
