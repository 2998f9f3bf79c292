"""Tests for the abstract store contract."""

import pytest

from slide_limiter.adapters.rate_limit.base import (
    HitResult,
    RateLimiterStore,
    WindowOptions,
)


class DelegatingStore(RateLimiterStore):
    """Store that forgets to implement anything and defers to the base class."""

    async def hit(self, bucket: str, key: str, options: WindowOptions) -> int:
        return await super().hit(bucket, key, options)

    async def consume(self, bucket: str, key: str, options: WindowOptions) -> HitResult:
        return await super().consume(bucket, key, options)


def test_store_without_overrides_cannot_be_instantiated() -> None:
    class Incomplete(RateLimiterStore):
        pass

    with pytest.raises(TypeError):
        Incomplete()  # type: ignore[abstract]


def test_delegating_store_is_a_rate_limiter_store() -> None:
    assert isinstance(DelegatingStore(), RateLimiterStore)


@pytest.mark.asyncio
async def test_base_hit_raises_not_implemented() -> None:
    store = DelegatingStore()

    with pytest.raises(NotImplementedError):
        await store.hit("bucket", "key", WindowOptions(window_ms=5000, max_limit=5))


@pytest.mark.asyncio
async def test_base_consume_raises_not_implemented() -> None:
    store = DelegatingStore()

    with pytest.raises(NotImplementedError):
        await store.consume("bucket", "key", WindowOptions(window_ms=5000, max_limit=5))
