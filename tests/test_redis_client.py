"""Tests for the process-wide Redis client lifecycle."""

import pytest

from slide_limiter.core import redis as redis_module


@pytest.mark.asyncio
async def test_client_is_shared_and_closed(monkeypatch, redis_db) -> None:
    built = []

    def _fake_builder(redis_settings):
        built.append(redis_settings.url)
        return redis_db

    monkeypatch.setattr(redis_module, "_build_redis_client", _fake_builder)
    monkeypatch.setattr(redis_module, "_redis_client", None)

    first = redis_module.get_redis_client()
    second = redis_module.get_redis_client()

    assert first is second is redis_db
    assert built == [redis_module.settings.redis.url]

    await redis_module.close_redis_client()
    assert redis_module._redis_client is None


@pytest.mark.asyncio
async def test_close_without_client_is_a_noop(monkeypatch) -> None:
    monkeypatch.setattr(redis_module, "_redis_client", None)

    await redis_module.close_redis_client()

    assert redis_module._redis_client is None
