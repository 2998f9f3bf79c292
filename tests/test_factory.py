"""Tests for store/limiter factory functions."""

import pytest

from slide_limiter.adapters.rate_limit import factory
from slide_limiter.adapters.rate_limit.in_memory import InMemorySlidingWindowStore
from slide_limiter.adapters.rate_limit.redis_store import RedisSlidingWindowStore
from slide_limiter.core.config import LimiterSettings
from slide_limiter.core.errors import ValidationAppError


def test_creates_memory_store() -> None:
    store = factory.create_store(LimiterSettings(backend="memory"))

    assert isinstance(store, InMemorySlidingWindowStore)


def test_creates_redis_store_over_shared_client(monkeypatch, redis_db) -> None:
    monkeypatch.setattr(factory, "get_redis_client", lambda: redis_db)

    store = factory.create_store(LimiterSettings(backend="Redis", key_prefix="svc"))

    assert isinstance(store, RedisSlidingWindowStore)
    assert store.db is redis_db
    assert store.window_key("b", "k") == "svc:1:b:k"


def test_unknown_backend_raises_validation_error() -> None:
    with pytest.raises(ValidationAppError) as exc_info:
        factory.create_store(LimiterSettings(backend="memcached"))

    assert exc_info.value.code == "limiter_unknown_backend"
    assert "memcached" in exc_info.value.message


def test_create_limiter_uses_configured_defaults() -> None:
    limiter = factory.create_limiter(
        LimiterSettings(backend="memory", window_ms=1500, max_limit=4)
    )

    assert limiter.options.window_ms == 1500
    assert limiter.options.max_limit == 4
    assert isinstance(limiter.store, InMemorySlidingWindowStore)
