"""Pytest configuration and fixtures shared across all test modules.

Environment defaults are set before any import that might load settings.
"""

import os
from unittest.mock import Mock

os.environ["APP_ENV"] = "testing"
os.environ.setdefault("LIMITER_BACKEND", "memory")
os.environ.setdefault("LIMITER_WINDOW_MS", "60000")
os.environ.setdefault("LIMITER_MAX_LIMIT", "10")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import fakeredis
import pytest

from slide_limiter.core import rate_limit


@pytest.fixture
def clock() -> Mock:
    """Millisecond clock; advance it with `clock.return_value += ms`."""
    return Mock(return_value=1_000_000)


@pytest.fixture
def redis_server() -> fakeredis.FakeServer:
    return fakeredis.FakeServer()


@pytest.fixture
def redis_db(redis_server: fakeredis.FakeServer) -> fakeredis.FakeAsyncRedis:
    return fakeredis.FakeAsyncRedis(server=redis_server)


@pytest.fixture(autouse=True)
def _reset_cached_limiter():
    rate_limit.reset_limiter()
    yield
    rate_limit.reset_limiter()
