"""Unit tests for window option models."""

import dataclasses

import pytest

from slide_limiter.adapters.rate_limit.base import (
    DEFAULT_MAX_LIMIT,
    DEFAULT_WINDOW_MS,
    RateLimiterOptions,
    WindowOptions,
)


def test_rate_limiter_options_defaults() -> None:
    options = RateLimiterOptions()

    assert options.window_ms == DEFAULT_WINDOW_MS == 60_000
    assert options.max_limit == DEFAULT_MAX_LIMIT == 10


def test_rate_limiter_options_partial_override() -> None:
    options = RateLimiterOptions(max_limit=3)

    assert options.window_ms == 60_000
    assert options.max_limit == 3


def test_options_are_immutable() -> None:
    options = WindowOptions(window_ms=1000, max_limit=2)

    with pytest.raises(dataclasses.FrozenInstanceError):
        options.max_limit = 5  # type: ignore[misc]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"window_ms": 0, "max_limit": 1},
        {"window_ms": 1000, "max_limit": 0},
        {"window_ms": -5, "max_limit": 1},
        {"window_ms": 1.5, "max_limit": 1},
        {"window_ms": 1000, "max_limit": True},
    ],
)
def test_invalid_window_options(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        WindowOptions(**kwargs)
