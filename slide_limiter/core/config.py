"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from slide_limiter.adapters.rate_limit.base import DEFAULT_MAX_LIMIT, DEFAULT_WINDOW_MS


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Nested BaseSettings don't inherit env_file, so populate os.environ up front.
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


class LimiterSettings(BaseSettings):
    """Rate limiter defaults and backend selection."""

    backend: str = Field(
        "memory",
        description="Store backend: 'memory' (per process) or 'redis' (shared)",
    )
    window_ms: int = Field(
        DEFAULT_WINDOW_MS,
        description="Default sliding window length in milliseconds",
        ge=1,
    )
    max_limit: int = Field(
        DEFAULT_MAX_LIMIT,
        description="Default maximum number of hits allowed per window",
        ge=1,
    )
    key_prefix: str = Field(
        "slide-limiter",
        description="Namespace prepended to Redis window keys",
    )
    include_headers: bool = Field(
        True,
        description="Include X-RateLimit-* and Retry-After headers on HTTP responses",
    )

    model_config = SettingsConfigDict(
        env_prefix="LIMITER_",
        case_sensitive=False,
    )


class RedisSettings(BaseSettings):
    """Connection settings for the shared Redis store."""

    url: str = Field(
        "redis://localhost:6379/0",
        description="Redis connection URL (may embed credentials)",
    )
    socket_timeout_seconds: float | None = Field(
        5.0,
        description="Socket timeout for Redis commands; None waits forever",
    )

    model_config = SettingsConfigDict(
        env_prefix="REDIS_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="Log format: 'json' or 'plain'")
    output: str = Field("stdout", description="Log destination: 'stdout' or 'file'")
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int | None = Field(
        None,
        description="Rotate the log file after this many bytes (None disables rotation)",
    )
    backup_count: int = Field(5, description="Number of rotated log files to keep")
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to read and echo the request correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if a setting is malformed.
    """

    app_env: str = APP_ENV
    limiter: LimiterSettings = Field(default_factory=LimiterSettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


settings = Settings()
