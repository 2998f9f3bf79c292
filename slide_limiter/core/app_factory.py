"""Application factory for the rate limiting service.

Centralizes app construction (middleware, handlers, routers, lifespan) so
tests can build isolated app instances.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from slide_limiter.api.routes import health_router, limits_router
from slide_limiter.core.config import settings
from slide_limiter.core.exception_handlers import setup_exception_handlers
from slide_limiter.core.logging import configure_logging
from slide_limiter.core.middleware import request_id_middleware
from slide_limiter.core.rate_limit import reset_limiter
from slide_limiter.core.redis import close_redis_client


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    reset_limiter()
    await close_redis_client()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers and routers.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Slide Limiter",
        description=(
            "Sliding window rate limiting service. Each hit on a (bucket, key) "
            "pair is admitted while fewer than max_limit hits were recorded in "
            "the trailing window, backed by process memory or Redis."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(limits_router, prefix="/v1")
    app.include_router(health_router)

    return app
