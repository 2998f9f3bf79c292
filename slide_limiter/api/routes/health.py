from __future__ import annotations

from fastapi import APIRouter

from slide_limiter.core.config import settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> dict:
    """Health check endpoint.

    Reports liveness only; it does not ping the backing store.

    Returns:
        dict: ``status`` set to "ok" and the configured store ``backend``.
    """

    return {"status": "ok", "backend": settings.limiter.backend}
