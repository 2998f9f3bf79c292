"""Pydantic schemas for hit responses."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HitResponse(BaseModel):
    """Outcome of a single hit against a (bucket, key) window."""

    bucket: str = Field(..., description="Rate limit namespace that was hit.")
    key: str = Field(..., description="Identity that was hit within the bucket.")
    allowed: bool = Field(..., description="Whether the hit was admitted.")
    limit: int = Field(..., description="Maximum hits allowed per window.")
    remaining: int = Field(
        ..., description="Hits left in the window after this call (0 when denied)."
    )
    retry_after_ms: int | None = Field(
        default=None,
        description="Milliseconds until a slot frees up. Only set when denied.",
    )
