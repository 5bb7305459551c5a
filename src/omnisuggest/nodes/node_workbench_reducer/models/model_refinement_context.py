"""ModelRefinementContext - inputs available to a refinement policy."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, Field


class ModelRefinementContext(BaseModel):
    """Context handed to ``ProtocolRefinementPolicy.refine``.

    Attributes:
        request: The session request text.
        source_pattern_id: Pattern the suggestion came from (None for the
            fallback suggestion).
        source_language: Language tag of the source pattern.
        matched_keywords: Keywords the source pattern matched on.
    """

    request: str = Field(..., min_length=1, description="The session request text")
    source_pattern_id: UUID | None = Field(
        default=None,
        description="Pattern the suggestion came from",
    )
    source_language: str | None = Field(
        default=None,
        description="Language tag of the source pattern",
    )
    matched_keywords: tuple[str, ...] = Field(
        default=(),
        description="Keywords the source pattern matched on",
    )

    model_config = {"frozen": True, "extra": "forbid"}


__all__ = ["ModelRefinementContext"]
