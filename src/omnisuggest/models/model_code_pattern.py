# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""ModelCodePattern - a stored, reusable code snippet."""

from __future__ import annotations

from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class ModelCodePattern(BaseModel):
    """A code snippet tagged with its language and a complexity score.

    Snippet, language and identity are frozen once the pattern exists.
    Complexity is the only mutable field and is only changed by
    ``PatternStore.analyze``; assignment is validated so it can never
    drop below zero.

    Attributes:
        pattern_id: Unique identifier for the pattern.
        snippet: The code snippet text.
        language: Language tag (e.g. "python", "generic").
        complexity: Finite complexity score (>= 0), raised by analysis passes.
        sequence: Zero-based insertion index assigned by the owning store,
            -1 while the pattern is not owned by a store.
    """

    pattern_id: UUID = Field(
        default_factory=uuid4,
        frozen=True,
        description="Unique identifier for the pattern",
    )
    snippet: str = Field(
        ...,
        min_length=1,
        frozen=True,
        description="The code snippet text",
    )
    language: str = Field(
        ...,
        min_length=1,
        frozen=True,
        description="Language tag of the snippet",
    )
    complexity: float = Field(
        default=0.0,
        ge=0.0,
        allow_inf_nan=False,
        description="Complexity score, monotonically raised by analysis",
    )
    sequence: int = Field(
        default=-1,
        ge=-1,
        description="Insertion index in the owning store (-1 when unowned)",
    )

    model_config = {"extra": "forbid", "validate_assignment": True}


__all__ = ["ModelCodePattern"]
