"""ModelRankedPattern / ModelMatchResult - ephemeral ranking output."""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, Field

from omnisuggest.models import ModelCodePattern


class ModelRankedPattern(BaseModel):
    """One ranked pattern with its score breakdown.

    ``pattern`` is a reference to the stored instance, not a copy.

    Attributes:
        pattern: The ranked pattern.
        score: Combined ranking score.
        lexical_score: Keyword similarity between request and snippet.
        language_match: Whether the request names the pattern language.
        simplicity_score: ``1 / (1 + complexity)`` at ranking time.
        matched_keywords: Keywords shared by request and snippet, sorted.
    """

    pattern: ModelCodePattern = Field(..., description="The ranked pattern")
    score: float = Field(..., ge=0.0, description="Combined ranking score")
    lexical_score: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Keyword similarity between request and snippet",
    )
    language_match: bool = Field(
        default=False,
        description="Whether the request names the pattern language",
    )
    simplicity_score: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="1 / (1 + complexity) at ranking time",
    )
    matched_keywords: tuple[str, ...] = Field(
        default=(),
        description="Keywords shared by request and snippet, sorted",
    )

    model_config = {"frozen": True, "extra": "forbid"}


class ModelMatchResult(BaseModel):
    """Ranked sequence of ``(pattern, score)`` for one request.

    Entries are ordered by non-increasing score; ties keep the order in
    which patterns were supplied (store insertion order).

    Attributes:
        request: The request that was ranked against.
        entries: Ranked entries, best first.
        patterns_analyzed: Number of patterns scored.
        algorithm_version: Version of the ranking algorithm.
    """

    request: str = Field(..., description="The request that was ranked against")
    entries: tuple[ModelRankedPattern, ...] = Field(
        default=(),
        description="Ranked entries, best first",
    )
    patterns_analyzed: int = Field(default=0, ge=0)
    algorithm_version: str = Field(default="1.0.0")

    model_config = {"frozen": True, "extra": "forbid"}

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def best(self) -> ModelRankedPattern | None:
        """Highest ranked entry, or None for an empty result."""
        return self.entries[0] if self.entries else None

    def pairs(self) -> Iterator[tuple[ModelCodePattern, float]]:
        """Yield ``(pattern, score)`` pairs in rank order."""
        for entry in self.entries:
            yield entry.pattern, entry.score


__all__ = ["ModelMatchResult", "ModelRankedPattern"]
