"""ModelRankingWeights - weights of the ranking score components."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class ModelRankingWeights(BaseModel):
    """Weights combining the ranking score components.

    ``score = lexical * lexical_weight + language * language_weight
    + simplicity * simplicity_weight * gate`` where ``gate`` is 1 only when
    the lexical similarity is non-zero. With the default weights every score
    lies in [0.0, 1.0].

    Attributes:
        lexical_weight: Weight of request/snippet keyword similarity.
        language_weight: Weight of the request naming the pattern language.
        simplicity_weight: Weight of the preference for low complexity.
    """

    lexical_weight: float = Field(
        default=0.7,
        ge=0.0,
        description="Weight of request/snippet keyword similarity",
    )
    language_weight: float = Field(
        default=0.1,
        ge=0.0,
        description="Weight of the request naming the pattern language",
    )
    simplicity_weight: float = Field(
        default=0.2,
        ge=0.0,
        description="Weight of the preference for low complexity",
    )

    model_config = {"frozen": True, "extra": "forbid"}

    @model_validator(mode="after")
    def _require_positive_total(self) -> ModelRankingWeights:
        if self.lexical_weight + self.language_weight + self.simplicity_weight <= 0.0:
            raise ValueError("At least one ranking weight must be positive")
        return self


__all__ = ["ModelRankingWeights"]
