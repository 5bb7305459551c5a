# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Matcher - thin shell delegating request ranking to the pure handler.

The Matcher holds the ranking configuration (weights, tokenizer, filters)
and forwards each ``rank`` call to ``rank_patterns``. It keeps no per-call
state, so one instance may serve concurrent sessions.
"""

from __future__ import annotations

from collections.abc import Iterable

from omnisuggest.models import ModelCodePattern
from omnisuggest.nodes.node_pattern_ranking_compute.handlers import (
    DEFAULT_WEIGHTS,
    rank_patterns,
)
from omnisuggest.nodes.node_pattern_ranking_compute.models import (
    ModelMatchResult,
    ModelRankingWeights,
)
from omnisuggest.protocols import ProtocolTokenizer


class Matcher:
    """Ranks patterns against requests.

    Args:
        weights: Score component weights.
        tokenizer: Tokenizer used for keyword extraction.
        min_score: Entries scoring below this are dropped.
        max_results: Keep at most this many entries (None keeps all).
    """

    def __init__(
        self,
        *,
        weights: ModelRankingWeights = DEFAULT_WEIGHTS,
        tokenizer: ProtocolTokenizer | None = None,
        min_score: float = 0.0,
        max_results: int | None = None,
    ) -> None:
        self._weights = weights
        self._tokenizer = tokenizer
        self._min_score = min_score
        self._max_results = max_results

    @property
    def weights(self) -> ModelRankingWeights:
        return self._weights

    def rank(
        self,
        request: str,
        patterns: Iterable[ModelCodePattern],
        *,
        correlation_id: str | None = None,
    ) -> ModelMatchResult:
        """Rank patterns against a request by delegating to the handler."""
        return rank_patterns(
            request,
            patterns,
            weights=self._weights,
            tokenizer=self._tokenizer,
            min_score=self._min_score,
            max_results=self._max_results,
            correlation_id=correlation_id,
        )


__all__ = ["Matcher"]
