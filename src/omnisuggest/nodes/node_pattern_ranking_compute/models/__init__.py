"""Models for Pattern Ranking Compute Node."""

from omnisuggest.nodes.node_pattern_ranking_compute.models.model_match_result import (
    ModelMatchResult,
    ModelRankedPattern,
)
from omnisuggest.nodes.node_pattern_ranking_compute.models.model_ranking_weights import (
    ModelRankingWeights,
)

__all__ = ["ModelMatchResult", "ModelRankedPattern", "ModelRankingWeights"]
