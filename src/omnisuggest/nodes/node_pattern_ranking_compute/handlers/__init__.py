"""Pattern Ranking Compute Handlers.

Pure handler functions that rank stored patterns against a request.

Usage:
    from omnisuggest.nodes.node_pattern_ranking_compute.handlers import (
        extract_keywords,
        rank_patterns,
    )

    result = rank_patterns("sort an array", store.all())
"""

from omnisuggest.nodes.node_pattern_ranking_compute.handlers.handler_pattern_ranking import (
    ALGORITHM_VERSION,
    DEFAULT_WEIGHTS,
    extract_keywords,
    rank_patterns,
    score_pattern,
)

__all__ = [
    "ALGORITHM_VERSION",
    "DEFAULT_WEIGHTS",
    "extract_keywords",
    "rank_patterns",
    "score_pattern",
]
