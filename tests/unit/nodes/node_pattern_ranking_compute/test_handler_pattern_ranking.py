# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for pattern ranking handler functions.

Tests the pure ranking logic without any store or session state.
"""

from __future__ import annotations

import pytest

from omnisuggest.exceptions import SessionValidationError
from omnisuggest.models import ModelCodePattern
from omnisuggest.nodes.node_pattern_ranking_compute.handlers import (
    ALGORITHM_VERSION,
    extract_keywords,
    rank_patterns,
)
from omnisuggest.nodes.node_pattern_ranking_compute.models import (
    ModelRankedPattern,
    ModelRankingWeights,
)


def _pattern(snippet: str, language: str = "generic", complexity: float = 0.0) -> ModelCodePattern:
    return ModelCodePattern(snippet=snippet, language=language, complexity=complexity)


@pytest.mark.unit
class TestExtractKeywords:
    """Tests for extract_keywords."""

    def test_splits_snake_and_camel_case(self) -> None:
        assert extract_keywords("bubble_sort(items)") == {"bubble", "sort", "item"}
        assert extract_keywords("fetchJsonData()") == {"fetch", "json", "data"}

    def test_stems_common_suffixes(self) -> None:
        assert extract_keywords("sorting sorted sorts") == {"sort"}

    def test_does_not_strip_s_after_s(self) -> None:
        assert "class" not in extract_keywords("class")  # noise word
        assert extract_keywords("address") == {"address"}

    def test_filters_noise_and_short_words(self) -> None:
        assert extract_keywords("def a(x): return self") == set()

    def test_ignores_numbers_strings_and_comments(self) -> None:
        assert extract_keywords("merge(1, 2)  # sort everything") == {"merge"}


@pytest.mark.unit
class TestRankPatterns:
    """Tests for rank_patterns."""

    def test_empty_store_returns_empty_result(self) -> None:
        result = rank_patterns("sort an array", [])

        assert result.is_empty
        assert result.best is None
        assert result.patterns_analyzed == 0
        assert result.algorithm_version == ALGORITHM_VERSION

    def test_matching_pattern_ranks_first(self) -> None:
        patterns = [
            _pattern("read_file(path)"),
            _pattern("bubble_sort(...)", complexity=1.0),
            _pattern("http_get(url)"),
        ]

        result = rank_patterns("sort an array", patterns)

        assert result.best is not None
        assert result.best.pattern.snippet == "bubble_sort(...)"
        assert result.best.matched_keywords == ("sort",)
        assert result.best.lexical_score > 0.0

    def test_scores_are_non_increasing(self) -> None:
        patterns = [
            _pattern("def merge_sort(items): ..."),
            _pattern("def quick_sort(items, low, high): ..."),
            _pattern("def parse_json(text): ..."),
            _pattern("sorted(items)"),
        ]

        result = rank_patterns("sort items quickly", patterns)

        scores = [entry.score for entry in result.entries]
        assert scores == sorted(scores, reverse=True)
        assert len(result) == 4

    def test_ties_preserve_insertion_order(self) -> None:
        patterns = [_pattern("alpha()"), _pattern("beta()"), _pattern("gamma()")]

        result = rank_patterns("sort an array", patterns)

        assert [e.pattern.snippet for e in result.entries] == ["alpha()", "beta()", "gamma()"]
        assert all(e.score == 0.0 for e in result.entries)

    def test_equal_scores_among_matches_keep_insertion_order(self) -> None:
        patterns = [_pattern("sort_values()"), _pattern("values_sort()")]

        result = rank_patterns("sort values", patterns)

        assert result.entries[0].score == result.entries[1].score
        assert [e.pattern.snippet for e in result.entries] == [
            "sort_values()",
            "values_sort()",
        ]

    def test_simpler_pattern_wins_among_equal_lexical_matches(self) -> None:
        patterns = [
            _pattern("bubble_sort(...)", complexity=5.0),
            _pattern("bubble_sort(...)", complexity=1.0),
        ]

        result = rank_patterns("bubble sort", patterns)

        assert result.best is not None
        assert result.best.pattern.complexity == 1.0

    def test_simplicity_ignored_without_lexical_overlap(self) -> None:
        result = rank_patterns("sort an array", [_pattern("unrelated()", complexity=0.0)])

        assert result.entries[0].score == 0.0
        assert result.entries[0].simplicity_score == 1.0

    def test_language_named_in_request_adds_weight(self) -> None:
        patterns = [
            _pattern("bubble_sort(...)", language="javascript"),
            _pattern("bubble_sort(...)", language="python"),
        ]

        result = rank_patterns("bubble sort in python", patterns)

        assert result.best is not None
        assert result.best.pattern.language == "python"
        assert result.best.language_match is True
        assert result.entries[1].language_match is False

    def test_deterministic(self) -> None:
        patterns = [_pattern("merge_sort()"), _pattern("heap_sort()"), _pattern("open_file()")]

        first = rank_patterns("sort", patterns)
        second = rank_patterns("sort", patterns)

        assert first == second

    def test_score_formula_with_default_weights(self) -> None:
        pattern = _pattern("bubble_sort(...)", complexity=1.0)

        entry = rank_patterns("sort an array", [pattern]).entries[0]

        # keywords: {sort, array} vs {bubble, sort} -> 1/3
        assert entry.lexical_score == pytest.approx(1 / 3)
        assert entry.simplicity_score == pytest.approx(0.5)
        assert entry.score == pytest.approx(0.7 / 3 + 0.2 * 0.5)

    def test_custom_weights(self) -> None:
        weights = ModelRankingWeights(
            lexical_weight=1.0, language_weight=0.0, simplicity_weight=0.0
        )

        entry = rank_patterns(
            "bubble sort", [_pattern("bubble_sort()")], weights=weights
        ).entries[0]

        assert entry.score == pytest.approx(1.0)

    def test_min_score_filters_entries(self) -> None:
        patterns = [_pattern("bubble_sort()"), _pattern("unrelated()")]

        result = rank_patterns("bubble sort", patterns, min_score=0.01)

        assert [e.pattern.snippet for e in result.entries] == ["bubble_sort()"]
        assert result.patterns_analyzed == 2

    def test_max_results_truncates(self) -> None:
        patterns = [_pattern(f"sort_{name}()") for name in ("alpha", "beta", "gamma")]

        result = rank_patterns("sort", patterns, max_results=2)

        assert len(result) == 2

    def test_ranked_entries_reference_stored_patterns(self) -> None:
        pattern = _pattern("bubble_sort()")
        result = rank_patterns("sort", [pattern])
        assert result.entries[0].pattern is pattern

    def test_pairs_yields_pattern_score_tuples(self) -> None:
        pattern = _pattern("bubble_sort()")
        pairs = list(rank_patterns("sort", [pattern]).pairs())
        assert pairs[0][0] is pattern
        assert pairs[0][1] > 0.0

    @pytest.mark.parametrize("request_text", ["", "   "])
    def test_empty_request_rejected(self, request_text: str) -> None:
        with pytest.raises(SessionValidationError):
            rank_patterns(request_text, [])

    def test_invalid_filters_rejected(self) -> None:
        with pytest.raises(SessionValidationError):
            rank_patterns("sort", [], min_score=-0.1)
        with pytest.raises(SessionValidationError):
            rank_patterns("sort", [], max_results=0)

    def test_extreme_complexity_does_not_break_unrelated_requests(self) -> None:
        patterns = [
            _pattern("bubble_sort(...)", complexity=1.0),
            _pattern("heavy_transform()", complexity=1.7976931348623157e308),
        ]

        result = rank_patterns("sort an array", patterns)

        assert result.best is not None
        assert result.best.pattern.snippet == "bubble_sort(...)"
        assert len(result.entries) == 2

    def test_ranked_pattern_accepts_zero_simplicity(self) -> None:
        entry = ModelRankedPattern(
            pattern=_pattern("x()"), score=0.0, lexical_score=0.0, simplicity_score=0.0
        )
        assert entry.simplicity_score == 0.0


@pytest.mark.unit
class TestRankingWeights:
    """Tests for ModelRankingWeights validation."""

    def test_defaults(self) -> None:
        weights = ModelRankingWeights()
        assert (weights.lexical_weight, weights.language_weight, weights.simplicity_weight) == (
            0.7,
            0.1,
            0.2,
        )

    def test_all_zero_rejected(self) -> None:
        with pytest.raises(ValueError):
            ModelRankingWeights(lexical_weight=0.0, language_weight=0.0, simplicity_weight=0.0)
