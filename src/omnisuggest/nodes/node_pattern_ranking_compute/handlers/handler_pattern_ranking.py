# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Pure pattern ranking handler functions.

This module provides pure functions for ranking stored code patterns
against a natural-language request. Handlers are side-effect free; the
Matcher is a thin shell that delegates to them.

Scoring Policy:
    lexical    = Jaccard(request keywords, snippet keywords)
    language   = 1.0 if the request names the pattern's language tag
    simplicity = 1 / (1 + complexity)
    score      = w_lex * lexical + w_lang * language
                 + w_simple * simplicity * (1 if lexical > 0 else 0)

    Simplicity only counts for patterns that share vocabulary with the
    request, so among lexically comparable candidates the simpler one wins
    and an unrelated trivial snippet never outranks a relevant one.

Ordering:
    Non-increasing score. Python's sort is stable, so ties keep the order
    in which patterns were supplied (store insertion order).

Usage:
    from omnisuggest.nodes.node_pattern_ranking_compute.handlers import (
        rank_patterns,
    )

    result = rank_patterns("sort an array", store.all())
    result.best.pattern.snippet
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import Final

from omnisuggest.constants import MAX_RANKING_RESULTS
from omnisuggest.exceptions import SessionValidationError
from omnisuggest.models import ModelCodePattern
from omnisuggest.nodes.node_pattern_ranking_compute.models import (
    ModelMatchResult,
    ModelRankedPattern,
    ModelRankingWeights,
)
from omnisuggest.protocols import ProtocolTokenizer
from omnisuggest.utils import RegexCodeTokenizer

logger = logging.getLogger(__name__)

ALGORITHM_VERSION: Final[str] = "1.0.0"

DEFAULT_WEIGHTS: Final[ModelRankingWeights] = ModelRankingWeights()

# Common code keywords and English filler words filtered out of keyword sets
_NOISE_WORDS: Final[frozenset[str]] = frozenset(
    {
        "def", "class", "return", "if", "else", "elif", "for", "while",
        "try", "except", "finally", "with", "as", "import", "from",
        "in", "is", "not", "and", "or", "none", "true", "false",
        "self", "cls", "args", "kwargs", "the", "a", "an", "of", "to",
        "pass", "raise", "yield", "async", "await", "lambda", "function",
        "create", "write", "make", "please", "that", "this", "some", "code",
        "var", "let", "const", "new", "void", "int", "str", "null",
    }
)

_CAMEL_BOUNDARY: Final[re.Pattern[str]] = re.compile(
    r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+"
)

# Suffix -> minimum stem length; "s" is not stripped after another "s" ("class")
_SUFFIXES: Final[tuple[tuple[str, int], ...]] = (("ing", 4), ("ed", 3), ("s", 3))
_MIN_KEYWORD_LENGTH: Final[int] = 3

_default_tokenizer = RegexCodeTokenizer()


def rank_patterns(
    request: str,
    patterns: Iterable[ModelCodePattern],
    *,
    weights: ModelRankingWeights = DEFAULT_WEIGHTS,
    tokenizer: ProtocolTokenizer | None = None,
    min_score: float = 0.0,
    max_results: int | None = None,
    correlation_id: str | None = None,
) -> ModelMatchResult:
    """Rank patterns against a request.

    Deterministic: the same request and the same patterns (in the same
    order, with the same complexities) always yield the same ranking.

    Args:
        request: Natural-language request text.
        patterns: Patterns to rank, in insertion order.
        weights: Score component weights.
        tokenizer: Tokenizer for keyword extraction.
        min_score: Entries scoring below this are dropped.
        max_results: Keep at most this many entries (None keeps all).
        correlation_id: Optional correlation ID for tracing.

    Returns:
        ModelMatchResult ordered by non-increasing score. Empty (not an
        error) when there are no patterns.

    Raises:
        SessionValidationError: If the request or filters are invalid.
    """
    _validate_inputs(request, min_score, max_results)
    active_tokenizer = tokenizer or _default_tokenizer

    request_keywords = extract_keywords(request, active_tokenizer)
    request_terms = {token.lower() for token in active_tokenizer.tokenize(request)}

    entries: list[ModelRankedPattern] = []
    analyzed = 0
    for pattern in patterns:
        analyzed += 1
        entry = score_pattern(
            request_keywords,
            request_terms,
            pattern,
            weights=weights,
            tokenizer=active_tokenizer,
        )
        if entry.score >= min_score:
            entries.append(entry)

    entries.sort(key=lambda e: -e.score)
    if max_results is not None:
        entries = entries[:max_results]

    logger.debug(
        "Ranked %d patterns for request (%d keywords), %d kept",
        analyzed,
        len(request_keywords),
        len(entries),
        extra={"correlation_id": correlation_id},
    )

    return ModelMatchResult(
        request=request,
        entries=tuple(entries),
        patterns_analyzed=analyzed,
        algorithm_version=ALGORITHM_VERSION,
    )


def score_pattern(
    request_keywords: set[str],
    request_terms: set[str],
    pattern: ModelCodePattern,
    *,
    weights: ModelRankingWeights = DEFAULT_WEIGHTS,
    tokenizer: ProtocolTokenizer | None = None,
) -> ModelRankedPattern:
    """Score a single pattern against pre-extracted request keywords.

    Args:
        request_keywords: Normalized request keywords.
        request_terms: Lowercased raw request tokens (for language lookup).
        pattern: The pattern to score.
        weights: Score component weights.
        tokenizer: Tokenizer for snippet keyword extraction.

    Returns:
        ModelRankedPattern with the score breakdown.
    """
    snippet_keywords = extract_keywords(pattern.snippet, tokenizer or _default_tokenizer)
    shared = request_keywords & snippet_keywords
    lexical = _jaccard(request_keywords, snippet_keywords)
    language_match = pattern.language.lower() in request_terms
    simplicity = 1.0 / (1.0 + pattern.complexity)

    score = weights.lexical_weight * lexical + weights.language_weight * float(
        language_match
    )
    if lexical > 0.0:
        score += weights.simplicity_weight * simplicity

    return ModelRankedPattern(
        pattern=pattern,
        score=score,
        lexical_score=lexical,
        language_match=language_match,
        simplicity_score=simplicity,
        matched_keywords=tuple(sorted(shared)),
    )


def extract_keywords(text: str, tokenizer: ProtocolTokenizer | None = None) -> set[str]:
    """Extract normalized keywords from code or request text.

    Identifiers are split on underscores and camelCase boundaries,
    lowercased, stemmed, and filtered against noise words and very short
    tokens.

    Args:
        text: The text to extract keywords from.
        tokenizer: Tokenizer to use. Defaults to ``RegexCodeTokenizer``.

    Returns:
        Set of normalized keywords.
    """
    keywords: set[str] = set()
    for token in (tokenizer or _default_tokenizer).tokenize(text):
        if not (token[0].isalpha() or token[0] == "_"):
            continue
        for part in _split_identifier(token):
            normalized = _stem(part.lower())
            if len(normalized) >= _MIN_KEYWORD_LENGTH and normalized not in _NOISE_WORDS:
                keywords.add(normalized)
    return keywords


def _split_identifier(identifier: str) -> list[str]:
    """Split ``bubble_sort`` / ``bubbleSort`` / ``HTTPServer`` into words."""
    parts: list[str] = []
    for chunk in identifier.split("_"):
        if chunk:
            parts.extend(_CAMEL_BOUNDARY.findall(chunk))
    return parts


def _stem(word: str) -> str:
    """Strip one common inflection suffix ("sorting"/"sorted"/"sorts" -> "sort")."""
    for suffix, min_stem_length in _SUFFIXES:
        if not word.endswith(suffix):
            continue
        stem = word[: -len(suffix)]
        if suffix == "s" and stem.endswith("s"):
            return word
        if len(stem) >= min_stem_length:
            return stem
    return word


def _jaccard(left: set[str], right: set[str]) -> float:
    """Jaccard similarity; 0.0 when either set is empty."""
    if not left or not right:
        return 0.0
    return len(left & right) / len(left | right)


def _validate_inputs(
    request: str,
    min_score: float,
    max_results: int | None,
) -> None:
    """Validate ranking inputs.

    Raises:
        SessionValidationError: If validation fails.
    """
    if not request or not request.strip():
        raise SessionValidationError("Request text cannot be empty")

    if min_score < 0.0:
        raise SessionValidationError(f"min_score must be >= 0.0, got {min_score}")

    if max_results is not None and not 1 <= max_results <= MAX_RANKING_RESULTS:
        raise SessionValidationError(
            f"max_results must be between 1 and {MAX_RANKING_RESULTS}, got {max_results}"
        )


__all__ = [
    "ALGORITHM_VERSION",
    "DEFAULT_WEIGHTS",
    "extract_keywords",
    "rank_patterns",
    "score_pattern",
]
