# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Pure complexity analysis handler functions.

Computes the structural complexity delta of a code snippet. The pattern
store adds ``CODE_COMPLEXITY_FACTOR`` plus this delta on every analysis
pass, so complexity grows monotonically while remaining a pure function of
the snippet content.

Structural Signals:
    - token_count: Number of lexical tokens (comments excluded)
    - branch_count: Branching keywords and short-circuit operators
    - call_count: Identifiers immediately followed by ``(``
    - max_nesting: Deepest bracket or indentation level

Usage:
    from omnisuggest.nodes.node_pattern_store_effect.handlers import (
        compute_structural_complexity,
    )

    breakdown = compute_structural_complexity("for x in xs:\\n    if x: f(x)")
    breakdown["delta"]  # >= 0.0
"""

from __future__ import annotations

from typing import Final, TypedDict

from omnisuggest.protocols import ProtocolTokenizer
from omnisuggest.utils import RegexCodeTokenizer

# Weights applied to each structural signal
TOKEN_WEIGHT: Final[float] = 0.01
BRANCH_WEIGHT: Final[float] = 0.1
CALL_WEIGHT: Final[float] = 0.05
NESTING_WEIGHT: Final[float] = 0.25

# Indentation width used to convert leading spaces into nesting levels
_INDENT_WIDTH: Final[int] = 4

_BRANCH_KEYWORDS: Final[frozenset[str]] = frozenset(
    {
        "if", "elif", "else", "for", "while", "case", "switch", "match",
        "catch", "except", "and", "or", "&&", "||", "?",
    }
)

_OPENERS: Final[frozenset[str]] = frozenset({"(", "[", "{"})
_CLOSERS: Final[frozenset[str]] = frozenset({")", "]", "}"})

_default_tokenizer = RegexCodeTokenizer()


class ComplexityBreakdown(TypedDict):
    """Structural signals and resulting delta for one snippet.

    Attributes:
        token_count: Number of lexical tokens.
        branch_count: Number of branching constructs.
        call_count: Number of call sites.
        max_nesting: Deepest nesting level seen.
        delta: Weighted, non-negative complexity delta.
    """

    token_count: int
    branch_count: int
    call_count: int
    max_nesting: int
    delta: float


def compute_structural_complexity(
    snippet: str,
    tokenizer: ProtocolTokenizer | None = None,
) -> ComplexityBreakdown:
    """Compute the structural complexity of a snippet.

    Pure function: the same snippet always yields the same breakdown.

    Args:
        snippet: The code to analyze.
        tokenizer: Tokenizer to use. Defaults to ``RegexCodeTokenizer``.

    Returns:
        ComplexityBreakdown with a delta >= 0.0.
    """
    tokens = (tokenizer or _default_tokenizer).tokenize(snippet)

    branch_count = sum(1 for token in tokens if token in _BRANCH_KEYWORDS)
    call_count = sum(
        1
        for current, following in zip(tokens, tokens[1:])
        if following == "(" and (current[0].isalpha() or current[0] == "_")
        and current not in _BRANCH_KEYWORDS
    )
    max_nesting = max(_bracket_depth(tokens), _indent_depth(snippet))

    delta = (
        TOKEN_WEIGHT * len(tokens)
        + BRANCH_WEIGHT * branch_count
        + CALL_WEIGHT * call_count
        + NESTING_WEIGHT * max_nesting
    )

    return ComplexityBreakdown(
        token_count=len(tokens),
        branch_count=branch_count,
        call_count=call_count,
        max_nesting=max_nesting,
        delta=round(delta, 6),
    )


def _bracket_depth(tokens: list[str]) -> int:
    """Deepest bracket nesting; unbalanced closers never go below zero."""
    depth = 0
    deepest = 0
    for token in tokens:
        if token in _OPENERS:
            depth += 1
            deepest = max(deepest, depth)
        elif token in _CLOSERS:
            depth = max(0, depth - 1)
    return deepest


def _indent_depth(snippet: str) -> int:
    """Deepest indentation level, counting tabs as one level each."""
    deepest = 0
    for line in snippet.splitlines():
        if not line.strip():
            continue
        indent = line[: len(line) - len(line.lstrip())]
        level = indent.count("\t") + indent.count(" ") // _INDENT_WIDTH
        deepest = max(deepest, level)
    return deepest


__all__ = [
    "BRANCH_WEIGHT",
    "CALL_WEIGHT",
    "NESTING_WEIGHT",
    "TOKEN_WEIGHT",
    "ComplexityBreakdown",
    "compute_structural_complexity",
]
