"""Heuristic code style evaluator.

Scores code on line-level hygiene: line length, trailing whitespace, tab
indentation and mixed indentation. The score is ``1.0`` minus the weighted
share of offending lines, clamped to [0.0, 1.0].
"""

from __future__ import annotations

from typing import Final

# Penalty weight per offending line, by rule
_LONG_LINE_WEIGHT: Final[float] = 0.5
_TRAILING_WHITESPACE_WEIGHT: Final[float] = 0.25
_TAB_INDENT_WEIGHT: Final[float] = 0.25
_MIXED_INDENT_WEIGHT: Final[float] = 0.5


class HeuristicStyleEvaluator:
    """Style evaluator satisfying ``ProtocolStyleEvaluator``.

    Args:
        max_line_length: Lines longer than this count as too long.

    Example:
        >>> HeuristicStyleEvaluator().evaluate("x = 1\\n")
        1.0
    """

    def __init__(self, max_line_length: int = 100) -> None:
        self._max_line_length = max_line_length

    @property
    def max_line_length(self) -> int:
        return self._max_line_length

    def evaluate(self, code: str) -> float:
        """Return a style score in [0.0, 1.0]; empty code scores 0.0."""
        lines = [line for line in code.splitlines() if line.strip()]
        if not lines:
            return 0.0

        penalty = 0.0
        for line in lines:
            indent = line[: len(line) - len(line.lstrip())]
            if len(line) > self._max_line_length:
                penalty += _LONG_LINE_WEIGHT
            if line != line.rstrip():
                penalty += _TRAILING_WHITESPACE_WEIGHT
            if "\t" in indent:
                penalty += _TAB_INDENT_WEIGHT
                if " " in indent:
                    penalty += _MIXED_INDENT_WEIGHT

        score = 1.0 - penalty / len(lines)
        return max(0.0, min(1.0, score))


__all__ = ["HeuristicStyleEvaluator"]
