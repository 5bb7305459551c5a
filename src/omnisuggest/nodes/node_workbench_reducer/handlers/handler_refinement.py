# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Refinement policies for workbench suggestions.

Each policy is a deterministic transformation satisfying
``ProtocolRefinementPolicy``. Policies never return empty text for
non-empty input.

Policies:
    - StyleRefinementPolicy: whitespace and indentation fixes, applied only
      when the style evaluator scores the suggestion below a threshold
    - RationaleRefinementPolicy: prepends the refinement header and the
      keywords the source pattern matched on
    - CompositeRefinementPolicy: applies policies in order

Usage:
    policy = default_refinement_policy()
    refined = policy.refine(suggestion, ModelRefinementContext(request="sort"))
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Final

from omnisuggest.constants import REFINEMENT_HEADER
from omnisuggest.nodes.node_workbench_reducer.models import ModelRefinementContext
from omnisuggest.protocols import ProtocolRefinementPolicy, ProtocolStyleEvaluator
from omnisuggest.utils import HeuristicStyleEvaluator

logger = logging.getLogger(__name__)

_TAB_SIZE: Final[int] = 4
_MAX_BLANK_RUN: Final[int] = 2


class StyleRefinementPolicy:
    """Fix line-level style issues when the style score is below threshold.

    Fixes: trailing whitespace stripped, tabs expanded to four spaces, runs
    of more than two blank lines collapsed, exactly one trailing newline.

    Args:
        evaluator: Style evaluator deciding whether fixes are needed.
        threshold: Suggestions scoring at or above this are kept unchanged.
    """

    def __init__(
        self,
        evaluator: ProtocolStyleEvaluator | None = None,
        threshold: float = 1.0,
    ) -> None:
        self._evaluator = evaluator or HeuristicStyleEvaluator()
        self._threshold = threshold

    def refine(self, suggestion: str, context: ModelRefinementContext) -> str:
        score = self._evaluator.evaluate(suggestion)
        if score >= self._threshold:
            return suggestion
        logger.debug("Applying style fixes (score=%.2f)", score)
        return apply_style_fixes(suggestion)


class RationaleRefinementPolicy:
    """Prepend the refinement header and the matched keywords."""

    def refine(self, suggestion: str, context: ModelRefinementContext) -> str:
        rationale = REFINEMENT_HEADER
        if context.matched_keywords:
            rationale += f"Matched keywords: {', '.join(context.matched_keywords)}\n"
        return rationale + suggestion


class CompositeRefinementPolicy:
    """Apply several policies in order, each to the previous one's output."""

    def __init__(self, policies: Sequence[ProtocolRefinementPolicy]) -> None:
        self._policies = tuple(policies)

    @property
    def policies(self) -> tuple[ProtocolRefinementPolicy, ...]:
        return self._policies

    def refine(self, suggestion: str, context: ModelRefinementContext) -> str:
        refined = suggestion
        for policy in self._policies:
            refined = policy.refine(refined, context)
        return refined


def apply_style_fixes(code: str) -> str:
    """Normalize whitespace; non-empty input never becomes empty."""
    lines: list[str] = []
    blank_run = 0
    for raw_line in code.splitlines():
        line = raw_line.expandtabs(_TAB_SIZE).rstrip()
        if not line:
            blank_run += 1
            if blank_run > _MAX_BLANK_RUN:
                continue
        else:
            blank_run = 0
        lines.append(line)

    while lines and not lines[-1]:
        lines.pop()
    if not lines:
        return code
    return "\n".join(lines) + "\n"


def default_refinement_policy(
    evaluator: ProtocolStyleEvaluator | None = None,
) -> CompositeRefinementPolicy:
    """Style fixes followed by the rationale header."""
    return CompositeRefinementPolicy(
        [StyleRefinementPolicy(evaluator), RationaleRefinementPolicy()]
    )


__all__ = [
    "CompositeRefinementPolicy",
    "RationaleRefinementPolicy",
    "StyleRefinementPolicy",
    "apply_style_fixes",
    "default_refinement_policy",
]
