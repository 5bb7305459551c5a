# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""
Shared Constants for OmniSuggest.

This module defines constants used across multiple modules to avoid magic numbers
and keep the suggestion pipeline's fixed texts in one place.

Usage:
    from omnisuggest.constants import CODE_PATTERN_LIMIT

    if len(store) >= CODE_PATTERN_LIMIT:
        ...
"""

# =============================================================================
# Pattern Store Limits
# =============================================================================

CODE_PATTERN_LIMIT: int = 10000
"""
Maximum number of patterns a single PatternStore may hold.

Adding past this limit raises ResourceExhaustedError and leaves the store
unchanged.

Used in:
    - PatternStore.add / PatternStore.seed
    - OmniSuggestSettings.pattern_limit default
"""

# =============================================================================
# Complexity Analysis
# =============================================================================

CODE_COMPLEXITY_FACTOR: float = 1.0
"""
Base increment applied by every complexity analysis pass.

The structural delta computed from the snippet is added on top, so a pass
always raises complexity by at least this amount.
"""

# =============================================================================
# Suggestion Texts
# =============================================================================

SUGGESTION_HEADER: str = "Here's a suggestion based on your request:\n"
"""Prefix written before the snippet of the best ranked pattern."""

FALLBACK_SUGGESTION: str = SUGGESTION_HEADER + "/* Your generated code here */"
"""Suggestion used when the pattern store has no candidate for a request."""

REFINEMENT_HEADER: str = "Refined code suggestion:\n"
"""Header prepended by the rationale refinement policy."""

LEDGER_COMMIT_DESCRIPTION: str = "Final Suggestion"
"""Description attached to ledger entries for finalized suggestions."""

# =============================================================================
# Ranking Limits
# =============================================================================

MAX_RANKING_RESULTS: int = 100
"""
Upper bound for the max_results filter on a ranking request.

Used in:
    - ModelRankingWeights / OmniSuggestSettings validation
    - HTTP API query validation
"""
