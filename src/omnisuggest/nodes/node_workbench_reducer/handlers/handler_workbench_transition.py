# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Handler for Workbench FSM transitions.

This module implements pure FSM transition logic for session workbenches:
    CREATED -> SUGGESTED -> REFINED -> COMMITTED

FSM Transitions:
    - created -> suggested (operation: set_suggestion)
    - refined -> suggested (operation: set_suggestion)
    - suggested -> refined (operation: refine)
    - suggested -> committed (operation: finalize)
    - refined -> committed (operation: finalize)

``commit_change`` is not an FSM operation: it is legal in every state and
never changes the state.

Design Principles:
    - Pure functions with no side effects
    - Declarative transition table as the single source of truth
    - Invalid transitions raise InvalidStateError (always a caller bug)
"""

from __future__ import annotations

from typing import Final

from omnisuggest.enums import EnumWorkbenchOperation, EnumWorkbenchState
from omnisuggest.exceptions import InvalidStateError

# =============================================================================
# FSM Transition Table
# =============================================================================
# Key: (from_state, operation)
# Value: to_state

VALID_TRANSITIONS: Final[
    dict[tuple[EnumWorkbenchState, EnumWorkbenchOperation], EnumWorkbenchState]
] = {
    (EnumWorkbenchState.CREATED, EnumWorkbenchOperation.SET_SUGGESTION): (
        EnumWorkbenchState.SUGGESTED
    ),
    (EnumWorkbenchState.REFINED, EnumWorkbenchOperation.SET_SUGGESTION): (
        EnumWorkbenchState.SUGGESTED
    ),
    (EnumWorkbenchState.SUGGESTED, EnumWorkbenchOperation.REFINE): (
        EnumWorkbenchState.REFINED
    ),
    (EnumWorkbenchState.SUGGESTED, EnumWorkbenchOperation.FINALIZE): (
        EnumWorkbenchState.COMMITTED
    ),
    (EnumWorkbenchState.REFINED, EnumWorkbenchOperation.FINALIZE): (
        EnumWorkbenchState.COMMITTED
    ),
}

TERMINAL_STATES: Final[frozenset[EnumWorkbenchState]] = frozenset(
    {EnumWorkbenchState.COMMITTED}
)


def validate_transition(
    state: EnumWorkbenchState,
    operation: EnumWorkbenchOperation,
) -> EnumWorkbenchState:
    """Look up the target state of an operation.

    Args:
        state: Current workbench state.
        operation: Operation being attempted.

    Returns:
        The state the workbench moves to.

    Raises:
        InvalidStateError: If the operation is not allowed from ``state``.
    """
    to_state = VALID_TRANSITIONS.get((state, operation))
    if to_state is None:
        raise InvalidStateError(operation.value, state.value)
    return to_state


def get_available_operations(
    state: EnumWorkbenchState,
) -> list[EnumWorkbenchOperation]:
    """Operations allowed from a state, sorted by name."""
    return sorted(
        (op for (from_state, op) in VALID_TRANSITIONS if from_state == state),
        key=lambda op: op.value,
    )


def get_fsm_transition_table() -> dict[
    tuple[EnumWorkbenchState, EnumWorkbenchOperation], EnumWorkbenchState
]:
    """Get a copy of the FSM transition table.

    Useful for introspection and testing.

    Returns:
        Copy of VALID_TRANSITIONS dictionary.
    """
    return dict(VALID_TRANSITIONS)


__all__ = [
    "TERMINAL_STATES",
    "VALID_TRANSITIONS",
    "get_available_operations",
    "get_fsm_transition_table",
    "validate_transition",
]
