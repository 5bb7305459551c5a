"""Workbench Reducer Handlers.

Pure FSM transition logic and refinement policies for session workbenches.
"""

from omnisuggest.nodes.node_workbench_reducer.handlers.handler_refinement import (
    CompositeRefinementPolicy,
    RationaleRefinementPolicy,
    StyleRefinementPolicy,
    apply_style_fixes,
    default_refinement_policy,
)
from omnisuggest.nodes.node_workbench_reducer.handlers.handler_workbench_transition import (
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    get_available_operations,
    get_fsm_transition_table,
    validate_transition,
)

__all__ = [
    "TERMINAL_STATES",
    "VALID_TRANSITIONS",
    "CompositeRefinementPolicy",
    "RationaleRefinementPolicy",
    "StyleRefinementPolicy",
    "apply_style_fixes",
    "default_refinement_policy",
    "get_available_operations",
    "get_fsm_transition_table",
    "validate_transition",
]
