"""Workbench and session enums for OmniSuggest.

String-based enums so states serialize directly into pydantic models and
HTTP responses.
"""

from enum import Enum


class EnumWorkbenchState(str, Enum):
    """Lifecycle states of a session workbench.

    Attributes:
        CREATED: Request stored, no suggestion yet.
        SUGGESTED: A suggestion has been written.
        REFINED: The suggestion has been refined; ready to finalize.
        COMMITTED: The suggestion was handed to the ledger (terminal).

    Example:
        >>> from omnisuggest.enums import EnumWorkbenchState
        >>> EnumWorkbenchState.CREATED.value
        'created'
    """

    CREATED = "created"
    SUGGESTED = "suggested"
    REFINED = "refined"
    COMMITTED = "committed"


class EnumWorkbenchOperation(str, Enum):
    """Operations that drive workbench state transitions."""

    SET_SUGGESTION = "set_suggestion"
    REFINE = "refine"
    FINALIZE = "finalize"


class EnumSessionStage(str, Enum):
    """Pipeline stages named in session abort errors."""

    VALIDATION = "validation"
    MATCHING = "matching"
    SUGGESTION = "suggestion"
    REFINEMENT = "refinement"
    COMMIT = "commit"


__all__ = ["EnumSessionStage", "EnumWorkbenchOperation", "EnumWorkbenchState"]
