# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Workbench - per-session state for one suggestion request.

Holds the immutable request, the append-only accumulated code and the
replaceable suggestion, and moves through the FSM defined in
``handler_workbench_transition``.

Finalize is two-phase so that a failed ledger commit never loses state:
``prepare_finalize`` validates the transition and returns the suggestion
without changing state; ``mark_committed`` applies the transition once the
ledger accepted the content. ``finalize`` performs both.

Thread Safety:
    Not safe for concurrent callers. Shared workbenches must be externally
    synchronized (the session orchestrator holds a per-session lock).
"""

from __future__ import annotations

import logging
from typing import TypedDict
from uuid import uuid4

from omnisuggest.enums import EnumWorkbenchOperation, EnumWorkbenchState
from omnisuggest.exceptions import InvalidStateError, SessionValidationError
from omnisuggest.nodes.node_workbench_reducer.handlers import validate_transition
from omnisuggest.nodes.node_workbench_reducer.models import ModelRefinementContext
from omnisuggest.protocols import ProtocolRefinementPolicy

logger = logging.getLogger(__name__)


class WorkbenchTransition(TypedDict):
    """One applied FSM transition."""

    from_state: EnumWorkbenchState
    operation: EnumWorkbenchOperation
    to_state: EnumWorkbenchState


class Workbench:
    """Mutable per-session state tracking request, code and suggestion.

    Args:
        request: The session request text (non-empty).
        session_id: Identifier used for logging; generated when omitted.

    Raises:
        SessionValidationError: If the request is empty.

    Example:
        >>> wb = Workbench.create("sort an array")
        >>> wb.set_suggestion("bubble_sort(items)")
        >>> wb.finalize()
        'bubble_sort(items)'
        >>> wb.state
        <EnumWorkbenchState.COMMITTED: 'committed'>
    """

    def __init__(self, request: str, *, session_id: str | None = None) -> None:
        if not isinstance(request, str) or not request.strip():
            raise SessionValidationError("Request text cannot be empty")
        self._request = request
        self._session_id = session_id or str(uuid4())
        self._code_chunks: list[str] = []
        self._suggested_code: str | None = None
        self._context = ModelRefinementContext(request=request)
        self._state = EnumWorkbenchState.CREATED
        self._finalize_pending = False
        self._history: list[WorkbenchTransition] = []

    @classmethod
    def create(cls, request: str, *, session_id: str | None = None) -> Workbench:
        """Create a workbench in the CREATED state."""
        return cls(request, session_id=session_id)

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def request(self) -> str:
        return self._request

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def state(self) -> EnumWorkbenchState:
        return self._state

    @property
    def current_code(self) -> str:
        """Accumulated committed code ("" until the first commit)."""
        return "".join(self._code_chunks)

    @property
    def suggested_code(self) -> str | None:
        """Current suggestion, None until the first suggestion."""
        return self._suggested_code

    @property
    def refinement_context(self) -> ModelRefinementContext:
        return self._context

    @property
    def is_finalize_pending(self) -> bool:
        """True between ``prepare_finalize`` and ``mark_committed``."""
        return self._finalize_pending

    @property
    def history(self) -> list[WorkbenchTransition]:
        return list(self._history)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def set_suggestion(
        self,
        text: str,
        *,
        context: ModelRefinementContext | None = None,
    ) -> None:
        """Replace the suggestion unconditionally.

        Valid from CREATED or REFINED; moves to SUGGESTED.

        Args:
            text: The new suggestion (non-empty).
            context: Refinement context describing where the suggestion came
                from. Defaults to a context carrying only the request.

        Raises:
            InvalidStateError: If not allowed from the current state.
            SessionValidationError: If the suggestion is empty.
        """
        to_state = validate_transition(self._state, EnumWorkbenchOperation.SET_SUGGESTION)
        if not text:
            raise SessionValidationError("Suggestion text cannot be empty")
        self._suggested_code = text
        self._context = context or ModelRefinementContext(request=self._request)
        self._apply(EnumWorkbenchOperation.SET_SUGGESTION, to_state)

    def refine(self, policy: ProtocolRefinementPolicy) -> str:
        """Derive a new suggestion from the current one.

        Valid only from SUGGESTED; moves to REFINED.

        Returns:
            The refined suggestion.

        Raises:
            InvalidStateError: If not allowed from the current state.
            SessionValidationError: If the policy produced empty text; the
                workbench is left unchanged.
        """
        to_state = validate_transition(self._state, EnumWorkbenchOperation.REFINE)
        # SUGGESTED guarantees a suggestion exists
        assert self._suggested_code is not None
        refined = policy.refine(self._suggested_code, self._context)
        if not refined:
            raise SessionValidationError("Refinement policy produced an empty suggestion")
        self._suggested_code = refined
        self._apply(EnumWorkbenchOperation.REFINE, to_state)
        return refined

    def commit_change(self, text: str) -> str:
        """Append text to the accumulated code.

        Legal in any state and never changes it. Appending "a" then "b"
        yields the same code as appending "ab".

        Returns:
            The accumulated code after the append.
        """
        self._code_chunks.append(text)
        return self.current_code

    def prepare_finalize(self) -> str:
        """Validate finalize and return the suggestion, without changing state.

        Raises:
            InvalidStateError: If finalize is not allowed from the current state.
        """
        validate_transition(self._state, EnumWorkbenchOperation.FINALIZE)
        assert self._suggested_code is not None
        self._finalize_pending = True
        return self._suggested_code

    def mark_committed(self) -> None:
        """Complete a prepared finalize; moves to COMMITTED.

        Raises:
            InvalidStateError: If ``prepare_finalize`` was not called since
                the last suggestion change.
        """
        if not self._finalize_pending:
            raise InvalidStateError("mark_committed", self._state.value)
        to_state = validate_transition(self._state, EnumWorkbenchOperation.FINALIZE)
        self._apply(EnumWorkbenchOperation.FINALIZE, to_state)

    def finalize(self) -> str:
        """Return the suggestion for ledger handoff and move to COMMITTED.

        Valid from SUGGESTED or REFINED.

        Raises:
            InvalidStateError: If not allowed from the current state.
        """
        suggestion = self.prepare_finalize()
        self.mark_committed()
        return suggestion

    def _apply(
        self,
        operation: EnumWorkbenchOperation,
        to_state: EnumWorkbenchState,
    ) -> None:
        from_state = self._state
        self._state = to_state
        self._finalize_pending = False
        self._history.append(
            WorkbenchTransition(from_state=from_state, operation=operation, to_state=to_state)
        )
        logger.debug(
            "Workbench %s: %s -> %s (%s)",
            self._session_id,
            from_state.value,
            to_state.value,
            operation.value,
            extra={"correlation_id": self._session_id},
        )


__all__ = ["Workbench", "WorkbenchTransition"]
