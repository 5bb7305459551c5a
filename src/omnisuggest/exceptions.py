# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Exceptions for the suggestion pipeline.

This module defines the domain-specific exceptions shared by the pattern
store, the ranking handlers, the workbench and the session orchestrator.
All exceptions follow the pattern of explicit, typed error handling: each
class carries a machine-readable error code and a recoverable flag so that
callers (the orchestrator, the HTTP API) can decide between retry and abort
without string matching.

Error codes:
    - SUGGEST_001: Validation errors (not recoverable)
    - SUGGEST_002: Invalid workbench state transition (not recoverable)
    - SUGGEST_003: Pattern store capacity exhausted (fatal to the session)
    - SUGGEST_004: Transient ledger failure (recoverable via retry)
    - SUGGEST_005: Session aborted at a pipeline stage (depends on cause)
    - SUGGEST_006: Pattern not owned by the store (not recoverable)
    - SUGGEST_007: Unknown session handle (not recoverable)
    - LEDGER_001: Ledger client error (not recoverable)
    - LEDGER_002: Ledger entry not found (not recoverable)
    - LEDGER_003: Ledger chain integrity violation (not recoverable)
"""

from __future__ import annotations

from typing import ClassVar

from omnisuggest.enums import EnumSessionStage


class OmniSuggestError(Exception):
    """Base class for all suggestion pipeline errors."""

    error_code: ClassVar[str] = "SUGGEST_000"
    recoverable: ClassVar[bool] = False


class SessionValidationError(OmniSuggestError, ValueError):
    """Raised when a request or pattern fails input validation.

    Raised before any state is created: an empty request never produces a
    workbench, an invalid pattern never reaches the store.

    Error Code: SUGGEST_001
    Recoverable: No
    Retry Strategy: None

    Example:
        >>> raise SessionValidationError("Request text cannot be empty")
        SessionValidationError: Request text cannot be empty
    """

    error_code: ClassVar[str] = "SUGGEST_001"


class InvalidStateError(OmniSuggestError):
    """Raised when a workbench operation is not allowed in its current state.

    Always a caller bug; never retried automatically.

    Error Code: SUGGEST_002
    Recoverable: No
    Retry Strategy: None

    Attributes:
        operation: The operation that was attempted.
        state: The workbench state at the time of the attempt.
    """

    error_code: ClassVar[str] = "SUGGEST_002"

    def __init__(self, operation: str, state: str) -> None:
        self.operation = operation
        self.state = state
        super().__init__(
            f"Operation '{operation}' is not allowed in workbench state '{state}'"
        )


class ResourceExhaustedError(OmniSuggestError):
    """Raised when the pattern store cannot grow any further.

    Fatal to the session that triggered it, never to the process. The store
    is left exactly as it was before the failing call.

    Error Code: SUGGEST_003
    Recoverable: No
    Retry Strategy: None

    Attributes:
        limit: The capacity limit that was hit.
    """

    error_code: ClassVar[str] = "SUGGEST_003"

    def __init__(self, message: str, *, limit: int) -> None:
        self.limit = limit
        super().__init__(message)


class PatternNotFoundError(OmniSuggestError, LookupError):
    """Raised when a pattern is not owned by the store it was passed to.

    Error Code: SUGGEST_006
    Recoverable: No
    """

    error_code: ClassVar[str] = "SUGGEST_006"


class SessionNotFoundError(OmniSuggestError, LookupError):
    """Raised when a session handle does not name a live session.

    Error Code: SUGGEST_007
    Recoverable: No
    """

    error_code: ClassVar[str] = "SUGGEST_007"


class RetryableError(OmniSuggestError):
    """Raised on a ledger timeout or transient ledger failure.

    The session keeps its finalized-but-uncommitted suggestion, so the
    caller may retry the commit without rematching.

    Error Code: SUGGEST_004
    Recoverable: Yes
    Retry Strategy: Caller-driven retry of the commit step
    """

    error_code: ClassVar[str] = "SUGGEST_004"
    recoverable: ClassVar[bool] = True


class SessionAbortedError(OmniSuggestError):
    """Raised when a session pipeline stage fails.

    Wraps the underlying error (available as ``__cause__``) and names the
    failing stage. ``is_retryable`` mirrors the cause.

    Error Code: SUGGEST_005

    Attributes:
        stage: The pipeline stage that failed.
        session_id: The session that was aborted, if one had been created.
    """

    error_code: ClassVar[str] = "SUGGEST_005"

    def __init__(
        self,
        stage: EnumSessionStage,
        cause: BaseException,
        *,
        session_id: str | None = None,
    ) -> None:
        self.stage = stage
        self.session_id = session_id
        self.cause = cause
        super().__init__(f"Session aborted during {stage.value}: {cause}")

    @property
    def is_retryable(self) -> bool:
        """True if the underlying cause may be retried."""
        return isinstance(self.cause, OmniSuggestError) and self.cause.recoverable


class LedgerClientError(OmniSuggestError):
    """Base exception for ledger client errors.

    Error Code: LEDGER_001
    """

    error_code: ClassVar[str] = "LEDGER_001"


class LedgerNotFoundError(LedgerClientError):
    """Raised by ``verify`` when the ledger holds no entry for a receipt.

    Error Code: LEDGER_002
    """

    error_code: ClassVar[str] = "LEDGER_002"


class LedgerTamperError(LedgerClientError):
    """Raised when a ledger entry no longer matches its hash chain.

    Error Code: LEDGER_003
    """

    error_code: ClassVar[str] = "LEDGER_003"


__all__ = [
    "InvalidStateError",
    "LedgerClientError",
    "LedgerNotFoundError",
    "LedgerTamperError",
    "OmniSuggestError",
    "PatternNotFoundError",
    "ResourceExhaustedError",
    "RetryableError",
    "SessionAbortedError",
    "SessionNotFoundError",
    "SessionValidationError",
]
