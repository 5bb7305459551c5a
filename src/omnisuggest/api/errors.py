"""Mapping of OmniSuggest errors to HTTP responses."""

from __future__ import annotations

from typing import Final

from fastapi import HTTPException

from omnisuggest.api.models_api import ModelErrorDetail
from omnisuggest.exceptions import (
    InvalidStateError,
    LedgerClientError,
    OmniSuggestError,
    PatternNotFoundError,
    ResourceExhaustedError,
    RetryableError,
    SessionAbortedError,
    SessionNotFoundError,
    SessionValidationError,
)

# Checked in order; first match wins.
_STATUS_BY_ERROR: Final[tuple[tuple[type[OmniSuggestError], int], ...]] = (
    (SessionValidationError, 422),
    (SessionNotFoundError, 404),
    (PatternNotFoundError, 404),
    (InvalidStateError, 409),
    (RetryableError, 503),
    (ResourceExhaustedError, 507),
    (LedgerClientError, 502),
)


def status_for_error(exc: OmniSuggestError) -> int:
    """HTTP status for an error; aborted sessions use their cause."""
    target: BaseException = exc
    if isinstance(exc, SessionAbortedError):
        target = exc.cause
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(target, error_type):
            return status
    return 500


def to_http_exception(exc: OmniSuggestError) -> HTTPException:
    """Convert an OmniSuggest error into an HTTPException with a structured detail."""
    detail = ModelErrorDetail(
        error_code=exc.error_code,
        message=str(exc),
        recoverable=(
            exc.is_retryable if isinstance(exc, SessionAbortedError) else exc.recoverable
        ),
        stage=exc.stage.value if isinstance(exc, SessionAbortedError) else None,
    )
    return HTTPException(
        status_code=status_for_error(exc),
        detail=detail.model_dump(),
    )


__all__ = ["status_for_error", "to_http_exception"]
