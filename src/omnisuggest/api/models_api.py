"""Request and response models for the OmniSuggest HTTP API.

These models define the contract for the /api/v1/sessions and
/api/v1/patterns endpoints.
"""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from omnisuggest.constants import MAX_RANKING_RESULTS
from omnisuggest.enums import EnumWorkbenchState
from omnisuggest.models import ModelLedgerReceipt


class ModelStartSessionRequest(BaseModel):
    """Body of POST /api/v1/sessions."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    request: str = Field(
        ...,
        min_length=1,
        description="Natural-language request for a code suggestion",
    )


class ModelSessionResponse(BaseModel):
    """State of one session."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    session_id: str = Field(..., description="Session identifier")
    state: EnumWorkbenchState = Field(..., description="Workbench state")
    suggestion: str = Field(..., description="Current suggestion")
    used_fallback: bool = Field(
        default=False,
        description="Whether no pattern matched and the fallback was suggested",
    )
    receipt: ModelLedgerReceipt | None = Field(
        default=None,
        description="Ledger receipt once the session is committed",
    )


class ModelCreatePatternRequest(BaseModel):
    """Body of POST /api/v1/patterns."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    snippet: str = Field(..., min_length=1, description="Code snippet text")
    language: str = Field(
        default="generic",
        min_length=1,
        max_length=50,
        description="Language tag of the snippet",
    )
    complexity: float = Field(
        default=0.0,
        ge=0.0,
        allow_inf_nan=False,
        description="Initial complexity",
    )


class ModelPatternResponse(BaseModel):
    """Single stored pattern."""

    model_config = ConfigDict(frozen=True, extra="forbid", from_attributes=True)

    pattern_id: UUID = Field(..., description="Pattern UUID")
    snippet: str = Field(..., description="Code snippet text")
    language: str = Field(..., description="Language tag")
    complexity: float = Field(..., ge=0.0, description="Complexity score")
    sequence: int = Field(..., ge=0, description="Insertion index in the store")


class ModelPatternPage(BaseModel):
    """Paginated list of stored patterns in insertion order."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    patterns: list[ModelPatternResponse] = Field(
        ...,
        description="Patterns on this page",
    )
    total: int = Field(..., ge=0, description="Patterns matching the filter")
    limit: int = Field(..., ge=1, le=MAX_RANKING_RESULTS, description="Page size")
    offset: int = Field(..., ge=0, description="Patterns skipped")


class ModelErrorDetail(BaseModel):
    """Structured error body carried in ``HTTPException.detail``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    recoverable: bool = Field(default=False, description="Whether a retry may succeed")
    stage: str | None = Field(
        default=None,
        description="Pipeline stage that failed, for aborted sessions",
    )


__all__ = [
    "ModelCreatePatternRequest",
    "ModelErrorDetail",
    "ModelPatternPage",
    "ModelPatternResponse",
    "ModelSessionResponse",
    "ModelStartSessionRequest",
]
