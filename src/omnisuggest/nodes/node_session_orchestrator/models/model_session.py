# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Session orchestrator models: handle, result and configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field

from omnisuggest.constants import LEDGER_COMMIT_DESCRIPTION
from omnisuggest.models import ModelLedgerReceipt
from omnisuggest.nodes.node_pattern_ranking_compute.models import ModelMatchResult


class ModelSessionHandle(BaseModel):
    """Opaque reference to a live session."""

    session_id: str = Field(..., min_length=1, description="Session identifier")

    model_config = {"frozen": True, "extra": "forbid"}


class ModelSessionResult(BaseModel):
    """Outcome of a completed session run.

    Attributes:
        session_id: The session that produced the result.
        suggestion: The finalized suggestion committed to the ledger.
        receipt: Ledger receipt for the committed suggestion.
        ranking: The ranking the suggestion was chosen from.
        used_fallback: True when no pattern matched and the fallback text
            was suggested.
    """

    session_id: str = Field(..., min_length=1, description="Session identifier")
    suggestion: str = Field(..., min_length=1, description="Finalized suggestion")
    receipt: ModelLedgerReceipt = Field(..., description="Ledger receipt")
    ranking: ModelMatchResult = Field(..., description="Ranking used for the suggestion")
    used_fallback: bool = Field(
        default=False,
        description="Whether the fallback suggestion was used",
    )

    model_config = {"frozen": True, "extra": "forbid"}


class ModelOrchestratorConfig(BaseModel):
    """Configuration for the session orchestrator.

    Attributes:
        ledger_timeout_seconds: Bound on each ledger commit call.
        ledger_description: Description attached to committed suggestions.
        max_sessions: Most sessions held at once before eviction.
    """

    ledger_timeout_seconds: float = Field(
        default=5.0,
        gt=0.0,
        description="Bound on each ledger commit call in seconds",
    )
    ledger_description: str = Field(
        default=LEDGER_COMMIT_DESCRIPTION,
        description="Description attached to committed suggestions",
    )
    max_sessions: int = Field(
        default=1000,
        ge=1,
        description="Most sessions held at once; committed then idle ones are evicted",
    )

    model_config = {"frozen": True, "extra": "forbid"}


__all__ = ["ModelOrchestratorConfig", "ModelSessionHandle", "ModelSessionResult"]
