# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""ModelLedgerReceipt - proof that content was committed to a ledger."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class ModelLedgerReceipt(BaseModel):
    """Receipt returned by ``LedgerClient.commit``.

    Attributes:
        receipt_id: Ledger-assigned identifier of the entry.
        timestamp: When the ledger recorded the entry (UTC).
        content_hash: SHA-256 hex digest of the committed content.
        description: Description supplied with the commit.
    """

    receipt_id: str = Field(
        ...,
        min_length=1,
        description="Ledger-assigned identifier of the entry",
    )
    timestamp: datetime = Field(
        ...,
        description="When the ledger recorded the entry (UTC)",
    )
    content_hash: str = Field(
        ...,
        min_length=64,
        max_length=64,
        description="SHA-256 hex digest of the committed content",
    )
    description: str = Field(
        default="",
        description="Description supplied with the commit",
    )

    model_config = {"frozen": True, "extra": "forbid"}


__all__ = ["ModelLedgerReceipt"]
