# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Configuration model for the ledger HTTP client."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ModelLedgerClientConfig(BaseModel):
    """Configuration for the ledger service HTTP client.

    Attributes:
        base_url: Base URL of the ledger service (from OMNISUGGEST_LEDGER_URL).
        timeout_seconds: HTTP request timeout in seconds.
        max_retries: Maximum number of retry attempts per request.
        retry_base_delay: Base delay in seconds for exponential backoff.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    base_url: str = Field(
        min_length=1,
        description="Base URL of the ledger service.",
    )
    timeout_seconds: float = Field(
        default=5.0,
        gt=0.0,
        description="HTTP request timeout in seconds.",
    )
    max_retries: int = Field(
        default=3,
        ge=0,
        description="Maximum number of retry attempts per request.",
    )
    retry_base_delay: float = Field(
        default=0.5,
        ge=0.0,
        description="Base delay in seconds for exponential backoff.",
    )


__all__ = ["ModelLedgerClientConfig"]
