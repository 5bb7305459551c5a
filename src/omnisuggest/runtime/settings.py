# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Runtime settings for OmniSuggest, loaded from the environment.

Environment variables (prefix ``OMNISUGGEST_``):
    OMNISUGGEST_SEED_FILE: YAML seed file loaded into the pattern store
    OMNISUGGEST_LEDGER_URL: Ledger service URL (in-memory ledger when unset)
    OMNISUGGEST_LEDGER_TIMEOUT_SECONDS: Bound on each ledger call (default 5.0)
    OMNISUGGEST_LEDGER_MAX_RETRIES: HTTP ledger retries (default 3)
    OMNISUGGEST_LEDGER_RETRY_BASE_DELAY: Backoff base delay (default 0.5)
    OMNISUGGEST_PATTERN_LIMIT: Pattern store capacity (default 10000)
    OMNISUGGEST_LEXICAL_WEIGHT / _LANGUAGE_WEIGHT / _SIMPLICITY_WEIGHT
    OMNISUGGEST_MIN_SCORE / OMNISUGGEST_MAX_RESULTS: Ranking filters
    OMNISUGGEST_LOG_LEVEL: Logging level (default INFO)
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from omnisuggest.constants import CODE_PATTERN_LIMIT, MAX_RANKING_RESULTS
from omnisuggest.models import ModelLedgerClientConfig
from omnisuggest.nodes.node_pattern_ranking_compute.models import ModelRankingWeights
from omnisuggest.nodes.node_session_orchestrator.models import ModelOrchestratorConfig
from omnisuggest.runtime.enum_log_level import EnumLogLevel


class OmniSuggestSettings(BaseSettings):
    """Pydantic Settings for the suggestion service and CLI."""

    model_config = SettingsConfigDict(
        env_prefix="OMNISUGGEST_",
        extra="ignore",
    )

    seed_file: Path | None = Field(
        default=None,
        description="YAML seed file loaded into the pattern store at startup",
    )
    ledger_url: str | None = Field(
        default=None,
        description="Ledger service base URL; in-memory ledger when unset",
    )
    ledger_timeout_seconds: float = Field(
        default=5.0,
        gt=0.0,
        description="Bound on each ledger call in seconds",
    )
    ledger_max_retries: int = Field(
        default=3,
        ge=0,
        description="Retry attempts for transient HTTP ledger failures",
    )
    ledger_retry_base_delay: float = Field(
        default=0.5,
        ge=0.0,
        description="Base delay in seconds for exponential backoff",
    )
    pattern_limit: int = Field(
        default=CODE_PATTERN_LIMIT,
        ge=1,
        description="Maximum number of patterns held by the store",
    )
    max_sessions: int = Field(
        default=1000,
        ge=1,
        description="Most sessions held at once before eviction",
    )
    lexical_weight: float = Field(default=0.7, ge=0.0)
    language_weight: float = Field(default=0.1, ge=0.0)
    simplicity_weight: float = Field(default=0.2, ge=0.0)
    min_score: float = Field(
        default=0.0,
        ge=0.0,
        description="Ranked entries scoring below this are dropped",
    )
    max_results: int | None = Field(
        default=None,
        ge=1,
        le=MAX_RANKING_RESULTS,
        description="Keep at most this many ranked entries",
    )
    log_level: EnumLogLevel = Field(
        default=EnumLogLevel.INFO,
        description="Logging level for entry points",
    )

    def to_ranking_weights(self) -> ModelRankingWeights:
        return ModelRankingWeights(
            lexical_weight=self.lexical_weight,
            language_weight=self.language_weight,
            simplicity_weight=self.simplicity_weight,
        )

    def to_ledger_client_config(self) -> ModelLedgerClientConfig | None:
        """HTTP ledger configuration, or None when no URL is configured."""
        if not self.ledger_url:
            return None
        return ModelLedgerClientConfig(
            base_url=self.ledger_url,
            timeout_seconds=self.ledger_timeout_seconds,
            max_retries=self.ledger_max_retries,
            retry_base_delay=self.ledger_retry_base_delay,
        )

    def to_orchestrator_config(self) -> ModelOrchestratorConfig:
        # Each HTTP attempt is already bounded; the orchestrator bounds the
        # whole retry sequence.
        attempts = self.ledger_max_retries + 1 if self.ledger_url else 1
        backoff = sum(self.ledger_retry_base_delay * 2**i for i in range(attempts - 1))
        return ModelOrchestratorConfig(
            ledger_timeout_seconds=self.ledger_timeout_seconds * attempts + backoff,
            max_sessions=self.max_sessions,
        )


__all__ = ["OmniSuggestSettings"]
