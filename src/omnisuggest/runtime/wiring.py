# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Component wiring shared by the CLI and the HTTP app.

Builds the pattern store, the ledger client and the session orchestrator
from ``OmniSuggestSettings``. No process-wide singletons: every call
returns fresh components.
"""

from __future__ import annotations

import logging

from omnisuggest.clients import HttpLedgerClient, InMemoryLedgerClient
from omnisuggest.nodes.node_pattern_ranking_compute import Matcher
from omnisuggest.nodes.node_pattern_store_effect import PatternStore
from omnisuggest.nodes.node_session_orchestrator import SessionOrchestrator
from omnisuggest.protocols import ProtocolLedgerClient
from omnisuggest.runtime.enum_log_level import EnumLogLevel
from omnisuggest.runtime.settings import OmniSuggestSettings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: EnumLogLevel | str = EnumLogLevel.INFO) -> None:
    """Configure root logging for an entry point with a safe fallback."""
    try:
        resolved = EnumLogLevel(level)
    except ValueError:
        resolved = EnumLogLevel.INFO
    logging.basicConfig(level=resolved.numeric, format=LOG_FORMAT)


def build_pattern_store(settings: OmniSuggestSettings) -> PatternStore:
    """Create a pattern store, seeded from ``settings.seed_file`` if set."""
    store = PatternStore(limit=settings.pattern_limit)
    if settings.seed_file is not None:
        seeded = store.seed_from_file(settings.seed_file)
        logger.info("Seeded %d patterns from %s", len(seeded), settings.seed_file)
    return store


def build_ledger_client(
    settings: OmniSuggestSettings,
) -> HttpLedgerClient | InMemoryLedgerClient:
    """HTTP ledger client when a URL is configured, in-memory ledger otherwise."""
    config = settings.to_ledger_client_config()
    if config is None:
        logger.info("No ledger URL configured, using in-memory ledger")
        return InMemoryLedgerClient()
    logger.info("Using ledger service at %s", config.base_url)
    return HttpLedgerClient(config)


def build_orchestrator(
    settings: OmniSuggestSettings,
    *,
    store: PatternStore | None = None,
    ledger: ProtocolLedgerClient | None = None,
) -> SessionOrchestrator:
    """Wire a session orchestrator from settings.

    ``store`` and ``ledger`` override the components built from settings.
    """
    matcher = Matcher(
        weights=settings.to_ranking_weights(),
        min_score=settings.min_score,
        max_results=settings.max_results,
    )
    return SessionOrchestrator(
        store if store is not None else build_pattern_store(settings),
        ledger if ledger is not None else build_ledger_client(settings),
        matcher=matcher,
        config=settings.to_orchestrator_config(),
    )


__all__ = [
    "LOG_FORMAT",
    "build_ledger_client",
    "build_orchestrator",
    "build_pattern_store",
    "configure_logging",
]
