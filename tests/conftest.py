"""
Pytest configuration and fixtures for omnisuggest tests.

Shared fixtures for pattern store, ranking, workbench and session tests.
"""

from __future__ import annotations

import pytest

from omnisuggest.clients import InMemoryLedgerClient
from omnisuggest.nodes.node_pattern_store_effect import PatternStore
from omnisuggest.nodes.node_session_orchestrator import SessionOrchestrator

# =========================================================================
# Basic Sample Data Fixtures
# =========================================================================


@pytest.fixture
def correlation_id() -> str:
    """Provide a valid UUID test correlation ID for tracing."""
    return "550e8400-e29b-41d4-a716-446655440000"


@pytest.fixture
def sample_seed_pairs() -> list[tuple[str, str]]:
    """Small mixed-language pattern library."""
    return [
        ("def bubble_sort(items):\n    return sorted(items)\n", "python"),
        ("function fetchJson(url) { return fetch(url).then(r => r.json()); }", "javascript"),
        ("def read_file(path):\n    with open(path) as handle:\n        return handle.read()\n", "python"),
    ]


@pytest.fixture
def sample_seed_yaml(tmp_path):
    """YAML seed file with two patterns."""
    path = tmp_path / "patterns.yaml"
    path.write_text(
        "patterns:\n"
        "  - snippet: \"bubble_sort(...)\"\n"
        "    language: generic\n"
        "  - snippet: \"def binary_search(items, target): ...\"\n"
        "    language: Python\n",
        encoding="utf-8",
    )
    return path


# =========================================================================
# Component Fixtures
# =========================================================================


@pytest.fixture
def store() -> PatternStore:
    """Empty pattern store."""
    return PatternStore()


@pytest.fixture
def seeded_store(sample_seed_pairs: list[tuple[str, str]]) -> PatternStore:
    """Pattern store loaded with the sample library."""
    pattern_store = PatternStore()
    pattern_store.seed(sample_seed_pairs)
    return pattern_store


@pytest.fixture
def ledger() -> InMemoryLedgerClient:
    """Fresh in-memory ledger."""
    return InMemoryLedgerClient()


@pytest.fixture
def orchestrator(
    seeded_store: PatternStore,
    ledger: InMemoryLedgerClient,
) -> SessionOrchestrator:
    """Orchestrator over the seeded store and the in-memory ledger."""
    return SessionOrchestrator(seeded_store, ledger)
