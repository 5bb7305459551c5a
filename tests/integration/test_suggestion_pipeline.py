# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Integration tests for the full suggestion pipeline.

Seed file -> pattern store -> ranking -> workbench -> ledger, wired the way
the CLI and the HTTP app wire it.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from omnisuggest.clients import InMemoryLedgerClient
from omnisuggest.constants import REFINEMENT_HEADER
from omnisuggest.enums import EnumWorkbenchState
from omnisuggest.exceptions import RetryableError
from omnisuggest.runtime import OmniSuggestSettings, build_orchestrator
from omnisuggest.testing import MockLedgerClient


@pytest.fixture
def settings(sample_seed_yaml: Path) -> OmniSuggestSettings:
    return OmniSuggestSettings(seed_file=sample_seed_yaml, ledger_url=None)


@pytest.mark.integration
class TestSuggestionPipeline:
    """End-to-end pipeline behavior."""

    async def test_seeded_session_commits_verifiable_suggestion(
        self, settings: OmniSuggestSettings
    ) -> None:
        ledger = InMemoryLedgerClient()
        orchestrator = build_orchestrator(settings, ledger=ledger)

        result = await orchestrator.run("write a binary search over sorted items")

        assert result.ranking.best is not None
        assert "binary_search" in result.ranking.best.pattern.snippet
        assert result.suggestion.startswith(REFINEMENT_HEADER)
        assert "def binary_search(items, target): ..." in result.suggestion
        assert await ledger.verify(result.receipt) == result.suggestion
        ledger.verify_chain()

    async def test_analysis_demotes_more_complex_duplicate(
        self, settings: OmniSuggestSettings
    ) -> None:
        orchestrator = build_orchestrator(settings)
        store = orchestrator.store
        snippet = "def sort_items(items):\n    return sorted(items)\n"
        analyzed = store.create(snippet, "python")
        untouched = store.create(snippet, "python")
        for _ in range(3):
            store.analyze(analyzed)

        result = await orchestrator.run("sort items")

        ranked_ids = [entry.pattern.pattern_id for entry in result.ranking.entries]
        assert ranked_ids[:2] == [untouched.pattern_id, analyzed.pattern_id]
        assert result.ranking.best is not None
        assert result.ranking.best.pattern is untouched

    async def test_concurrent_sessions_share_one_ledger(
        self, settings: OmniSuggestSettings
    ) -> None:
        ledger = InMemoryLedgerClient()
        orchestrator = build_orchestrator(settings, ledger=ledger)
        requests = ["sort an array", "binary search", "sort items", "search a list"]

        results = await asyncio.gather(*(orchestrator.run(r) for r in requests))

        assert len(ledger) == len(requests)
        assert len({r.receipt.receipt_id for r in results}) == len(requests)
        for result in results:
            assert await ledger.verify(result.receipt) == result.suggestion
        ledger.verify_chain()

    async def test_ledger_outage_then_recovery(self, settings: OmniSuggestSettings) -> None:
        ledger = MockLedgerClient(fail_times=1)
        orchestrator = build_orchestrator(settings, ledger=ledger)

        handle = await orchestrator.start_session("sort an array")
        with pytest.raises(RetryableError):
            await orchestrator.commit_session(handle)
        assert orchestrator.get_workbench(handle).state == EnumWorkbenchState.REFINED

        receipt = await orchestrator.retry_commit(handle)

        assert orchestrator.get_workbench(handle).state == EnumWorkbenchState.COMMITTED
        assert await ledger.verify(receipt) == orchestrator.get_suggestion(handle)
        ledger.backend.verify_chain()
