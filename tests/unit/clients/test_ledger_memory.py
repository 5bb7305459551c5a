# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for InMemoryLedgerClient."""

from __future__ import annotations

import pytest

from omnisuggest.clients import GENESIS_HASH, InMemoryLedgerClient
from omnisuggest.clients.ledger_memory import sha256_hex
from omnisuggest.exceptions import (
    LedgerClientError,
    LedgerNotFoundError,
    LedgerTamperError,
)
from omnisuggest.models import ModelLedgerReceipt


@pytest.mark.unit
class TestCommitAndVerify:
    """Tests for commit / verify."""

    async def test_verify_returns_committed_content(
        self, ledger: InMemoryLedgerClient
    ) -> None:
        receipt = await ledger.commit("print(1)", "Final Suggestion")

        assert await ledger.verify(receipt) == "print(1)"
        assert receipt.content_hash == sha256_hex("print(1)")
        assert receipt.description == "Final Suggestion"

    async def test_receipts_are_unique(self, ledger: InMemoryLedgerClient) -> None:
        first = await ledger.commit("same", "d")
        second = await ledger.commit("same", "d")

        assert first.receipt_id != second.receipt_id
        assert len(ledger) == 2

    async def test_entries_are_chained(self, ledger: InMemoryLedgerClient) -> None:
        assert ledger.head_hash == GENESIS_HASH

        await ledger.commit("a", "d")
        await ledger.commit("b", "d")

        first, second = ledger.entries
        assert first.prev_hash == GENESIS_HASH
        assert second.prev_hash == first.entry_hash
        assert ledger.head_hash == second.entry_hash
        ledger.verify_chain()

    async def test_unknown_receipt(self, ledger: InMemoryLedgerClient) -> None:
        other = InMemoryLedgerClient()
        receipt = await other.commit("elsewhere", "d")

        with pytest.raises(LedgerNotFoundError):
            await ledger.verify(receipt)

    async def test_repeated_idempotency_key_records_once(
        self, ledger: InMemoryLedgerClient
    ) -> None:
        first = await ledger.commit("same", "d", idempotency_key="k-1")
        second = await ledger.commit("same", "d", idempotency_key="k-1")

        assert second == first
        assert len(ledger) == 1
        ledger.verify_chain()

    async def test_distinct_idempotency_keys_record_separately(
        self, ledger: InMemoryLedgerClient
    ) -> None:
        await ledger.commit("same", "d", idempotency_key="k-1")
        await ledger.commit("same", "d", idempotency_key="k-2")

        assert len(ledger) == 2

    async def test_idempotency_key_reused_for_other_content(
        self, ledger: InMemoryLedgerClient
    ) -> None:
        await ledger.commit("first", "d", idempotency_key="k-1")

        with pytest.raises(LedgerClientError):
            await ledger.commit("second", "d", idempotency_key="k-1")
        assert len(ledger) == 1


@pytest.mark.unit
class TestTamperDetection:
    """Tests for hash chain integrity checks."""

    async def test_modified_content_detected(self, ledger: InMemoryLedgerClient) -> None:
        receipt = await ledger.commit("original", "d")

        ledger.entries[0].content = "tampered"

        with pytest.raises(LedgerTamperError):
            await ledger.verify(receipt)
        with pytest.raises(LedgerTamperError):
            ledger.verify_chain()

    async def test_earlier_tampering_breaks_later_verification(
        self, ledger: InMemoryLedgerClient
    ) -> None:
        await ledger.commit("first", "d")
        receipt = await ledger.commit("second", "d")

        first = ledger.entries[0]
        first.content = "rewritten"
        first.content_hash = sha256_hex("rewritten")

        with pytest.raises(LedgerTamperError):
            await ledger.verify(receipt)

    async def test_later_tampering_does_not_affect_earlier_receipt(
        self, ledger: InMemoryLedgerClient
    ) -> None:
        receipt = await ledger.commit("first", "d")
        await ledger.commit("second", "d")

        ledger.entries[1].description = "changed"

        assert await ledger.verify(receipt) == "first"
        with pytest.raises(LedgerTamperError):
            ledger.verify_chain()

    async def test_forged_receipt_hash(self, ledger: InMemoryLedgerClient) -> None:
        receipt = await ledger.commit("content", "d")
        forged = ModelLedgerReceipt(
            receipt_id=receipt.receipt_id,
            timestamp=receipt.timestamp,
            content_hash=sha256_hex("other"),
            description=receipt.description,
        )

        with pytest.raises(LedgerTamperError):
            await ledger.verify(forged)
