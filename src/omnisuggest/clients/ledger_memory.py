# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""In-process hash-chained ledger.

Satisfies ``ProtocolLedgerClient`` without any external service. Every entry
links to its predecessor:

    entry_hash = sha256(prev_hash + content_hash + description + timestamp)

so altering any committed entry breaks every link from that entry onwards.
``verify`` recomputes the chain up to the requested entry and
``verify_chain`` validates the whole log.

Commits carrying an idempotency key are deduplicated: a repeated key with
the same content returns the original receipt instead of appending.

Used by the CLI and the HTTP app when no ledger URL is configured, and by
tests as the reference ledger.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Final
from uuid import uuid4

from omnisuggest.exceptions import (
    LedgerClientError,
    LedgerNotFoundError,
    LedgerTamperError,
)
from omnisuggest.models import ModelLedgerReceipt

logger = logging.getLogger(__name__)

GENESIS_HASH: Final[str] = "0" * 64


def sha256_hex(text: str) -> str:
    """SHA-256 hex digest of UTF-8 encoded text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def compute_entry_hash(
    prev_hash: str,
    content_hash: str,
    description: str,
    timestamp: datetime,
) -> str:
    """Hash linking an entry to its predecessor."""
    return sha256_hex(prev_hash + content_hash + description + timestamp.isoformat())


@dataclass
class LedgerEntry:
    """One committed ledger entry.

    Mutable on purpose so that tests can simulate tampering; the chain
    hashes detect any change.
    """

    receipt_id: str
    timestamp: datetime
    content: str
    content_hash: str
    description: str
    prev_hash: str
    entry_hash: str


class InMemoryLedgerClient:
    """Append-only, hash-chained ledger held in memory.

    Example:
        >>> ledger = InMemoryLedgerClient()
        >>> receipt = await ledger.commit("print(1)", "Final Suggestion")
        >>> await ledger.verify(receipt)
        'print(1)'
    """

    def __init__(self) -> None:
        self._entries: list[LedgerEntry] = []
        self._positions: dict[str, int] = {}
        self._idempotent: dict[str, int] = {}

    @property
    def entries(self) -> tuple[LedgerEntry, ...]:
        return tuple(self._entries)

    @property
    def head_hash(self) -> str:
        """Hash of the newest entry, or the genesis hash when empty."""
        return self._entries[-1].entry_hash if self._entries else GENESIS_HASH

    def __len__(self) -> int:
        return len(self._entries)

    async def commit(
        self,
        content: str,
        description: str,
        *,
        idempotency_key: str | None = None,
    ) -> ModelLedgerReceipt:
        """Append content and return its receipt.

        Raises:
            LedgerClientError: If ``idempotency_key`` was already used for
                different content.
        """
        content_hash = sha256_hex(content)
        if idempotency_key is not None and idempotency_key in self._idempotent:
            existing = self._entries[self._idempotent[idempotency_key]]
            if existing.content_hash != content_hash:
                raise LedgerClientError(
                    f"Idempotency key {idempotency_key} was used for different content"
                )
            logger.debug(
                "Ledger commit deduplicated (receipt=%s)", existing.receipt_id
            )
            return _receipt_for(existing)
        timestamp = datetime.now(UTC)
        prev_hash = self.head_hash
        entry = LedgerEntry(
            receipt_id=uuid4().hex,
            timestamp=timestamp,
            content=content,
            content_hash=content_hash,
            description=description,
            prev_hash=prev_hash,
            entry_hash=compute_entry_hash(prev_hash, content_hash, description, timestamp),
        )
        self._positions[entry.receipt_id] = len(self._entries)
        if idempotency_key is not None:
            self._idempotent[idempotency_key] = len(self._entries)
        self._entries.append(entry)
        logger.debug(
            "Ledger entry %d committed (receipt=%s)",
            len(self._entries),
            entry.receipt_id,
        )
        return _receipt_for(entry)

    async def verify(self, receipt: ModelLedgerReceipt) -> str:
        """Return the committed content for a receipt.

        Raises:
            LedgerNotFoundError: If no entry exists for the receipt.
            LedgerTamperError: If the chain up to the entry is broken or the
                receipt's hash does not match the entry.
        """
        position = self._positions.get(receipt.receipt_id)
        if position is None:
            raise LedgerNotFoundError(f"No ledger entry for receipt {receipt.receipt_id}")
        self._verify_range(position + 1)
        entry = self._entries[position]
        if entry.content_hash != receipt.content_hash:
            raise LedgerTamperError(
                f"Receipt {receipt.receipt_id} does not match the ledger entry hash"
            )
        return entry.content

    def verify_chain(self) -> None:
        """Validate every link of the ledger.

        Raises:
            LedgerTamperError: On the first broken link.
        """
        self._verify_range(len(self._entries))

    def _verify_range(self, end: int) -> None:
        prev_hash = GENESIS_HASH
        for index, entry in enumerate(self._entries[:end]):
            if entry.prev_hash != prev_hash:
                raise LedgerTamperError(f"Ledger entry {index} is not linked to its predecessor")
            if sha256_hex(entry.content) != entry.content_hash:
                raise LedgerTamperError(f"Ledger entry {index} content was modified")
            expected = compute_entry_hash(
                prev_hash, entry.content_hash, entry.description, entry.timestamp
            )
            if expected != entry.entry_hash:
                raise LedgerTamperError(f"Ledger entry {index} hash mismatch")
            prev_hash = entry.entry_hash


def _receipt_for(entry: LedgerEntry) -> ModelLedgerReceipt:
    return ModelLedgerReceipt(
        receipt_id=entry.receipt_id,
        timestamp=entry.timestamp,
        content_hash=entry.content_hash,
        description=entry.description,
    )


__all__ = [
    "GENESIS_HASH",
    "InMemoryLedgerClient",
    "LedgerEntry",
    "compute_entry_hash",
    "sha256_hex",
]
