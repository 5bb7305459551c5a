# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Ledger clients.

Transport code lives here rather than under nodes/; the session
orchestrator receives a ledger client by injection.
"""

from omnisuggest.clients.ledger_client import HttpLedgerClient
from omnisuggest.clients.ledger_memory import (
    GENESIS_HASH,
    InMemoryLedgerClient,
    LedgerEntry,
)

__all__ = [
    "GENESIS_HASH",
    "HttpLedgerClient",
    "InMemoryLedgerClient",
    "LedgerEntry",
]
