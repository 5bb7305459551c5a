# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""OmniSuggest - code pattern memory and suggestion sessions.

Stores reusable code patterns, ranks them against natural-language
requests, refines the best candidate in a per-session workbench and
commits the final suggestion to a tamper-evident ledger.

Quick Start:
    >>> from omnisuggest import InMemoryLedgerClient, PatternStore, SessionOrchestrator
    >>> store = PatternStore()
    >>> store.seed([("def bubble_sort(items): ...", "python")])
    >>> orchestrator = SessionOrchestrator(store, InMemoryLedgerClient())
    >>> result = await orchestrator.run("sort a list in python")
    >>> "bubble_sort" in result.suggestion
    True
"""

__version__ = "0.1.0"

from omnisuggest.clients import HttpLedgerClient, InMemoryLedgerClient
from omnisuggest.exceptions import (
    InvalidStateError,
    OmniSuggestError,
    ResourceExhaustedError,
    RetryableError,
    SessionAbortedError,
    SessionNotFoundError,
    SessionValidationError,
)
from omnisuggest.models import ModelCodePattern, ModelLedgerReceipt
from omnisuggest.nodes.node_pattern_ranking_compute import Matcher
from omnisuggest.nodes.node_pattern_store_effect import PatternStore
from omnisuggest.nodes.node_session_orchestrator import (
    ModelSessionHandle,
    ModelSessionResult,
    SessionOrchestrator,
)
from omnisuggest.nodes.node_workbench_reducer import Workbench

__all__ = [
    "HttpLedgerClient",
    "InMemoryLedgerClient",
    "InvalidStateError",
    "Matcher",
    "ModelCodePattern",
    "ModelLedgerReceipt",
    "ModelSessionHandle",
    "ModelSessionResult",
    "OmniSuggestError",
    "PatternStore",
    "ResourceExhaustedError",
    "RetryableError",
    "SessionAbortedError",
    "SessionNotFoundError",
    "SessionOrchestrator",
    "SessionValidationError",
    "Workbench",
    "__version__",
]
