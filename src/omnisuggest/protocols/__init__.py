"""Shared protocol definitions for OmniSuggest.

These protocols define the pluggable strategy seams of the suggestion
pipeline. The orchestrator and the workbench depend only on these
interfaces, so real implementations (a language-aware tokenizer, a linter
backed style evaluator, a blockchain ledger) can be substituted without
touching them.

Protocols:
    - ProtocolTokenizer: splits code or request text into lexical tokens
    - ProtocolStyleEvaluator: scores code style in [0.0, 1.0]
    - ProtocolRefinementPolicy: deterministic suggestion transformation
    - ProtocolLedgerClient: tamper-evident commit/verify boundary
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from omnisuggest.models import ModelLedgerReceipt
    from omnisuggest.nodes.node_workbench_reducer.models import (
        ModelRefinementContext,
    )


@runtime_checkable
class ProtocolTokenizer(Protocol):
    """Protocol for lexical tokenizers.

    Implementations must be deterministic: the same text always yields the
    same token sequence.
    """

    def tokenize(self, text: str) -> list[str]:
        """Split text into tokens, preserving source order."""
        ...


@runtime_checkable
class ProtocolStyleEvaluator(Protocol):
    """Protocol for code style evaluators."""

    def evaluate(self, code: str) -> float:
        """Return a style score in [0.0, 1.0]; higher is better."""
        ...


@runtime_checkable
class ProtocolRefinementPolicy(Protocol):
    """Protocol for suggestion refinement policies.

    A refinement derives a new suggestion from the previous one. It must be
    deterministic and must never return empty text for non-empty input.
    """

    def refine(self, suggestion: str, context: ModelRefinementContext) -> str:
        """Return the refined suggestion."""
        ...


@runtime_checkable
class ProtocolLedgerClient(Protocol):
    """Protocol for the external tamper-evident ledger.

    The core treats the ledger as opaque. Implementations raise
    ``RetryableError`` for transient failures and ``LedgerNotFoundError``
    from ``verify`` when no entry exists for a receipt.

    Commits sharing an ``idempotency_key`` record at most one entry: a repeat
    with the same content returns the original receipt.
    """

    async def commit(
        self,
        content: str,
        description: str,
        *,
        idempotency_key: str | None = None,
    ) -> ModelLedgerReceipt:
        """Append content to the ledger and return its receipt."""
        ...

    async def verify(self, receipt: ModelLedgerReceipt) -> str:
        """Return the committed content for a receipt."""
        ...


__all__ = [
    "ProtocolLedgerClient",
    "ProtocolRefinementPolicy",
    "ProtocolStyleEvaluator",
    "ProtocolTokenizer",
]
