# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Pattern Store - owned, ordered collection of code patterns.

The store is the only owner of its patterns: ``add`` returns the stored
instance, and ``analyze`` only accepts patterns the store owns.

Concurrency:
    Writes (``add``, ``create``, ``seed``, ``analyze``) are serialized by an
    exclusive lock. Readers never take the lock for the duration of a scan:
    ``all()`` iterates over an immutable snapshot captured when iteration
    starts, so concurrent ranking passes never observe a partial write.

Capacity:
    The store holds at most ``limit`` patterns (``CODE_PATTERN_LIMIT`` by
    default). A write that would exceed it raises ``ResourceExhaustedError``
    and leaves the store unchanged.
"""

from __future__ import annotations

import logging
import math
import threading
from collections.abc import Iterable, Iterator
from pathlib import Path
from uuid import UUID, uuid4

from omnisuggest.constants import CODE_COMPLEXITY_FACTOR, CODE_PATTERN_LIMIT
from omnisuggest.exceptions import (
    PatternNotFoundError,
    ResourceExhaustedError,
    SessionValidationError,
)
from omnisuggest.models import ModelCodePattern
from omnisuggest.nodes.node_pattern_store_effect.handlers import (
    compute_structural_complexity,
    load_seed_file,
    validate_seed_pairs,
)
from omnisuggest.protocols import ProtocolTokenizer

logger = logging.getLogger(__name__)


class PatternStoreView:
    """Lazy, restartable, read-only view over a store's patterns.

    Each ``iter()`` call starts from a fresh snapshot, in insertion order.
    """

    def __init__(self, store: PatternStore) -> None:
        self._store = store

    def __iter__(self) -> Iterator[ModelCodePattern]:
        return iter(self._store.snapshot())

    def __len__(self) -> int:
        return len(self._store)


class PatternStore:
    """Ordered, insertion-preserving collection of code patterns.

    Duplicate snippets are permitted. Adding a pattern that is already owned
    (by this or another store) stores a copy under a fresh ``pattern_id``.

    Args:
        limit: Maximum number of patterns the store may hold.
        tokenizer: Tokenizer used by complexity analysis.

    Example:
        >>> store = PatternStore()
        >>> pattern = store.create("bubble_sort(...)", "generic", complexity=1.0)
        >>> store.analyze(pattern) >= 2.0
        True
        >>> [p.snippet for p in store.all()]
        ['bubble_sort(...)']
    """

    def __init__(
        self,
        *,
        limit: int = CODE_PATTERN_LIMIT,
        tokenizer: ProtocolTokenizer | None = None,
    ) -> None:
        if limit < 1:
            raise SessionValidationError(f"limit must be at least 1, got {limit}")
        self._limit = limit
        self._tokenizer = tokenizer
        self._patterns: list[ModelCodePattern] = []
        self._index: dict[UUID, ModelCodePattern] = {}
        self._snapshot: tuple[ModelCodePattern, ...] = ()
        self._lock = threading.Lock()

    @property
    def limit(self) -> int:
        """Maximum number of patterns the store may hold."""
        return self._limit

    def __len__(self) -> int:
        return len(self._snapshot)

    def __contains__(self, pattern: object) -> bool:
        return (
            isinstance(pattern, ModelCodePattern)
            and self._index.get(pattern.pattern_id) is pattern
        )

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def add(self, pattern: ModelCodePattern) -> ModelCodePattern:
        """Append a pattern and take ownership of it.

        Args:
            pattern: The pattern to store.

        Returns:
            The stored instance (``pattern`` itself, or a copy if the
            pattern was already owned).

        Raises:
            ResourceExhaustedError: If the store is full.
        """
        with self._lock:
            self._ensure_capacity(1)
            stored = self._append(pattern)
            self._publish()
        logger.debug(
            "Stored pattern %s (language=%s, sequence=%d)",
            stored.pattern_id,
            stored.language,
            stored.sequence,
        )
        return stored

    def create(
        self,
        snippet: str,
        language: str,
        complexity: float = 0.0,
    ) -> ModelCodePattern:
        """Build a pattern from raw fields and add it.

        Raises:
            SessionValidationError: If a field is invalid; nothing is stored.
            ResourceExhaustedError: If the store is full.
        """
        ((snippet, language),) = validate_seed_pairs([(snippet, language)])
        if not math.isfinite(complexity) or complexity < 0.0:
            raise SessionValidationError(
                f"complexity must be a finite number >= 0.0, got {complexity}"
            )
        return self.add(
            ModelCodePattern(snippet=snippet, language=language, complexity=complexity)
        )

    def seed(self, pairs: Iterable[object]) -> list[ModelCodePattern]:
        """Bulk-load ``(snippet, language)`` pairs, all or nothing.

        Args:
            pairs: Sequence of ``(snippet, language)`` pairs.

        Returns:
            The stored patterns in input order.

        Raises:
            SessionValidationError: If any pair is invalid; nothing is stored.
            ResourceExhaustedError: If the batch does not fit; nothing is stored.
        """
        validated = validate_seed_pairs(pairs)
        with self._lock:
            self._ensure_capacity(len(validated))
            stored = [
                self._append(ModelCodePattern(snippet=snippet, language=language))
                for snippet, language in validated
            ]
            self._publish()
        logger.info("Seeded pattern store with %d patterns", len(stored))
        return stored

    def seed_from_file(self, path: str | Path) -> list[ModelCodePattern]:
        """Bulk-load patterns from a YAML seed file."""
        return self.seed(load_seed_file(path))

    def analyze(self, pattern: ModelCodePattern) -> float:
        """Recompute a stored pattern's complexity in place.

        Every pass adds ``CODE_COMPLEXITY_FACTOR`` plus the structural delta
        of the snippet, so repeated calls keep raising complexity. Callers
        decide when to invoke it.

        Returns:
            The new complexity.

        Raises:
            PatternNotFoundError: If the pattern is not owned by this store.
            SessionValidationError: If the new complexity would not be finite;
                the pattern is left unchanged.
        """
        with self._lock:
            stored = self._index.get(pattern.pattern_id)
            if stored is None:
                raise PatternNotFoundError(
                    f"Pattern {pattern.pattern_id} is not owned by this store"
                )
            breakdown = compute_structural_complexity(stored.snippet, self._tokenizer)
            complexity = (
                stored.complexity + CODE_COMPLEXITY_FACTOR + breakdown["delta"]
            )
            if not math.isfinite(complexity):
                raise SessionValidationError(
                    f"Complexity of pattern {stored.pattern_id} overflowed"
                )
            stored.complexity = complexity
        logger.debug(
            "Analyzed pattern %s: complexity=%.4f (delta=%.4f)",
            stored.pattern_id,
            complexity,
            breakdown["delta"],
        )
        return complexity

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def all(self) -> PatternStoreView:
        """Return a lazy, restartable, insertion-ordered read-only view."""
        return PatternStoreView(self)

    def snapshot(self) -> tuple[ModelCodePattern, ...]:
        """Return the current immutable snapshot of stored patterns."""
        return self._snapshot

    def get(self, pattern_id: UUID) -> ModelCodePattern:
        """Look up a stored pattern by id.

        Raises:
            PatternNotFoundError: If no pattern has this id.
        """
        stored = self._index.get(pattern_id)
        if stored is None:
            raise PatternNotFoundError(f"No pattern with id {pattern_id}")
        return stored

    # -------------------------------------------------------------------------
    # Internals (caller holds the lock)
    # -------------------------------------------------------------------------

    def _ensure_capacity(self, incoming: int) -> None:
        if len(self._patterns) + incoming > self._limit:
            raise ResourceExhaustedError(
                f"Pattern store is full: {len(self._patterns)} stored, "
                f"{incoming} incoming, limit {self._limit}",
                limit=self._limit,
            )

    def _append(self, pattern: ModelCodePattern) -> ModelCodePattern:
        sequence = len(self._patterns)
        if pattern.sequence == -1 and pattern.pattern_id not in self._index:
            pattern.sequence = sequence
            stored = pattern
        else:
            stored = pattern.model_copy(
                update={"pattern_id": uuid4(), "sequence": sequence}
            )
        self._patterns.append(stored)
        self._index[stored.pattern_id] = stored
        return stored

    def _publish(self) -> None:
        self._snapshot = tuple(self._patterns)


__all__ = ["PatternStore", "PatternStoreView"]
