# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""SessionOrchestrator - drives one request through the suggestion pipeline.

Pipeline stages (``EnumSessionStage``):

    validation  create the Workbench (rejects empty requests)
    matching    Matcher.rank over a snapshot of the PatternStore
    suggestion  set_suggestion(best candidate, or the fallback text)
    refinement  Workbench.refine(policy)
    commit      prepare_finalize -> LedgerClient.commit -> mark_committed

A failure in the first four stages aborts the session with
``SessionAbortedError`` naming the stage; the session is never registered,
so nothing is left behind. The ledger is only called once finalize
preparation succeeded.

Ledger commit semantics:
    - Each call is bounded by ``asyncio.wait_for``.
    - A timeout or transient ledger failure raises ``RetryableError`` and
      leaves the Workbench in REFINED with the prepared suggestion;
      ``retry_commit`` commits the same content without rematching.
    - A successful commit caches the receipt; committing again returns it
      without another ledger call.
    - Any other ledger failure discards the session and raises
      ``SessionAbortedError(stage=commit)``.
    - Cancellation discards the session and propagates.

Operations on one session are serialized with a per-session
``asyncio.Lock``; different sessions proceed concurrently. A session cannot
be cancelled while its commit is in flight.

Every commit of a session carries the same idempotency key, derived from
the session id and the finalized content, so a ledger that deduplicates on
it records one entry however many attempts reach it.

Session retention:
    ``run`` drops its session once the commit succeeds. Sessions created
    through ``start_session`` stay until cancelled or evicted: when
    ``max_sessions`` is reached, committed sessions are evicted first, then
    the oldest idle ones. Sessions with a commit in flight are never evicted;
    if every slot is busy, ``start_session`` fails with
    ``ResourceExhaustedError``.
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
from dataclasses import dataclass, field
from uuid import uuid4

from omnisuggest.constants import FALLBACK_SUGGESTION, SUGGESTION_HEADER
from omnisuggest.enums import EnumSessionStage
from omnisuggest.exceptions import (
    InvalidStateError,
    ResourceExhaustedError,
    RetryableError,
    SessionAbortedError,
    SessionNotFoundError,
)
from omnisuggest.models import ModelLedgerReceipt
from omnisuggest.nodes.node_pattern_ranking_compute import Matcher
from omnisuggest.nodes.node_pattern_ranking_compute.models import (
    ModelMatchResult,
    ModelRankedPattern,
)
from omnisuggest.nodes.node_pattern_store_effect import PatternStore
from omnisuggest.nodes.node_session_orchestrator.models import (
    ModelOrchestratorConfig,
    ModelSessionHandle,
    ModelSessionResult,
)
from omnisuggest.nodes.node_workbench_reducer import Workbench
from omnisuggest.nodes.node_workbench_reducer.handlers import (
    default_refinement_policy,
)
from omnisuggest.nodes.node_workbench_reducer.models import ModelRefinementContext
from omnisuggest.protocols import ProtocolLedgerClient, ProtocolRefinementPolicy

logger = logging.getLogger(__name__)

SessionRef = ModelSessionHandle | str


@dataclass
class _Session:
    workbench: Workbench
    ranking: ModelMatchResult
    used_fallback: bool
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    receipt: ModelLedgerReceipt | None = None


def commit_idempotency_key(session_id: str, content: str) -> str:
    """Stable ledger idempotency key for one session's finalized content."""
    return hashlib.sha256(f"{session_id}\n{content}".encode()).hexdigest()


def select_candidate(ranking: ModelMatchResult) -> ModelRankedPattern | None:
    """Best ranked entry that shares at least one keyword with the request."""
    return next((entry for entry in ranking.entries if entry.lexical_score > 0.0), None)


def build_suggestion(
    request: str,
    candidate: ModelRankedPattern | None,
) -> tuple[str, ModelRefinementContext]:
    """Suggestion text and refinement context for a candidate (or fallback)."""
    if candidate is None:
        return FALLBACK_SUGGESTION, ModelRefinementContext(request=request)
    pattern = candidate.pattern
    context = ModelRefinementContext(
        request=request,
        source_pattern_id=pattern.pattern_id,
        source_language=pattern.language,
        matched_keywords=candidate.matched_keywords,
    )
    return SUGGESTION_HEADER + pattern.snippet, context


class SessionOrchestrator:
    """Runs suggestion sessions and exposes the session API.

    Args:
        store: Pattern store ranked against.
        ledger: Ledger receiving finalized suggestions.
        matcher: Ranking configuration; defaults to the standard weights.
        policy: Refinement policy; defaults to style fixes plus rationale.
        config: Ledger timeout and commit description.

    Example:
        >>> orchestrator = SessionOrchestrator(store, InMemoryLedgerClient())
        >>> result = await orchestrator.run("sort an array")
        >>> result.receipt.description
        'Final Suggestion'
    """

    def __init__(
        self,
        store: PatternStore,
        ledger: ProtocolLedgerClient,
        *,
        matcher: Matcher | None = None,
        policy: ProtocolRefinementPolicy | None = None,
        config: ModelOrchestratorConfig | None = None,
    ) -> None:
        self._store = store
        self._ledger = ledger
        self._matcher = matcher or Matcher()
        self._policy = policy or default_refinement_policy()
        self._config = config or ModelOrchestratorConfig()
        self._sessions: dict[str, _Session] = {}

    @property
    def store(self) -> PatternStore:
        return self._store

    @property
    def ledger(self) -> ProtocolLedgerClient:
        return self._ledger

    @property
    def config(self) -> ModelOrchestratorConfig:
        return self._config

    @property
    def session_ids(self) -> list[str]:
        return list(self._sessions)

    # -------------------------------------------------------------------------
    # One-shot pipeline
    # -------------------------------------------------------------------------

    async def run(self, request: str) -> ModelSessionResult:
        """Run a full session: match, suggest, refine, finalize and commit.

        The session is released once the commit succeeds.

        Raises:
            SessionAbortedError: If any stage fails. For a retryable commit
                failure the session is kept (``is_retryable`` is True and
                ``retry_commit(session_id)`` may be called).
        """
        handle = await self.start_session(request)
        try:
            receipt = await self.commit_session(handle)
        except RetryableError as exc:
            raise SessionAbortedError(
                EnumSessionStage.COMMIT, exc, session_id=handle.session_id
            ) from exc
        result = self.get_result(handle, receipt)
        self._sessions.pop(handle.session_id, None)
        return result

    # -------------------------------------------------------------------------
    # Session API
    # -------------------------------------------------------------------------

    async def start_session(self, request: str) -> ModelSessionHandle:
        """Create a session and take it up to REFINED.

        Raises:
            SessionAbortedError: Naming the validation, matching, suggestion
                or refinement stage that failed.
                A full session table with no evictable session aborts at
                validation with a ``ResourceExhaustedError`` cause.
        """
        session_id = str(uuid4())

        try:
            workbench = Workbench.create(request, session_id=session_id)
        except Exception as exc:
            self._log_abort(EnumSessionStage.VALIDATION, session_id, exc)
            raise SessionAbortedError(EnumSessionStage.VALIDATION, exc) from exc

        try:
            self._make_room()
        except ResourceExhaustedError as exc:
            self._log_abort(EnumSessionStage.VALIDATION, session_id, exc)
            raise SessionAbortedError(EnumSessionStage.VALIDATION, exc) from exc

        try:
            ranking = self._matcher.rank(
                request, self._store.all(), correlation_id=session_id
            )
        except Exception as exc:
            self._log_abort(EnumSessionStage.MATCHING, session_id, exc)
            raise SessionAbortedError(
                EnumSessionStage.MATCHING, exc, session_id=session_id
            ) from exc

        candidate = select_candidate(ranking)
        try:
            text, context = build_suggestion(request, candidate)
            workbench.set_suggestion(text, context=context)
        except Exception as exc:
            self._log_abort(EnumSessionStage.SUGGESTION, session_id, exc)
            raise SessionAbortedError(
                EnumSessionStage.SUGGESTION, exc, session_id=session_id
            ) from exc

        try:
            workbench.refine(self._policy)
        except Exception as exc:
            self._log_abort(EnumSessionStage.REFINEMENT, session_id, exc)
            raise SessionAbortedError(
                EnumSessionStage.REFINEMENT, exc, session_id=session_id
            ) from exc

        self._sessions[session_id] = _Session(
            workbench=workbench,
            ranking=ranking,
            used_fallback=candidate is None,
        )
        logger.info(
            "Session %s started (patterns=%d, candidates=%d, fallback=%s)",
            session_id,
            ranking.patterns_analyzed,
            len(ranking),
            candidate is None,
            extra={"correlation_id": session_id},
        )
        return ModelSessionHandle(session_id=session_id)

    def get_suggestion(self, handle: SessionRef) -> str:
        """Current suggestion of a session.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        suggestion = self._lookup(handle).workbench.suggested_code
        # every registered session has reached REFINED
        assert suggestion is not None
        return suggestion

    def get_workbench(self, handle: SessionRef) -> Workbench:
        return self._lookup(handle).workbench

    def get_receipt(self, handle: SessionRef) -> ModelLedgerReceipt | None:
        """Cached receipt, or None while the session is uncommitted."""
        return self._lookup(handle).receipt

    def get_result(
        self,
        handle: SessionRef,
        receipt: ModelLedgerReceipt | None = None,
    ) -> ModelSessionResult:
        """Result of a committed session."""
        session = self._lookup(handle)
        receipt = receipt or session.receipt
        if receipt is None:
            raise InvalidStateError("get_result", session.workbench.state.value)
        return ModelSessionResult(
            session_id=session.workbench.session_id,
            suggestion=self.get_suggestion(handle),
            receipt=receipt,
            ranking=session.ranking,
            used_fallback=session.used_fallback,
        )

    async def commit_session(self, handle: SessionRef) -> ModelLedgerReceipt:
        """Finalize a session and commit its suggestion to the ledger.

        Returns:
            The ledger receipt. A session that already committed returns its
            cached receipt without another ledger call.

        Raises:
            SessionNotFoundError: If the session does not exist.
            InvalidStateError: If the workbench cannot be finalized.
            RetryableError: On ledger timeout or transient failure; the
                session stays in REFINED and may be retried.
            SessionAbortedError: On any other ledger failure; the session
                is discarded.
        """
        session = self._lookup(handle)
        workbench = session.workbench
        session_id = workbench.session_id

        async with session.lock:
            if session.receipt is not None:
                logger.debug(
                    "Session %s already committed, returning cached receipt",
                    session_id,
                    extra={"correlation_id": session_id},
                )
                return session.receipt

            content = workbench.prepare_finalize()
            idempotency_key = commit_idempotency_key(session_id, content)

            try:
                receipt = await asyncio.wait_for(
                    self._ledger.commit(
                        content,
                        self._config.ledger_description,
                        idempotency_key=idempotency_key,
                    ),
                    timeout=self._config.ledger_timeout_seconds,
                )
            except TimeoutError as exc:
                logger.warning(
                    "Ledger commit for session %s timed out after %.2fs",
                    session_id,
                    self._config.ledger_timeout_seconds,
                    extra={"correlation_id": session_id},
                )
                raise RetryableError(
                    f"Ledger commit timed out after "
                    f"{self._config.ledger_timeout_seconds}s"
                ) from exc
            except RetryableError:
                logger.warning(
                    "Transient ledger failure for session %s",
                    session_id,
                    extra={"correlation_id": session_id},
                )
                raise
            except asyncio.CancelledError:
                self._sessions.pop(session_id, None)
                logger.info(
                    "Session %s cancelled during commit",
                    session_id,
                    extra={"correlation_id": session_id},
                )
                raise
            except Exception as exc:
                self._sessions.pop(session_id, None)
                self._log_abort(EnumSessionStage.COMMIT, session_id, exc)
                raise SessionAbortedError(
                    EnumSessionStage.COMMIT, exc, session_id=session_id
                ) from exc

            workbench.mark_committed()
            session.receipt = receipt

        logger.info(
            "Session %s committed (receipt=%s)",
            session_id,
            receipt.receipt_id,
            extra={"correlation_id": session_id},
        )
        return receipt

    async def retry_commit(self, handle: SessionRef) -> ModelLedgerReceipt:
        """Retry the ledger commit of a session without rematching."""
        return await self.commit_session(handle)

    def cancel_session(self, handle: SessionRef) -> bool:
        """Discard a session.

        Returns:
            True if the session existed.

        Raises:
            InvalidStateError: If the session's commit is in flight.
        """
        session_id = _session_id(handle)
        session = self._sessions.get(session_id)
        if session is None:
            return False
        if session.lock.locked():
            raise InvalidStateError("cancel", "committing")
        del self._sessions[session_id]
        logger.info(
            "Session %s cancelled",
            session_id,
            extra={"correlation_id": session_id},
        )
        return True

    def _make_room(self) -> None:
        """Evict sessions until one more fits under ``max_sessions``."""
        limit = self._config.max_sessions
        if len(self._sessions) < limit:
            return
        # committed first, then idle; dict order is oldest first
        evictable = [
            session_id
            for session_id, session in self._sessions.items()
            if session.receipt is not None and not session.lock.locked()
        ] + [
            session_id
            for session_id, session in self._sessions.items()
            if session.receipt is None and not session.lock.locked()
        ]
        excess = len(self._sessions) - limit + 1
        if len(evictable) < excess:
            raise ResourceExhaustedError(
                f"Session table is full: {len(self._sessions)} sessions, "
                f"{len(self._sessions) - len(evictable)} committing, limit {limit}",
                limit=limit,
            )
        for session_id in evictable[:excess]:
            del self._sessions[session_id]
            logger.info(
                "Session %s evicted (limit=%d)",
                session_id,
                limit,
                extra={"correlation_id": session_id},
            )

    def _lookup(self, handle: SessionRef) -> _Session:
        session_id = _session_id(handle)
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(f"Unknown session: {session_id}")
        return session

    @staticmethod
    def _log_abort(stage: EnumSessionStage, session_id: str, exc: Exception) -> None:
        logger.warning(
            "Session %s aborted during %s: %s",
            session_id,
            stage.value,
            exc,
            extra={"correlation_id": session_id},
        )


def _session_id(handle: SessionRef) -> str:
    return handle.session_id if isinstance(handle, ModelSessionHandle) else handle


__all__ = [
    "SessionOrchestrator",
    "SessionRef",
    "build_suggestion",
    "commit_idempotency_key",
    "select_candidate",
]
