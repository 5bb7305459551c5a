"""Unit tests for the session router.

Tests the FastAPI endpoints using httpx.AsyncClient over an ASGI transport,
with a real orchestrator over an in-memory pattern store. Validates
HTTP-level behavior: status codes, response schema and error mapping.
"""

from __future__ import annotations

import asyncio

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from omnisuggest.api.router_sessions import create_session_router
from omnisuggest.clients import InMemoryLedgerClient
from omnisuggest.constants import FALLBACK_SUGGESTION
from omnisuggest.exceptions import LedgerClientError
from omnisuggest.nodes.node_pattern_store_effect import PatternStore
from omnisuggest.nodes.node_session_orchestrator import (
    ModelOrchestratorConfig,
    SessionOrchestrator,
)
from omnisuggest.testing import MockLedgerClient


def _app(orchestrator: SessionOrchestrator) -> FastAPI:
    test_app = FastAPI()

    async def get_orchestrator():
        return orchestrator

    test_app.include_router(create_session_router(get_orchestrator=get_orchestrator))
    return test_app


@pytest.fixture
async def client(orchestrator: SessionOrchestrator) -> AsyncClient:
    """Create an async HTTP client for the test app."""
    transport = ASGITransport(app=_app(orchestrator))
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.mark.unit
class TestStartSessionEndpoint:
    """Tests for POST /api/v1/sessions."""

    async def test_returns_201_with_refined_suggestion(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/sessions", json={"request": "sort the items"})

        assert response.status_code == 201
        body = response.json()
        assert body["state"] == "refined"
        assert "bubble_sort" in body["suggestion"]
        assert body["used_fallback"] is False
        assert body["receipt"] is None
        assert body["session_id"]

    async def test_fallback_for_unrelated_request(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/sessions", json={"request": "compile a kernel module"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["used_fallback"] is True
        assert FALLBACK_SUGGESTION in body["suggestion"]

    async def test_empty_request_returns_422(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/sessions", json={"request": ""})
        assert response.status_code == 422

    async def test_whitespace_request_returns_422_with_stage(
        self, client: AsyncClient
    ) -> None:
        response = await client.post("/api/v1/sessions", json={"request": "   "})

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["error_code"] == "SUGGEST_005"
        assert detail["stage"] == "validation"
        assert detail["recoverable"] is False

    async def test_missing_body_field_returns_422(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/sessions", json={"prompt": "sort"})
        assert response.status_code == 422


@pytest.mark.unit
class TestSessionLifecycleEndpoints:
    """Tests for GET, commit and DELETE on /api/v1/sessions/{session_id}."""

    async def test_get_unknown_session_returns_404(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/sessions/missing")

        assert response.status_code == 404
        assert response.json()["detail"]["error_code"] == "SUGGEST_007"

    async def test_commit_returns_receipt_and_updates_state(
        self, client: AsyncClient, ledger: InMemoryLedgerClient
    ) -> None:
        created = (
            await client.post("/api/v1/sessions", json={"request": "sort the items"})
        ).json()
        session_id = created["session_id"]

        response = await client.post(f"/api/v1/sessions/{session_id}/commit")

        assert response.status_code == 200
        receipt = response.json()
        assert receipt["description"] == "Final Suggestion"
        assert len(ledger) == 1

        body = (await client.get(f"/api/v1/sessions/{session_id}")).json()
        assert body["state"] == "committed"
        assert body["receipt"]["receipt_id"] == receipt["receipt_id"]

    async def test_repeat_commit_returns_same_receipt(
        self, client: AsyncClient, ledger: InMemoryLedgerClient
    ) -> None:
        session_id = (
            await client.post("/api/v1/sessions", json={"request": "sort the items"})
        ).json()["session_id"]

        first = await client.post(f"/api/v1/sessions/{session_id}/commit")
        second = await client.post(f"/api/v1/sessions/{session_id}/commit")

        assert first.json() == second.json()
        assert len(ledger) == 1

    async def test_commit_unknown_session_returns_404(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/sessions/missing/commit")
        assert response.status_code == 404

    async def test_delete_session(self, client: AsyncClient) -> None:
        session_id = (
            await client.post("/api/v1/sessions", json={"request": "sort the items"})
        ).json()["session_id"]

        response = await client.delete(f"/api/v1/sessions/{session_id}")

        assert response.status_code == 204
        assert (await client.get(f"/api/v1/sessions/{session_id}")).status_code == 404

    async def test_delete_unknown_session_returns_404(self, client: AsyncClient) -> None:
        response = await client.delete("/api/v1/sessions/missing")
        assert response.status_code == 404

    async def test_delete_during_commit_returns_409(self, seeded_store: PatternStore) -> None:
        ledger = MockLedgerClient(hang_times=1)
        orchestrator = SessionOrchestrator(
            seeded_store, ledger, config=ModelOrchestratorConfig(ledger_timeout_seconds=10.0)
        )
        handle = await orchestrator.start_session("sort the items")
        task = asyncio.create_task(orchestrator.commit_session(handle))
        while not ledger.commit_calls:
            await asyncio.sleep(0)

        transport = ASGITransport(app=_app(orchestrator))
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.delete(f"/api/v1/sessions/{handle.session_id}")

        assert response.status_code == 409
        assert orchestrator.session_ids == [handle.session_id]

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    async def test_full_session_table_returns_507(self, seeded_store: PatternStore) -> None:
        ledger = MockLedgerClient(hang_times=1)
        orchestrator = SessionOrchestrator(
            seeded_store,
            ledger,
            config=ModelOrchestratorConfig(ledger_timeout_seconds=10.0, max_sessions=1),
        )
        handle = await orchestrator.start_session("sort the items")
        task = asyncio.create_task(orchestrator.commit_session(handle))
        while not ledger.commit_calls:
            await asyncio.sleep(0)

        transport = ASGITransport(app=_app(orchestrator))
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.post("/api/v1/sessions", json={"request": "read a file"})

        assert response.status_code == 507
        assert response.json()["detail"]["stage"] == "validation"

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task


@pytest.mark.unit
class TestCommitFailureMapping:
    """Ledger failures surface as 503 (retryable) or 502 (fatal)."""

    async def test_transient_failure_returns_503_then_succeeds(
        self, seeded_store: PatternStore
    ) -> None:
        ledger = MockLedgerClient(fail_times=1)
        transport = ASGITransport(app=_app(SessionOrchestrator(seeded_store, ledger)))

        async with AsyncClient(transport=transport, base_url="http://test") as client:
            session_id = (
                await client.post("/api/v1/sessions", json={"request": "sort the items"})
            ).json()["session_id"]

            failed = await client.post(f"/api/v1/sessions/{session_id}/commit")
            assert failed.status_code == 503
            assert failed.json()["detail"]["recoverable"] is True

            state = (await client.get(f"/api/v1/sessions/{session_id}")).json()["state"]
            assert state == "refined"

            retried = await client.post(f"/api/v1/sessions/{session_id}/commit")
            assert retried.status_code == 200

        assert ledger.successful_commits == 1

    async def test_fatal_failure_returns_502_and_discards_session(
        self, seeded_store: PatternStore
    ) -> None:
        ledger = MockLedgerClient(fail_times=1, error=LedgerClientError("rejected"))
        transport = ASGITransport(app=_app(SessionOrchestrator(seeded_store, ledger)))

        async with AsyncClient(transport=transport, base_url="http://test") as client:
            session_id = (
                await client.post("/api/v1/sessions", json={"request": "sort the items"})
            ).json()["session_id"]

            response = await client.post(f"/api/v1/sessions/{session_id}/commit")

            assert response.status_code == 502
            assert response.json()["detail"]["stage"] == "commit"
            assert (await client.get(f"/api/v1/sessions/{session_id}")).status_code == 404
