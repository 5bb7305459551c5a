"""Unit tests for the FastAPI application factory."""

from __future__ import annotations

from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from omnisuggest.api import create_app
from omnisuggest.clients import InMemoryLedgerClient
from omnisuggest.nodes.node_session_orchestrator import SessionOrchestrator
from omnisuggest.runtime import OmniSuggestSettings


@pytest.mark.unit
class TestCreateApp:
    """Tests for create_app wiring and the health endpoint."""

    async def test_health_with_injected_orchestrator(
        self, orchestrator: SessionOrchestrator
    ) -> None:
        app = create_app(orchestrator=orchestrator)

        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as client:
            await client.post("/api/v1/sessions", json={"request": "sort the items"})
            response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "patterns": 3, "sessions": 1}

    async def test_routes_return_503_before_startup(self) -> None:
        app = create_app(settings=OmniSuggestSettings())

        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as client:
            health = await client.get("/health")
            sessions = await client.post("/api/v1/sessions", json={"request": "sort"})
            patterns = await client.get("/api/v1/patterns")

        assert health.status_code == 503
        assert health.json() == {"status": "starting"}
        assert sessions.status_code == 503
        assert patterns.status_code == 503

    async def test_lifespan_builds_orchestrator_from_settings(
        self, sample_seed_yaml: Path
    ) -> None:
        app = create_app(settings=OmniSuggestSettings(seed_file=sample_seed_yaml))

        async with app.router.lifespan_context(app):
            async with AsyncClient(
                transport=ASGITransport(app=app), base_url="http://test"
            ) as client:
                health = await client.get("/health")
                created = await client.post(
                    "/api/v1/sessions", json={"request": "binary search the items"}
                )

        assert health.json()["patterns"] == 2
        assert created.status_code == 201
        assert "binary_search" in created.json()["suggestion"]

        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as client:
            assert (await client.get("/health")).status_code == 503

    async def test_injected_orchestrator_survives_shutdown(
        self, orchestrator: SessionOrchestrator
    ) -> None:
        app = create_app(orchestrator=orchestrator)

        async with app.router.lifespan_context(app):
            pass

        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as client:
            assert (await client.get("/health")).status_code == 200
        assert isinstance(orchestrator.ledger, InMemoryLedgerClient)
