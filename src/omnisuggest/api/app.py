"""FastAPI application factory for the OmniSuggest API.

Provides create_app() to construct a configured FastAPI application with
session and pattern store endpoints. Component lifecycle (building the
store and the ledger client, closing the HTTP ledger pool) is managed via
FastAPI lifespan events.

Usage:
    >>> app = create_app()
    >>> # Run with uvicorn:
    >>> # uvicorn omnisuggest.api.app:create_app --factory
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse

from omnisuggest import __version__
from omnisuggest.api.router_patterns import create_pattern_router
from omnisuggest.api.router_sessions import create_session_router
from omnisuggest.clients import HttpLedgerClient
from omnisuggest.nodes.node_pattern_store_effect import PatternStore
from omnisuggest.nodes.node_session_orchestrator import SessionOrchestrator
from omnisuggest.runtime import OmniSuggestSettings, build_orchestrator

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class _AppState:
    """Typed shared state for the FastAPI lifespan and dependency closures.

    ``orchestrator`` is set before the server accepts requests (either
    injected at construction or built during lifespan startup) and cleared
    after in-flight requests have drained at shutdown. Dependencies return
    HTTP 503 while it is unset.
    """

    settings: OmniSuggestSettings
    orchestrator: SessionOrchestrator | None = None
    owns_orchestrator: bool = False


def create_app(
    *,
    settings: OmniSuggestSettings | None = None,
    orchestrator: SessionOrchestrator | None = None,
) -> FastAPI:
    """Create a FastAPI application with session and pattern endpoints.

    Args:
        settings: Runtime settings. Defaults to OMNISUGGEST_* environment
            variables via OmniSuggestSettings.
        orchestrator: Pre-built orchestrator. When omitted, one is built
            from settings at startup and torn down at shutdown.

    Returns:
        Configured FastAPI application.
    """
    state = _AppState(
        settings=settings or OmniSuggestSettings(),
        orchestrator=orchestrator,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:  # noqa: ARG001
        """Build components on startup and release the ledger on shutdown."""
        if state.orchestrator is None:
            logger.info("Building session orchestrator from settings...")
            state.orchestrator = build_orchestrator(state.settings)
            state.owns_orchestrator = True
            logger.info(
                "Session orchestrator ready (patterns=%d)",
                len(state.orchestrator.store),
            )

        yield

        if state.owns_orchestrator and state.orchestrator is not None:
            ledger = state.orchestrator.ledger
            if isinstance(ledger, HttpLedgerClient):
                logger.info("Closing ledger client...")
                await ledger.close()
            state.orchestrator = None
            state.owns_orchestrator = False

    async def get_orchestrator() -> SessionOrchestrator:
        """FastAPI dependency returning the session orchestrator (503 if unset)."""
        current = state.orchestrator
        if current is None:
            raise HTTPException(
                status_code=503,
                detail="Service unavailable: session orchestrator not initialized.",
            )
        return current

    async def get_store() -> PatternStore:
        return (await get_orchestrator()).store

    app = FastAPI(
        title="OmniSuggest API",
        description="Code pattern matching and suggestion sessions",
        version=__version__,
        lifespan=lifespan,
    )

    app.include_router(create_session_router(get_orchestrator=get_orchestrator))
    app.include_router(create_pattern_router(get_store=get_store))

    # Health endpoint is mounted at root path (not under /api/v1)
    @app.get("/health", tags=["infrastructure"])
    async def health_check() -> JSONResponse:
        """Liveness and readiness check."""
        current = state.orchestrator
        if current is None:
            return JSONResponse(status_code=503, content={"status": "starting"})
        return JSONResponse(
            content={
                "status": "healthy",
                "patterns": len(current.store),
                "sessions": len(current.session_ids),
            }
        )

    return app


__all__ = ["create_app"]
