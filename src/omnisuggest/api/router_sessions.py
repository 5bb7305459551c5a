"""FastAPI router for the session endpoints.

Exposes the session API over HTTP:

    POST   /api/v1/sessions                start a session (match, suggest, refine)
    GET    /api/v1/sessions/{session_id}   suggestion and state
    POST   /api/v1/sessions/{session_id}/commit
                                           finalize and commit to the ledger
    DELETE /api/v1/sessions/{session_id}   discard a session

The router is a thin shell: all behavior lives in SessionOrchestrator.
"""

# NOTE: Do NOT use `from __future__ import annotations` in this module.
# FastAPI requires runtime-accessible type annotations for dependency injection
# and path parameter extraction.

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response, status

from omnisuggest.api.errors import to_http_exception
from omnisuggest.api.models_api import ModelSessionResponse, ModelStartSessionRequest
from omnisuggest.exceptions import OmniSuggestError, SessionNotFoundError
from omnisuggest.models import ModelLedgerReceipt
from omnisuggest.nodes.node_session_orchestrator import SessionOrchestrator


def _session_response(
    orchestrator: SessionOrchestrator,
    session_id: str,
) -> ModelSessionResponse:
    workbench = orchestrator.get_workbench(session_id)
    return ModelSessionResponse(
        session_id=session_id,
        state=workbench.state,
        suggestion=orchestrator.get_suggestion(session_id),
        used_fallback=workbench.refinement_context.source_pattern_id is None,
        receipt=orchestrator.get_receipt(session_id),
    )


def create_session_router(
    *,
    get_orchestrator: Any,
) -> APIRouter:
    """Create a FastAPI router for session endpoints.

    Args:
        get_orchestrator: Dependency callable that returns the
            SessionOrchestrator serving the app.

    Returns:
        Configured APIRouter ready to be mounted on a FastAPI app.
    """
    router = APIRouter(
        prefix="/api/v1",
        tags=["sessions"],
    )

    @router.post(
        "/sessions",
        response_model=ModelSessionResponse,
        status_code=status.HTTP_201_CREATED,
        summary="Start a suggestion session",
    )
    async def start_session(
        body: ModelStartSessionRequest,
        orchestrator: Annotated[SessionOrchestrator, Depends(get_orchestrator)],
    ) -> ModelSessionResponse:
        """Match the request, suggest and refine; the session ends in REFINED."""
        try:
            handle = await orchestrator.start_session(body.request)
            return _session_response(orchestrator, handle.session_id)
        except OmniSuggestError as exc:
            raise to_http_exception(exc) from exc

    @router.get(
        "/sessions/{session_id}",
        response_model=ModelSessionResponse,
        summary="Get a session's suggestion and state",
    )
    async def get_session(
        session_id: str,
        orchestrator: Annotated[SessionOrchestrator, Depends(get_orchestrator)],
    ) -> ModelSessionResponse:
        try:
            return _session_response(orchestrator, session_id)
        except OmniSuggestError as exc:
            raise to_http_exception(exc) from exc

    @router.post(
        "/sessions/{session_id}/commit",
        response_model=ModelLedgerReceipt,
        summary="Finalize a session and commit it to the ledger",
        description=(
            "Returns 503 when the ledger timed out or failed transiently; the "
            "session is kept and the commit may be retried. Committing an "
            "already committed session returns the same receipt."
        ),
    )
    async def commit_session(
        session_id: str,
        orchestrator: Annotated[SessionOrchestrator, Depends(get_orchestrator)],
    ) -> ModelLedgerReceipt:
        try:
            return await orchestrator.commit_session(session_id)
        except OmniSuggestError as exc:
            raise to_http_exception(exc) from exc

    @router.delete(
        "/sessions/{session_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        summary="Discard a session",
    )
    async def cancel_session(
        session_id: str,
        orchestrator: Annotated[SessionOrchestrator, Depends(get_orchestrator)],
    ) -> Response:
        try:
            cancelled = orchestrator.cancel_session(session_id)
        except OmniSuggestError as exc:
            # 409 while the session's commit is in flight
            raise to_http_exception(exc) from exc
        if not cancelled:
            raise to_http_exception(
                SessionNotFoundError(f"Unknown session: {session_id}")
            )
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


__all__ = ["create_session_router"]
