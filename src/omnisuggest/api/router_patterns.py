"""FastAPI router for the pattern store endpoints.

    POST /api/v1/patterns                      store a pattern
    GET  /api/v1/patterns                      list stored patterns
    POST /api/v1/patterns/{pattern_id}/analyze run one complexity pass
"""

# NOTE: Do NOT use `from __future__ import annotations` in this module.
# FastAPI requires runtime-accessible type annotations for dependency injection
# and query parameter extraction.

from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from omnisuggest.api.errors import to_http_exception
from omnisuggest.api.models_api import (
    ModelCreatePatternRequest,
    ModelPatternPage,
    ModelPatternResponse,
)
from omnisuggest.constants import MAX_RANKING_RESULTS
from omnisuggest.exceptions import OmniSuggestError
from omnisuggest.nodes.node_pattern_store_effect import PatternStore


def create_pattern_router(
    *,
    get_store: Any,
) -> APIRouter:
    """Create a FastAPI router for pattern store endpoints.

    Args:
        get_store: Dependency callable that returns the PatternStore.

    Returns:
        Configured APIRouter ready to be mounted on a FastAPI app.
    """
    router = APIRouter(
        prefix="/api/v1",
        tags=["patterns"],
    )

    @router.post(
        "/patterns",
        response_model=ModelPatternResponse,
        status_code=status.HTTP_201_CREATED,
        summary="Store a code pattern",
        description="Returns 507 when the store has reached its capacity limit.",
    )
    async def create_pattern(
        body: ModelCreatePatternRequest,
        store: Annotated[PatternStore, Depends(get_store)],
    ) -> ModelPatternResponse:
        try:
            pattern = store.create(body.snippet, body.language, body.complexity)
        except OmniSuggestError as exc:
            raise to_http_exception(exc) from exc
        return ModelPatternResponse.model_validate(pattern)

    @router.get(
        "/patterns",
        response_model=ModelPatternPage,
        summary="List stored patterns",
    )
    async def list_patterns(
        store: Annotated[PatternStore, Depends(get_store)],
        language: Annotated[
            str | None,
            Query(
                max_length=50,
                description="Language tag to filter by",
            ),
        ] = None,
        limit: Annotated[
            int,
            Query(
                ge=1,
                le=MAX_RANKING_RESULTS,
                description="Maximum patterns per page",
            ),
        ] = 50,
        offset: Annotated[
            int,
            Query(
                ge=0,
                description="Number of patterns to skip for pagination",
            ),
        ] = 0,
    ) -> ModelPatternPage:
        """List patterns in insertion order."""
        patterns = [
            pattern
            for pattern in store.all()
            if language is None or pattern.language == language.lower()
        ]
        page = patterns[offset : offset + limit]
        return ModelPatternPage(
            patterns=[ModelPatternResponse.model_validate(p) for p in page],
            total=len(patterns),
            limit=limit,
            offset=offset,
        )

    @router.post(
        "/patterns/{pattern_id}/analyze",
        response_model=ModelPatternResponse,
        summary="Run one complexity analysis pass on a pattern",
    )
    async def analyze_pattern(
        pattern_id: UUID,
        store: Annotated[PatternStore, Depends(get_store)],
    ) -> ModelPatternResponse:
        try:
            pattern = store.get(pattern_id)
            store.analyze(pattern)
        except OmniSuggestError as exc:
            raise to_http_exception(exc) from exc
        return ModelPatternResponse.model_validate(pattern)

    return router


__all__ = ["create_pattern_router"]
