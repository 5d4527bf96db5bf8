"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from mosaic.engine.graph import get_graph
from mosaic.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    # Importing the session module registers the derived nodes
    import mosaic.engine.session  # noqa: F401

    return HealthResponse(
        status="ok",
        version="0.1.0",
        derived_nodes=get_graph().count,
    )
