"""/api/session/* — the process-wide layout session."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from mosaic.engine.errors import LayoutError
from mosaic.engine.session import LayoutSession
from mosaic.engine.styles import resolve_blank_fraction
from mosaic.dependencies import get_session
from mosaic.models.requests import ColorUpdate, GeometryUpdate, RegenerateRequest, StyleUpdate
from mosaic.models.responses import SessionResponse
from mosaic.models.shapes import StyledShapeModel
from mosaic.svg.serializer import render_mosaic_svg

router = APIRouter(prefix="/session")


def _response(session: LayoutSession, recomputed: list[str] | None = None) -> SessionResponse:
    snap = session.snapshot()
    snap["shapes"] = [StyledShapeModel.from_styled(s) for s in snap["shapes"]]
    return SessionResponse(**snap, recomputed=recomputed or [])


@router.get("", response_model=SessionResponse)
async def get_state(session: LayoutSession = Depends(get_session)) -> SessionResponse:
    return _response(session)


@router.patch("/geometry", response_model=SessionResponse)
async def update_geometry(
    req: GeometryUpdate,
    session: LayoutSession = Depends(get_session),
) -> SessionResponse:
    try:
        session.ensure_ready()
        recomputed = session.update_geometry(**req.model_dump())
    except LayoutError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return _response(session, recomputed)


@router.patch("/style", response_model=SessionResponse)
async def update_style(
    req: StyleUpdate,
    session: LayoutSession = Depends(get_session),
) -> SessionResponse:
    try:
        session.ensure_ready()
        recomputed = session.update_style(
            palette=req.palette,
            blank_fraction=resolve_blank_fraction(req.blank_fraction, req.blank_percent),
            kind=req.kind,
            scale=req.scale,
            rotation=req.rotation,
        )
    except LayoutError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return _response(session, recomputed)


@router.put("/palette/{index}", response_model=SessionResponse)
async def update_color(
    index: int,
    req: ColorUpdate,
    session: LayoutSession = Depends(get_session),
) -> SessionResponse:
    try:
        session.ensure_ready()
        recomputed = session.update_color(index, req.color)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return _response(session, recomputed)


@router.post("/regenerate", response_model=SessionResponse)
async def regenerate(
    req: RegenerateRequest | None = None,
    session: LayoutSession = Depends(get_session),
) -> SessionResponse:
    seed = req.seed if req is not None else None
    try:
        recomputed = session.regenerate(seed)
    except LayoutError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return _response(session, recomputed)


@router.get("/svg")
async def session_svg(session: LayoutSession = Depends(get_session)) -> Response:
    session.ensure_ready()
    state = session.state
    svg = render_mosaic_svg(
        state.styled,
        state.generation.canvas_width,
        state.generation.canvas_height,
        scale=state.scale,
        rotation=state.rotation,
    )
    return Response(content=svg, media_type="image/svg+xml")
