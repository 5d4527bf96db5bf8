"""POST /api/layout, /api/styles, /api/render — stateless layout operations."""

from __future__ import annotations

import time

from fastapi import APIRouter, Depends, HTTPException

from mosaic.engine.config import PartitionConfig
from mosaic.engine.errors import LayoutError
from mosaic.engine.layout import compute_styled_shapes, regenerate_layout
from mosaic.engine.styles import blank_count, resolve_blank_fraction
from mosaic.engine.validation import validate_generation
from mosaic.dependencies import get_partition_config
from mosaic.models.requests import LayoutRequest, RenderRequest, StyleRequest
from mosaic.models.responses import LayoutResponse, RenderResponse, StyleResponse
from mosaic.models.shapes import BaseShapeModel, LayoutReportModel, StyledShapeModel
from mosaic.svg.serializer import render_mosaic_svg
from mosaic.utils.rasterizer import ascii_preview

router = APIRouter()


@router.post("/layout", response_model=LayoutResponse)
async def layout(
    req: LayoutRequest,
    config: PartitionConfig = Depends(get_partition_config),
) -> LayoutResponse:
    start = time.perf_counter()
    try:
        generation = regenerate_layout(
            req.canvas_width,
            req.canvas_height,
            req.min_size,
            req.max_size,
            seed=req.seed,
            config=config,
        )
    except LayoutError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    report = validate_generation(generation)
    elapsed = (time.perf_counter() - start) * 1000

    return LayoutResponse(
        shapes=[BaseShapeModel.from_shape(s) for s in generation.shapes],
        stable_order=list(generation.stable_order),
        canvas_width=generation.canvas_width,
        canvas_height=generation.canvas_height,
        seed=generation.seed,
        validation=LayoutReportModel(**report.to_dict()),
        processing_time_ms=round(elapsed, 1),
    )


@router.post("/styles", response_model=StyleResponse)
async def styles(
    req: StyleRequest,
    config: PartitionConfig = Depends(get_partition_config),
) -> StyleResponse:
    shapes = [m.to_shape() for m in req.shapes]
    fraction = resolve_blank_fraction(req.blank_fraction, req.blank_percent)
    styled = compute_styled_shapes(
        shapes,
        req.stable_order,
        req.palette,
        fraction,
        req.kind,
        config=config,
    )
    return StyleResponse(
        shapes=[StyledShapeModel.from_styled(s) for s in styled],
        blank_count=blank_count(len(shapes), fraction),
    )


@router.post("/render", response_model=RenderResponse)
async def render(
    req: RenderRequest,
    config: PartitionConfig = Depends(get_partition_config),
) -> RenderResponse:
    start = time.perf_counter()
    try:
        generation = regenerate_layout(
            req.canvas_width,
            req.canvas_height,
            req.min_size,
            req.max_size,
            seed=req.seed,
            config=config,
        )
    except LayoutError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    styled = compute_styled_shapes(
        generation,
        palette=req.palette,
        blank_fraction=resolve_blank_fraction(req.blank_fraction, req.blank_percent),
        kind=req.kind,
        config=config,
    )
    svg = render_mosaic_svg(
        styled,
        generation.canvas_width,
        generation.canvas_height,
        scale=req.scale,
        rotation=req.rotation,
        background=req.background,
    )
    preview = ""
    if req.ascii_cols:
        preview = ascii_preview(
            styled, generation.canvas_width, generation.canvas_height, config.neutral_color, cols=req.ascii_cols
        )

    elapsed = (time.perf_counter() - start) * 1000
    return RenderResponse(
        svg=svg,
        shape_count=len(styled),
        ascii_preview=preview,
        processing_time_ms=round(elapsed, 1),
    )
