"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from mosaic.engine.context import ShapeKind
from mosaic.models.shapes import BaseShapeModel, LayoutReportModel, StyledShapeModel


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    derived_nodes: int = 0


class LayoutResponse(BaseModel):
    shapes: list[BaseShapeModel]
    stable_order: list[int]
    canvas_width: float
    canvas_height: float
    seed: int | None = None
    validation: LayoutReportModel
    processing_time_ms: float = 0.0


class StyleResponse(BaseModel):
    shapes: list[StyledShapeModel]
    blank_count: int = 0


class RenderResponse(BaseModel):
    svg: str
    shape_count: int = 0
    ascii_preview: str = ""
    processing_time_ms: float = 0.0


class SessionResponse(BaseModel):
    revision: int = 0
    canvas_width: float
    canvas_height: float
    min_size: float
    max_size: float
    seed: int | None = None
    palette: list[str] = Field(default_factory=list)
    blank_fraction: float = 0.0
    kind: ShapeKind = ShapeKind.SQUARE
    scale: float = 1.0
    rotation: float = 0.0
    stable_order: list[int] = Field(default_factory=list)
    shapes: list[StyledShapeModel] = Field(default_factory=list)
    recomputed: list[str] = Field(default_factory=list)
