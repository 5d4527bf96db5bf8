"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from mosaic.engine.context import DEFAULT_PALETTE, ShapeKind
from mosaic.models.shapes import BaseShapeModel


class LayoutRequest(BaseModel):
    canvas_width: float = Field(..., description="Canvas width in pixels")
    canvas_height: float = Field(..., description="Canvas height in pixels")
    min_size: float = Field(default=30.0, gt=0, description="Smallest allowed leaf side")
    max_size: float = Field(default=150.0, gt=0, description="Side below which leaves usually stop splitting")
    seed: int | None = Field(default=None, description="Seed for reproducible geometry")


class StyleRequest(BaseModel):
    shapes: list[BaseShapeModel] = Field(..., description="Geometry from /api/layout")
    stable_order: list[int] = Field(..., description="Stable order from /api/layout")
    palette: list[str] = Field(default_factory=lambda: list(DEFAULT_PALETTE))
    blank_fraction: float = Field(default=0.2, description="Fraction in [0, 1]; clamped")
    blank_percent: float | None = Field(default=None, description="0-100; overrides blank_fraction")
    kind: ShapeKind = ShapeKind.SQUARE


class RenderRequest(LayoutRequest):
    palette: list[str] = Field(default_factory=lambda: list(DEFAULT_PALETTE))
    blank_fraction: float = Field(default=0.2, description="Fraction in [0, 1]; clamped")
    blank_percent: float | None = Field(default=None, description="0-100; overrides blank_fraction")
    kind: ShapeKind = ShapeKind.SQUARE
    scale: float = Field(default=1.0, gt=0)
    rotation: float = Field(default=0.0, description="Degrees")
    background: str | None = Field(default=None, description="Optional canvas fill")
    ascii_cols: int = Field(default=0, ge=0, le=200, description="ASCII preview width; 0 = none")


class GeometryUpdate(BaseModel):
    canvas_width: float | None = None
    canvas_height: float | None = None
    min_size: float | None = None
    max_size: float | None = None


class StyleUpdate(BaseModel):
    palette: list[str] | None = None
    blank_fraction: float | None = None
    blank_percent: float | None = None
    kind: ShapeKind | None = None
    scale: float | None = None
    rotation: float | None = None


class ColorUpdate(BaseModel):
    color: str = Field(..., description="Replacement color value")


class RegenerateRequest(BaseModel):
    seed: int | None = None
