"""Shape wire models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from mosaic.engine.context import BaseShape, ShapeKind, StyledShape


class BaseShapeModel(BaseModel):
    id: int = Field(..., ge=0)
    x: float
    y: float
    width: float = Field(..., ge=0)
    height: float = Field(..., ge=0)

    @classmethod
    def from_shape(cls, shape: BaseShape) -> BaseShapeModel:
        return cls(id=shape.id, x=shape.x, y=shape.y, width=shape.width, height=shape.height)

    def to_shape(self) -> BaseShape:
        return BaseShape(id=self.id, x=self.x, y=self.y, width=self.width, height=self.height)


class StyledShapeModel(BaseShapeModel):
    color: str
    kind: ShapeKind

    @classmethod
    def from_styled(cls, shape: StyledShape) -> StyledShapeModel:
        return cls(
            id=shape.id,
            x=shape.x,
            y=shape.y,
            width=shape.width,
            height=shape.height,
            color=shape.color,
            kind=shape.kind,
        )


class LayoutReportModel(BaseModel):
    valid: bool = True
    shape_count: int = 0
    canvas_area: float = 0.0
    covered_area: float = 0.0
    issues: list[str] = Field(default_factory=list)
