"""Layout data — geometry, styled shapes and the mutable session state.

One partition run → LayoutGeneration (shapes + stable order, immutable)
Style-only inputs → LayoutState.* (palette, blank fraction, kind, transform)
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from mosaic.engine.config import PartitionConfig
from mosaic.utils.math_helpers import make_rng


class ShapeKind(str, enum.Enum):
    SQUARE = "square"
    CIRCLE = "circle"


DEFAULT_PALETTE: tuple[str, ...] = ("#1B998B", "#2D3047", "#FFFD82", "#FF9B71", "#E84855")


@dataclass(frozen=True)
class BaseShape:
    """A leaf rectangle of one partition run."""

    id: int
    x: float
    y: float
    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def bbox(self) -> tuple[float, float, float, float]:
        """(xmin, ymin, xmax, ymax)"""
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class StyledShape(BaseShape):
    """BaseShape plus the derived color and render kind. Never persisted."""

    color: str = "#cccccc"
    kind: ShapeKind = ShapeKind.SQUARE

    @classmethod
    def from_base(cls, base: BaseShape, color: str, kind: ShapeKind) -> StyledShape:
        return cls(
            id=base.id,
            x=base.x,
            y=base.y,
            width=base.width,
            height=base.height,
            color=color,
            kind=kind,
        )

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["color"] = self.color
        data["kind"] = self.kind.value
        return data


@dataclass(frozen=True)
class LayoutGeneration:
    """Geometry and its stable order, created together by one partition run."""

    shapes: tuple[BaseShape, ...] = ()
    stable_order: tuple[int, ...] = ()
    canvas_width: float = 0.0
    canvas_height: float = 0.0
    min_size: float = 0.0
    max_size: float = 0.0
    seed: int | None = None

    @property
    def num_shapes(self) -> int:
        return len(self.shapes)

    @property
    def canvas_area(self) -> float:
        return self.canvas_width * self.canvas_height

    def get_shape(self, shape_id: int) -> BaseShape | None:
        for shape in self.shapes:
            if shape.id == shape_id:
                return shape
        return None


@dataclass
class LayoutState:
    """Shared state for a layout session. Inputs are written by setters,
    outputs only by the recompute pass."""

    # --- Geometry inputs ---
    canvas_width: float = 800.0
    canvas_height: float = 600.0
    min_size: float = 30.0
    max_size: float = 150.0
    seed: int | None = None

    # --- Style inputs ---
    palette: list[str] = field(default_factory=lambda: list(DEFAULT_PALETTE))
    blank_fraction: float = 0.2
    kind: ShapeKind = ShapeKind.SQUARE

    # --- Transform inputs (render only) ---
    scale: float = 1.0
    rotation: float = 0.0

    # --- Derived ---
    generation: LayoutGeneration = field(default_factory=LayoutGeneration)
    styled: list[StyledShape] = field(default_factory=list)

    # --- Randomness / tunables ---
    rng: np.random.Generator = field(default_factory=make_rng, repr=False)
    config: PartitionConfig = field(default_factory=PartitionConfig)

    # --- Bookkeeping ---
    revision: int = 0
    completed_nodes: set[str] = field(default_factory=set)

    @property
    def num_shapes(self) -> int:
        return self.generation.num_shapes
