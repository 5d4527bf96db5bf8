"""Layout facade — the two operations the rendering layer calls.

regenerate_layout      canvas or size bounds changed → new geometry + stable order
compute_styled_shapes  any style input changed (or new geometry) → styled shapes
"""

from __future__ import annotations

import logging
import time
from typing import Literal, Sequence

import numpy as np

from mosaic.engine.config import PartitionConfig
from mosaic.engine.context import BaseShape, LayoutGeneration, ShapeKind, StyledShape
from mosaic.engine.partition import partition
from mosaic.engine.shuffle import stable_index_order
from mosaic.engine.styles import assign_styles
from mosaic.utils.math_helpers import make_rng

logger = logging.getLogger(__name__)


def clamp_size_bounds(
    min_size: float,
    max_size: float,
    changed: Literal["min", "max"] = "min",
) -> tuple[float, float]:
    """Keep min <= max by dragging the control that was *not* edited.

    Raising min above max pulls max up; lowering max below min pulls min down.
    """
    if changed == "min" and max_size < min_size:
        max_size = min_size
    elif changed == "max" and min_size > max_size:
        min_size = max_size
    return min_size, max_size


def regenerate_layout(
    canvas_width: float,
    canvas_height: float,
    min_size: float,
    max_size: float,
    *,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
    config: PartitionConfig | None = None,
) -> LayoutGeneration:
    """Partition the canvas and shuffle the new ids, as one atomic unit.

    The same generator drives both steps, so a fixed seed reproduces the
    geometry and the stable order exactly.
    """
    start = time.perf_counter()
    rng = rng if rng is not None else make_rng(seed)

    shapes = partition(0, 0, canvas_width, canvas_height, min_size, max_size, rng, config=config)
    order = stable_index_order(shapes, rng)

    elapsed = (time.perf_counter() - start) * 1000
    logger.info(
        "Layout regenerated: %d shapes on %sx%s canvas in %.1fms",
        len(shapes),
        canvas_width,
        canvas_height,
        elapsed,
    )
    return LayoutGeneration(
        shapes=tuple(shapes),
        stable_order=order,
        canvas_width=canvas_width,
        canvas_height=canvas_height,
        min_size=min_size,
        max_size=max_size,
        seed=seed,
    )


def compute_styled_shapes(
    shapes: LayoutGeneration | Sequence[BaseShape],
    stable_order: Sequence[int] | None = None,
    palette: Sequence[str] = (),
    blank_fraction: float = 0.0,
    kind: ShapeKind | str = ShapeKind.SQUARE,
    *,
    config: PartitionConfig | None = None,
) -> list[StyledShape]:
    """Style a generation (or a bare shape list plus its stable order)."""
    if isinstance(shapes, LayoutGeneration):
        if stable_order is None:
            stable_order = shapes.stable_order
        shapes = shapes.shapes
    if stable_order is None:
        raise ValueError("stable_order is required when styling a bare shape list")

    config = config or PartitionConfig()
    return assign_styles(
        shapes,
        stable_order,
        palette,
        blank_fraction,
        kind,
        neutral_color=config.neutral_color,
        fallback_color=config.fallback_color,
    )
