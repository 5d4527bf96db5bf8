"""Style assignment — pure derivation of colors and render kind.

Color is a modular hash of the shape id (palette slot = id mod len(palette)),
never of its position in the stable order, so changing the blank fraction
only flips shapes between blank and their own palette slot.
"""

from __future__ import annotations

import math
from typing import Sequence

from mosaic.engine.config import PartitionConfig
from mosaic.engine.context import BaseShape, ShapeKind, StyledShape
from mosaic.utils.math_helpers import clamp, is_finite_number


def normalize_blank_fraction(value: float) -> float:
    """Clamp a blank fraction to [0, 1]. Non-finite input counts as 0."""
    if not is_finite_number(value):
        return 0.0
    return clamp(float(value), 0.0, 1.0)


def percent_to_fraction(percent: float) -> float:
    """A 0-100 blank percentage as a clamped fraction."""
    if not is_finite_number(percent):
        return 0.0
    return normalize_blank_fraction(percent / 100.0)


def resolve_blank_fraction(fraction: float | None, percent: float | None) -> float | None:
    """Pick the blank amount from a fraction or a percentage; the percentage wins."""
    if percent is not None:
        return percent_to_fraction(percent)
    if fraction is not None:
        return normalize_blank_fraction(fraction)
    return None


def blank_count(num_shapes: int, blank_fraction: float) -> int:
    """floor(N * fraction), clamped to [0, N]."""
    if num_shapes <= 0:
        return 0
    fraction = blank_fraction if is_finite_number(blank_fraction) else 0.0
    fraction = clamp(fraction, 0.0, 1.0)
    return int(clamp(math.floor(num_shapes * fraction), 0, num_shapes))


def blank_ids(stable_order: Sequence[int], num_shapes: int, blank_fraction: float) -> set[int]:
    """The first blank_count ids of the stable order."""
    return set(stable_order[: blank_count(num_shapes, blank_fraction)])


def palette_slot(shape_id: int, palette_length: int) -> int:
    return shape_id % palette_length


def assign_styles(
    shapes: Sequence[BaseShape],
    stable_order: Sequence[int],
    palette: Sequence[str],
    blank_fraction: float,
    kind: ShapeKind | str,
    *,
    neutral_color: str | None = None,
    fallback_color: str | None = None,
) -> list[StyledShape]:
    """Derive the renderable shape list, in input order."""
    if not shapes:
        return []

    defaults = PartitionConfig()
    neutral = neutral_color or defaults.neutral_color
    effective_palette = list(palette) if palette else [fallback_color or defaults.fallback_color]
    shape_kind = ShapeKind(kind)

    blanks = blank_ids(stable_order, len(shapes), blank_fraction)
    n_colors = len(effective_palette)

    return [
        StyledShape.from_base(
            shape,
            color=neutral if shape.id in blanks else effective_palette[palette_slot(shape.id, n_colors)],
            kind=shape_kind,
        )
        for shape in shapes
    ]
