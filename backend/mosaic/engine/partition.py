"""Partition engine — recursive subdivision of a canvas into leaf rectangles.

At each rectangle:
    1. Stop if it fits inside max_size and a stop trial succeeds, or if
       neither axis can be split without making a child smaller than min_size.
    2. Otherwise split the longer axis (falling back to whichever axis is
       still legal) at a random integer offset that keeps both children
       >= min_size, and recurse into both halves.

The recursion runs on an explicit stack (first child on top) so leaf ids are
assigned in the same depth-first order as the recursive definition without
touching the interpreter's recursion limit.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from mosaic.engine.config import PartitionConfig
from mosaic.engine.context import BaseShape
from mosaic.engine.errors import InvalidLayoutInput, LayoutLimitExceeded
from mosaic.utils.math_helpers import is_finite_number, round_half_up

logger = logging.getLogger(__name__)


def check_size_bounds(min_size: float, max_size: float) -> None:
    """Fail fast on bounds that would break the 2*min_size progress guarantee."""
    if not is_finite_number(min_size) or min_size <= 0:
        raise InvalidLayoutInput(f"min_size must be a positive number, got {min_size!r}")
    if not is_finite_number(max_size) or max_size <= 0:
        raise InvalidLayoutInput(f"max_size must be a positive number, got {max_size!r}")
    if max_size < min_size:
        raise InvalidLayoutInput(
            f"max_size ({max_size}) is smaller than min_size ({min_size}); clamp before partitioning"
        )


def split_offset(extent: float, min_size: float, rng: np.random.Generator) -> float:
    """Offset along an axis of length ``extent`` leaving both sides >= min_size.

    Rounded to the nearest integer coordinate (returned as an int) when an
    integer fits in the legal range; otherwise the exact draw is kept.
    """
    raw = min_size + rng.random() * (extent - 2 * min_size)
    offset = round_half_up(raw)
    if offset >= min_size and extent - offset >= min_size:
        return offset

    lo = math.ceil(min_size)
    hi = math.floor(extent - min_size)
    if lo <= hi:
        return min(max(offset, lo), hi)
    return raw


def partition(
    x: float,
    y: float,
    width: float,
    height: float,
    min_size: float,
    max_size: float,
    rng: np.random.Generator,
    *,
    config: PartitionConfig | None = None,
) -> list[BaseShape]:
    """Subdivide the rectangle (x, y, width, height) into leaf BaseShapes.

    Ids start at 0 for every call and follow leaf emission order.

    Raises:
        InvalidLayoutInput: non-positive or non-finite sizes, max < min.
        LayoutLimitExceeded: the depth or leaf-count guard tripped.
    """
    config = config or PartitionConfig()
    check_size_bounds(min_size, max_size)
    if not (is_finite_number(width) and is_finite_number(height)):
        raise InvalidLayoutInput(f"canvas size must be finite, got {width!r}x{height!r}")
    if width <= 0 or height <= 0:
        logger.debug("Degenerate canvas %sx%s: no shapes", width, height)
        return []

    leaves: list[BaseShape] = []
    next_id = 0
    max_seen_depth = 0

    # (x, y, w, h, depth)
    stack: list[tuple[float, float, float, float, int]] = [(x, y, width, height, 0)]

    while stack:
        rx, ry, rw, rh, depth = stack.pop()
        max_seen_depth = max(max_seen_depth, depth)

        can_split_vertically = rw >= min_size * 2
        can_split_horizontally = rh >= min_size * 2
        within_max = rw <= max_size and rh <= max_size

        should_stop = within_max and rng.random() < config.stop_probability

        if should_stop or (not can_split_vertically and not can_split_horizontally):
            leaves.append(BaseShape(id=next_id, x=rx, y=ry, width=rw, height=rh))
            next_id += 1
            if next_id > config.max_leaves:
                logger.warning("Partition aborted: more than %d leaves", config.max_leaves)
                raise LayoutLimitExceeded(
                    f"partition produced more than {config.max_leaves} leaves",
                    depth=max_seen_depth,
                    leaves=next_id,
                )
            continue

        if depth + 1 > config.max_depth:
            logger.warning("Partition aborted: depth limit %d reached", config.max_depth)
            raise LayoutLimitExceeded(
                f"partition exceeded maximum depth {config.max_depth}",
                depth=depth + 1,
                leaves=next_id,
            )

        split_vertically = (rw > rh and can_split_vertically) or not can_split_horizontally

        if split_vertically:
            split_x = split_offset(rw, min_size, rng)
            first = (rx, ry, split_x, rh, depth + 1)
            second = (rx + split_x, ry, rw - split_x, rh, depth + 1)
        else:
            split_y = split_offset(rh, min_size, rng)
            first = (rx, ry, rw, split_y, depth + 1)
            second = (rx, ry + split_y, rw, rh - split_y, depth + 1)

        # LIFO: push second first so the first child is expanded next
        stack.append(second)
        stack.append(first)

    logger.debug(
        "Partitioned %sx%s (min=%s, max=%s) into %d leaves, depth %d",
        width,
        height,
        min_size,
        max_size,
        len(leaves),
        max_seen_depth,
    )
    return leaves
