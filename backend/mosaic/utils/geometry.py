"""Leaf-node rectangle helpers. No engine imports.

Rectangles are passed around as an Nx4 array of (x, y, width, height).
"""

from __future__ import annotations

from typing import Iterable

import numpy as np
from numpy.typing import NDArray


def rect_array(rects: Iterable[tuple[float, float, float, float]]) -> NDArray[np.float64]:
    """Stack (x, y, w, h) tuples into an Nx4 float array."""
    arr = np.asarray(list(rects), dtype=np.float64)
    if arr.size == 0:
        return np.empty((0, 4))
    return arr.reshape(-1, 4)


def to_bboxes(rects: NDArray[np.float64]) -> NDArray[np.float64]:
    """(x, y, w, h) → (xmin, ymin, xmax, ymax)."""
    out = rects.copy()
    out[:, 2] = rects[:, 0] + rects[:, 2]
    out[:, 3] = rects[:, 1] + rects[:, 3]
    return out


def within_bounds(
    rects: NDArray[np.float64],
    canvas_w: float,
    canvas_h: float,
    eps: float = 1e-9,
) -> NDArray[np.bool_]:
    """Mask of rectangles lying fully inside the canvas."""
    if len(rects) == 0:
        return np.zeros(0, dtype=bool)
    boxes = to_bboxes(rects)
    return (
        (boxes[:, 0] >= -eps)
        & (boxes[:, 1] >= -eps)
        & (boxes[:, 2] <= canvas_w + eps)
        & (boxes[:, 3] <= canvas_h + eps)
    )


def overlapping_pairs(rects: NDArray[np.float64], eps: float = 1e-9) -> list[tuple[int, int]]:
    """Index pairs whose interiors intersect. Touching edges do not count.

    O(N²) broadcast; fine for the few hundred leaves a mosaic produces.
    """
    n = len(rects)
    if n < 2:
        return []
    boxes = to_bboxes(rects)
    x_overlap = np.minimum(boxes[:, None, 2], boxes[None, :, 2]) - np.maximum(
        boxes[:, None, 0], boxes[None, :, 0]
    )
    y_overlap = np.minimum(boxes[:, None, 3], boxes[None, :, 3]) - np.maximum(
        boxes[:, None, 1], boxes[None, :, 1]
    )
    hits = (x_overlap > eps) & (y_overlap > eps)
    rows, cols = np.nonzero(np.triu(hits, k=1))
    return [(int(i), int(j)) for i, j in zip(rows, cols)]
