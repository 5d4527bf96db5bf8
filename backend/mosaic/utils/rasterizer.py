"""Rasterization utilities — shapes to a coarse label grid, grid to text.

Used for the ASCII preview of a mosaic.
"""

from __future__ import annotations

import string
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from mosaic.engine.context import BaseShape, StyledShape

# Grid cell holding no shape (only possible for an empty layout)
EMPTY = -1

# Glyph per palette slot; blank shapes use _BLANK_GLYPH.
_GLYPHS = string.ascii_uppercase + string.digits
_BLANK_GLYPH = "."
_EMPTY_GLYPH = " "


def label_grid(
    shapes: Sequence[BaseShape],
    canvas_w: float,
    canvas_h: float,
    cols: int = 48,
    rows: int | None = None,
) -> NDArray[np.int64]:
    """Sample the id of the shape covering each cell centre.

    ``rows`` defaults to keeping the canvas aspect ratio, halved because
    terminal cells are about twice as tall as they are wide.
    """
    if rows is None:
        rows = max(1, round(cols * (canvas_h / canvas_w) / 2)) if canvas_w > 0 else 1
    grid = np.full((rows, cols), EMPTY, dtype=np.int64)
    if not shapes or canvas_w <= 0 or canvas_h <= 0:
        return grid

    xs = (np.arange(cols) + 0.5) * (canvas_w / cols)
    ys = (np.arange(rows) + 0.5) * (canvas_h / rows)

    for s in shapes:
        col_mask = (xs >= s.x) & (xs < s.x + s.width)
        row_mask = (ys >= s.y) & (ys < s.y + s.height)
        grid[np.ix_(row_mask, col_mask)] = s.id
    return grid


def grid_to_text(grid: NDArray[np.int64], glyphs: dict[int, str] | None = None) -> str:
    """Convert a label grid to text, one glyph per cell."""
    glyphs = glyphs or {}
    rows = []
    for row in grid:
        rows.append(
            "".join(
                _EMPTY_GLYPH if cell == EMPTY else glyphs.get(int(cell), _GLYPHS[int(cell) % len(_GLYPHS)])
                for cell in row
            )
        )
    return "\n".join(rows)


def style_glyphs(shapes: Sequence[StyledShape], neutral_color: str) -> dict[int, str]:
    """One glyph per distinct color; blank shapes render as '.'."""
    by_color: dict[str, str] = {}
    glyphs: dict[int, str] = {}
    for s in shapes:
        if s.color == neutral_color:
            glyphs[s.id] = _BLANK_GLYPH
            continue
        if s.color not in by_color:
            by_color[s.color] = _GLYPHS[len(by_color) % len(_GLYPHS)]
        glyphs[s.id] = by_color[s.color]
    return glyphs


def ascii_preview(
    shapes: Sequence[StyledShape],
    canvas_w: float,
    canvas_h: float,
    neutral_color: str,
    cols: int = 48,
) -> str:
    grid = label_grid(shapes, canvas_w, canvas_h, cols=cols)
    return grid_to_text(grid, style_glyphs(shapes, neutral_color))


def grid_fill_percentage(grid: NDArray[np.int64]) -> float:
    """Percentage of cells covered by some shape."""
    total = grid.size
    if total == 0:
        return 0.0
    return float(np.sum(grid != EMPTY) / total * 100)
