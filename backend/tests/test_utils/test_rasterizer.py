"""Tests for the label grid and ASCII preview."""

from __future__ import annotations

import numpy as np

from mosaic.engine.context import BaseShape, StyledShape
from mosaic.utils.geometry import overlapping_pairs, rect_array, to_bboxes, within_bounds
from mosaic.utils.rasterizer import (
    EMPTY,
    ascii_preview,
    grid_fill_percentage,
    grid_to_text,
    label_grid,
    style_glyphs,
)

HALVES = [
    BaseShape(id=0, x=0, y=0, width=50, height=50),
    BaseShape(id=1, x=50, y=0, width=50, height=50),
]


def test_label_grid_samples_cell_centres():
    grid = label_grid(HALVES, 100, 50, cols=4, rows=2)
    assert grid.tolist() == [[0, 0, 1, 1], [0, 0, 1, 1]]


def test_label_grid_default_rows_follow_aspect():
    grid = label_grid(HALVES, 100, 50, cols=8)
    assert grid.shape == (2, 8)


def test_empty_layout_grid():
    grid = label_grid([], 100, 50, cols=4, rows=2)
    assert np.all(grid == EMPTY)
    assert grid_fill_percentage(grid) == 0.0


def test_grid_to_text():
    grid = label_grid(HALVES, 100, 50, cols=4, rows=2)
    assert grid_to_text(grid) == "AABB\nAABB"


def test_blank_shapes_render_as_dots():
    styled = [
        StyledShape(id=0, x=0, y=0, width=50, height=50, color="#ffffff"),
        StyledShape(id=1, x=50, y=0, width=50, height=50, color="#E84855"),
    ]
    assert style_glyphs(styled, "#ffffff") == {0: ".", 1: "A"}
    assert ascii_preview(styled, 100, 50, "#ffffff", cols=4) == "..AA"


def test_full_coverage():
    grid = label_grid(HALVES, 100, 50, cols=10, rows=5)
    assert grid_fill_percentage(grid) == 100.0


# ---------------------------------------------------------------------------
# Rectangle helpers
# ---------------------------------------------------------------------------

def test_rect_helpers():
    rects = rect_array([(0, 0, 50, 50), (50, 0, 50, 50), (25, 25, 50, 50)])
    assert to_bboxes(rects)[2].tolist() == [25, 25, 75, 75]
    assert overlapping_pairs(rects) == [(0, 2), (1, 2)]
    assert within_bounds(rects, 100, 50).tolist() == [True, True, False]


def test_touching_edges_do_not_overlap():
    rects = rect_array([(0, 0, 50, 50), (50, 0, 50, 50)])
    assert overlapping_pairs(rects) == []


def test_empty_rect_array():
    rects = rect_array([])
    assert rects.shape == (0, 4)
    assert overlapping_pairs(rects) == []
