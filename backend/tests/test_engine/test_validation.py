"""Tests for layout validation."""

from __future__ import annotations

import pytest

from mosaic.engine.config import PartitionConfig
from mosaic.engine.context import BaseShape, LayoutGeneration
from mosaic.engine.layout import regenerate_layout
from mosaic.engine.validation import validate_generation
from tests.conftest import four_shapes


def _generation(shapes, order=None, width=100, height=100, min_size=10, max_size=100):
    shapes = tuple(shapes)
    if order is None:
        order = tuple(s.id for s in shapes)
    return LayoutGeneration(
        shapes=shapes,
        stable_order=tuple(order),
        canvas_width=width,
        canvas_height=height,
        min_size=min_size,
        max_size=max_size,
    )


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_generated_layouts_are_valid(seed):
    report = validate_generation(regenerate_layout(640, 480, 24, 120, seed=seed))
    assert report.valid, report.issues
    assert report.covered_area == pytest.approx(640 * 480)


def test_grid_is_valid():
    report = validate_generation(_generation(four_shapes()))
    assert report.valid
    assert report.shape_count == 4


def test_overlap_detected():
    shapes = [
        BaseShape(id=0, x=0, y=0, width=60, height=100),
        BaseShape(id=1, x=40, y=0, width=60, height=100),
    ]
    report = validate_generation(_generation(shapes))
    assert not report.valid
    assert any("overlap" in issue for issue in report.issues)


def test_gap_detected():
    shapes = [
        BaseShape(id=0, x=0, y=0, width=50, height=100),
        BaseShape(id=1, x=60, y=0, width=40, height=100),
    ]
    report = validate_generation(_generation(shapes))
    assert not report.valid
    assert any("uncovered" in issue for issue in report.issues)


def test_out_of_canvas_detected():
    shapes = [BaseShape(id=0, x=0, y=0, width=120, height=100)]
    report = validate_generation(_generation(shapes, max_size=200))
    assert any("beyond the canvas" in issue for issue in report.issues)


def test_non_contiguous_ids_detected():
    shapes = [s for s in four_shapes()]
    shapes[3] = BaseShape(id=7, x=50, y=50, width=50, height=50)
    report = validate_generation(_generation(shapes))
    assert any("contiguous" in issue for issue in report.issues)


def test_bad_stable_order_detected():
    report = validate_generation(_generation(four_shapes(), order=(0, 0, 1, 2)))
    assert any("permutation" in issue for issue in report.issues)


def test_undersized_leaf_detected():
    report = validate_generation(_generation(four_shapes(), min_size=60, max_size=100))
    assert any("smaller than min_size" in issue for issue in report.issues)


def test_oversized_splittable_leaf_detected():
    shapes = [BaseShape(id=0, x=0, y=0, width=100, height=100)]
    report = validate_generation(_generation(shapes, min_size=10, max_size=50))
    assert any("exceeds max_size" in issue for issue in report.issues)


def test_oversized_unsplittable_root_is_fine():
    shapes = [BaseShape(id=0, x=0, y=0, width=100, height=100)]
    report = validate_generation(_generation(shapes, min_size=60, max_size=80))
    assert report.valid, report.issues


def test_empty_layout_for_degenerate_canvas_is_valid():
    report = validate_generation(_generation([], width=0, height=100))
    assert report.valid
    assert report.shape_count == 0


def test_empty_layout_for_real_canvas_is_invalid():
    report = validate_generation(_generation([]))
    assert not report.valid


def test_short_canvas_axis_is_not_undersized():
    generation = regenerate_layout(120, 40, 50, 60, seed=3, config=PartitionConfig(stop_probability=0.0))
    assert generation.num_shapes == 2
    assert all(s.height == 40 for s in generation.shapes)
    report = validate_generation(generation)
    assert report.valid, report.issues


def test_short_side_inside_tall_canvas_is_undersized():
    shapes = [
        BaseShape(id=0, x=0, y=0, width=120, height=40),
        BaseShape(id=1, x=0, y=40, width=120, height=40),
    ]
    report = validate_generation(_generation(shapes, width=120, height=80, min_size=50, max_size=200))
    assert any("smaller than min_size" in issue for issue in report.issues)
