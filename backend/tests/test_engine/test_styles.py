"""Tests for style assignment."""

from __future__ import annotations

import pytest

from mosaic.engine.context import ShapeKind
from mosaic.engine.layout import compute_styled_shapes
from mosaic.engine.styles import (
    assign_styles,
    blank_count,
    blank_ids,
    normalize_blank_fraction,
    percent_to_fraction,
    resolve_blank_fraction,
)
from tests.conftest import PALETTE, four_shapes

NEUTRAL = "#ffffff"
FALLBACK = "#cccccc"


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

def test_palette_slots_cycle_by_id():
    styled = assign_styles(four_shapes(), (2, 0, 3, 1), ["#111", "#222"], 0.0, ShapeKind.SQUARE)
    assert [s.color for s in styled] == ["#111", "#222", "#111", "#222"]


def test_empty_palette_uses_fallback():
    styled = assign_styles(four_shapes(), (0, 1, 2, 3), [], 0.0, ShapeKind.SQUARE)
    assert [s.color for s in styled] == [FALLBACK] * 4


def test_empty_palette_with_blanks():
    styled = assign_styles(four_shapes(), (3, 1, 0, 2), [], 0.5, ShapeKind.SQUARE)
    assert [s.color for s in styled] == [FALLBACK, NEUTRAL, FALLBACK, NEUTRAL]


def test_no_shapes():
    assert assign_styles([], (), PALETTE, 0.5, ShapeKind.CIRCLE) == []


def test_blank_set_is_prefix_of_stable_order():
    styled = assign_styles(four_shapes(), (3, 1, 0, 2), ["#111", "#222"], 0.5, ShapeKind.SQUARE)
    assert {s.id for s in styled if s.color == NEUTRAL} == {3, 1}


def test_kind_applies_to_every_shape():
    styled = assign_styles(four_shapes(), (0, 1, 2, 3), PALETTE, 0.25, "circle")
    assert all(s.kind == ShapeKind.CIRCLE for s in styled)


def test_output_keeps_input_order():
    shapes = list(reversed(four_shapes()))
    styled = assign_styles(shapes, (0, 1, 2, 3), PALETTE, 0.0, ShapeKind.SQUARE)
    assert [s.id for s in styled] == [3, 2, 1, 0]
    assert [(s.x, s.y) for s in styled] == [(s.x, s.y) for s in shapes]


def test_custom_neutral_and_fallback():
    styled = assign_styles(
        four_shapes(), (0, 1, 2, 3), [], 0.5, ShapeKind.SQUARE, neutral_color="#000", fallback_color="#abc"
    )
    assert [s.color for s in styled] == ["#000", "#000", "#abc", "#abc"]


# ---------------------------------------------------------------------------
# Blank fraction
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "n,fraction,expected",
    [
        (10, 0.25, 2),
        (10, 0.0, 0),
        (10, 1.0, 10),
        (10, 1.5, 10),
        (10, -0.2, 0),
        (10, float("nan"), 0),
        (0, 0.5, 0),
        (7, 0.99, 6),
    ],
)
def test_blank_count(n, fraction, expected):
    assert blank_count(n, fraction) == expected


@pytest.mark.parametrize(
    "value,expected",
    [(0.2, 0.2), (0, 0.0), (1, 1.0), (1.5, 1.0), (20, 1.0), (-3, 0.0), (float("nan"), 0.0)],
)
def test_normalize_blank_fraction_clamps(value, expected):
    assert normalize_blank_fraction(value) == pytest.approx(expected)


@pytest.mark.parametrize(
    "percent,expected",
    [(1, 0.01), (0.5, 0.005), (20, 0.2), (90, 0.9), (150, 1.0), (-3, 0.0), (float("inf"), 0.0)],
)
def test_percent_to_fraction(percent, expected):
    assert percent_to_fraction(percent) == pytest.approx(expected)


def test_resolve_blank_fraction_prefers_percent():
    assert resolve_blank_fraction(0.9, 10) == pytest.approx(0.1)
    assert resolve_blank_fraction(0.3, None) == pytest.approx(0.3)
    assert resolve_blank_fraction(None, None) is None


def test_blank_sets_grow_monotonically(generation):
    n = generation.num_shapes
    previous: set[int] = set()
    for step in range(0, 101, 5):
        current = blank_ids(generation.stable_order, n, step / 100)
        assert previous <= current
        previous = current


def test_blank_fraction_never_changes_palette_slots(generation):
    runs = [
        compute_styled_shapes(generation, palette=PALETTE, blank_fraction=f / 10, kind=ShapeKind.SQUARE)
        for f in range(11)
    ]
    for styled in runs:
        for s in styled:
            assert s.color in (NEUTRAL, PALETTE[s.id % len(PALETTE)])


def test_full_blank_fraction_blanks_everything(generation):
    styled = compute_styled_shapes(generation, palette=PALETTE, blank_fraction=1.0)
    assert all(s.color == NEUTRAL for s in styled)


def test_bare_shape_list_requires_order():
    with pytest.raises(ValueError):
        compute_styled_shapes(four_shapes(), None, PALETTE, 0.0)
