"""Tests for the stable Fisher–Yates shuffle."""

from __future__ import annotations

import numpy as np

from mosaic.engine.context import BaseShape
from mosaic.engine.shuffle import fisher_yates_shuffle, is_permutation_of, stable_index_order
from mosaic.utils.math_helpers import make_rng
from tests.conftest import ScriptedRng, four_shapes


def test_shuffle_is_a_permutation(rng):
    items = list(range(50))
    out = fisher_yates_shuffle(items, rng)
    assert sorted(out) == items


def test_shuffle_leaves_input_untouched(rng):
    items = [1, 2, 3, 4, 5]
    fisher_yates_shuffle(items, rng)
    assert items == [1, 2, 3, 4, 5]


def test_shuffle_walks_down_from_last_index():
    # j = 0 every step: swap(3,0), swap(2,0), swap(1,0)
    assert fisher_yates_shuffle([0, 1, 2, 3], ScriptedRng()) == [1, 2, 3, 0]
    # j = i every step: every swap is a no-op
    assert fisher_yates_shuffle([0, 1, 2, 3], ScriptedRng(integers_high=True)) == [0, 1, 2, 3]


def test_shuffle_trivial_inputs(rng):
    assert fisher_yates_shuffle([], rng) == []
    assert fisher_yates_shuffle(["only"], rng) == ["only"]


def test_shuffle_is_uniform():
    n = 5
    trials = 20_000
    rng = make_rng(2024)
    counts = np.zeros((n, n), dtype=np.int64)  # counts[position, item]
    for _ in range(trials):
        for pos, item in enumerate(fisher_yates_shuffle(range(n), rng)):
            counts[pos, item] += 1
    expected = trials / n
    # 10% band ≈ 7 standard deviations at this sample size
    assert np.all(np.abs(counts - expected) < 0.1 * expected)


def test_stable_order_maps_positions_to_ids():
    shapes = [
        BaseShape(id=10, x=0, y=0, width=1, height=1),
        BaseShape(id=20, x=1, y=0, width=1, height=1),
        BaseShape(id=30, x=2, y=0, width=1, height=1),
    ]
    assert stable_index_order(shapes, ScriptedRng(integers_high=True)) == (10, 20, 30)
    assert stable_index_order(shapes, ScriptedRng()) == (20, 30, 10)


def test_stable_order_is_permutation_of_ids(rng):
    shapes = four_shapes()
    order = stable_index_order(shapes, rng)
    assert is_permutation_of(order, [s.id for s in shapes])


def test_stable_order_empty(rng):
    assert stable_index_order([], rng) == ()


def test_is_permutation_of():
    assert is_permutation_of([2, 0, 1], [0, 1, 2])
    assert not is_permutation_of([0, 0, 1], [0, 1, 2])
    assert not is_permutation_of([0, 1], [0, 1, 2])
