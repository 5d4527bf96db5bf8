"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from mosaic.engine.config import PartitionConfig
from mosaic.engine.context import BaseShape, LayoutGeneration, LayoutState
from mosaic.engine.layout import regenerate_layout
from mosaic.engine.session import LayoutSession
from mosaic.utils.math_helpers import make_rng


# Canvas used across the property tests (integer sizes → integer split points)
CANVAS_W = 800
CANVAS_H = 600
MIN_SIZE = 30
MAX_SIZE = 150

PALETTE = ["#1B998B", "#2D3047", "#FFFD82", "#FF9B71", "#E84855"]


class ScriptedRng:
    """Stand-in for numpy's Generator with fixed draws.

    random() always returns ``value``; integers(lo, hi) returns lo, or hi - 1
    when ``integers_high`` is set.
    """

    def __init__(self, value: float = 0.5, integers_high: bool = False) -> None:
        self.value = value
        self.integers_high = integers_high

    def random(self) -> float:
        return self.value

    def integers(self, low: int, high: int) -> int:
        return high - 1 if self.integers_high else low


def four_shapes() -> list[BaseShape]:
    """2x2 grid on a 100x100 canvas, ids 0..3."""
    return [
        BaseShape(id=0, x=0, y=0, width=50, height=50),
        BaseShape(id=1, x=50, y=0, width=50, height=50),
        BaseShape(id=2, x=0, y=50, width=50, height=50),
        BaseShape(id=3, x=50, y=50, width=50, height=50),
    ]


def coverage_counts(generation: LayoutGeneration) -> np.ndarray:
    """How many leaves cover each unit cell of an integer canvas."""
    counts = np.zeros((int(generation.canvas_height), int(generation.canvas_width)), dtype=np.int32)
    for s in generation.shapes:
        counts[int(s.y) : int(s.y + s.height), int(s.x) : int(s.x + s.width)] += 1
    return counts


@pytest.fixture
def rng() -> np.random.Generator:
    return make_rng(1234)


@pytest.fixture
def config() -> PartitionConfig:
    return PartitionConfig()


@pytest.fixture
def generation() -> LayoutGeneration:
    return regenerate_layout(CANVAS_W, CANVAS_H, MIN_SIZE, MAX_SIZE, seed=42)


@pytest.fixture
def session() -> LayoutSession:
    state = LayoutState(
        canvas_width=400,
        canvas_height=300,
        min_size=MIN_SIZE,
        max_size=MAX_SIZE,
        seed=7,
        palette=list(PALETTE),
        blank_fraction=0.2,
        rng=make_rng(7),
    )
    return LayoutSession(state)
