"""Math helpers — clamping, rounding, seeded generators. No engine imports."""

from __future__ import annotations

import math

import numpy as np


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Seedable source of randomness. ``None`` draws fresh OS entropy."""
    return np.random.default_rng(seed)


def clamp(value: float, low: float, high: float) -> float:
    """Constrain a value to [low, high]."""
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward +inf.

    Python's round() uses banker's rounding (2.5 → 2); split points need
    the conventional rule so a tie never depends on parity.
    """
    return int(math.floor(value + 0.5))


def is_finite_number(value: float) -> bool:
    try:
        return math.isfinite(value)
    except TypeError:
        return False
