"""Stable shuffle — one Fisher–Yates permutation per geometry generation.

Taking "the first K ids" of the stable order gives a blank set that grows and
shrinks one id at a time as K changes, instead of re-randomizing on every
style tweak.
"""

from __future__ import annotations

from typing import Sequence, TypeVar

import numpy as np

from mosaic.engine.context import BaseShape

T = TypeVar("T")


def fisher_yates_shuffle(items: Sequence[T], rng: np.random.Generator) -> list[T]:
    """Unbiased shuffle: for i from n-1 down to 1, swap i with j ~ U[0, i].

    Returns a new list; ``items`` is left untouched.
    """
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = int(rng.integers(0, i + 1))
        out[i], out[j] = out[j], out[i]
    return out


def stable_index_order(shapes: Sequence[BaseShape], rng: np.random.Generator) -> tuple[int, ...]:
    """Shuffle positions 0..N-1 and map each back to the shape id at that position."""
    positions = fisher_yates_shuffle(range(len(shapes)), rng)
    return tuple(shapes[pos].id for pos in positions)


def is_permutation_of(order: Sequence[int], ids: Sequence[int]) -> bool:
    return len(order) == len(ids) and sorted(order) == sorted(ids)
