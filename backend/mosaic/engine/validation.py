"""Validate a generation against the tiling invariants.

Checks:
- coverage: the union of leaves equals the canvas rectangle (no gaps)
- bounds: every leaf lies inside the canvas
- overlap: no two leaves share interior area
- size policy: sides >= min_size (unless the root is the only leaf, or the
  side spans a canvas axis that is itself shorter than min_size), and a
  side above max_size only where that axis could not be split
- ids are 0..N-1 without duplicates; the stable order is a permutation of them
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from shapely.geometry import box
from shapely.ops import unary_union

from mosaic.engine.context import LayoutGeneration
from mosaic.engine.shuffle import is_permutation_of
from mosaic.utils.geometry import overlapping_pairs, rect_array, within_bounds

logger = logging.getLogger(__name__)

# Relative tolerance on areas; split points are integers so any real
# gap or overlap is at least one unit wide.
_AREA_EPS = 1e-6


@dataclass
class LayoutReport:
    valid: bool = True
    shape_count: int = 0
    canvas_area: float = 0.0
    covered_area: float = 0.0
    issues: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "shape_count": self.shape_count,
            "canvas_area": self.canvas_area,
            "covered_area": self.covered_area,
            "issues": list(self.issues),
        }


def validate_generation(generation: LayoutGeneration) -> LayoutReport:
    shapes = generation.shapes
    report = LayoutReport(shape_count=len(shapes), canvas_area=max(generation.canvas_area, 0.0))
    issues = report.issues

    if not shapes:
        if generation.canvas_width > 0 and generation.canvas_height > 0:
            issues.append("No shapes for a non-empty canvas")
        report.valid = not issues
        return report

    # Ids
    ids = [s.id for s in shapes]
    if sorted(ids) != list(range(len(shapes))):
        issues.append(f"Ids are not a contiguous 0..{len(shapes) - 1} range")
    if not is_permutation_of(generation.stable_order, ids):
        issues.append("Stable order is not a permutation of the shape ids")

    # Coverage + overlap
    canvas = box(0, 0, generation.canvas_width, generation.canvas_height)
    boxes = [box(*s.bbox) for s in shapes]
    union = unary_union(boxes)
    report.covered_area = float(union.area)
    tol = _AREA_EPS * max(canvas.area, 1.0)

    gap = canvas.difference(union).area
    if gap > tol:
        issues.append(f"Leaves leave {gap:.3f} units² of the canvas uncovered")

    rects = rect_array((s.x, s.y, s.width, s.height) for s in shapes)
    inside = within_bounds(rects, generation.canvas_width, generation.canvas_height)
    for idx in (~inside).nonzero()[0]:
        issues.append(f"Shape {shapes[idx].id} extends beyond the canvas")

    for i, j in overlapping_pairs(rects):
        shared = boxes[i].intersection(boxes[j]).area
        issues.append(f"Shapes {shapes[i].id} and {shapes[j].id} overlap by {shared:.3f} units²")

    # Size policy
    min_size = generation.min_size
    max_size = generation.max_size
    sole_root = len(shapes) == 1
    canvas_w = generation.canvas_width
    canvas_h = generation.canvas_height
    for s in shapes:
        # A side shorter than min_size is legal only when it spans the whole canvas axis
        narrow = s.width < min_size and not _spans(s.width, canvas_w)
        short = s.height < min_size and not _spans(s.height, canvas_h)
        if not sole_root and (narrow or short):
            issues.append(f"Shape {s.id} ({s.width}x{s.height}) is smaller than min_size {min_size}")
        # A leaf only outgrows max_size when neither axis could be split
        oversized = s.width > max_size or s.height > max_size
        splittable = s.width >= 2 * min_size or s.height >= 2 * min_size
        if oversized and splittable:
            issues.append(f"Shape {s.id} exceeds max_size {max_size} but was splittable")

    report.valid = not issues
    if issues:
        logger.warning("Layout validation found %d issue(s)", len(issues))
    return report


def _spans(side: float, extent: float) -> bool:
    return abs(side - extent) <= _AREA_EPS * max(extent, 1.0)
