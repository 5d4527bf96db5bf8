"""generate_mosaic_sheet.py -- One geometry, several blank fractions.

Panels left to right share the same partition and stable order; only the
blank fraction changes. Blank shapes accumulate one id at a time and every
colored shape keeps its palette slot, which is what makes restyling stable.

Usage:
    python breakdown/generate_mosaic_sheet.py [seed] [kind]
"""

from __future__ import annotations

import sys
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.patches import Ellipse, Rectangle

ROOT = Path(__file__).resolve().parent.parent
OUT_DIR = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT / "backend"))

from mosaic.engine.config import PartitionConfig  # noqa: E402
from mosaic.engine.context import DEFAULT_PALETTE, ShapeKind  # noqa: E402
from mosaic.engine.layout import compute_styled_shapes, regenerate_layout  # noqa: E402
from mosaic.engine.validation import validate_generation  # noqa: E402

_BG = "#1a1a2e"
_TEXT = "#e0e0e0"
_EDGE = "#1a1a2e"

CANVAS_W, CANVAS_H = 800, 600
MIN_SIZE, MAX_SIZE = 30, 150
FRACTIONS = [0.0, 0.2, 0.4, 0.6, 0.9]


def draw_panel(ax, shapes, title: str) -> None:
    for s in shapes:
        if s.kind == ShapeKind.CIRCLE:
            cx, cy = s.center
            patch = Ellipse((cx, cy), s.width, s.height, facecolor=s.color, edgecolor=_EDGE, linewidth=0.6)
        else:
            patch = Rectangle((s.x, s.y), s.width, s.height, facecolor=s.color, edgecolor=_EDGE, linewidth=0.6)
        ax.add_patch(patch)
    ax.set_xlim(0, CANVAS_W)
    ax.set_ylim(CANVAS_H, 0)
    ax.set_aspect("equal")
    ax.set_xticks([])
    ax.set_yticks([])
    ax.set_title(title, color=_TEXT, fontsize=8, pad=4)


def main():
    seed = int(sys.argv[1]) if len(sys.argv) > 1 else 7
    kind = ShapeKind(sys.argv[2]) if len(sys.argv) > 2 else ShapeKind.SQUARE
    out_png = OUT_DIR / f"09_mosaic_sheet_{seed}_{kind.value}.png"
    config = PartitionConfig()

    generation = regenerate_layout(CANVAS_W, CANVAS_H, MIN_SIZE, MAX_SIZE, seed=seed, config=config)
    report = validate_generation(generation)
    print(f"Seed {seed}: {generation.num_shapes} shapes, valid={report.valid}")
    for issue in report.issues:
        print(f"  ! {issue}")

    fig, axes = plt.subplots(1, len(FRACTIONS), figsize=(4 * len(FRACTIONS), 3.4), facecolor=_BG)
    previous: set[int] = set()
    for ax, fraction in zip(axes, FRACTIONS):
        styled = compute_styled_shapes(generation, palette=DEFAULT_PALETTE, blank_fraction=fraction, kind=kind)
        blanks = {s.id for s in styled if s.color == config.neutral_color}
        added = len(blanks - previous)
        draw_panel(ax, styled, f"blank {fraction:.0%}  ({len(blanks)} shapes, +{added})")
        previous = blanks

    fig.suptitle(f"Stable restyle -- seed {seed}, {generation.num_shapes} leaves", color=_TEXT, fontsize=11)
    fig.savefig(str(out_png), dpi=150, facecolor=_BG)
    plt.close(fig)
    print(f"Saved: {out_png}")


if __name__ == "__main__":
    main()
