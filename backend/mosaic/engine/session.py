"""LayoutSession — holds the current inputs and recomputes only what they affect.

Geometry inputs (canvas, size bounds, seed) regenerate shapes and the stable
order together; style inputs (palette, blank fraction, kind) only restyle.
Transform inputs (scale, rotation) are read at render time and recompute
nothing.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Iterable, Sequence

from mosaic.engine.config import PartitionConfig
from mosaic.engine.context import LayoutState, ShapeKind
from mosaic.engine.errors import InvalidLayoutInput
from mosaic.engine.graph import DerivationGraph, derived, get_graph
from mosaic.engine.layout import clamp_size_bounds, compute_styled_shapes, regenerate_layout
from mosaic.engine.styles import normalize_blank_fraction, percent_to_fraction
from mosaic.utils.math_helpers import is_finite_number, make_rng

logger = logging.getLogger(__name__)

GEOMETRY_INPUTS = {"canvas_width", "canvas_height", "min_size", "max_size", "seed"}
STYLE_INPUTS = {"palette", "blank_fraction", "kind"}
TRANSFORM_INPUTS = {"scale", "rotation"}


@derived(
    id="geometry",
    inputs=GEOMETRY_INPUTS,
    description="Partition the canvas and shuffle the stable order",
)
def geometry(state: LayoutState) -> None:
    # A pinned seed restarts the generator: same inputs, same layout
    rng = make_rng(state.seed) if state.seed is not None else state.rng
    # Single assignment: shapes and their order are never published apart
    state.generation = regenerate_layout(
        state.canvas_width,
        state.canvas_height,
        state.min_size,
        state.max_size,
        rng=rng,
        seed=state.seed,
        config=state.config,
    )


@derived(
    id="styles",
    inputs=STYLE_INPUTS,
    dependencies=["geometry"],
    description="Assign palette / blank colors and the render kind",
)
def styles(state: LayoutState) -> None:
    state.styled = compute_styled_shapes(
        state.generation,
        palette=state.palette,
        blank_fraction=state.blank_fraction,
        kind=state.kind,
        config=state.config,
    )


class LayoutSession:
    """Process-wide layout state with explicit change tracking."""

    def __init__(
        self,
        state: LayoutState | None = None,
        graph: DerivationGraph | None = None,
    ) -> None:
        self.state = state or LayoutState()
        self.graph = graph or get_graph()
        self._lock = threading.RLock()

    @classmethod
    def from_settings(cls) -> LayoutSession:
        from mosaic.config import settings

        state = LayoutState(
            canvas_width=settings.mosaic_canvas_width,
            canvas_height=settings.mosaic_canvas_height,
            min_size=settings.mosaic_min_size,
            max_size=settings.mosaic_max_size,
            seed=settings.mosaic_seed,
            palette=list(settings.mosaic_palette),
            blank_fraction=percent_to_fraction(settings.mosaic_blank_percent),
            config=PartitionConfig.from_settings(),
        )
        return cls(state)

    # ── Recompute ──

    def recompute(self, changed: Iterable[str] | None = None) -> list[str]:
        """Run every node made stale by ``changed`` (all nodes when None)."""
        with self._lock:
            start = time.perf_counter()
            specs = self.graph.all() if changed is None else self.graph.stale_after(changed)
            for spec in specs:
                t0 = time.perf_counter()
                spec.fn(self.state)
                self.state.completed_nodes.add(spec.id)
                logger.debug("  %s recomputed in %.1fms", spec.id, (time.perf_counter() - t0) * 1000)
            if specs:
                self.state.revision += 1
                logger.info(
                    "Session revision %d: %s in %.0fms",
                    self.state.revision,
                    ", ".join(s.id for s in specs),
                    (time.perf_counter() - start) * 1000,
                )
            return [s.id for s in specs]

    def ensure_ready(self) -> None:
        """Build the first generation lazily."""
        with self._lock:
            if "geometry" not in self.state.completed_nodes:
                self.recompute()

    def _apply(self, updates: dict[str, Any]) -> list[str]:
        """Write inputs and recompute; on failure restore the previous inputs."""
        with self._lock:
            changed = {k for k, v in updates.items() if getattr(self.state, k) != v}
            if not changed:
                return []
            previous = {k: getattr(self.state, k) for k in changed}
            for key in changed:
                setattr(self.state, key, updates[key])
            if "geometry" not in self.state.completed_nodes:
                changed = None
            try:
                return self.recompute(changed)
            except Exception:
                for key, value in previous.items():
                    setattr(self.state, key, value)
                raise

    # ── Geometry inputs ──

    def set_canvas(self, width: float, height: float) -> list[str]:
        return self._apply({"canvas_width": float(width), "canvas_height": float(height)})

    def set_min_size(self, value: float) -> list[str]:
        _check_positive("min_size", value)
        min_size, max_size = clamp_size_bounds(value, self.state.max_size, changed="min")
        return self._apply({"min_size": min_size, "max_size": max_size})

    def set_max_size(self, value: float) -> list[str]:
        _check_positive("max_size", value)
        min_size, max_size = clamp_size_bounds(self.state.min_size, value, changed="max")
        return self._apply({"min_size": min_size, "max_size": max_size})

    def update_geometry(
        self,
        *,
        canvas_width: float | None = None,
        canvas_height: float | None = None,
        min_size: float | None = None,
        max_size: float | None = None,
    ) -> list[str]:
        """Apply several geometry edits as one recompute. min is applied before max."""
        updates: dict[str, Any] = {}
        if canvas_width is not None:
            updates["canvas_width"] = float(canvas_width)
        if canvas_height is not None:
            updates["canvas_height"] = float(canvas_height)
        lo, hi = self.state.min_size, self.state.max_size
        if min_size is not None:
            _check_positive("min_size", min_size)
            lo, hi = clamp_size_bounds(min_size, hi, changed="min")
        if max_size is not None:
            _check_positive("max_size", max_size)
            lo, hi = clamp_size_bounds(lo, max_size, changed="max")
        updates["min_size"] = lo
        updates["max_size"] = hi
        return self._apply(updates)

    def regenerate(self, seed: int | None = None) -> list[str]:
        """Force new geometry.

        A seed pins the layout; without one the session generator advances and
        the previous seed is dropped, since it no longer reproduces the result.
        """
        with self._lock:
            previous = self.state.seed
            self.state.seed = seed
            try:
                return self.recompute({"seed"})
            except Exception:
                self.state.seed = previous
                raise

    # ── Style inputs ──

    def set_palette(self, palette: Sequence[str]) -> list[str]:
        return self._apply({"palette": list(palette)})

    def update_color(self, index: int, color: str) -> list[str]:
        with self._lock:
            palette = list(self.state.palette)
            if not 0 <= index < len(palette):
                raise IndexError(f"palette index {index} out of range (size {len(palette)})")
            palette[index] = color
            return self._apply({"palette": palette})

    def add_color(self, color: str) -> list[str]:
        with self._lock:
            return self._apply({"palette": [*self.state.palette, color]})

    def remove_color(self, index: int) -> list[str]:
        with self._lock:
            palette = list(self.state.palette)
            if not 0 <= index < len(palette):
                raise IndexError(f"palette index {index} out of range (size {len(palette)})")
            del palette[index]
            return self._apply({"palette": palette})

    def set_blank_fraction(self, value: float) -> list[str]:
        return self._apply({"blank_fraction": normalize_blank_fraction(value)})

    def set_blank_percent(self, value: float) -> list[str]:
        return self._apply({"blank_fraction": percent_to_fraction(value)})

    def set_kind(self, kind: ShapeKind | str) -> list[str]:
        return self._apply({"kind": ShapeKind(kind)})

    # ── Transform inputs ──

    def set_transform(self, scale: float | None = None, rotation: float | None = None) -> list[str]:
        return self._apply(_transform_updates(scale, rotation))

    def update_style(
        self,
        *,
        palette: Sequence[str] | None = None,
        blank_fraction: float | None = None,
        kind: ShapeKind | str | None = None,
        scale: float | None = None,
        rotation: float | None = None,
    ) -> list[str]:
        """Apply style and transform edits together: all of them or none."""
        updates = _transform_updates(scale, rotation)
        if kind is not None:
            try:
                updates["kind"] = ShapeKind(kind)
            except ValueError as e:
                raise InvalidLayoutInput(f"unknown shape kind {kind!r}") from e
        if palette is not None:
            updates["palette"] = list(palette)
        if blank_fraction is not None:
            updates["blank_fraction"] = normalize_blank_fraction(blank_fraction)
        return self._apply(updates)

    # ── Output ──

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            self.ensure_ready()
            s = self.state
            return {
                "revision": s.revision,
                "canvas_width": s.canvas_width,
                "canvas_height": s.canvas_height,
                "min_size": s.min_size,
                "max_size": s.max_size,
                "seed": s.seed,
                "palette": list(s.palette),
                "blank_fraction": s.blank_fraction,
                "kind": s.kind,
                "scale": s.scale,
                "rotation": s.rotation,
                "stable_order": list(s.generation.stable_order),
                "shapes": list(s.styled),
            }


def _check_positive(name: str, value: float) -> None:
    if not is_finite_number(value) or value <= 0:
        raise InvalidLayoutInput(f"{name} must be a positive number, got {value!r}")


def _transform_updates(scale: float | None, rotation: float | None) -> dict[str, Any]:
    updates: dict[str, Any] = {}
    if scale is not None:
        _check_positive("scale", scale)
        updates["scale"] = float(scale)
    if rotation is not None:
        if not is_finite_number(rotation):
            raise InvalidLayoutInput(f"rotation must be finite, got {rotation!r}")
        updates["rotation"] = float(rotation) % 360
    return updates
