"""Write SVG output from styled shapes."""

from __future__ import annotations

from typing import Any, Sequence
from xml.sax.saxutils import escape

from mosaic.engine.context import ShapeKind, StyledShape

_ATTR_ENTITIES = {'"': "&quot;"}


def _attr(value: Any) -> str:
    """Escape a value for use inside a double-quoted attribute."""
    return escape(str(value), _ATTR_ENTITIES)


def _fmt(value: float) -> str:
    """Drop trailing zeros: 40.0 → 40, 12.50 → 12.5."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return text if text not in ("", "-0") else "0"


def shape_to_element(shape: StyledShape) -> dict[str, Any]:
    """Square → <rect>, circle → <ellipse> inscribed in the same bounding box."""
    if shape.kind == ShapeKind.CIRCLE:
        cx, cy = shape.center
        return {
            "tag": "ellipse",
            "id": f"shape-{shape.id}",
            "cx": _fmt(cx),
            "cy": _fmt(cy),
            "rx": _fmt(shape.width / 2),
            "ry": _fmt(shape.height / 2),
            "fill": shape.color,
        }
    return {
        "tag": "rect",
        "id": f"shape-{shape.id}",
        "x": _fmt(shape.x),
        "y": _fmt(shape.y),
        "width": _fmt(shape.width),
        "height": _fmt(shape.height),
        "fill": shape.color,
    }


def shapes_to_elements(shapes: Sequence[StyledShape]) -> list[dict[str, Any]]:
    return [shape_to_element(s) for s in shapes]


def transform_attribute(canvas_w: float, canvas_h: float, scale: float = 1.0, rotation: float = 0.0) -> str:
    """Scale and rotate about the canvas centre; empty when both are identity."""
    if scale == 1.0 and rotation % 360 == 0:
        return ""
    cx, cy = canvas_w / 2, canvas_h / 2
    parts = [f"translate({_fmt(cx)} {_fmt(cy)})"]
    if rotation % 360:
        parts.append(f"rotate({_fmt(rotation)})")
    if scale != 1.0:
        parts.append(f"scale({_fmt(scale)})")
    parts.append(f"translate({_fmt(-cx)} {_fmt(-cy)})")
    return " ".join(parts)


def serialize_svg(
    elements: list[dict[str, Any]],
    canvas_w: float,
    canvas_h: float,
    title: str = "",
    background: str | None = None,
    transform: str = "",
) -> str:
    """Generate SVG markup from element definitions."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg viewBox="0 0 {_fmt(canvas_w)} {_fmt(canvas_h)}" width="{_fmt(canvas_w)}"'
        f' height="{_fmt(canvas_h)}" xmlns="http://www.w3.org/2000/svg" role="img">',
    ]

    if title:
        lines.append(f"  <title>{escape(title)}</title>")
    if background:
        lines.append(f'  <rect width="100%" height="100%" fill="{_attr(background)}" />')

    indent = "  "
    if transform:
        lines.append(f'  <g transform="{_attr(transform)}">')
        indent = "    "

    for elem in elements:
        tag = elem.get("tag", "rect")
        attrs = {k: v for k, v in elem.items() if k != "tag"}
        attr_str = " ".join(f'{k}="{_attr(v)}"' for k, v in attrs.items())
        lines.append(f"{indent}<{tag} {attr_str} />")

    if transform:
        lines.append("  </g>")
    lines.append("</svg>")
    return "\n".join(lines)


def render_mosaic_svg(
    shapes: Sequence[StyledShape],
    canvas_w: float,
    canvas_h: float,
    *,
    scale: float = 1.0,
    rotation: float = 0.0,
    background: str | None = None,
    title: str = "",
) -> str:
    return serialize_svg(
        shapes_to_elements(shapes),
        canvas_w,
        canvas_h,
        title=title,
        background=background,
        transform=transform_attribute(canvas_w, canvas_h, scale, rotation),
    )
