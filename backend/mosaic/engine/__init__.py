"""Mosaic layout engine — partition, stable shuffle, style assignment."""

from mosaic.engine.context import BaseShape, LayoutGeneration, ShapeKind, StyledShape
from mosaic.engine.errors import InvalidLayoutInput, LayoutError, LayoutLimitExceeded
from mosaic.engine.layout import clamp_size_bounds, compute_styled_shapes, regenerate_layout
from mosaic.engine.partition import partition
from mosaic.engine.session import LayoutSession

__all__ = [
    "BaseShape",
    "StyledShape",
    "ShapeKind",
    "LayoutGeneration",
    "LayoutError",
    "InvalidLayoutInput",
    "LayoutLimitExceeded",
    "partition",
    "regenerate_layout",
    "compute_styled_shapes",
    "clamp_size_bounds",
    "LayoutSession",
]
