"""Partition configuration — tunables for the subdivision and styling passes."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PartitionConfig:
    """Controls when subdivision stops and how shapes are styled."""

    # Once a rectangle fits inside max_size it stops with this probability.
    # The remainder keeps subdividing for visual variety.
    stop_probability: float = 0.9

    # Guards against runaway subdivision (huge canvas / tiny min size)
    max_depth: int = 64
    max_leaves: int = 20_000

    # Blank shapes take the neutral color; an empty palette falls back to
    # a single gray so shapes are never silently blanked.
    neutral_color: str = "#ffffff"
    fallback_color: str = "#cccccc"

    @classmethod
    def from_settings(cls) -> PartitionConfig:
        from mosaic.config import settings

        return cls(
            stop_probability=settings.mosaic_stop_probability,
            max_depth=settings.mosaic_max_depth,
            max_leaves=settings.mosaic_max_leaves,
            neutral_color=settings.mosaic_neutral_color,
            fallback_color=settings.mosaic_fallback_color,
        )
