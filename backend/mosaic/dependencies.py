"""FastAPI dependency injection."""

from __future__ import annotations

from mosaic.config import settings
from mosaic.engine.config import PartitionConfig
from mosaic.engine.session import LayoutSession

_session: LayoutSession | None = None


def get_settings():
    return settings


def get_partition_config() -> PartitionConfig:
    return PartitionConfig.from_settings()


def get_session() -> LayoutSession:
    """Process-wide session, built from settings on first use."""
    global _session
    if _session is None:
        _session = LayoutSession.from_settings()
    return _session


def reset_session() -> None:
    global _session
    _session = None
