"""Layout errors. Everything derives from ValueError so callers can treat them as bad input."""

from __future__ import annotations


class LayoutError(ValueError):
    """Base class for layout failures."""


class InvalidLayoutInput(LayoutError):
    """Sizes that would break the subdivision progress guarantee."""


class LayoutLimitExceeded(LayoutError):
    """Subdivision went deeper or produced more leaves than allowed."""

    def __init__(self, message: str, *, depth: int = 0, leaves: int = 0) -> None:
        super().__init__(message)
        self.depth = depth
        self.leaves = leaves
