"""Immutable grid coordinates."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """A cell position on a board: column ``x``, row ``y`` (row 0 is the top)."""

    x: int = 0
    y: int = 0

    def shifted(self, dx: int, dy: int) -> Point:
        """Return a new point moved by ``dx`` columns and ``dy`` rows."""
        return Point(self.x + dx, self.y + dy)