"""
Axis-aligned rectangle collision.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


class HasBounds(Protocol):
    """Anything with a top-left position and a size."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class RectCollider:
    """
    Rectangle collider (top-left + size).
    """

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def of(cls, thing: HasBounds) -> RectCollider:
        """Snapshot the bounds of an entity."""
        return cls(thing.x, thing.y, thing.width, thing.height)

    def intersects(self, other: RectCollider) -> bool:
        """
        Half-open overlap test on both axes.

        Rectangles that only share an edge do not intersect.
        """
        return (
            self.x < other.x + other.width
            and self.x + self.width > other.x
            and self.y < other.y + other.height
            and self.y + self.height > other.y
        )
