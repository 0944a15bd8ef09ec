# src/rune_rotation/core/geometry.py

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Point:
    x: int
    y: int


@dataclass(frozen=True, slots=True)
class Box:
    """
    Axis-aligned rectangle in world tiles.

    Corners may be given in any order; both edges are inclusive.
    """

    x1: int
    y1: int
    x2: int
    y2: int

    @property
    def min_x(self) -> int:
        return min(self.x1, self.x2)

    @property
    def max_x(self) -> int:
        return max(self.x1, self.x2)

    @property
    def min_y(self) -> int:
        return min(self.y1, self.y2)

    @property
    def max_y(self) -> int:
        return max(self.y1, self.y2)

    def contains(self, point: Point) -> bool:
        return self.min_x <= point.x <= self.max_x and self.min_y <= point.y <= self.max_y

    def center(self) -> Point:
        return Point((self.min_x + self.max_x) // 2, (self.min_y + self.max_y) // 2)
