"""Aabb — 2D axis-aligned bounding box in millimetres.

Pure integer math; no shapely.  All interval tests use open intervals, so
rectangles that merely share an edge neither intersect nor overlap.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from planforge.models.document import Point2Mm


@dataclass(frozen=True)
class Aabb:
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @classmethod
    def from_min_max(cls, min_x: int, min_y: int, max_x: int, max_y: int) -> Aabb:
        return cls(min_x, min_y, max_x, max_y)

    @classmethod
    def from_points(cls, points: Iterable[Point2Mm]) -> Aabb | None:
        """Bounding box of *points*, or None when there are none."""
        pts = list(points)
        if not pts:
            return None
        xs = [p.x for p in pts]
        ys = [p.y for p in pts]
        return cls(min(xs), min(ys), max(xs), max(ys))

    @property
    def width(self) -> int:
        return max(0, self.max_x - self.min_x)

    @property
    def depth(self) -> int:
        return max(0, self.max_y - self.min_y)

    def intersects(self, other: Aabb) -> bool:
        return self.overlaps_x(other) and self.overlaps_y(other)

    def overlaps_x(self, other: Aabb) -> bool:
        return self.min_x < other.max_x and self.max_x > other.min_x

    def overlaps_y(self, other: Aabb) -> bool:
        return self.min_y < other.max_y and self.max_y > other.min_y

    def gap_x(self, other: Aabb) -> int:
        """Separation along X; 0 when the boxes overlap on X.

        Only meaningful once the caller has checked :meth:`overlaps_y`.
        """
        if self.max_x <= other.min_x:
            return other.min_x - self.max_x
        if other.max_x <= self.min_x:
            return self.min_x - other.max_x
        return 0

    def gap_y(self, other: Aabb) -> int:
        """Separation along Y; 0 when the boxes overlap on Y."""
        if self.max_y <= other.min_y:
            return other.min_y - self.max_y
        if other.max_y <= self.min_y:
            return self.min_y - other.max_y
        return 0

    def area_mm2(self) -> int:
        return self.width * self.depth
