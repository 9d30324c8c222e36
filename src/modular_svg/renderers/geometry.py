"""2-D vector and bounding-box helpers used by the emitter."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vec2:
    x: float
    y: float

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def scale(self, s: float) -> Vec2:
        return Vec2(self.x * s, self.y * s)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def perp(self) -> Vec2:
        """Rotate 90 degrees counter-clockwise."""
        return Vec2(-self.y, self.x)

    def unit(self) -> Vec2:
        n = self.length()
        return Vec2(0.0, 0.0) if n == 0 else self.scale(1 / n)


@dataclass(frozen=True)
class BoundingBox:
    start: Vec2
    end: Vec2

    @classmethod
    def from_points(cls, *pts: Vec2) -> BoundingBox:
        xs = [p.x for p in pts]
        ys = [p.y for p in pts]
        return cls(Vec2(min(xs), min(ys)), Vec2(max(xs), max(ys)))

    @classmethod
    def from_rect(cls, x: float, y: float, width: float, height: float) -> BoundingBox:
        return cls.from_points(Vec2(x, y), Vec2(x + width, y + height))

    def union(self, other: BoundingBox) -> BoundingBox:
        return BoundingBox(
            Vec2(min(self.start.x, other.start.x), min(self.start.y, other.start.y)),
            Vec2(max(self.end.x, other.end.x), max(self.end.y, other.end.y)),
        )

    @property
    def width(self) -> float:
        return self.end.x - self.start.x

    @property
    def height(self) -> float:
        return self.end.y - self.start.y
