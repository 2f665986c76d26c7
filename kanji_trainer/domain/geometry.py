"""Geometric value objects for reference and live strokes."""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence, Tuple
import math


@dataclass(frozen=True)
class Point:
    """Immutable 2D point. Also used as a direction vector."""
    x: float
    y: float

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def angle_degrees(self) -> float:
        """Direction of the vector in degrees, in (-180, 180]."""
        return math.degrees(math.atan2(self.y, self.x))

    def to_tuple(self) -> Tuple[float, float]:
        """Convert to tuple for compatibility."""
        return (self.x, self.y)

    def to_list(self) -> List[float]:
        """Convert to list for JSON serialization."""
        return [float(self.x), float(self.y)]

    @classmethod
    def from_tuple(cls, t: Sequence[float]) -> Point:
        """Create from tuple or two-element list."""
        return cls(float(t[0]), float(t[1]))


Polyline = List[Point]


def polyline_to_list(points: Sequence[Point]) -> List[List[float]]:
    """Convert a polyline to nested lists for JSON serialization."""
    return [p.to_list() for p in points]


def polyline_from_list(values: Sequence[Sequence[float]]) -> Polyline:
    """Create a polyline from nested [x, y] lists."""
    return [Point.from_tuple(v) for v in values]
