"""Two-dimensional vectors and point/segment geometry."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector2:
    """An immutable 2D vector."""

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def splat(cls, value: float) -> Vector2:
        """Vector with both components set to ``value``."""
        return cls(value, value)

    @classmethod
    def from_angle(cls, angle: float) -> Vector2:
        """Unit vector pointing along ``angle`` (radians)."""
        return cls(math.cos(angle), math.sin(angle))

    def distance(self, other: Vector2) -> float:
        """Euclidean distance to ``other``."""
        dx = self.x - other.x
        dy = self.y - other.y
        return math.sqrt(dx * dx + dy * dy)

    def length(self) -> float:
        """Length of the vector."""
        return math.sqrt(self.x * self.x + self.y * self.y)

    def normalized(self) -> Vector2:
        """Unit vector in the same direction; the zero vector stays zero."""
        length = self.length()
        if length == 0:
            return Vector2(0.0, 0.0)
        return Vector2(self.x / length, self.y / length)

    def dot(self, other: Vector2) -> float:
        """Dot product with ``other``."""
        return self.x * other.x + self.y * other.y

    def rotated(self, angle: float) -> Vector2:
        """This vector rotated by ``angle`` radians."""
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return Vector2(self.x * cos_a - self.y * sin_a, self.x * sin_a + self.y * cos_a)

    def angle_to(self, other: Vector2) -> float:
        """Unsigned angle in radians between this vector and ``other``.

        Returns NaN when either vector has zero length.
        """
        denominator = self.length() * other.length()
        if denominator == 0:
            return math.nan
        cosine = max(-1.0, min(1.0, self.dot(other) / denominator))
        return math.acos(cosine)

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scale: float) -> Vector2:
        return Vector2(self.x * scale, self.y * scale)

    def __truediv__(self, divisor: float) -> Vector2:
        return Vector2(self.x / divisor, self.y / divisor)


def distance_to_line(line_start: Vector2, line_end: Vector2, point: Vector2) -> float:
    """Shortest distance from ``point`` to the segment ``line_start``-``line_end``."""
    line_length = line_end.distance(line_start)
    if line_length == 0.0:
        return line_start.distance(point)

    u = (
        (point.x - line_start.x) * (line_end.x - line_start.x)
        + (point.y - line_start.y) * (line_end.y - line_start.y)
    ) / (line_length * line_length)

    if u < 0.0:
        return point.distance(line_start)
    if u > 1.0:
        return point.distance(line_end)

    closest = Vector2(
        line_start.x + u * (line_end.x - line_start.x),
        line_start.y + u * (line_end.y - line_start.y),
    )
    return point.distance(closest)