"""Small vector and bounding-box helpers used by the complexity core."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

Vector3 = tuple[float, float, float]


def _vec(values: Iterable[float]) -> Vector3:
    x, y, z = values
    return (float(x), float(y), float(z))


def _sub(a: Sequence[float], b: Sequence[float]) -> Vector3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _cross(a: Sequence[float], b: Sequence[float]) -> Vector3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _length(v: Sequence[float]) -> float:
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def triangle_area(a: Sequence[float], b: Sequence[float], c: Sequence[float]) -> float:
    """Return the area of the triangle with corners a, b and c."""
    return 0.5 * _length(_cross(_sub(b, a), _sub(c, a)))


def normalize(vector: Sequence[float]) -> Vector3:
    """Return the unit vector pointing the same way as ``vector``."""
    length = _length(vector)
    if length == 0.0 or math.isnan(length):
        raise ValueError("cannot normalize a zero-length vector")
    return (vector[0] / length, vector[1] / length, vector[2] / length)


@dataclass(frozen=True)
class AABB:
    """Axis-aligned bounding box."""

    min: Vector3
    max: Vector3

    def __post_init__(self) -> None:
        object.__setattr__(self, "min", _vec(self.min))
        object.__setattr__(self, "max", _vec(self.max))

    @classmethod
    def from_flat(cls, coordinates: Sequence[float]) -> "AABB":
        """Build the box enclosing a flat x, y, z coordinate list."""
        if len(coordinates) < 3:
            raise ValueError("at least one point is needed to build a bounding box")
        if len(coordinates) % 3:
            raise ValueError("coordinate count must be a multiple of three")
        xs = coordinates[0::3]
        ys = coordinates[1::3]
        zs = coordinates[2::3]
        return cls((min(xs), min(ys), min(zs)), (max(xs), max(ys), max(zs)))

    def center(self) -> Vector3:
        return tuple((lo + hi) / 2.0 for lo, hi in zip(self.min, self.max))  # type: ignore[return-value]

    def size(self) -> Vector3:
        return _sub(self.max, self.min)

    def longest_axis_length(self) -> float:
        return max(self.size())

    def scaled(self, factor: float) -> "AABB":
        """Scale the box about the origin."""
        a = tuple(v * factor for v in self.min)
        b = tuple(v * factor for v in self.max)
        return AABB(
            tuple(map(min, a, b)),  # type: ignore[arg-type]
            tuple(map(max, a, b)),  # type: ignore[arg-type]
        )

    def translated(self, offset: Sequence[float]) -> "AABB":
        return AABB(
            tuple(v + o for v, o in zip(self.min, offset)),  # type: ignore[arg-type]
            tuple(v + o for v, o in zip(self.max, offset)),  # type: ignore[arg-type]
        )