"""Integer 3D vector math used by the hailstone predicates."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Vector3:
    """Immutable integer 3D vector.

    Components are plain Python ``int`` values, so every product stays exact
    no matter how large the coordinates grow.
    """

    x: int
    y: int
    z: int

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: int) -> "Vector3":
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def cross_2d(self, other: "Vector3") -> int:
        """Z component of the cross product of the XY projections."""
        return self.x * other.y - self.y * other.x

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.x, self.y, self.z)

