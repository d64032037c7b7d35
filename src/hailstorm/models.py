"""Data models shared by the crossing counter and the rock solver."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from .geometry import Vector3


@dataclass(frozen=True)
class Particle:
    """A hailstone with an integer starting position and constant velocity."""

    position: Vector3
    velocity: Vector3

    @classmethod
    def from_tuples(cls, position: Sequence[int], velocity: Sequence[int]) -> "Particle":
        return cls(Vector3(*position), Vector3(*velocity))

    def position_at(self, time: int) -> Vector3:
        return self.position + self.velocity * time


@dataclass(frozen=True)
class Bound:
    """Inclusive square window ``[minimum, maximum] x [minimum, maximum]``."""

    minimum: int
    maximum: int

    def __post_init__(self) -> None:
        if self.minimum > self.maximum:
            raise ValueError(
                f"Bound minimum {self.minimum} exceeds maximum {self.maximum}"
            )

    def scaled_contains(self, value: int, scale: int) -> bool:
        """Check ``minimum <= value / scale <= maximum`` without dividing.

        ``scale`` must be positive.
        """
        return scale * self.minimum <= value <= scale * self.maximum


@dataclass(frozen=True)
class RockSolution:
    """Outcome of a Newton solve for the rock trajectory."""

    position: Tuple[int, int, int]
    state: Tuple[float, ...]
    iterations: int
    residual_norm: float

    @property
    def velocity(self) -> Tuple[int, int, int]:
        vx, vy, vz = (round_half_away(value) for value in self.state[3:6])
        return (vx, vy, vz)

    @property
    def hit_times(self) -> Tuple[float, float, float]:
        ta, tb, tc = self.state[6:9]
        return (ta, tb, tc)

    @property
    def coordinate_sum(self) -> int:
        return sum(self.position)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero."""
    if value < 0:
        return -int(-value + 0.5)
    return int(value + 0.5)
