"""Tests for the integer vector helpers."""
from __future__ import annotations

from hailstorm.geometry import Vector3


def test_vector_arithmetic_is_exact() -> None:
    big = Vector3(400_000_000_000_000, -3, 7)

    assert big * 10**6 == Vector3(400_000_000_000_000_000_000, -3_000_000, 7_000_000)
    assert 2 * Vector3(1, 2, 3) == Vector3(2, 4, 6)
    assert Vector3(1, 2, 3) + Vector3(4, 5, 6) - Vector3(5, 7, 9) == Vector3(0, 0, 0)


def test_cross_2d_ignores_z_and_is_antisymmetric() -> None:
    a = Vector3(-2, 1, -2)
    b = Vector3(-1, -1, 99)

    assert a.cross_2d(b) == 3
    assert b.cross_2d(a) == -3
    assert a.cross_2d(a) == 0
