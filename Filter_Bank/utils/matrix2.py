"""
Fixed-size 2x2 / 2x1 arithmetic for the two-state Kalman filter.

Matrices are row-major nested tuples ((a, b), (c, d)); vectors are (x, y).
Dimensions never change, so every operation is written out explicitly.
"""

from typing import Tuple

Vec2 = Tuple[float, float]
Mat2 = Tuple[Vec2, Vec2]

IDENTITY: Mat2 = ((1.0, 0.0), (0.0, 1.0))


def mat_vec(m: Mat2, v: Vec2) -> Vec2:
    """(2x2) * (2x1)."""
    return (
        m[0][0] * v[0] + m[0][1] * v[1],
        m[1][0] * v[0] + m[1][1] * v[1],
    )


def mat_mul(a: Mat2, b: Mat2) -> Mat2:
    """(2x2) * (2x2)."""
    return (
        (a[0][0] * b[0][0] + a[0][1] * b[1][0], a[0][0] * b[0][1] + a[0][1] * b[1][1]),
        (a[1][0] * b[0][0] + a[1][1] * b[1][0], a[1][0] * b[0][1] + a[1][1] * b[1][1]),
    )


def mat_add(a: Mat2, b: Mat2) -> Mat2:
    return (
        (a[0][0] + b[0][0], a[0][1] + b[0][1]),
        (a[1][0] + b[1][0], a[1][1] + b[1][1]),
    )


def transpose(m: Mat2) -> Mat2:
    return ((m[0][0], m[1][0]), (m[0][1], m[1][1]))


def scalar_mul(s: float, m: Mat2) -> Mat2:
    return ((s * m[0][0], s * m[0][1]), (s * m[1][0], s * m[1][1]))


def outer(u: Vec2, v: Vec2) -> Mat2:
    """(2x1) * (1x2)."""
    return ((u[0] * v[0], u[0] * v[1]), (u[1] * v[0], u[1] * v[1]))


def trace(m: Mat2) -> float:
    return m[0][0] + m[1][1]
