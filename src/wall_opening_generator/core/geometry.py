# File: src/wall_opening_generator/core/geometry.py
"""
Vector helpers for tuple-based 3D geometry.

All functions take and return plain (x, y, z) tuples so the core stays
independent of any host geometry kernel.
"""

from typing import Tuple
import math

Vec = Tuple[float, float, float]


def add(v1: Vec, v2: Vec) -> Vec:
    return (v1[0] + v2[0], v1[1] + v2[1], v1[2] + v2[2])


def subtract(v1: Vec, v2: Vec) -> Vec:
    return (v1[0] - v2[0], v1[1] - v2[1], v1[2] - v2[2])


def scale(v: Vec, factor: float) -> Vec:
    return (v[0] * factor, v[1] * factor, v[2] * factor)


def dot_product(v1: Vec, v2: Vec) -> float:
    """
    Calculate dot product of two 3D vectors.

    Args:
        v1: First vector (x, y, z)
        v2: Second vector (x, y, z)

    Returns:
        Dot product scalar
    """
    return v1[0] * v2[0] + v1[1] * v2[1] + v1[2] * v2[2]


def cross_product(v1: Vec, v2: Vec) -> Vec:
    return (
        v1[1] * v2[2] - v1[2] * v2[1],
        v1[2] * v2[0] - v1[0] * v2[2],
        v1[0] * v2[1] - v1[1] * v2[0],
    )


def vector_length(v: Vec) -> float:
    return math.sqrt(v[0]**2 + v[1]**2 + v[2]**2)


def distance_3d(p1: Vec, p2: Vec) -> float:
    """
    Calculate 3D distance between two points.

    Args:
        p1: First point (x, y, z)
        p2: Second point (x, y, z)

    Returns:
        Distance in same units as input
    """
    dx = p2[0] - p1[0]
    dy = p2[1] - p1[1]
    dz = p2[2] - p1[2]
    return math.sqrt(dx**2 + dy**2 + dz**2)


def normalize_vector(v: Vec) -> Vec:
    """
    Normalize a 3D vector to unit length.

    Args:
        v: Vector (x, y, z)

    Returns:
        Unit vector (x, y, z), or the zero vector if v is degenerate
    """
    length = vector_length(v)
    if length < 1e-10:
        return (0.0, 0.0, 0.0)
    return (v[0] / length, v[1] / length, v[2] / length)


def is_finite_vector(v: Vec) -> bool:
    return all(math.isfinite(c) for c in v)


def is_unit_vector(v: Vec, tolerance: float = 1e-6) -> bool:
    return abs(vector_length(v) - 1.0) <= tolerance
