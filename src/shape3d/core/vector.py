"""Vector utilities for double precision 3D geometry.

This module provides the small set of vector operations the intersection
engine is written against. Vectors are plain NumPy float64 arrays of shape
(3,); the helpers return Python floats for scalar results so that branch
conditions read naturally.

All tolerance comparisons in the package use the single absolute constant
EPSILON defined here.

Example:
    >>> from src.shape3d.core.vector import vec3, cross, normalize
    >>> x = vec3(1.0, 0.0, 0.0)
    >>> y = vec3(0.0, 1.0, 0.0)
    >>> normalize(cross(x, y))
    array([0., 0., 1.])
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Union

import numpy as np
import numpy.typing as npt

# Absolute tolerance for zero vectors, planarity and boundary inclusion
EPSILON = 1e-10

# Type alias for 3D vectors
Vec3 = npt.NDArray[np.float64]

VectorLike = Union[Vec3, Sequence[float]]


def vec3(x: float, y: float, z: float) -> Vec3:
    """Create a 3D vector from its components.

    Args:
        x: X component.
        y: Y component.
        z: Z component.

    Returns:
        A float64 array of shape (3,).
    """
    return np.array((x, y, z), dtype=np.float64)


def as_vec3(value: VectorLike) -> Vec3:
    """Convert a sequence of three numbers to a 3D vector.

    Args:
        value: Any sequence or array holding three numbers.

    Returns:
        A new float64 array of shape (3,).

    Raises:
        ValueError: If the value does not hold exactly three components.
    """
    arr = np.array(value, dtype=np.float64).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"Expected 3 components, got shape {np.shape(value)}")
    return arr


def frozen_vec3(value: VectorLike) -> Vec3:
    """Convert a value to a read-only 3D vector.

    Shapes store their points as frozen arrays so that the intersector can
    never mutate an input.
    """
    arr = as_vec3(value)
    arr.setflags(write=False)
    return arr


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product of two vectors."""
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Compute the cross product a x b."""
    return np.array(
        (
            a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0],
        ),
        dtype=np.float64,
    )


def length_squared(v: Vec3) -> float:
    """Compute the squared length of a vector.

    This avoids the square root when only comparing magnitudes.
    """
    return dot(v, v)


def length(v: Vec3) -> float:
    """Compute the Euclidean length of a vector."""
    return math.sqrt(dot(v, v))


def distance(a: Vec3, b: Vec3) -> float:
    """Compute the distance between two points."""
    return length(a - b)


def normalize(v: Vec3) -> Vec3:
    """Normalize a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.
        If v is zero-length, returns a zero vector.
    """
    n = length(v)
    if n < EPSILON:
        return np.zeros(3, dtype=np.float64)
    return v / n


def near_zero(v: Vec3, tolerance: float = EPSILON) -> bool:
    """Check whether a vector's length is below the tolerance."""
    return length(v) < tolerance


def any_perpendicular(v: Vec3) -> Vec3:
    """Return a unit vector perpendicular to v.

    Picks the world axis least aligned with v to keep the cross product
    well conditioned.
    """
    a = np.array((1.0, 0.0, 0.0))
    if abs(v[0]) > 0.9 * length(v):
        a = np.array((0.0, 1.0, 0.0))
    return normalize(cross(v, a))
