"""Sphere primitive with robust line-sphere parameter solving.

A sphere here is a filled ball: a point is contained when its distance to
the center does not exceed the radius.

Surface crossings of a parametric line ``origin + t * span`` are found with
the robust quadratic formula from Ray Tracing Gems, which avoids
catastrophic cancellation when b^2 is nearly equal to 4ac.

Example:
    >>> from src.shape3d.geometry.sphere import make_sphere, line_sphere_parameters
    >>> ball = make_sphere((0, 0, 0), 1.0)
    >>> line_sphere_parameters(ball, ball.center + (0, 0, 5), (0, 0, -1))
    (4.0, 6.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar

from src.shape3d.core.errors import ShapeError
from src.shape3d.core.vector import (
    EPSILON,
    Vec3,
    VectorLike,
    as_vec3,
    dot,
    frozen_vec3,
)
from src.shape3d.geometry.kinds import ShapeKind


@dataclass(frozen=True, eq=False)
class Sphere:
    """A filled sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (read-only vec3).
        radius: The radius of the sphere (non-negative float).
    """

    center: Vec3
    radius: float

    kind: ClassVar[ShapeKind] = ShapeKind.SPHERE

    def contains_point(self, point: VectorLike, tolerance: float = EPSILON) -> bool:
        from src.shape3d.intersector.containment import sphere_contains_point

        return sphere_contains_point(self, as_vec3(point), tolerance)


def solve_quadratic_robust(h: float, a: float, c: float) -> tuple[float, float] | None:
    """Solve a*t^2 + 2*h*t + c = 0 using a numerically stable method.

    Args:
        h: Half of the linear coefficient.
        a: Quadratic coefficient (must be non-zero).
        c: Constant term.

    Returns:
        Tuple of (t0, t1) where t0 <= t1, or None if there is no real root.
        A tangent contact returns a repeated root.
    """
    discriminant = h * h - a * c
    if discriminant < 0.0:
        return None
    sqrt_d = math.sqrt(discriminant)

    # Robust quadratic formula: use sign of h to avoid catastrophic cancellation
    # q = -(h + sign(h) * sqrt(discriminant))
    sign_h = -1.0 if h < 0.0 else 1.0
    q = -(h + sign_h * sqrt_d)

    if abs(q) < 1e-300:
        # h and the discriminant are both zero: double root at the origin
        t0 = t1 = -h / a
    else:
        t0 = q / a
        t1 = c / q

    if t0 > t1:
        t0, t1 = t1, t0
    return t0, t1


def line_sphere_parameters(
    sphere: Sphere, origin: VectorLike, span: VectorLike
) -> tuple[float, float] | None:
    """Find where the line origin + t * span crosses the sphere surface.

    The crossing is found by solving:
        |origin + t * span - center|^2 = radius^2

    Expanding and rearranging gives a*t^2 + 2*h*t + c = 0 with
    a = span.span, h = span.oc, c = oc.oc - radius^2, oc = origin - center.

    Args:
        sphere: The sphere to test.
        origin: Line origin.
        span: Line span vector (need not be normalized, must be non-zero).

    Returns:
        The two surface parameters (t0 <= t1), or None if the line misses.
    """
    o = as_vec3(origin)
    d = as_vec3(span)
    oc = o - sphere.center
    a = dot(d, d)
    h = dot(d, oc)
    c = dot(oc, oc) - sphere.radius * sphere.radius
    return solve_quadratic_robust(h, a, c)


def make_sphere(center: VectorLike, radius: float) -> Sphere:
    """Create a sphere from center and radius.

    Raises:
        ShapeError: If the radius is negative.
    """
    if radius < 0.0:
        raise ShapeError(f"Radius must be non-negative, got {radius}")
    return Sphere(center=frozen_vec3(center), radius=float(radius))
