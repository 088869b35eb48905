"""Point containment predicates for every shape kind.

These are the boolean tests the intersection algorithms use to validate
candidate points, and what each shape's ``contains_point`` delegates to.

Predicate families:
    polygon: out-of-plane distance <= tolerance, then a half-plane test per
        edge: (edge x (point - edge_start)) . normal / |edge| >= -tolerance,
        a signed distance to the edge line (boundary inclusive)
    curved: out-of-plane distance <= tolerance, in-plane radial distance
        <= radius, and for sectors the polar angle measured from the zero
        direction must fall inside the signed angular range
    line family: |direction x (point - origin)| <= tolerance plus the
        parametric domain check ([0, 1], [0, inf) or unconstrained)
    sphere: distance to the center <= radius

All predicates take an optional tolerance that defaults to EPSILON.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from typing import Any

from src.shape3d.core.vector import EPSILON, Vec3, cross, dot, length
from src.shape3d.geometry.kinds import ShapeKind, kind_of

_FULL_TURN = 2.0 * math.pi


def polygon_contains_point(
    vertices: Sequence[Vec3],
    normal: Vec3,
    point: Vec3,
    tolerance: float = EPSILON,
) -> bool:
    """Check whether a point lies in a convex polygon (boundary inclusive).

    Args:
        vertices: Polygon vertices, counter-clockwise about normal.
        normal: Unit normal of the polygon plane.
        point: The point to test.
        tolerance: Allowed out-of-plane distance and edge slack.

    Returns:
        True if the point is inside or on the boundary of the polygon.
    """
    if abs(dot(point - vertices[0], normal)) > tolerance:
        return False

    # Signed distance to each edge line, so the slack is a length
    count = len(vertices)
    for i in range(count):
        start = vertices[i]
        edge = vertices[(i + 1) % count] - start
        if dot(cross(edge, point - start), normal) < -tolerance * length(edge):
            return False
    return True


def triangle_contains_point(triangle: Any, point: Vec3, tolerance: float = EPSILON) -> bool:
    """Check whether a point lies in a triangle (boundary inclusive)."""
    return polygon_contains_point(triangle.get_vertices(), triangle.normal(), point, tolerance)


def rectangle_contains_point(rectangle: Any, point: Vec3, tolerance: float = EPSILON) -> bool:
    """Check whether a point lies in a rectangle (boundary inclusive)."""
    return polygon_contains_point(rectangle.get_vertices(), rectangle.normal(), point, tolerance)


def _in_plane_offset(center: Vec3, normal: Vec3, point: Vec3, tolerance: float) -> Vec3 | None:
    """Project point - center onto the plane, or None if the point is off-plane."""
    v = point - center
    dist = dot(v, normal)
    if abs(dist) > tolerance:
        return None
    return v - normal * dist


def circle_contains_point(circle: Any, point: Vec3, tolerance: float = EPSILON) -> bool:
    """Check whether a point lies in a filled circle (rim inclusive)."""
    offset = _in_plane_offset(circle.center, circle.normal(), point, tolerance)
    if offset is None:
        return False
    return length(offset) <= circle.radius + tolerance


def angle_in_sweep(angle: float, sweep: float, slack: float = 0.0) -> bool:
    """Check whether a polar angle lies within a signed sweep from zero.

    The angle is normalized modulo a full turn before comparison. A positive
    sweep covers [0, sweep]; a negative sweep covers [sweep, 0].

    Args:
        angle: Polar angle in radians, any value.
        sweep: Signed sweep in radians, in [-2*pi, 2*pi].
        slack: Angular tolerance added on both ends of the sweep.

    Returns:
        True if the angle lies inside the sweep.
    """
    if abs(sweep) >= _FULL_TURN:
        return True
    if sweep < 0.0:
        angle = -angle
        sweep = -sweep
    a = angle % _FULL_TURN
    return a <= sweep + slack or a >= _FULL_TURN - slack


def sector_contains_point(sector: Any, point: Vec3, tolerance: float = EPSILON) -> bool:
    """Check whether a point lies in a filled sector (boundary inclusive)."""
    normal = sector.normal()
    offset = _in_plane_offset(sector.center, normal, point, tolerance)
    if offset is None:
        return False
    radial = length(offset)
    if radial > sector.radius + tolerance:
        return False
    if radial <= tolerance or sector.is_full:
        return True

    # Polar angle in the (direction, normal x direction) frame
    x = dot(offset, sector.direction)
    y = dot(offset, cross(normal, sector.direction))
    angle = math.atan2(y, x)
    return angle_in_sweep(angle, sector.angle, slack=tolerance / radial)


def line_contains_point(line: Any, point: Vec3, tolerance: float = EPSILON) -> bool:
    """Check whether a point lies on an infinite line."""
    return length(cross(line.direction, point - line.point)) <= tolerance


def ray_contains_point(ray: Any, point: Vec3, tolerance: float = EPSILON) -> bool:
    """Check whether a point lies on a ray."""
    offset = point - ray.point
    if length(cross(ray.direction, offset)) > tolerance:
        return False
    return dot(offset, ray.direction) >= -tolerance


def segment_contains_point(segment: Any, point: Vec3, tolerance: float = EPSILON) -> bool:
    """Check whether a point lies on a segment (endpoints inclusive)."""
    direction = segment.direction
    offset = point - segment.point1
    if length(cross(direction, offset)) > tolerance:
        return False
    s = dot(offset, direction)
    return -tolerance <= s <= segment.length + tolerance


def sphere_contains_point(sphere: Any, point: Vec3, tolerance: float = EPSILON) -> bool:
    """Check whether a point lies in a filled sphere (surface inclusive)."""
    return length(point - sphere.center) <= sphere.radius + tolerance


_PREDICATES: dict[ShapeKind, Callable[[Any, Vec3, float], bool]] = {
    ShapeKind.LINE: line_contains_point,
    ShapeKind.RAY: ray_contains_point,
    ShapeKind.SEGMENT: segment_contains_point,
    ShapeKind.TRIANGLE: triangle_contains_point,
    ShapeKind.RECTANGLE: rectangle_contains_point,
    ShapeKind.CIRCLE: circle_contains_point,
    ShapeKind.SECTOR: sector_contains_point,
    ShapeKind.SPHERE: sphere_contains_point,
}


def shape_contains_point(shape: Any, point: Vec3, tolerance: float = EPSILON) -> bool:
    """Dispatch to the containment predicate for the shape's kind.

    Raises:
        TypeError: If the shape has no known kind tag.
    """
    kind = kind_of(shape)
    if kind is None:
        raise TypeError(f"Object of type {type(shape).__name__} has no shape kind")
    return _PREDICATES[kind](shape, point, tolerance)
