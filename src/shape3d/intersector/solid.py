"""Intersection algorithms involving spheres.

- Line family: the robust quadratic gives the surface parameters, which are
  clipped to the shape's domain. Finite endpoints inside the ball are also
  witnesses, so a segment buried in the sphere still hits.
- Planar shapes: the plane cuts the ball in a circle (a single point when
  tangent); the shape is then intersected with that coplanar circle.
- Sphere pairs: reported by a single representative point, either the
  tangent point, the center of the intersection circle, or the center of
  the nested sphere.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from typing import Any

from src.shape3d.core.vector import EPSILON, Vec3, distance, dot
from src.shape3d.geometry.disk import Circle
from src.shape3d.geometry.kinds import POLYGON_KINDS, kind_of
from src.shape3d.geometry.sphere import line_sphere_parameters
from src.shape3d.intersector.containment import sphere_contains_point
from src.shape3d.intersector.curved import iter_disk_disk, iter_polygon_disk
from src.shape3d.intersector.planar import clip_parameter, plane_of


def iter_linear_sphere(linear: Any, sphere: Any) -> Iterator[Vec3]:
    """Yield the points a line-family shape shares with a sphere."""
    origin, span, t_min, t_max = linear.parametric_form()
    roots = line_sphere_parameters(sphere, origin, span)
    if roots is None:
        return
    for t in roots:
        t = clip_parameter(t, t_min, t_max)
        if t is not None:
            yield origin + span * t
    for t in (t_min, t_max):
        if math.isinf(t):
            continue
        p = origin + span * t
        if sphere_contains_point(sphere, p):
            yield p


def cross_section(sphere: Any, ref: Vec3, normal: Vec3) -> Circle | None:
    """Cut a sphere with a plane.

    Args:
        sphere: The sphere to cut.
        ref: A point on the plane.
        normal: Unit normal of the plane.

    Returns:
        The circle where the plane meets the ball, of radius zero when the
        plane is tangent, or None if the plane misses the sphere.
    """
    offset = dot(sphere.center - ref, normal)
    if abs(offset) > sphere.radius + EPSILON:
        return None
    radius = math.sqrt(max(sphere.radius * sphere.radius - offset * offset, 0.0))
    return Circle(center=sphere.center - normal * offset, radius=radius, axis=normal)


def iter_planar_sphere(shape: Any, sphere: Any) -> Iterator[Vec3]:
    """Yield the points a polygon, circle or sector shares with a sphere."""
    ref, normal = plane_of(shape)
    section = cross_section(sphere, ref, normal)
    if section is None:
        return
    if kind_of(shape) in POLYGON_KINDS:
        yield from iter_polygon_disk(shape, section)
    else:
        yield from iter_disk_disk(shape, section)


def iter_sphere_sphere(sphere_a: Any, sphere_b: Any) -> Iterator[Vec3]:
    """Yield one representative point shared by two spheres, if any."""
    c1, r1 = sphere_a.center, sphere_a.radius
    c2, r2 = sphere_b.center, sphere_b.radius
    d = distance(c1, c2)
    if d > r1 + r2 + EPSILON:
        return
    if d < EPSILON:
        yield c1
        return

    u = (c2 - c1) / d
    if abs(d - (r1 + r2)) <= EPSILON:
        yield c1 + u * r1
        return

    inner_gap = abs(r1 - r2)
    if d <= inner_gap + EPSILON:
        if abs(d - inner_gap) <= EPSILON:
            yield c1 + u * r1 if r1 >= r2 else c2 - u * r2
        else:
            yield c2 if r1 >= r2 else c1
        return

    a = (r1 * r1 - r2 * r2 + d * d) / (2.0 * d)
    yield c1 + u * a
