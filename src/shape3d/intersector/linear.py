"""Line-family intersection algorithms.

Lines, rays and segments are all handled through their parametric form
``origin + t * span`` with a per-shape domain for t, so one routine covers
every line-family pair.

Two parametric lines either cross, run parallel, or are skew:

- Crossing: the closest-point parameters on each line are
      t1 = ((p2 - p1) x d2) . n / n.n
      t2 = ((p2 - p1) x d1) . n / n.n,   n = d1 x d2
  and the lines meet only if those closest points coincide within eps.
- Parallel: the lines meet only if collinear, in which case the second
  domain is mapped into the first line's parameter and the two parameter
  intervals are intersected.

Line-family shapes against planar shapes use the edge-plane clipping of the
planar solver; when the line lies in the shape's plane its crossings with
the shape's boundary are used instead.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from typing import Any

from src.shape3d.core.vector import EPSILON, Vec3, cross, distance, dot, length, normalize
from src.shape3d.geometry.disk import Sector
from src.shape3d.geometry.kinds import DISK_KINDS, POLYGON_KINDS, kind_of
from src.shape3d.geometry.linear import ParametricForm
from src.shape3d.geometry.sphere import Sphere, line_sphere_parameters
from src.shape3d.intersector.containment import shape_contains_point
from src.shape3d.intersector.planar import (
    clip_parameter,
    edge_form,
    iter_plane_crossings,
    plane_of,
)


def _map_parameter(t0: float, k: float, s: float) -> float:
    """Evaluate t0 + s * k, keeping infinite s infinite without inf * 0."""
    if math.isinf(s):
        return math.copysign(math.inf, s * k)
    return t0 + s * k


def iter_form_crossings(form_a: ParametricForm, form_b: ParametricForm) -> Iterator[Vec3]:
    """Yield the points shared by two parametric line forms.

    Args:
        form_a: (origin, span, t_min, t_max) of the first shape.
        form_b: (origin, span, t_min, t_max) of the second shape.

    Yields:
        The single crossing point, or for collinear overlaps the finite
        ends of the overlap. Two infinite collinear lines yield the point
        of the common line closest to the world origin.
    """
    p1, d1, a_min, a_max = form_a
    p2, d2, b_min, b_max = form_b
    w = p2 - p1
    u1 = normalize(d1)

    if length(cross(u1, normalize(d2))) >= EPSILON:
        n = cross(d1, d2)
        nn = dot(n, n)
        t1 = dot(cross(w, d2), n) / nn
        t2 = dot(cross(w, d1), n) / nn
        c1 = p1 + d1 * t1
        c2 = p2 + d2 * t2
        # Skew lines never meet
        if distance(c1, c2) > EPSILON:
            return
        t1 = clip_parameter(t1, a_min, a_max)
        t2 = clip_parameter(t2, b_min, b_max)
        if t1 is None or t2 is None:
            return
        yield p1 + d1 * t1
        return

    if length(cross(w, u1)) > EPSILON:
        return

    # Collinear: express the second domain in the first line's parameter
    dd = dot(d1, d1)
    t0 = dot(w, d1) / dd
    k = dot(d2, d1) / dd
    tb1 = _map_parameter(t0, k, b_min)
    tb2 = _map_parameter(t0, k, b_max)
    lo = max(a_min, min(tb1, tb2))
    hi = min(a_max, max(tb1, tb2))
    if lo > hi + EPSILON:
        return

    if math.isinf(lo) and math.isinf(hi):
        yield p1 - u1 * dot(p1, u1)
        return
    for t in (lo, hi):
        if not math.isinf(t):
            yield p1 + d1 * t


def _finite_endpoints(form: ParametricForm) -> list[Vec3]:
    origin, span, t_min, t_max = form
    return [origin + span * t for t in (t_min, t_max) if not math.isinf(t)]


def iter_linear_linear(shape_a: Any, shape_b: Any) -> Iterator[Vec3]:
    """Yield the points shared by two line-family shapes."""
    yield from iter_form_crossings(shape_a.parametric_form(), shape_b.parametric_form())


def boundary_forms(shape: Any) -> list[ParametricForm]:
    """Straight boundary edges of a planar shape as parametric forms."""
    if kind_of(shape) in POLYGON_KINDS:
        return [edge_form(e) for e in shape.get_edges()]
    if isinstance(shape, Sector) and not shape.is_full:
        return [edge_form(e) for e in shape.get_radial_edges()]
    return []


def iter_rim_crossings(form: ParametricForm, disk: Any) -> Iterator[Vec3]:
    """Yield where an in-plane parametric line meets a disk's rim.

    For a line lying in the disk's plane the rim crossings coincide with the
    crossings of the sphere of the same center and radius. Rim points off a
    sector's arc are discarded.
    """
    origin, span, t_min, t_max = form
    roots = line_sphere_parameters(Sphere(disk.center, disk.radius), origin, span)
    if roots is None:
        return
    for t in roots:
        t = clip_parameter(t, t_min, t_max)
        if t is None:
            continue
        p = origin + span * t
        if shape_contains_point(disk, p):
            yield p


def iter_in_plane_crossings(form: ParametricForm, shape: Any) -> Iterator[Vec3]:
    """Yield where a parametric line lying in a planar shape's plane meets it.

    Covers the boundary crossings plus the line's finite endpoints that lie
    inside the shape.
    """
    for edge in boundary_forms(shape):
        yield from iter_form_crossings(form, edge)
    if kind_of(shape) in DISK_KINDS:
        yield from iter_rim_crossings(form, shape)
    for p in _finite_endpoints(form):
        if shape_contains_point(shape, p):
            yield p


def iter_form_planar(form: ParametricForm, shape: Any) -> Iterator[Vec3]:
    """Yield the points a parametric line shares with a planar shape."""
    origin, span, _, _ = form
    ref, normal = plane_of(shape)
    if abs(dot(normalize(span), normal)) >= EPSILON:
        yield from iter_plane_crossings([form], shape)
        return
    if abs(dot(origin - ref, normal)) > EPSILON:
        return
    yield from iter_in_plane_crossings(form, shape)


def iter_linear_planar(linear: Any, shape: Any) -> Iterator[Vec3]:
    """Yield the points a line-family shape shares with a planar shape."""
    yield from iter_form_planar(linear.parametric_form(), shape)
