"""Plane classification and the polygon-polygon intersection algorithm.

Every planar shape (triangle, rectangle, circle, sector) lives in a plane
given by a reference point and a unit normal. Intersecting two planar
shapes starts by classifying how their planes relate:

    n = n1 x n2
    |n| < eps and |(ref2 - ref1) . n1| <= eps  ->  COPLANAR
    |n| < eps otherwise                        ->  DISJOINT (parallel)
    |n| >= eps                                 ->  CROSSING

Coplanar polygons are projected into a 2D frame anchored at the first
vertex of the first polygon and every edge pair is solved as a 2x2 linear
system. Crossing polygons are handled by intersecting each polygon's edges
with the other's plane and keeping the points the other polygon contains.

The helpers that clip a parametric edge against a plane are shared with the
line-family and curved solvers.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import Enum
from typing import Any

from src.shape3d.core.vector import EPSILON, Vec3, cross, dot, length, normalize
from src.shape3d.geometry.kinds import DISK_KINDS, POLYGON_KINDS, kind_of
from src.shape3d.geometry.linear import ParametricForm
from src.shape3d.geometry.polygon import Edge
from src.shape3d.intersector.containment import shape_contains_point


class PlaneRelation(Enum):
    """How the supporting planes of two planar shapes relate."""

    COPLANAR = "coplanar"
    DISJOINT = "disjoint"
    CROSSING = "crossing"


def plane_of(shape: Any) -> tuple[Vec3, Vec3]:
    """Get the (reference point, unit normal) of a planar shape.

    Polygons use their first vertex; circles and sectors use their center.

    Raises:
        TypeError: If the shape is not planar.
    """
    kind = kind_of(shape)
    if kind in POLYGON_KINDS:
        return shape.get_vertices()[0], shape.normal()
    if kind in DISK_KINDS:
        return shape.center, shape.normal()
    raise TypeError(f"{type(shape).__name__} is not a planar shape")


def classify_planes(shape_a: Any, shape_b: Any) -> PlaneRelation:
    """Classify the supporting planes of two planar shapes."""
    ref_a, n_a = plane_of(shape_a)
    ref_b, n_b = plane_of(shape_b)
    if length(cross(n_a, n_b)) < EPSILON:
        if abs(dot(ref_b - ref_a, n_a)) <= EPSILON:
            return PlaneRelation.COPLANAR
        return PlaneRelation.DISJOINT
    return PlaneRelation.CROSSING


def plane_intersection_line(
    ref_a: Vec3, n_a: Vec3, ref_b: Vec3, n_b: Vec3
) -> tuple[Vec3, Vec3]:
    """Compute the line shared by two crossing planes.

    With plane offsets h = n . ref and m = n_a x n_b, a point on the line is

        p0 = (h_a (n_b x m) + h_b (m x n_a)) / (m . m)

    The denominator comes from the cross product rather than 1 - (n_a . n_b)^2,
    which rounds to zero for planes a few nanoradians apart.

    Args:
        ref_a: A point on the first plane.
        n_a: Unit normal of the first plane.
        ref_b: A point on the second plane.
        n_b: Unit normal of the second plane.

    Returns:
        Tuple of (point on the line, unit direction n_a x n_b).
    """
    m = cross(n_a, n_b)
    h_a = dot(n_a, ref_a)
    h_b = dot(n_b, ref_b)
    point = (cross(n_b, m) * h_a + cross(m, n_a) * h_b) / dot(m, m)
    return point, normalize(m)


def edge_form(edge: Edge) -> ParametricForm:
    """Express a (start, end) edge as a parametric form over [0, 1]."""
    start, end = edge
    return start, end - start, 0.0, 1.0


def clip_parameter(t: float, t_min: float, t_max: float, slack: float = EPSILON) -> float | None:
    """Clamp t into [t_min, t_max], or None if it lies outside by more than slack."""
    if t < t_min - slack or t > t_max + slack:
        return None
    return min(max(t, t_min), t_max)


def plane_parameter(origin: Vec3, span: Vec3, plane_point: Vec3, plane_normal: Vec3) -> float | None:
    """Solve origin + t * span on the plane, or None if the line is parallel to it."""
    denom = dot(span, plane_normal)
    if abs(denom) < EPSILON * length(span):
        return None
    return dot(plane_point - origin, plane_normal) / denom


def iter_plane_crossings(forms: Iterable[ParametricForm], target: Any) -> Iterator[Vec3]:
    """Yield where parametric edges pierce a planar shape.

    Each edge is intersected with the target's plane; parallel edges are
    skipped, the parameter is clipped to the edge's own domain, and the
    point is kept only if the target contains it.
    """
    ref, normal = plane_of(target)
    for origin, span, t_min, t_max in forms:
        t = plane_parameter(origin, span, ref, normal)
        if t is None:
            continue
        t = clip_parameter(t, t_min, t_max)
        if t is None:
            continue
        p = origin + span * t
        if shape_contains_point(target, p):
            yield p


class PlaneFrame:
    """Orthonormal 2D frame in a plane, anchored at an origin.

    Attributes:
        origin: The 3D point mapped to (0, 0).
        axis1: Unit first axis.
        axis2: Unit second axis, normal x axis1.
    """

    def __init__(self, origin: Vec3, axis1: Vec3, normal: Vec3):
        self.origin = origin
        self.axis1 = normalize(axis1)
        self.axis2 = cross(normal, self.axis1)

    @classmethod
    def for_polygon(cls, polygon: Any) -> PlaneFrame:
        vertices = polygon.get_vertices()
        return cls(vertices[0], vertices[1] - vertices[0], polygon.normal())

    def project(self, point: Vec3) -> tuple[float, float]:
        v = point - self.origin
        return dot(v, self.axis1), dot(v, self.axis2)

    def lift(self, x: float, y: float) -> Vec3:
        return self.origin + self.axis1 * x + self.axis2 * y


def edge_crossing_2d(
    p1: tuple[float, float],
    p2: tuple[float, float],
    q1: tuple[float, float],
    q2: tuple[float, float],
) -> tuple[float, float] | None:
    """Intersect two 2D edges p1-p2 and q1-q2.

    Solves p1 + t1 (p2 - p1) = q1 + t2 (q2 - q1) by Cramer's rule.

    Returns:
        The crossing point, or None if the edges are parallel (|det| < eps)
        or the crossing lies outside either edge.
    """
    d1x, d1y = p2[0] - p1[0], p2[1] - p1[1]
    d2x, d2y = q2[0] - q1[0], q2[1] - q1[1]
    det = d1x * d2y - d1y * d2x
    if abs(det) < EPSILON:
        return None

    wx, wy = q1[0] - p1[0], q1[1] - p1[1]
    t1 = (wx * d2y - wy * d2x) / det
    t2 = (wx * d1y - wy * d1x) / det
    t1 = clip_parameter(t1, 0.0, 1.0)
    t2 = clip_parameter(t2, 0.0, 1.0)
    if t1 is None or t2 is None:
        return None
    return p1[0] + d1x * t1, p1[1] + d1y * t1


def iter_coplanar_polygon_crossings(poly_a: Any, poly_b: Any) -> Iterator[Vec3]:
    """Yield the crossings of two coplanar polygons' boundaries."""
    frame = PlaneFrame.for_polygon(poly_a)
    edges_a = [(frame.project(s), frame.project(e)) for s, e in poly_a.get_edges()]
    edges_b = [(frame.project(s), frame.project(e)) for s, e in poly_b.get_edges()]
    for p1, p2 in edges_a:
        for q1, q2 in edges_b:
            hit = edge_crossing_2d(p1, p2, q1, q2)
            if hit is not None:
                yield frame.lift(*hit)


def iter_nested_witnesses(
    points_a: Iterable[Vec3], shape_a: Any, points_b: Iterable[Vec3], shape_b: Any
) -> Iterator[Vec3]:
    """Yield the representative points of each shape that the other contains.

    Used when two coplanar shapes have no boundary crossings, which leaves
    either disjoint shapes or one shape nested inside the other.
    """
    for p in points_a:
        if shape_contains_point(shape_b, p):
            yield p
    for p in points_b:
        if shape_contains_point(shape_a, p):
            yield p


def iter_polygon_polygon(poly_a: Any, poly_b: Any) -> Iterator[Vec3]:
    """Yield candidate intersection points of two convex polygons."""
    relation = classify_planes(poly_a, poly_b)
    if relation is PlaneRelation.DISJOINT:
        return

    if relation is PlaneRelation.CROSSING:
        yield from iter_plane_crossings(map(edge_form, poly_a.get_edges()), poly_b)
        yield from iter_plane_crossings(map(edge_form, poly_b.get_edges()), poly_a)
        return

    found = False
    for p in iter_coplanar_polygon_crossings(poly_a, poly_b):
        found = True
        yield p
    if not found:
        yield from iter_nested_witnesses(
            poly_a.get_vertices(), poly_a, poly_b.get_vertices(), poly_b
        )
