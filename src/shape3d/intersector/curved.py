"""Intersection algorithms involving circles and sectors.

Coplanar disks meet where their rims cross. With center distance d and
radii r1, r2 the rim crossings lie on the chord

    a = (r1^2 - r2^2 + d^2) / (2d),   h = sqrt(r1^2 - a^2)
    p = c1 + a * u  (+/- h * (n x u)),  u = (c2 - c1) / d

with two tangent special cases:

- external tangency (d = r1 + r2): the single point c1 + u * r1
- internal tangency (d = |r1 - r2|): the point on the larger circle facing
  the smaller one

Disks in crossing planes are cut by the line the planes share. Each disk
contributes the chord endpoints foot +/- h * dir, where foot is the disk
center projected onto that line; candidates are kept when both shapes
contain them.

Sectors reuse the circle algorithms and add their two radial edges as
straight boundary, filtering rim points by the angular range.

When coplanar shapes have no boundary crossings one is nested in the other
or they are disjoint; the nested case reports the inner shape's center or
vertices as witnesses.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from typing import Any

from src.shape3d.core.vector import EPSILON, Vec3, cross, distance, dot
from src.shape3d.intersector.containment import shape_contains_point
from src.shape3d.intersector.linear import (
    boundary_forms,
    iter_form_crossings,
    iter_rim_crossings,
)
from src.shape3d.intersector.planar import (
    PlaneRelation,
    classify_planes,
    edge_form,
    iter_nested_witnesses,
    iter_plane_crossings,
    plane_intersection_line,
    plane_of,
)


def iter_rim_rim(disk_a: Any, disk_b: Any) -> Iterator[Vec3]:
    """Yield the crossings of two coplanar rims, ignoring sector arcs.

    Concentric rims yield nothing; separated or strictly nested rims yield
    nothing; tangent rims yield one point.
    """
    c1, r1 = disk_a.center, disk_a.radius
    c2, r2 = disk_b.center, disk_b.radius
    v = c2 - c1
    d = distance(c1, c2)
    if d < EPSILON:
        return
    u = v / d

    if d > r1 + r2 + EPSILON:
        return
    if abs(d - (r1 + r2)) <= EPSILON:
        yield c1 + u * r1
        return

    inner_gap = abs(r1 - r2)
    if d < inner_gap - EPSILON:
        return
    if abs(d - inner_gap) <= EPSILON:
        if r1 >= r2:
            yield c1 + u * r1
        else:
            yield c2 - u * r2
        return

    a = (r1 * r1 - r2 * r2 + d * d) / (2.0 * d)
    h = math.sqrt(max(r1 * r1 - a * a, 0.0))
    mid = c1 + u * a
    perp = cross(disk_a.normal(), u)
    yield mid + perp * h
    yield mid - perp * h


def iter_chord_points(disk: Any, line_point: Vec3, line_dir: Vec3) -> Iterator[Vec3]:
    """Yield where an in-plane line crosses a disk's rim.

    Args:
        disk: Circle or sector; only its center and radius are used.
        line_point: A point on the line, in the disk's plane.
        line_dir: Unit direction of the line.
    """
    foot = line_point + line_dir * dot(disk.center - line_point, line_dir)
    offset = distance(disk.center, foot)
    if offset > disk.radius + EPSILON:
        return
    h = math.sqrt(max(disk.radius * disk.radius - offset * offset, 0.0))
    yield foot + line_dir * h
    yield foot - line_dir * h


def _iter_shared_line_chords(shape_a: Any, shape_b: Any, disks: tuple) -> Iterator[Vec3]:
    """Yield chord endpoints of the given disks on the line two planes share."""
    ref_a, n_a = plane_of(shape_a)
    ref_b, n_b = plane_of(shape_b)
    line_point, line_dir = plane_intersection_line(ref_a, n_a, ref_b, n_b)
    for disk in disks:
        for p in iter_chord_points(disk, line_point, line_dir):
            if shape_contains_point(shape_a, p) and shape_contains_point(shape_b, p):
                yield p


def _iter_coplanar_disk_disk(disk_a: Any, disk_b: Any) -> Iterator[Vec3]:
    for p in iter_rim_rim(disk_a, disk_b):
        if shape_contains_point(disk_a, p) and shape_contains_point(disk_b, p):
            yield p
    edges_b = boundary_forms(disk_b)
    for edge in boundary_forms(disk_a):
        yield from iter_rim_crossings(edge, disk_b)
        for other in edges_b:
            yield from iter_form_crossings(edge, other)
    for edge in edges_b:
        yield from iter_rim_crossings(edge, disk_a)


def iter_disk_disk(disk_a: Any, disk_b: Any) -> Iterator[Vec3]:
    """Yield candidate intersection points of two circles or sectors."""
    relation = classify_planes(disk_a, disk_b)
    if relation is PlaneRelation.DISJOINT:
        return

    if relation is PlaneRelation.CROSSING:
        yield from _iter_shared_line_chords(disk_a, disk_b, (disk_a, disk_b))
        yield from iter_plane_crossings(boundary_forms(disk_a), disk_b)
        yield from iter_plane_crossings(boundary_forms(disk_b), disk_a)
        return

    found = False
    for p in _iter_coplanar_disk_disk(disk_a, disk_b):
        found = True
        yield p
    if not found:
        yield from iter_nested_witnesses([disk_a.center], disk_a, [disk_b.center], disk_b)


def _iter_coplanar_polygon_disk(polygon: Any, disk: Any) -> Iterator[Vec3]:
    radials = boundary_forms(disk)
    for edge in map(edge_form, polygon.get_edges()):
        yield from iter_rim_crossings(edge, disk)
        for radial in radials:
            yield from iter_form_crossings(edge, radial)


def iter_polygon_disk(polygon: Any, disk: Any) -> Iterator[Vec3]:
    """Yield candidate intersection points of a polygon and a circle or sector."""
    relation = classify_planes(polygon, disk)
    if relation is PlaneRelation.DISJOINT:
        return

    if relation is PlaneRelation.CROSSING:
        yield from iter_plane_crossings(map(edge_form, polygon.get_edges()), disk)
        yield from _iter_shared_line_chords(polygon, disk, (disk,))
        yield from iter_plane_crossings(boundary_forms(disk), polygon)
        return

    found = False
    for p in _iter_coplanar_polygon_disk(polygon, disk):
        found = True
        yield p
    if not found:
        yield from iter_nested_witnesses(polygon.get_vertices(), polygon, [disk.center], disk)
