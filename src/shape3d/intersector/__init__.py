"""Intersector module for shape-pair intersection.

This module decides whether two shapes share a point and reports witness
points of the intersection:

Components:
    dispatch: intersect / has_intersection entry points and the kind-pair tables
    outcome: IntersectionOutcome record
    containment: Point containment predicates per shape kind
    points: Witness point deduplication
    planar: Plane classification and the polygon-polygon solver
    linear: Line-family crossings and line-planar clipping
    curved: Circle and sector solvers
    solid: Sphere solvers
    kernels: Batched any-hit tests on Taichi kernels

Every pair of shape kinds has an algorithm; dispatch swaps the arguments
into canonical (low kind, high kind) order so both argument orders give the
same result.
"""

from .containment import (
    circle_contains_point,
    line_contains_point,
    polygon_contains_point,
    ray_contains_point,
    rectangle_contains_point,
    sector_contains_point,
    segment_contains_point,
    shape_contains_point,
    sphere_contains_point,
    triangle_contains_point,
)
from .dispatch import (
    bounding_ball,
    bounds_apart,
    has_intersection,
    intersect,
    missing_pairs,
    pair_key,
    register_pair,
    registered_pairs,
)
from .kernels import batch_has_intersection
from .outcome import IntersectionOutcome, make_miss, make_outcome
from .planar import PlaneRelation, classify_planes
from .points import unique_points

__all__ = [
    # Entry points
    "intersect",
    "has_intersection",
    "batch_has_intersection",
    "IntersectionOutcome",
    "make_miss",
    "make_outcome",
    # Dispatch tables
    "pair_key",
    "register_pair",
    "registered_pairs",
    "missing_pairs",
    "bounding_ball",
    "bounds_apart",
    # Containment
    "shape_contains_point",
    "polygon_contains_point",
    "triangle_contains_point",
    "rectangle_contains_point",
    "circle_contains_point",
    "sector_contains_point",
    "line_contains_point",
    "ray_contains_point",
    "segment_contains_point",
    "sphere_contains_point",
    # Helpers
    "PlaneRelation",
    "classify_planes",
    "unique_points",
]
