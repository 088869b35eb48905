"""Intersection testing for 3D geometric primitives.

This package decides whether two shapes in 3D space intersect and, when
they do, reports representative intersection points. Supported shapes:
- Line family: infinite lines, rays and segments
- Polygons: triangles and rectangles
- Curved planar shapes: filled circles and circular sectors
- Solids: filled spheres

Every pair of shape kinds is handled, in either argument order, in double
precision with a single absolute tolerance (EPSILON = 1e-10). Many
line-family shapes can also be tested at once on Taichi kernels.

Subpackages:
    core: Vector helpers, tolerance, configuration and errors
    geometry: Immutable shape types and factories
    intersector: Containment predicates, per-pair algorithms and dispatch

Example:
    >>> from src.shape3d import intersect, make_segment
    >>> a = make_segment((0, 0, 0), (2, 2, 0))
    >>> b = make_segment((0, 2, 0), (2, 0, 0))
    >>> hit, points = intersect(a, b)
    >>> hit, points[0]
    (True, array([1., 1., 0.]))
"""

from .core import EPSILON, IntersectorConfig, set_intersector_config
from .geometry import (
    ShapeKind,
    make_circle,
    make_line,
    make_ray,
    make_rectangle,
    make_sector,
    make_segment,
    make_sphere,
    make_triangle,
)
from .intersector import IntersectionOutcome, batch_has_intersection, has_intersection, intersect

__version__ = "0.1.0"

__all__ = [
    "EPSILON",
    "IntersectorConfig",
    "set_intersector_config",
    "ShapeKind",
    "make_line",
    "make_ray",
    "make_segment",
    "make_triangle",
    "make_rectangle",
    "make_circle",
    "make_sector",
    "make_sphere",
    "intersect",
    "has_intersection",
    "batch_has_intersection",
    "IntersectionOutcome",
]
