"""Geometry module for shape primitives.

This module provides the immutable shape value types consumed by the
intersector:

Components:
    kinds: ShapeKind enumeration and kind families
    linear: Line, Ray and Segment (parametric line family)
    polygon: Triangle and Rectangle
    disk: Circle and Sector (filled, planar)
    sphere: Sphere (filled ball) and robust line-sphere solving

Every shape exposes a ``kind`` tag and ``contains_point(point, tolerance)``.
Shapes are built with the ``make_*`` factories, which normalize directions
and clamp ranges so the intersector can assume well-formed input.
"""

from .disk import Circle, Sector, make_circle, make_sector
from .kinds import (
    DISK_KINDS,
    LINEAR_KINDS,
    PLANAR_KINDS,
    POLYGON_KINDS,
    SOLID_KINDS,
    ShapeKind,
    kind_of,
)
from .linear import Line, Ray, Segment, make_line, make_ray, make_segment
from .polygon import Rectangle, Triangle, make_rectangle, make_triangle
from .sphere import Sphere, line_sphere_parameters, make_sphere, solve_quadratic_robust

__all__ = [
    "ShapeKind",
    "kind_of",
    "LINEAR_KINDS",
    "POLYGON_KINDS",
    "DISK_KINDS",
    "SOLID_KINDS",
    "PLANAR_KINDS",
    "Line",
    "Ray",
    "Segment",
    "make_line",
    "make_ray",
    "make_segment",
    "Triangle",
    "Rectangle",
    "make_triangle",
    "make_rectangle",
    "Circle",
    "Sector",
    "make_circle",
    "make_sector",
    "Sphere",
    "make_sphere",
    "solve_quadratic_robust",
    "line_sphere_parameters",
]
