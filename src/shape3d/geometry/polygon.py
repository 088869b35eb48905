"""Planar polygon primitives: triangles and rectangles.

Both shapes expose their vertices in counter-clockwise order about their
unit normal, which is what the half-plane containment test relies on:

- Triangle: vertices point1, point2, point3; normal follows the right-hand
  rule over that order.
- Rectangle: defined by a center, width and height along an orthonormal
  (direction, up) frame. The normal is direction x up.

A rectangle can also be described in corner/edge form (Q, u, v) spanning
the parallelogram Q, Q+u, Q+u+v, Q+v, which is the layout used by the
batched kernels.

Example:
    >>> from src.shape3d.geometry.polygon import make_rectangle
    >>> rect = make_rectangle((0, 0, 0), 2.0, 2.0)
    >>> [tuple(v) for v in rect.get_vertices()][0]
    (-1.0, -1.0, 0.0)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from src.shape3d.core.errors import ShapeError
from src.shape3d.core.vector import (
    EPSILON,
    Vec3,
    VectorLike,
    any_perpendicular,
    as_vec3,
    cross,
    dot,
    frozen_vec3,
    length,
    normalize,
)
from src.shape3d.geometry.kinds import ShapeKind

# An edge is a (start, end) pair of vertices
Edge = tuple[Vec3, Vec3]


def _edges_of(vertices: list[Vec3]) -> list[Edge]:
    """Build the closed edge loop of a vertex list."""
    count = len(vertices)
    return [(vertices[i], vertices[(i + 1) % count]) for i in range(count)]


@dataclass(frozen=True, eq=False)
class Triangle:
    """A triangle defined by three vertices.

    Attributes:
        point1: First vertex (read-only vec3).
        point2: Second vertex (read-only vec3).
        point3: Third vertex (read-only vec3).
    """

    point1: Vec3
    point2: Vec3
    point3: Vec3

    kind: ClassVar[ShapeKind] = ShapeKind.TRIANGLE

    def get_vertices(self) -> list[Vec3]:
        return [self.point1, self.point2, self.point3]

    def get_edges(self) -> list[Edge]:
        return _edges_of(self.get_vertices())

    def normal(self) -> Vec3:
        """Compute the unit normal (right-hand rule over the vertex order)."""
        return normalize(cross(self.point2 - self.point1, self.point3 - self.point1))

    def centroid(self) -> Vec3:
        return (self.point1 + self.point2 + self.point3) / 3.0

    def contains_point(self, point: VectorLike, tolerance: float = EPSILON) -> bool:
        from src.shape3d.intersector.containment import triangle_contains_point

        return triangle_contains_point(self, as_vec3(point), tolerance)


@dataclass(frozen=True, eq=False)
class Rectangle:
    """A rectangle defined by its center and an orthonormal frame.

    Attributes:
        center: Center of the rectangle (read-only vec3).
        width: Extent along direction.
        height: Extent along up.
        direction: Unit width axis (read-only vec3).
        up: Unit height axis, perpendicular to direction (read-only vec3).
    """

    center: Vec3
    width: float
    height: float
    direction: Vec3
    up: Vec3

    kind: ClassVar[ShapeKind] = ShapeKind.RECTANGLE

    def get_vertices(self) -> list[Vec3]:
        hw = self.width / 2.0
        hh = self.height / 2.0
        d = self.direction * hw
        u = self.up * hh
        return [
            self.center - d - u,
            self.center + d - u,
            self.center + d + u,
            self.center - d + u,
        ]

    def get_edges(self) -> list[Edge]:
        return _edges_of(self.get_vertices())

    def normal(self) -> Vec3:
        """Compute the unit normal direction x up."""
        return normalize(cross(self.direction, self.up))

    @property
    def corner(self) -> Vec3:
        """The first vertex (Q in corner/edge form)."""
        return self.center - self.direction * (self.width / 2.0) - self.up * (self.height / 2.0)

    @property
    def edge_u(self) -> Vec3:
        """Edge vector along the width (u in corner/edge form)."""
        return self.direction * self.width

    @property
    def edge_v(self) -> Vec3:
        """Edge vector along the height (v in corner/edge form)."""
        return self.up * self.height

    def contains_point(self, point: VectorLike, tolerance: float = EPSILON) -> bool:
        from src.shape3d.intersector.containment import rectangle_contains_point

        return rectangle_contains_point(self, as_vec3(point), tolerance)


def make_triangle(point1: VectorLike, point2: VectorLike, point3: VectorLike) -> Triangle:
    """Create a triangle from three vertices.

    Raises:
        ShapeError: If the vertices are collinear.
    """
    p1 = frozen_vec3(point1)
    p2 = frozen_vec3(point2)
    p3 = frozen_vec3(point3)
    if length(cross(p2 - p1, p3 - p1)) <= EPSILON:
        raise ShapeError("Triangle vertices are collinear")
    return Triangle(point1=p1, point2=p2, point3=p3)


def make_rectangle(
    center: VectorLike,
    width: float,
    height: float,
    direction: VectorLike | None = None,
    up: VectorLike | None = None,
) -> Rectangle:
    """Create a rectangle from a center, extents and an optional frame.

    The direction defaults to +X and up to +Y. Up is re-orthogonalized
    against direction; if the two are parallel, any perpendicular axis is
    used.

    Raises:
        ShapeError: If width or height is not positive.
    """
    if width <= 0.0 or height <= 0.0:
        raise ShapeError(f"Rectangle extents must be positive, got {width} x {height}")

    d = as_vec3(direction if direction is not None else (1.0, 0.0, 0.0))
    if length(d) <= EPSILON:
        d = as_vec3((1.0, 0.0, 0.0))
    d = normalize(d)

    u = as_vec3(up if up is not None else (0.0, 1.0, 0.0))
    if length(u) <= EPSILON:
        u = as_vec3((0.0, 1.0, 0.0))
    u = u - d * dot(d, u)
    if length(u) <= EPSILON:
        u = any_perpendicular(d)
    u = normalize(u)

    return Rectangle(
        center=frozen_vec3(center),
        width=float(width),
        height=float(height),
        direction=frozen_vec3(d),
        up=frozen_vec3(u),
    )
