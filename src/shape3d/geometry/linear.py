"""Line-family primitives: infinite lines, rays and segments.

All three shapes describe the point set ``origin + t * span`` for t in a
parametric domain:

- Line: span is the unit direction, t in (-inf, inf)
- Ray: span is the unit direction, t in [0, inf)
- Segment: span is ``point2 - point1``, t in [0, 1]

The intersector works on that common parametric form, so every line-family
pair is handled by one algorithm with per-shape domain checks.

Example:
    >>> from src.shape3d.geometry.linear import make_segment
    >>> seg = make_segment((0, 0, 0), (2, 2, 0))
    >>> seg.length
    2.8284271247461903
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
    frozen_vec3,
    length,
)
from src.shape3d.geometry.kinds import ShapeKind

# Parametric form: (origin, span, t_min, t_max)
ParametricForm = tuple[Vec3, Vec3, float, float]

_DEFAULT_DIRECTION = (1.0, 0.0, 0.0)


def _unit_direction(direction: VectorLike) -> Vec3:
    """Normalize a direction, falling back to +X for zero vectors."""
    d = as_vec3(direction)
    n = length(d)
    if n <= EPSILON:
        return frozen_vec3(_DEFAULT_DIRECTION)
    return frozen_vec3(d / n)


@dataclass(frozen=True, eq=False)
class Line:
    """An infinite line through a point.

    Attributes:
        point: A point on the line (read-only vec3).
        direction: Unit direction of the line (read-only vec3).
    """

    point: Vec3
    direction: Vec3

    kind: ClassVar[ShapeKind] = ShapeKind.LINE

    @property
    def span(self) -> Vec3:
        return self.direction

    def parameter_range(self) -> tuple[float, float]:
        return -math.inf, math.inf

    def parametric_form(self) -> ParametricForm:
        return self.point, self.direction, -math.inf, math.inf

    def get_point(self, t: float) -> Vec3:
        """Compute the point at parameter t."""
        return self.point + t * self.direction

    def contains_point(self, point: VectorLike, tolerance: float = EPSILON) -> bool:
        from src.shape3d.intersector.containment import line_contains_point

        return line_contains_point(self, as_vec3(point), tolerance)


@dataclass(frozen=True, eq=False)
class Ray:
    """A half-infinite line starting at a point.

    Attributes:
        point: The origin of the ray (read-only vec3).
        direction: Unit direction of the ray (read-only vec3).
    """

    point: Vec3
    direction: Vec3

    kind: ClassVar[ShapeKind] = ShapeKind.RAY

    @property
    def span(self) -> Vec3:
        return self.direction

    def parameter_range(self) -> tuple[float, float]:
        return 0.0, math.inf

    def parametric_form(self) -> ParametricForm:
        return self.point, self.direction, 0.0, math.inf

    def get_point(self, t: float) -> Vec3:
        """Compute the point at distance t along the ray."""
        return self.point + t * self.direction

    def contains_point(self, point: VectorLike, tolerance: float = EPSILON) -> bool:
        from src.shape3d.intersector.containment import ray_contains_point

        return ray_contains_point(self, as_vec3(point), tolerance)


@dataclass(frozen=True, eq=False)
class Segment:
    """A finite segment between two endpoints.

    Attributes:
        point1: Start point (read-only vec3).
        point2: End point (read-only vec3).
    """

    point1: Vec3
    point2: Vec3

    kind: ClassVar[ShapeKind] = ShapeKind.SEGMENT

    @property
    def point(self) -> Vec3:
        """The segment origin, an alias of point1."""
        return self.point1

    @property
    def span(self) -> Vec3:
        return self.point2 - self.point1

    @property
    def direction(self) -> Vec3:
        """Unit direction from point1 to point2."""
        s = self.span
        return s / length(s)

    @property
    def length(self) -> float:
        return length(self.span)

    def parameter_range(self) -> tuple[float, float]:
        return 0.0, 1.0

    def parametric_form(self) -> ParametricForm:
        return self.point1, self.span, 0.0, 1.0

    def get_point(self, t: float) -> Vec3:
        """Compute the point at parameter t (0 at point1, 1 at point2)."""
        return self.point1 + t * self.span

    def contains_point(self, point: VectorLike, tolerance: float = EPSILON) -> bool:
        from src.shape3d.intersector.containment import segment_contains_point

        return segment_contains_point(self, as_vec3(point), tolerance)


def make_line(point: VectorLike, direction: VectorLike) -> Line:
    """Create a line from a point and a direction.

    The direction is normalized; a zero direction defaults to +X.
    """
    return Line(point=frozen_vec3(point), direction=_unit_direction(direction))


def make_ray(point: VectorLike, direction: VectorLike) -> Ray:
    """Create a ray from an origin and a direction.

    The direction is normalized; a zero direction defaults to +X.
    """
    return Ray(point=frozen_vec3(point), direction=_unit_direction(direction))


def make_segment(point1: VectorLike, point2: VectorLike) -> Segment:
    """Create a segment between two points.

    Raises:
        ShapeError: If the endpoints coincide.
    """
    p1 = frozen_vec3(point1)
    p2 = frozen_vec3(point2)
    if length(p2 - p1) <= EPSILON:
        raise ShapeError("Segment endpoints coincide")
    return Segment(point1=p1, point2=p2)
