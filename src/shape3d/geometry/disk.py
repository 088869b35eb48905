"""Curved planar primitives: circles and circular sectors.

Both shapes are filled disks lying in the plane through their center
perpendicular to their unit axis.

A sector additionally has a zero-angle direction (unit, in-plane) and a
signed range expressed as a fraction of a full turn, clamped to [-1, 1]:

- range > 0 sweeps counter-clockwise about the axis, from direction toward
  axis x direction
- range < 0 sweeps clockwise, ending at direction
- |range| == 1 covers the whole disk

Example:
    >>> from src.shape3d.geometry.disk import make_sector
    >>> quarter = make_sector((0, 0, 0), 1.0, direction=(1, 0, 0), range=0.25)
    >>> quarter.contains_point((0.5, 0.5, 0.0))
    True
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
    any_perpendicular,
    as_vec3,
    cross,
    dot,
    frozen_vec3,
    length,
    normalize,
)
from src.shape3d.geometry.kinds import ShapeKind


@dataclass(frozen=True, eq=False)
class Circle:
    """A filled circle (disk) in 3D space.

    Attributes:
        center: Center of the disk (read-only vec3).
        radius: Radius of the disk (non-negative).
        axis: Unit normal of the supporting plane (read-only vec3).
    """

    center: Vec3
    radius: float
    axis: Vec3

    kind: ClassVar[ShapeKind] = ShapeKind.CIRCLE

    def normal(self) -> Vec3:
        return self.axis

    def contains_point(self, point: VectorLike, tolerance: float = EPSILON) -> bool:
        from src.shape3d.intersector.containment import circle_contains_point

        return circle_contains_point(self, as_vec3(point), tolerance)


@dataclass(frozen=True, eq=False)
class Sector:
    """A filled circular sector in 3D space.

    Attributes:
        center: Apex of the sector (read-only vec3).
        radius: Radius of the sector (non-negative).
        direction: Unit in-plane direction of angle zero (read-only vec3).
        axis: Unit normal of the supporting plane (read-only vec3).
        range: Signed angular extent as a fraction of a full turn, in [-1, 1].
    """

    center: Vec3
    radius: float
    direction: Vec3
    axis: Vec3
    range: float

    kind: ClassVar[ShapeKind] = ShapeKind.SECTOR

    def normal(self) -> Vec3:
        return self.axis

    @property
    def angle(self) -> float:
        """Signed angular extent in radians."""
        return self.range * 2.0 * math.pi

    @property
    def is_full(self) -> bool:
        return abs(self.range) >= 1.0

    def direction_at(self, angle: float) -> Vec3:
        """Rotate the zero-angle direction by angle about the axis."""
        return self.direction * math.cos(angle) + cross(self.axis, self.direction) * math.sin(angle)

    def end_direction(self) -> Vec3:
        """Direction of the boundary radius at the end of the sweep."""
        return self.direction_at(self.angle)

    def get_radial_edges(self) -> list[tuple[Vec3, Vec3]]:
        """The two straight boundary edges from the apex to the rim."""
        return [
            (self.center, self.center + self.direction * self.radius),
            (self.center, self.center + self.end_direction() * self.radius),
        ]

    def to_circle(self) -> Circle:
        """The full disk the sector is cut from."""
        return Circle(center=self.center, radius=self.radius, axis=self.axis)

    def contains_point(self, point: VectorLike, tolerance: float = EPSILON) -> bool:
        from src.shape3d.intersector.containment import sector_contains_point

        return sector_contains_point(self, as_vec3(point), tolerance)


def _check_radius(radius: float) -> float:
    if radius < 0.0:
        raise ShapeError(f"Radius must be non-negative, got {radius}")
    return float(radius)


def make_circle(center: VectorLike, radius: float, normal: VectorLike | None = None) -> Circle:
    """Create a circle from a center, radius and plane normal.

    The normal defaults to +Z and is normalized.

    Raises:
        ShapeError: If the radius is negative.
    """
    n = as_vec3(normal if normal is not None else (0.0, 0.0, 1.0))
    if length(n) <= EPSILON:
        n = as_vec3((0.0, 0.0, 1.0))
    return Circle(
        center=frozen_vec3(center),
        radius=_check_radius(radius),
        axis=frozen_vec3(normalize(n)),
    )


def make_sector(
    center: VectorLike,
    radius: float,
    direction: VectorLike | None = None,
    range: float = 1.0,
    up: VectorLike | None = None,
) -> Sector:
    """Create a sector from a center, radius, zero direction and range.

    The plane of the sector is spanned by direction and up; its normal is
    direction x up. Direction defaults to +X and up to +Y, so the default
    sector lies in the XY plane facing +Z. The range is clamped to [-1, 1].

    Raises:
        ShapeError: If the radius is negative.
    """
    d = as_vec3(direction if direction is not None else (1.0, 0.0, 0.0))
    if length(d) <= EPSILON:
        d = as_vec3((1.0, 0.0, 0.0))
    d = normalize(d)

    u = as_vec3(up if up is not None else (0.0, 1.0, 0.0))
    u = u - d * dot(d, u)
    if length(u) <= EPSILON:
        u = any_perpendicular(d)
    u = normalize(u)

    return Sector(
        center=frozen_vec3(center),
        radius=_check_radius(radius),
        direction=frozen_vec3(d),
        axis=frozen_vec3(normalize(cross(d, u))),
        range=max(-1.0, min(1.0, float(range))),
    )
