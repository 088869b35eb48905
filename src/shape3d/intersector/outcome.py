"""Intersection outcome record.

An outcome pairs the hit flag with the witness points the algorithm found.
The points are deduplicated before an outcome is built, so ``hit`` is True
exactly when ``points`` is non-empty.

Outcomes unpack like a pair:

    >>> hit, points = intersect(a, b)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from src.shape3d.core.vector import Vec3


@dataclass(frozen=True, eq=False)
class IntersectionOutcome:
    """Result of intersecting two shapes.

    Attributes:
        hit: Whether the shapes share at least one point.
        points: Distinct witness points of the intersection, in discovery
            order. Empty on a miss.
    """

    hit: bool
    points: tuple[Vec3, ...] = ()

    def __iter__(self) -> Iterator[Any]:
        yield self.hit
        yield self.points

    def __len__(self) -> int:
        return len(self.points)


def make_miss() -> IntersectionOutcome:
    """Create an outcome for shapes that do not intersect."""
    return IntersectionOutcome(hit=False, points=())


def make_outcome(points: Iterable[Vec3]) -> IntersectionOutcome:
    """Create an outcome from already deduplicated witness points."""
    pts = tuple(points)
    if not pts:
        return make_miss()
    return IntersectionOutcome(hit=True, points=pts)
