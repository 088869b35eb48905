"""Witness point collection helpers."""

from __future__ import annotations

from collections.abc import Iterable

from src.shape3d.core.vector import EPSILON, Vec3, distance


def unique_points(points: Iterable[Vec3], tolerance: float = EPSILON) -> list[Vec3]:
    """Remove near-duplicate points, keeping the first occurrence.

    Two points are duplicates when their distance is within the tolerance.
    Intersection algorithms produce at most a handful of candidates, so the
    quadratic scan is fine.

    Args:
        points: Candidate points in discovery order.
        tolerance: Distance below which two points are considered equal.

    Returns:
        The distinct points in first-seen order.
    """
    kept: list[Vec3] = []
    for p in points:
        if all(distance(p, q) > tolerance for q in kept):
            kept.append(p)
    return kept
