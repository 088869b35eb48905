"""Shape-pair dispatch for the intersection entry points.

Two tables map an unordered pair of shape kinds to the algorithm for that
pair: one produces the full outcome, the other answers the boolean question.
The boolean variant first compares bounding balls and rejects pairs that are
apart without building any candidate point; otherwise it pulls candidates
lazily and stops at the first one, skipping deduplication. Pairs are keyed
canonically as ``(low kind, high kind)`` and the arguments are swapped to
match, so an algorithm registered for (SEGMENT, CIRCLE) also serves
(CIRCLE, SEGMENT).

Algorithms are registered per kind family at import time:

    LINEAR  x LINEAR    line-family crossings
    LINEAR  x POLYGON   line-plane clipping, in-plane boundary crossings
    LINEAR  x DISK      same, with rim crossings
    LINEAR  x SOLID     robust line-sphere quadratic
    POLYGON x POLYGON   plane classification, 2D or edge-plane solver
    POLYGON x DISK      edge-plane solver plus disk chords
    DISK    x DISK      rim chords or shared-line chords
    PLANAR  x SOLID     plane cross-section of the sphere
    SOLID   x SOLID     center distance

A pair with no registered algorithm is reported as a miss and logged at
WARNING, unless strict dispatch is enabled in the intersector config, in
which case UnsupportedShapePairError is raised.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from itertools import product
from typing import Any

import numpy as np

from src.shape3d.core.config import is_strict_dispatch
from src.shape3d.core.errors import UnsupportedShapePairError
from src.shape3d.core.vector import EPSILON, Vec3, distance
from src.shape3d.geometry.kinds import (
    DISK_KINDS,
    LINEAR_KINDS,
    PLANAR_KINDS,
    POLYGON_KINDS,
    SOLID_KINDS,
    ShapeKind,
    kind_of,
)
from src.shape3d.intersector.curved import iter_disk_disk, iter_polygon_disk
from src.shape3d.intersector.linear import iter_linear_linear, iter_linear_planar
from src.shape3d.intersector.outcome import IntersectionOutcome, make_miss, make_outcome
from src.shape3d.intersector.planar import iter_polygon_polygon
from src.shape3d.intersector.points import unique_points
from src.shape3d.intersector.solid import (
    iter_linear_sphere,
    iter_planar_sphere,
    iter_sphere_sphere,
)

logger = logging.getLogger(__name__)

PairKey = tuple[ShapeKind, ShapeKind]
CandidateFn = Callable[[Any, Any], Iterator[Vec3]]
IntersectFn = Callable[[Any, Any], IntersectionOutcome]
HitFn = Callable[[Any, Any], bool]

_INTERSECT_TABLE: dict[PairKey, IntersectFn] = {}
_HIT_TABLE: dict[PairKey, HitFn] = {}


def pair_key(kind_a: ShapeKind, kind_b: ShapeKind) -> PairKey:
    """Canonical (low, high) key for an unordered kind pair."""
    if kind_a <= kind_b:
        return kind_a, kind_b
    return kind_b, kind_a


def _make_intersect(candidates: CandidateFn) -> IntersectFn:
    def intersect_pair(shape_a: Any, shape_b: Any) -> IntersectionOutcome:
        return make_outcome(unique_points(candidates(shape_a, shape_b)))

    intersect_pair.__name__ = f"intersect_{candidates.__name__}"
    return intersect_pair


def bounding_ball(shape: Any) -> tuple[Vec3, float] | None:
    """Get a (center, radius) ball enclosing a bounded shape.

    Returns:
        The ball, or None for lines and rays, which are unbounded.
    """
    kind = kind_of(shape)
    if kind in POLYGON_KINDS:
        vertices = shape.get_vertices()
        center = np.mean(vertices, axis=0)
        return center, max(distance(center, v) for v in vertices)
    if kind in DISK_KINDS or kind in SOLID_KINDS:
        return shape.center, shape.radius
    if kind is ShapeKind.SEGMENT:
        return (shape.point1 + shape.point2) / 2.0, shape.length / 2.0
    return None


def bounds_apart(shape_a: Any, shape_b: Any) -> bool:
    """Check whether the bounding balls of two shapes are separated.

    A True answer proves the shapes do not intersect; False proves nothing.
    """
    ball_a = bounding_ball(shape_a)
    ball_b = bounding_ball(shape_b)
    if ball_a is None or ball_b is None:
        return False
    # Accepted witnesses may lie up to EPSILON outside each shape
    return distance(ball_a[0], ball_b[0]) > ball_a[1] + ball_b[1] + 2.0 * EPSILON


def _make_hit(candidates: CandidateFn) -> HitFn:
    def hit_pair(shape_a: Any, shape_b: Any) -> bool:
        if bounds_apart(shape_a, shape_b):
            return False
        return any(True for _ in candidates(shape_a, shape_b))

    hit_pair.__name__ = f"hit_{candidates.__name__}"
    return hit_pair


def register_pair(
    kinds_a: Iterable[ShapeKind], kinds_b: Iterable[ShapeKind], candidates: CandidateFn
) -> None:
    """Register a candidate generator for every pair across two kind families.

    The generator receives the lower-kind shape first. Both tables get an
    entry: the outcome variant deduplicates all candidates, the boolean
    variant stops at the first one.

    Args:
        kinds_a: Kinds accepted as the first argument.
        kinds_b: Kinds accepted as the second argument.
        candidates: Generator of witness points for one shape pair.

    Raises:
        ValueError: If a pair is already registered or not in canonical order.
    """
    intersect_fn = _make_intersect(candidates)
    hit_fn = _make_hit(candidates)
    for kind_a, kind_b in product(kinds_a, kinds_b):
        key = (kind_a, kind_b)
        if pair_key(kind_a, kind_b) != key:
            raise ValueError(f"Pair {kind_a.name}, {kind_b.name} is not in canonical order")
        if key in _INTERSECT_TABLE:
            raise ValueError(f"Pair {kind_a.name}, {kind_b.name} is already registered")
        _INTERSECT_TABLE[key] = intersect_fn
        _HIT_TABLE[key] = hit_fn


def _family_pairs(kinds: frozenset) -> list[PairKey]:
    """Canonical pairs within one family, each unordered pair once."""
    ordered = sorted(kinds)
    return [(a, b) for i, a in enumerate(ordered) for b in ordered[i:]]


def _register_within(kinds: frozenset, candidates: CandidateFn) -> None:
    for kind_a, kind_b in _family_pairs(kinds):
        register_pair([kind_a], [kind_b], candidates)


_register_within(LINEAR_KINDS, iter_linear_linear)
register_pair(LINEAR_KINDS, PLANAR_KINDS, iter_linear_planar)
register_pair(LINEAR_KINDS, SOLID_KINDS, iter_linear_sphere)
_register_within(POLYGON_KINDS, iter_polygon_polygon)
register_pair(POLYGON_KINDS, DISK_KINDS, iter_polygon_disk)
_register_within(DISK_KINDS, iter_disk_disk)
register_pair(PLANAR_KINDS, SOLID_KINDS, iter_planar_sphere)
_register_within(SOLID_KINDS, iter_sphere_sphere)


def registered_pairs() -> list[PairKey]:
    """All registered canonical pairs, sorted."""
    return sorted(_INTERSECT_TABLE)


def missing_pairs() -> list[PairKey]:
    """Canonical kind pairs with no registered algorithm."""
    kinds = sorted(ShapeKind)
    return [
        (a, b)
        for i, a in enumerate(kinds)
        for b in kinds[i:]
        if (a, b) not in _INTERSECT_TABLE or (a, b) not in _HIT_TABLE
    ]


def _label(shape: Any, kind: ShapeKind | None) -> str:
    return kind.name if kind is not None else type(shape).__name__


def _resolve(table: dict, shape_a: Any, shape_b: Any) -> tuple[Any, Any, Any]:
    """Look up the algorithm for a pair and order the shapes to match it.

    Objects without a shape kind are treated like an unregistered pair.

    Returns:
        Tuple of (algorithm or None, first shape, second shape).

    Raises:
        UnsupportedShapePairError: If nothing handles the pair and strict
            dispatch is enabled.
    """
    kind_a = kind_of(shape_a)
    kind_b = kind_of(shape_b)
    label_a = _label(shape_a, kind_a)
    label_b = _label(shape_b, kind_b)
    fn = None
    if kind_a is not None and kind_b is not None:
        key = pair_key(kind_a, kind_b)
        if key != (kind_a, kind_b):
            shape_a, shape_b = shape_b, shape_a
        fn = table.get(key)

    if fn is None:
        if is_strict_dispatch():
            raise UnsupportedShapePairError(label_a, label_b)
        logger.warning("No intersection algorithm for %s x %s, reporting a miss", label_a, label_b)
    return fn, shape_a, shape_b


def intersect(shape_a: Any, shape_b: Any) -> IntersectionOutcome:
    """Intersect two shapes.

    Args:
        shape_a: Any shape.
        shape_b: Any shape.

    Returns:
        The outcome: whether the shapes share a point, and the distinct
        witness points found.

    Raises:
        UnsupportedShapePairError: If the pair has no algorithm and strict
            dispatch is enabled.
    """
    fn, first, second = _resolve(_INTERSECT_TABLE, shape_a, shape_b)
    if fn is None:
        return make_miss()
    outcome = fn(first, second)
    logger.debug(
        "%s x %s -> hit=%s, %d point(s)",
        type(shape_a).__name__,
        type(shape_b).__name__,
        outcome.hit,
        len(outcome.points),
    )
    return outcome


def has_intersection(shape_a: Any, shape_b: Any) -> bool:
    """Check whether two shapes share at least one point.

    Agrees with ``intersect(shape_a, shape_b).hit`` but stops at the first
    witness found.

    Raises:
        UnsupportedShapePairError: If the pair has no algorithm and strict
            dispatch is enabled.
    """
    fn, first, second = _resolve(_HIT_TABLE, shape_a, shape_b)
    if fn is None:
        return False
    return fn(first, second)
