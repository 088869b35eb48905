"""Batched any-hit tests on Taichi kernels.

This module answers ``has_intersection`` for many line-family shapes at once
against a set of triangles, rectangles and spheres. Each linear shape is one
parallel kernel iteration; the inner loop over the targets stops testing
once a hit is found, the same any-hit pattern used for shadow queries.

The kernels work in double precision, so Taichi must be initialized with a
backend that supports f64 before the first call:

    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.shape3d.geometry import make_ray, make_sphere
    >>> from src.shape3d.intersector.kernels import batch_has_intersection
    >>> batch_has_intersection([make_ray((0, 0, 5), (0, 0, -1))],
    ...                        spheres=[make_sphere((0, 0, 0), 1.0)])
    array([ True])

A linear shape lying in a target polygon's plane cannot be decided by the
piercing test. The kernel flags those shapes and they are resolved with the
scalar ``has_intersection`` afterwards, so results always agree with it.
"""

import logging
from collections.abc import Iterable, Sequence
from itertools import chain

import numpy as np
import taichi as ti

from src.shape3d.core.vector import EPSILON
from src.shape3d.geometry.kinds import LINEAR_KINDS, ShapeKind, kind_of
from src.shape3d.intersector.dispatch import has_intersection

logger = logging.getLogger(__name__)

# Type alias for double precision 3D vectors inside kernels
vec3d = ti.types.vector(3, ti.f64)

# Per-shape status written by the kernel
MISS = 0
HIT = 1
DEFERRED = 2


@ti.func
def _load(arr: ti.template(), i: ti.i32) -> vec3d:
    return vec3d(arr[i, 0], arr[i, 1], arr[i, 2])


@ti.func
def _edge_distance(start: vec3d, end: vec3d, p: vec3d, normal: vec3d) -> ti.f64:
    """Signed in-plane distance from the edge line start-end to p, positive inside."""
    edge = end - start
    return edge.cross(p - start).dot(normal) / edge.norm()


@ti.func
def _hit_polygon(
    origin: vec3d,
    span: vec3d,
    t_min: ti.f64,
    t_max: ti.f64,
    corner: vec3d,
    edge_u: vec3d,
    edge_v: vec3d,
    triangle: ti.i32,
) -> ti.i32:
    """Test a parametric line against a parallelogram or triangle.

    The target has vertices Q, Q+u, Q+u+v, Q+v (parallelogram) or Q, Q+u, Q+v
    (triangle), counter-clockwise about n = u x v. The plane point is inside
    when its signed distance to every edge line is at least -EPSILON, the
    same length-based slack as the scalar containment predicate.

    Returns:
        HIT, MISS, or DEFERRED when the line lies in the target's plane.
    """
    normal = edge_u.cross(edge_v).normalized()

    status = MISS
    denom = normal.dot(span)
    if ti.abs(denom) >= EPSILON * span.norm():
        t = normal.dot(corner - origin) / denom
        if t >= t_min - EPSILON and t <= t_max + EPSILON:
            t = ti.min(ti.max(t, t_min), t_max)
            p = origin + t * span
            q_u = corner + edge_u
            q_v = corner + edge_v
            inside = 1
            if _edge_distance(corner, q_u, p, normal) < -EPSILON:
                inside = 0
            if triangle == 1:
                if _edge_distance(q_u, q_v, p, normal) < -EPSILON:
                    inside = 0
                if _edge_distance(q_v, corner, p, normal) < -EPSILON:
                    inside = 0
            else:
                q_uv = q_u + edge_v
                if _edge_distance(q_u, q_uv, p, normal) < -EPSILON:
                    inside = 0
                if _edge_distance(q_uv, q_v, p, normal) < -EPSILON:
                    inside = 0
                if _edge_distance(q_v, corner, p, normal) < -EPSILON:
                    inside = 0
            if inside == 1:
                status = HIT
    elif ti.abs(normal.dot(origin - corner)) <= EPSILON:
        status = DEFERRED

    return status


@ti.func
def _solve_quadratic_robust(h: ti.f64, a: ti.f64, c: ti.f64, sqrt_d: ti.f64):
    """Solve a*t^2 + 2*h*t + c = 0, returning (t0, t1) with t0 <= t1."""
    sign_h = ti.select(h < 0.0, -1.0, 1.0)
    q = -(h + sign_h * sqrt_d)

    t0 = 0.0
    t1 = 0.0
    if ti.abs(q) < 1e-300:
        t0 = -h / a
        t1 = -h / a
    else:
        t0 = q / a
        t1 = c / q

    if t0 > t1:
        temp = t0
        t0 = t1
        t1 = temp

    return t0, t1


@ti.func
def _hit_ball(
    origin: vec3d,
    span: vec3d,
    t_min: ti.f64,
    t_max: ti.f64,
    center: vec3d,
    radius: ti.f64,
) -> ti.i32:
    """Test a parametric line against a filled ball.

    The line is inside the ball for t in [t0, t1]; it hits when that
    interval overlaps the shape's own domain, which also covers segments
    buried entirely in the ball.
    """
    oc = origin - center
    a = span.dot(span)
    h = span.dot(oc)
    c = oc.dot(oc) - radius * radius
    discriminant = h * h - a * c

    status = MISS
    if discriminant >= 0.0:
        t0, t1 = _solve_quadratic_robust(h, a, c, ti.sqrt(discriminant))
        if t0 <= t_max + EPSILON and t1 >= t_min - EPSILON:
            status = HIT

    return status


@ti.kernel
def _any_hit_kernel(
    origins: ti.types.ndarray(dtype=ti.f64, ndim=2),
    spans: ti.types.ndarray(dtype=ti.f64, ndim=2),
    bounds: ti.types.ndarray(dtype=ti.f64, ndim=2),
    tri_corners: ti.types.ndarray(dtype=ti.f64, ndim=2),
    tri_u: ti.types.ndarray(dtype=ti.f64, ndim=2),
    tri_v: ti.types.ndarray(dtype=ti.f64, ndim=2),
    n_triangles: ti.i32,
    rect_corners: ti.types.ndarray(dtype=ti.f64, ndim=2),
    rect_u: ti.types.ndarray(dtype=ti.f64, ndim=2),
    rect_v: ti.types.ndarray(dtype=ti.f64, ndim=2),
    n_rectangles: ti.i32,
    centers: ti.types.ndarray(dtype=ti.f64, ndim=2),
    radii: ti.types.ndarray(dtype=ti.f64, ndim=1),
    n_spheres: ti.i32,
    out: ti.types.ndarray(dtype=ti.i32, ndim=1),
):
    for i in range(origins.shape[0]):
        origin = _load(origins, i)
        span = _load(spans, i)
        t_min = bounds[i, 0]
        t_max = bounds[i, 1]

        hit_any = 0
        deferred = 0

        # Early exit on first hit
        for j in range(n_triangles):
            if hit_any == 0:
                status = _hit_polygon(
                    origin, span, t_min, t_max,
                    _load(tri_corners, j), _load(tri_u, j), _load(tri_v, j), 1,
                )
                if status == HIT:
                    hit_any = 1
                elif status == DEFERRED:
                    deferred = 1

        for j in range(n_rectangles):
            if hit_any == 0:
                status = _hit_polygon(
                    origin, span, t_min, t_max,
                    _load(rect_corners, j), _load(rect_u, j), _load(rect_v, j), 0,
                )
                if status == HIT:
                    hit_any = 1
                elif status == DEFERRED:
                    deferred = 1

        for j in range(n_spheres):
            if hit_any == 0:
                if _hit_ball(origin, span, t_min, t_max, _load(centers, j), radii[j]) == HIT:
                    hit_any = 1

        result = MISS
        if hit_any == 1:
            result = HIT
        elif deferred == 1:
            result = DEFERRED
        out[i] = result


def _rows(vectors: Sequence[np.ndarray]) -> np.ndarray:
    """Stack vectors into an (n, 3) float64 array, padded to one row if empty."""
    if not vectors:
        return np.zeros((1, 3), dtype=np.float64)
    return np.ascontiguousarray(np.stack(vectors), dtype=np.float64)


def _check_kinds(shapes: Sequence, allowed: Iterable[ShapeKind], label: str) -> None:
    allowed = frozenset(allowed)
    for shape in shapes:
        if kind_of(shape) not in allowed:
            raise TypeError(f"{label} cannot contain {type(shape).__name__}")


def batch_has_intersection(
    linear_shapes: Iterable,
    triangles: Iterable = (),
    rectangles: Iterable = (),
    spheres: Iterable = (),
) -> np.ndarray:
    """Test many line-family shapes against a set of targets in one kernel.

    Args:
        linear_shapes: Lines, rays and segments to test.
        triangles: Triangle targets.
        rectangles: Rectangle targets.
        spheres: Sphere targets.

    Returns:
        Boolean array with one entry per linear shape, True when the shape
        intersects at least one target.

    Raises:
        TypeError: If a sequence holds a shape of the wrong kind.
    """
    linear_shapes = list(linear_shapes)
    triangles = list(triangles)
    rectangles = list(rectangles)
    spheres = list(spheres)
    _check_kinds(linear_shapes, LINEAR_KINDS, "linear_shapes")
    _check_kinds(triangles, [ShapeKind.TRIANGLE], "triangles")
    _check_kinds(rectangles, [ShapeKind.RECTANGLE], "rectangles")
    _check_kinds(spheres, [ShapeKind.SPHERE], "spheres")

    if not linear_shapes:
        return np.zeros(0, dtype=bool)

    forms = [shape.parametric_form() for shape in linear_shapes]
    origins = _rows([f[0] for f in forms])
    spans = _rows([f[1] for f in forms])
    bounds = np.array([(f[2], f[3]) for f in forms], dtype=np.float64)

    radii = np.array([s.radius for s in spheres] or [0.0], dtype=np.float64)
    out = np.zeros(len(linear_shapes), dtype=np.int32)

    _any_hit_kernel(
        origins,
        spans,
        bounds,
        _rows([t.point1 for t in triangles]),
        _rows([t.point2 - t.point1 for t in triangles]),
        _rows([t.point3 - t.point1 for t in triangles]),
        len(triangles),
        _rows([r.corner for r in rectangles]),
        _rows([r.edge_u for r in rectangles]),
        _rows([r.edge_v for r in rectangles]),
        len(rectangles),
        _rows([s.center for s in spheres]),
        radii,
        len(spheres),
        out,
    )

    mask = out == HIT
    deferred = np.flatnonzero(out == DEFERRED)
    if deferred.size:
        logger.debug("Resolving %d in-plane shape(s) with the scalar test", deferred.size)
    for i in deferred:
        shape = linear_shapes[i]
        mask[i] = any(has_intersection(shape, target) for target in chain(triangles, rectangles, spheres))
    return mask
