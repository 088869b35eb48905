#!/usr/bin/env python3
"""Intersect a gallery of shape pairs and run a batched ray query.

This script demonstrates the scalar intersection API on one pair per shape
family, then fires a batch of random rays at a small scene of triangles,
rectangles and spheres using the Taichi any-hit kernel and checks the mask
against the scalar has_intersection.

Usage:
    python -m examples.intersect_shapes [options]

Options:
    --rays RAYS     Number of random rays for the batch query (default: 1000)
    --seed SEED     Random seed for the ray batch (default: 7)
    --strict        Raise on unsupported shape pairs instead of missing
    --verbose       Enable DEBUG logging of every dispatch
    --cpu           Force the CPU backend

Example:
    python -m examples.intersect_shapes --rays 5000 --verbose
"""

from __future__ import annotations

import argparse
import logging
import sys
import time

import numpy as np
import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Intersect a gallery of shape pairs and run a batched ray query.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--rays",
        type=int,
        default=1000,
        help="Number of random rays for the batch query (default: 1000)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=7,
        help="Random seed for the ray batch (default: 7)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Raise on unsupported shape pairs instead of missing",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable DEBUG logging of every dispatch",
    )
    parser.add_argument(
        "--cpu",
        action="store_true",
        help="Force the CPU backend",
    )
    return parser.parse_args()


def _format_point(p: np.ndarray) -> str:
    return "(" + ", ".join(f"{c:.4f}" for c in p) + ")"


def show_gallery() -> None:
    """Print the outcome of one representative pair per shape family."""
    # Lazy imports to allow Taichi initialization first
    from src.shape3d import (
        intersect,
        make_circle,
        make_line,
        make_ray,
        make_rectangle,
        make_sector,
        make_segment,
        make_sphere,
        make_triangle,
    )

    gallery = [
        (
            "crossing segments",
            make_segment((0, 0, 0), (2, 2, 0)),
            make_segment((0, 2, 0), (2, 0, 0)),
        ),
        (
            "overlapping squares",
            make_rectangle((0, 0, 0), 2.0, 2.0),
            make_rectangle((1, 1, 0), 2.0, 2.0),
        ),
        (
            "parallel squares",
            make_rectangle((0, 0, 0), 1.0, 1.0),
            make_rectangle((0, 0, 1), 1.0, 1.0),
        ),
        (
            "ray through triangle",
            make_ray((0.2, 0.2, 5), (0, 0, -1)),
            make_triangle((0, 0, 0), (1, 0, 0), (0, 1, 0)),
        ),
        (
            "tangent circles",
            make_circle((0, 0, 0), 1.0),
            make_circle((3, 0, 0), 2.0),
        ),
        (
            "quarter sector vs crossing circle",
            make_sector((0, 0, 0), 2.0, direction=(1, 0, 0), range=0.25),
            make_circle((1, 1, 0), 1.0, normal=(1, 0, 0)),
        ),
        (
            "line through sphere",
            make_line((-5, 0, 0), (1, 0, 0)),
            make_sphere((0, 0, 0), 1.0),
        ),
        (
            "triangle cutting sphere",
            make_triangle((-2, -2, 0.5), (2, -2, 0.5), (0, 2, 0.5)),
            make_sphere((0, 0, 0), 1.0),
        ),
    ]

    for name, a, b in gallery:
        hit, points = intersect(a, b)
        print(f"{name}: hit={hit}")
        for p in points:
            print(f"    {_format_point(p)}")


def run_batch(num_rays: int, seed: int) -> None:
    """Fire random rays at a small scene and compare kernel and scalar results."""
    from src.shape3d import (
        batch_has_intersection,
        has_intersection,
        make_ray,
        make_rectangle,
        make_sphere,
        make_triangle,
    )

    triangles = [make_triangle((-1, -1, -2), (1, -1, -2), (0, 1, -2))]
    rectangles = [
        make_rectangle((0, -2, 0), 4.0, 4.0, direction=(1, 0, 0), up=(0, 0, 1)),
        make_rectangle((2, 0, 0), 4.0, 4.0, direction=(0, 1, 0), up=(0, 0, 1)),
    ]
    spheres = [make_sphere((0, 0, 0), 0.75), make_sphere((-1.5, 1.0, 0.5), 0.5)]

    rng = np.random.default_rng(seed)
    origins = rng.uniform(-4.0, 4.0, size=(num_rays, 3))
    directions = rng.normal(size=(num_rays, 3))
    rays = [make_ray(o, d) for o, d in zip(origins, directions)]

    start_time = time.time()
    mask = batch_has_intersection(rays, triangles, rectangles, spheres)
    kernel_time = time.time() - start_time

    start_time = time.time()
    targets = triangles + rectangles + spheres
    scalar = np.array([any(has_intersection(r, t) for t in targets) for r in rays])
    scalar_time = time.time() - start_time

    agree = int(np.sum(mask == scalar))
    print(f"Batch of {num_rays} rays: {int(mask.sum())} hit")
    print(f"  kernel: {kernel_time:.3f}s, scalar: {scalar_time:.3f}s")
    print(f"  agreement: {agree}/{num_rays}")


def main() -> int:
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Double precision kernels; use GPU if available, fall back to CPU
    if args.cpu:
        ti.init(arch=ti.cpu, default_fp=ti.f64)
    else:
        try:
            ti.init(arch=ti.gpu, default_fp=ti.f64)
        except Exception:
            ti.init(arch=ti.cpu, default_fp=ti.f64)

    from src.shape3d import IntersectorConfig, set_intersector_config

    set_intersector_config(IntersectorConfig(strict_dispatch=args.strict))

    try:
        show_gallery()
        run_batch(args.rays, args.seed)
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
