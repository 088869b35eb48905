"""Unit tests for sphere intersection.

Tests cover:
- Line, ray and segment against a sphere, including tangency and buried segments
- Plane cross-sections of a sphere
- Polygons, circles and sectors against a sphere
- Sphere pairs: overlap, tangency, nesting, concentric and separated
"""

import math

import numpy as np


def _has_point(points, expected, tol=1e-9):
    return any(np.allclose(p, expected, atol=tol) for p in points)


class TestLinearSphere:
    """Tests for line-family shapes against spheres."""

    def test_line_through_center(self):
        """Test a line through the center reports both surface points."""
        from src.shape3d import intersect, make_line, make_sphere

        sphere = make_sphere((0, 0, 0), 1.0)
        hit, points = intersect(make_line((-5, 0, 0), (1, 0, 0)), sphere)
        assert hit is True
        assert len(points) == 2
        assert _has_point(points, (-1.0, 0.0, 0.0))
        assert _has_point(points, (1.0, 0.0, 0.0))

    def test_tangent_line(self):
        """Test a tangent line reports a single point."""
        from src.shape3d import intersect, make_line, make_sphere

        sphere = make_sphere((0, 0, 0), 1.0)
        hit, points = intersect(sphere, make_line((-5, 1, 0), (1, 0, 0)))
        assert hit is True
        assert len(points) == 1
        assert np.allclose(points[0], (0.0, 1.0, 0.0))

    def test_line_missing_sphere(self):
        """Test a line passing outside the sphere."""
        from src.shape3d import has_intersection, make_line, make_sphere

        sphere = make_sphere((0, 0, 0), 1.0)
        assert has_intersection(make_line((-5, 1.5, 0), (1, 0, 0)), sphere) is False

    def test_buried_segment(self):
        """Test a segment entirely inside the ball reports its endpoints."""
        from src.shape3d import intersect, make_segment, make_sphere

        sphere = make_sphere((0, 0, 0), 1.0)
        hit, points = intersect(make_segment((-0.2, 0, 0), (0.2, 0, 0)), sphere)
        assert hit is True
        assert len(points) == 2
        assert _has_point(points, (-0.2, 0.0, 0.0))
        assert _has_point(points, (0.2, 0.0, 0.0))

    def test_ray_pointing_away(self):
        """Test a ray leaving the sphere behind does not intersect it."""
        from src.shape3d import has_intersection, make_ray, make_sphere

        sphere = make_sphere((0, 0, 0), 1.0)
        assert has_intersection(make_ray((2, 0, 0), (1, 0, 0)), sphere) is False
        assert has_intersection(make_ray((2, 0, 0), (-1, 0, 0)), sphere) is True

    def test_ray_from_inside(self):
        """Test a ray starting inside reports its origin and exit point."""
        from src.shape3d import intersect, make_ray, make_sphere

        sphere = make_sphere((0, 0, 0), 1.0)
        hit, points = intersect(make_ray((0, 0, 0), (1, 0, 0)), sphere)
        assert hit is True
        assert len(points) == 2
        assert _has_point(points, (0.0, 0.0, 0.0))
        assert _has_point(points, (1.0, 0.0, 0.0))


class TestCrossSection:
    """Tests for cross_section."""

    def test_plane_through_ball(self):
        """Test a plane at height 1 cuts a radius 2 sphere in a radius sqrt(3) circle."""
        from src.shape3d.core.vector import vec3
        from src.shape3d.geometry import make_sphere
        from src.shape3d.intersector.solid import cross_section

        sphere = make_sphere((0, 0, 0), 2.0)
        section = cross_section(sphere, vec3(5.0, 5.0, 1.0), vec3(0.0, 0.0, 1.0))
        assert section is not None
        assert np.allclose(section.center, (0.0, 0.0, 1.0))
        assert abs(section.radius - math.sqrt(3.0)) < 1e-12

    def test_tangent_plane(self):
        """Test a tangent plane gives a zero-radius circle."""
        from src.shape3d.core.vector import vec3
        from src.shape3d.geometry import make_sphere
        from src.shape3d.intersector.solid import cross_section

        sphere = make_sphere((0, 0, 0), 2.0)
        section = cross_section(sphere, vec3(0.0, 0.0, -2.0), vec3(0.0, 0.0, 1.0))
        assert section is not None
        assert section.radius == 0.0
        assert np.allclose(section.center, (0.0, 0.0, -2.0))

    def test_plane_missing_ball(self):
        """Test a plane beyond the radius gives None."""
        from src.shape3d.core.vector import vec3
        from src.shape3d.geometry import make_sphere
        from src.shape3d.intersector.solid import cross_section

        sphere = make_sphere((0, 0, 0), 2.0)
        assert cross_section(sphere, vec3(0.0, 0.0, 3.0), vec3(0.0, 0.0, 1.0)) is None


class TestPlanarSphere:
    """Tests for planar shapes against spheres."""

    def test_triangle_around_sphere(self):
        """Test a large triangle through the center reports the center."""
        from src.shape3d import intersect, make_sphere, make_triangle

        tri = make_triangle((-5, -5, 0), (5, -5, 0), (0, 5, 0))
        hit, points = intersect(tri, make_sphere((0, 0, 0), 1.0))
        assert hit is True
        assert _has_point(points, (0.0, 0.0, 0.0))

    def test_rectangle_tangent_to_sphere(self):
        """Test a rectangle resting on top of a sphere touches it at one point."""
        from src.shape3d import intersect, make_rectangle, make_sphere

        rect = make_rectangle((0, 0, 1), 2.0, 2.0)
        hit, points = intersect(make_sphere((0, 0, 0), 1.0), rect)
        assert hit is True
        assert len(points) == 1
        assert np.allclose(points[0], (0.0, 0.0, 1.0))

    def test_rectangle_edge_cuts_sphere(self):
        """Test every reported point lies in the rectangle and the ball."""
        from src.shape3d import intersect, make_rectangle, make_sphere

        rect = make_rectangle((1.5, 0, 0.2), 2.0, 2.0)
        sphere = make_sphere((0, 0, 0), 1.0)
        hit, points = intersect(rect, sphere)
        assert hit is True
        for p in points:
            assert rect.contains_point(p, tolerance=1e-9)
            assert sphere.contains_point(p, tolerance=1e-9)

    def test_circle_above_sphere(self):
        """Test a circle in a plane above the sphere misses."""
        from src.shape3d import has_intersection, make_circle, make_sphere

        assert has_intersection(make_circle((0, 0, 2), 5.0), make_sphere((0, 0, 0), 1.0)) is False

    def test_circle_around_sphere(self):
        """Test a filled circle through the sphere's equator intersects it."""
        from src.shape3d import intersect, make_circle, make_sphere

        hit, points = intersect(make_circle((0, 0, 0), 3.0), make_sphere((0, 0, 0), 1.0))
        assert hit is True
        assert _has_point(points, (0.0, 0.0, 0.0))

    def test_sector_and_sphere(self):
        """Test the sector's angular range decides sphere hits."""
        from src.shape3d import has_intersection, make_sector, make_sphere

        sector = make_sector((0, 0, 0), 2.0, range=0.25)
        assert has_intersection(sector, make_sphere((1, 1, 0.3), 0.5)) is True
        assert has_intersection(sector, make_sphere((-1, -1, 0.3), 0.5)) is False


class TestSphereSphere:
    """Tests for sphere pairs."""

    def test_overlapping(self):
        """Test overlapping spheres report the center of the intersection circle."""
        from src.shape3d import intersect, make_sphere

        hit, points = intersect(make_sphere((0, 0, 0), 1.0), make_sphere((1.5, 0, 0), 1.0))
        assert hit is True
        assert len(points) == 1
        assert np.allclose(points[0], (0.75, 0.0, 0.0))

    def test_tangent(self):
        """Test externally tangent spheres touch at one point."""
        from src.shape3d import intersect, make_sphere

        hit, points = intersect(make_sphere((0, 0, 0), 1.0), make_sphere((3, 0, 0), 2.0))
        assert hit is True
        assert np.allclose(points[0], (1.0, 0.0, 0.0))

    def test_separated(self):
        """Test distant spheres do not intersect."""
        from src.shape3d import has_intersection, make_sphere

        assert has_intersection(make_sphere((0, 0, 0), 1.0), make_sphere((3, 0, 0), 1.0)) is False

    def test_nested(self):
        """Test a sphere inside another reports the inner center in either order."""
        from src.shape3d import intersect, make_sphere

        big = make_sphere((0, 0, 0), 3.0)
        small = make_sphere((0.5, 0, 0), 1.0)
        for a, b in ((big, small), (small, big)):
            hit, points = intersect(a, b)
            assert hit is True
            assert np.allclose(points[0], (0.5, 0.0, 0.0))

    def test_concentric(self):
        """Test concentric spheres report the shared center."""
        from src.shape3d import intersect, make_sphere

        hit, points = intersect(make_sphere((1, 1, 1), 1.0), make_sphere((1, 1, 1), 2.0))
        assert hit is True
        assert np.allclose(points[0], (1.0, 1.0, 1.0))
