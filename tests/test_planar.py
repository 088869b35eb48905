"""Unit tests for plane classification and polygon-polygon intersection.

Tests cover:
- Plane relation classification
- Plane-plane intersection line
- 2D frame projection and edge crossing
- Coplanar polygon overlap, touching, nesting and separation
- Polygons in crossing planes
"""

import numpy as np


def _has_point(points, expected, tol=1e-9):
    return any(np.allclose(p, expected, atol=tol) for p in points)


class TestPlaneClassification:
    """Tests for classify_planes."""

    def test_parallel_planes_disjoint(self):
        """Test parallel rectangles at different heights are disjoint."""
        from src.shape3d import make_rectangle
        from src.shape3d.intersector.planar import PlaneRelation, classify_planes

        a = make_rectangle((0, 0, 0), 1.0, 1.0)
        b = make_rectangle((0, 0, 1), 1.0, 1.0)
        assert classify_planes(a, b) is PlaneRelation.DISJOINT

    def test_same_plane_coplanar(self):
        """Test shapes in the same plane are coplanar even with flipped normals."""
        from src.shape3d import make_circle, make_triangle
        from src.shape3d.intersector.planar import PlaneRelation, classify_planes

        tri = make_triangle((5, 0, 2), (6, 0, 2), (5, 1, 2))
        circle = make_circle((0, 0, 2), 1.0, normal=(0, 0, -1))
        assert classify_planes(tri, circle) is PlaneRelation.COPLANAR

    def test_perpendicular_planes_crossing(self):
        """Test perpendicular shapes cross."""
        from src.shape3d import make_circle, make_rectangle
        from src.shape3d.intersector.planar import PlaneRelation, classify_planes

        rect = make_rectangle((0, 0, 0), 1.0, 1.0)
        circle = make_circle((0, 0, 0), 1.0, normal=(1, 0, 0))
        assert classify_planes(rect, circle) is PlaneRelation.CROSSING

    def test_plane_intersection_line(self):
        """Test the line shared by z = 0 and x = 1."""
        from src.shape3d.core.vector import vec3
        from src.shape3d.intersector.planar import plane_intersection_line

        point, direction = plane_intersection_line(
            vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, 1.0), vec3(1.0, 5.0, 3.0), vec3(1.0, 0.0, 0.0)
        )
        assert np.allclose(point, (1.0, 0.0, 0.0))
        assert np.allclose(direction, (0.0, 1.0, 0.0))

    def test_plane_intersection_line_small_angle(self):
        """Test the shared line stays finite and on both planes for a tiny crossing angle."""
        import math

        from src.shape3d.core.vector import dot, vec3
        from src.shape3d.intersector.planar import plane_intersection_line

        n_b = vec3(0.0, math.sin(1e-9), math.cos(1e-9))
        ref_b = vec3(0.0, 0.0, 0.0)
        point, direction = plane_intersection_line(
            vec3(3.0, 0.0, 0.0), vec3(0.0, 0.0, 1.0), ref_b, n_b
        )
        assert np.all(np.isfinite(point))
        assert abs(point[2]) < 1e-12
        assert abs(dot(point - ref_b, n_b)) < 1e-12
        assert np.allclose(np.abs(direction), (1.0, 0.0, 0.0))


class TestPlaneFrame:
    """Tests for the 2D projection helpers."""

    def test_project_and_lift(self):
        """Test projecting then lifting returns the original in-plane point."""
        from src.shape3d import make_triangle
        from src.shape3d.core.vector import vec3
        from src.shape3d.intersector.planar import PlaneFrame

        tri = make_triangle((1, 0, 0), (1, 2, 0), (1, 0, 2))
        frame = PlaneFrame.for_polygon(tri)
        p = vec3(1.0, 0.5, 0.75)
        x, y = frame.project(p)
        assert abs(x - 0.5) < 1e-12
        assert np.allclose(frame.lift(x, y), p)

    def test_edge_crossing_2d(self):
        """Test crossing, parallel and out-of-range 2D edges."""
        from src.shape3d.intersector.planar import edge_crossing_2d

        assert np.allclose(edge_crossing_2d((0, 0), (2, 2), (0, 2), (2, 0)), (1.0, 1.0))
        assert edge_crossing_2d((0, 0), (1, 0), (0, 1), (1, 1)) is None
        assert edge_crossing_2d((0, 0), (1, 0), (2, -1), (2, 1)) is None

    def test_clip_parameter(self):
        """Test clipping to a domain with slack."""
        import math

        from src.shape3d.intersector.planar import clip_parameter

        assert clip_parameter(0.5, 0.0, 1.0) == 0.5
        assert clip_parameter(1.0 + 1e-12, 0.0, 1.0) == 1.0
        assert clip_parameter(1.1, 0.0, 1.0) is None
        assert clip_parameter(-50.0, -math.inf, math.inf) == -50.0


class TestCoplanarPolygons:
    """Tests for polygons sharing a plane."""

    def test_overlapping_squares(self):
        """Test overlapping squares report the two boundary crossings."""
        from src.shape3d import intersect, make_rectangle

        a = make_rectangle((0, 0, 0), 2.0, 2.0)
        b = make_rectangle((1, 1, 0), 2.0, 2.0)
        hit, points = intersect(a, b)
        assert hit is True
        assert len(points) == 2
        assert _has_point(points, (1.0, 0.0, 0.0))
        assert _has_point(points, (0.0, 1.0, 0.0))

    def test_squares_sharing_an_edge(self):
        """Test squares touching along an edge intersect."""
        from src.shape3d import has_intersection, make_rectangle

        a = make_rectangle((0.5, 0.5, 0), 1.0, 1.0)
        b = make_rectangle((1.5, 0.5, 0), 1.0, 1.0)
        assert has_intersection(a, b) is True

    def test_disjoint_coplanar(self):
        """Test separated coplanar polygons do not intersect."""
        from src.shape3d import has_intersection, intersect, make_rectangle, make_triangle

        rect = make_rectangle((0, 0, 0), 1.0, 1.0)
        tri = make_triangle((3, 3, 0), (4, 3, 0), (3, 4, 0))
        assert has_intersection(rect, tri) is False
        assert intersect(tri, rect).points == ()

    def test_identical_triangles(self):
        """Test a triangle intersects itself."""
        from src.shape3d import intersect, make_triangle

        tri = make_triangle((0, 0, 0), (1, 0, 0), (0, 1, 0))
        hit, points = intersect(tri, tri)
        assert hit is True
        for vertex in tri.get_vertices():
            assert _has_point(points, vertex)

    def test_nested_triangle_in_rectangle(self):
        """Test a triangle inside a rectangle reports its vertices as witnesses."""
        from src.shape3d import intersect, make_rectangle, make_triangle

        rect = make_rectangle((0, 0, 0), 4.0, 4.0)
        tri = make_triangle((0, 0, 0), (0.5, 0, 0), (0, 0.5, 0))
        hit, points = intersect(rect, tri)
        assert hit is True
        assert len(points) == 3
        for vertex in tri.get_vertices():
            assert _has_point(points, vertex)

    def test_flipped_normal_overlap(self):
        """Test overlap is found when the two normals point opposite ways."""
        from src.shape3d import has_intersection, make_rectangle, make_triangle

        rect = make_rectangle((0, 0, 0), 2.0, 2.0, direction=(0, 1, 0), up=(1, 0, 0))
        tri = make_triangle((0.5, 0.5, 0), (3, 0.5, 0), (0.5, 3, 0))
        assert has_intersection(rect, tri) is True


class TestCrossingPolygons:
    """Tests for polygons in crossing planes."""

    def test_perpendicular_rectangles(self):
        """Test a vertical rectangle cutting a horizontal one."""
        from src.shape3d import intersect, make_rectangle

        floor = make_rectangle((0, 0, 0), 2.0, 2.0)
        wall = make_rectangle((0, 0, 0), 1.0, 1.0, direction=(1, 0, 0), up=(0, 0, 1))
        hit, points = intersect(floor, wall)
        assert hit is True
        assert len(points) == 2
        assert _has_point(points, (-0.5, 0.0, 0.0))
        assert _has_point(points, (0.5, 0.0, 0.0))

    def test_perpendicular_rectangles_apart(self):
        """Test a vertical rectangle hovering above a horizontal one."""
        from src.shape3d import has_intersection, make_rectangle

        floor = make_rectangle((0, 0, 0), 2.0, 2.0)
        wall = make_rectangle((0, 0, 1.5), 1.0, 1.0, direction=(1, 0, 0), up=(0, 0, 1))
        assert has_intersection(floor, wall) is False

    def test_triangle_through_triangle(self):
        """Test a tilted triangle piercing another one."""
        from src.shape3d import intersect, make_triangle

        flat = make_triangle((-2, -2, 0), (2, -2, 0), (0, 2, 0))
        tilted = make_triangle((0, 0, -1), (0, 0, 1), (0, 1, 1))
        hit, points = intersect(flat, tilted)
        assert hit is True
        for p in points:
            assert abs(p[2]) < 1e-9
            assert flat.contains_point(p)
            assert tilted.contains_point(p)

    def test_parallel_rectangles(self):
        """Test parallel rectangles with identical extents do not intersect."""
        from src.shape3d import has_intersection, intersect, make_rectangle

        a = make_rectangle((0, 0, 0), 1.0, 1.0)
        b = make_rectangle((0, 0, 1), 1.0, 1.0)
        assert has_intersection(a, b) is False
        assert intersect(a, b).hit is False
