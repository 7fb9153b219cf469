"""Tests for GeometryCalculator."""

import numpy as np
import pytest

from facial_geometry.processing.geometry import GeometryCalculator


class TestDistance:

    def test_pythagorean(self):
        assert GeometryCalculator.distance((0, 0), (3, 4)) == pytest.approx(5.0)

    def test_ignores_depth(self):
        assert GeometryCalculator.distance((0, 0, 10), (3, 4, -10)) == pytest.approx(5.0)


class TestInteriorAngle:

    def test_right_angle(self):
        assert GeometryCalculator.interior_angle((1, 0), (0, 0), (0, 1)) == pytest.approx(90.0)

    def test_straight_line_is_180(self):
        assert GeometryCalculator.interior_angle((-1, 0), (0, 0), (1, 0)) == pytest.approx(180.0)

    def test_folded_back_is_0(self):
        assert GeometryCalculator.interior_angle((1, 0), (0, 0), (2, 0)) == pytest.approx(0.0)

    def test_degenerate_edge_returns_none(self):
        assert GeometryCalculator.interior_angle((0, 0), (0, 0), (1, 1)) is None

    def test_polyline_skips_degenerate_vertices(self):
        points = [(0, 0), (1, 0), (1, 0), (2, 1)]
        angles = GeometryCalculator.polyline_interior_angles(points)
        assert angles == []

    def test_polyline_inner_vertices_only(self):
        points = [(0, 0), (1, 0), (2, 0), (3, 0)]
        assert GeometryCalculator.polyline_interior_angles(points) == pytest.approx([180.0, 180.0])


class TestFaceGeometry:

    def test_polygon_center(self):
        assert GeometryCalculator.polygon_center([(0, 0), (4, 0), (4, 2), (0, 2)]) == (2.0, 1.0)

    def test_level_face_has_zero_roll(self, default_points):
        points = default_points.copy()
        points[33] = (280.0, 200.0)
        points[263] = (360.0, 200.0)
        pitch, yaw, roll = GeometryCalculator.calculate_face_angles(points)
        assert roll == pytest.approx(0.0)

    def test_face_size(self):
        points = np.array([[10.0, 20.0], [110.0, 20.0], [60.0, 220.0]])
        assert GeometryCalculator.calculate_face_size(points) == (100.0, 200.0)

    def test_get_face_geometry(self, default_points):
        geometry = GeometryCalculator.get_face_geometry(default_points)
        assert geometry.face_width > 0
        assert geometry.face_height > 0
