"""
Unit tests for core geometry module.
"""

import math

import numpy as np
import pytest

from planar_regions.core.errors import InvalidGeometryError
from planar_regions.core.geometry import (
    EPS,
    NAN_VECTOR,
    Vector2D,
    as_vector,
    as_vertex_array,
    ensure_ccw,
    ensure_cw,
    normalize_angle,
    polygon_area,
    remove_consecutive_duplicates,
    signed_area,
)


class TestPolygonArea:
    """Tests for polygon_area() and signed_area() functions."""

    def test_unit_square(self):
        """Unit square should have area 1."""
        square = np.array([[0, 0], [1, 0], [1, 1], [0, 1]], dtype=float)
        assert abs(polygon_area(square) - 1.0) < EPS

    def test_triangle(self):
        """Triangle with base 2 and height 2 should have area 2."""
        triangle = np.array([[0, 0], [2, 0], [1, 2]], dtype=float)
        assert abs(polygon_area(triangle) - 2.0) < EPS

    def test_degenerate_polygon(self):
        """Polygon with < 3 vertices should have area 0."""
        line = np.array([[0, 0], [1, 1]], dtype=float)
        assert polygon_area(line) == 0.0

        point = np.array([[0, 0]], dtype=float)
        assert polygon_area(point) == 0.0

    def test_signed_area_orientation(self):
        """Signed area is positive for CCW, negative for CW."""
        ccw_square = np.array([[0, 0], [1, 0], [1, 1], [0, 1]], dtype=float)
        cw_square = ccw_square[::-1]
        assert signed_area(ccw_square) == pytest.approx(1.0)
        assert signed_area(cw_square) == pytest.approx(-1.0)

    def test_order_invariant(self):
        """Area should be same regardless of vertex order (CCW vs CW)."""
        ccw_square = np.array([[0, 0], [1, 0], [1, 1], [0, 1]], dtype=float)
        cw_square = np.array([[0, 0], [0, 1], [1, 1], [1, 0]], dtype=float)
        assert abs(polygon_area(ccw_square) - polygon_area(cw_square)) < EPS


class TestOrientation:
    """Tests for ensure_ccw() and ensure_cw() functions."""

    def test_ccw_unchanged(self):
        """CCW polygon should remain unchanged."""
        ccw_square = np.array([[0, 0], [1, 0], [1, 1], [0, 1]], dtype=float)
        result = ensure_ccw(ccw_square)
        np.testing.assert_array_almost_equal(result, ccw_square)

    def test_cw_reversed(self):
        """CW polygon should be reversed to CCW."""
        cw_square = np.array([[0, 0], [0, 1], [1, 1], [1, 0]], dtype=float)
        result = ensure_ccw(cw_square)
        np.testing.assert_array_almost_equal(result, cw_square[::-1])

    def test_ensure_cw(self):
        """CCW polygon should be reversed to CW, CW left alone."""
        ccw_square = np.array([[0, 0], [1, 0], [1, 1], [0, 1]], dtype=float)
        assert signed_area(ensure_cw(ccw_square)) < 0
        cw_square = ccw_square[::-1]
        np.testing.assert_array_almost_equal(ensure_cw(cw_square), cw_square)


class TestVertexArrays:
    """Tests for vertex array validation and cleanup."""

    def test_list_of_tuples(self):
        """A list of pairs becomes an (N, 2) float array."""
        arr = as_vertex_array([(0, 0), (1, 0), (1, 1)])
        assert arr.shape == (3, 2)
        assert arr.dtype == np.float64

    def test_empty(self):
        """No vertices gives an empty (0, 2) array."""
        assert as_vertex_array([]).shape == (0, 2)

    def test_wrong_shape(self):
        """Three-dimensional points are rejected."""
        with pytest.raises(InvalidGeometryError):
            as_vertex_array([(0, 0, 0), (1, 0, 0)])

    def test_non_finite(self):
        """Infinite coordinates are rejected."""
        with pytest.raises(ValueError):
            as_vertex_array([(0, 0), (np.inf, 0), (1, 1)])

    def test_remove_consecutive_duplicates(self):
        """Near-identical neighbours collapse, including the closing vertex."""
        poly = np.array([[0, 0], [1, 0], [1, 1e-12], [1, 1], [0, 1], [0, 0]], dtype=float)
        result = remove_consecutive_duplicates(poly)
        np.testing.assert_array_almost_equal(result, [[0, 0], [1, 0], [1, 1], [0, 1]])

    def test_remove_duplicates_keeps_distinct(self):
        """Distinct vertices are all kept."""
        poly = np.array([[0, 0], [1, 0], [0, 1]], dtype=float)
        assert len(remove_consecutive_duplicates(poly)) == 3

    def test_remove_duplicates_tolerance(self):
        """Vertices closer than the tolerance collapse."""
        poly = np.array([[0, 0], [0.05, 0], [1, 0], [0, 1]], dtype=float)
        assert len(remove_consecutive_duplicates(poly, tolerance=0.1)) == 3


class TestVector2D:
    """Tests for the Vector2D value type."""

    def test_arithmetic(self):
        """Basic vector operations."""
        a = Vector2D(1.0, 2.0)
        b = Vector2D(3.0, -1.0)
        assert a.add(b) == (4.0, 1.0)
        assert b.subtract(a) == (2.0, -3.0)
        assert a.scale(2.0) == (2.0, 4.0)
        assert a.dot(b) == pytest.approx(1.0)
        assert a.cross(b) == pytest.approx(-7.0)

    def test_norm_and_distance(self):
        """Euclidean norm and distance to a tuple."""
        assert Vector2D(3.0, 4.0).norm() == pytest.approx(5.0)
        assert Vector2D(0.0, 0.0).distance((3.0, 4.0)) == pytest.approx(5.0)

    def test_as_vector(self):
        """Numpy pairs convert to Vector2D."""
        v = as_vector(np.array([1, 2]))
        assert isinstance(v, Vector2D)
        assert v == (1.0, 2.0)

    def test_nan_vector(self):
        """Only the NaN vector reports NaN."""
        assert NAN_VECTOR.is_nan()
        assert not Vector2D(0.0, 0.0).is_nan()


class TestNormalizeAngle:
    """Tests for normalize_angle() function."""

    def test_range_around_pi(self):
        """Angles land in [0, 2 pi) without changing direction."""
        for angle in [-7.0, -math.pi, 0.0, 1.0, 2 * math.pi, 10.0]:
            result = normalize_angle(angle, math.pi)
            assert 0.0 <= result < 2 * math.pi
            assert math.sin(result) == pytest.approx(math.sin(angle))
            assert math.cos(result) == pytest.approx(math.cos(angle))

    def test_range_around_zero(self):
        """Centering on zero gives angles in [-pi, pi)."""
        assert normalize_angle(3 * math.pi / 2, 0.0) == pytest.approx(-math.pi / 2)
