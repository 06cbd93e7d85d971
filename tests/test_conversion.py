"""
Tests for shapely interoperability.

Shapely serves as an independent oracle: boolean operations computed on
the BSP representation must agree with the same operations on shapely
geometries.
"""

import pytest
from shapely.geometry import MultiPolygon, Point, Polygon, box

from planar_regions import (
    InvalidGeometryError,
    Location,
    PolygonsSet,
    from_shapely,
    to_shapely,
)


TRIANGLE = Polygon([(0, 0), (4, 0), (0, 4)])
SQUARE = box(1, 1, 3, 3)


@pytest.fixture
def regions():
    return from_shapely(TRIANGLE), from_shapely(SQUARE)


class TestShapelyOracle:
    """Boolean operations compared with shapely."""

    def test_union(self, regions):
        """Union area matches shapely."""
        a, b = regions
        assert (a | b).size == pytest.approx(TRIANGLE.union(SQUARE).area)

    def test_intersection(self, regions):
        """Intersection area matches shapely."""
        a, b = regions
        assert (a & b).size == pytest.approx(TRIANGLE.intersection(SQUARE).area)

    def test_difference(self, regions):
        """Difference area matches shapely."""
        a, b = regions
        assert (a - b).size == pytest.approx(TRIANGLE.difference(SQUARE).area)

    def test_xor(self, regions):
        """Symmetric difference area matches shapely."""
        a, b = regions
        assert (a ^ b).size == pytest.approx(TRIANGLE.symmetric_difference(SQUARE).area)

    def test_union_shape(self, regions):
        """Union outline matches shapely."""
        a, b = regions
        expected = TRIANGLE.union(SQUARE)
        result = to_shapely(a | b)
        assert result.symmetric_difference(expected).area == pytest.approx(0.0, abs=1e-9)

    def test_point_locations(self, regions):
        """Point location of a difference matches shapely."""
        a, b = regions
        difference = a - b
        expected = TRIANGLE.difference(SQUARE)
        for x, y in [(0.5, 0.5), (2.0, 1.5), (1.5, 2.0), (3.5, 0.2), (2.5, 2.5)]:
            inside = difference.check_point((x, y)) is Location.INSIDE
            assert inside == expected.contains(Point(x, y)), (x, y)


class TestToShapely:
    """Tests for to_shapely()."""

    def test_single_polygon(self):
        """A box becomes a Polygon."""
        result = to_shapely(PolygonsSet.from_box(0, 2, 0, 1))
        assert isinstance(result, Polygon)
        assert result.area == pytest.approx(2.0)

    def test_holed_square(self):
        """A hole becomes a polygon interior."""
        ring = PolygonsSet.from_box(0, 3, 0, 3) - PolygonsSet.from_box(1, 2, 1, 2)
        result = to_shapely(ring)
        assert isinstance(result, Polygon)
        assert len(result.interiors) == 1
        assert result.area == pytest.approx(8.0)

    def test_two_components(self):
        """Disjoint parts become a MultiPolygon."""
        region = PolygonsSet.from_box(0, 1, 0, 1) | PolygonsSet.from_box(2, 3, 0, 1)
        result = to_shapely(region)
        assert isinstance(result, MultiPolygon)
        assert len(result.geoms) == 2
        assert result.area == pytest.approx(2.0)

    def test_empty(self):
        """The empty region becomes an empty geometry."""
        assert to_shapely(PolygonsSet.empty()).is_empty

    def test_unbounded_rejected(self):
        """Unbounded regions have no shapely counterpart."""
        with pytest.raises(InvalidGeometryError):
            to_shapely(~PolygonsSet.from_box(0, 1, 0, 1))


class TestFromShapely:
    """Tests for from_shapely()."""

    def test_clockwise_shell_is_reoriented(self):
        """A clockwise shell still describes its interior."""
        clockwise = Polygon([(0, 0), (0, 1), (1, 1), (1, 0)])
        assert from_shapely(clockwise).size == pytest.approx(1.0)

    def test_polygon_with_hole(self):
        """Interiors become holes."""
        holed = Polygon([(0, 0), (4, 0), (4, 4), (0, 4)], [[(1, 1), (3, 1), (3, 3), (1, 3)]])
        region = from_shapely(holed)
        assert region.size == pytest.approx(12.0)
        assert region.check_point((2, 2)) is Location.OUTSIDE
        assert region.check_point((0.5, 2)) is Location.INSIDE

    def test_multipolygon(self):
        """Each polygon of a MultiPolygon gives one loop."""
        region = from_shapely(MultiPolygon([box(0, 0, 1, 1), box(2, 2, 4, 4)]))
        assert region.size == pytest.approx(5.0)
        assert len(region.get_vertices()) == 2

    def test_empty(self):
        """An empty polygon gives the empty region."""
        assert from_shapely(Polygon()).is_empty()

    def test_unsupported_geometry(self):
        """Points are rejected."""
        with pytest.raises(InvalidGeometryError):
            from_shapely(Point(0, 0))

    def test_round_trip(self):
        """Shapely to region and back keeps the shape."""
        region = from_shapely(TRIANGLE)
        assert to_shapely(region).symmetric_difference(TRIANGLE).area == pytest.approx(0.0, abs=1e-9)
