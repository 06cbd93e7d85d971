"""
Tests for boolean operations between regions.

Regions are compared through their area and the location of a grid of
sample points (points reported on a boundary are skipped).
"""

import math

import numpy as np
import pytest

from planar_regions import (
    BooleanOperator,
    Line,
    Location,
    PolygonsSet,
    RegionFactory,
    Side,
)


SAMPLES = [(x, y) for x in np.arange(-0.9, 4.0, 0.37) for y in np.arange(-0.9, 4.0, 0.37)]


def assert_same_region(a, b):
    if math.isinf(a.size) or math.isinf(b.size):
        assert math.isinf(a.size) and math.isinf(b.size)
    else:
        assert a.size == pytest.approx(b.size, abs=1e-9)
    for point in SAMPLES:
        loc_a = a.check_point(point)
        loc_b = b.check_point(point)
        if Location.BOUNDARY in (loc_a, loc_b):
            continue
        assert loc_a is loc_b, point


@pytest.fixture
def square():
    return PolygonsSet.from_box(0, 2, 0, 2)


@pytest.fixture
def triangle():
    return PolygonsSet.from_loops([[(1, -0.5), (3.5, 1), (1, 3)]])


class TestBooleanOperator:
    """Tests for the operator truth tables."""

    def test_tables(self):
        """Truth tables of the four operators."""
        assert BooleanOperator.UNION.apply(True, False)
        assert not BooleanOperator.UNION.apply(False, False)
        assert BooleanOperator.INTERSECTION.apply(True, True)
        assert not BooleanOperator.INTERSECTION.apply(True, False)
        assert not BooleanOperator.XOR.apply(True, True)
        assert BooleanOperator.XOR.apply(False, True)
        assert BooleanOperator.DIFFERENCE.apply(True, False)
        assert not BooleanOperator.DIFFERENCE.apply(True, True)


class TestRegionFactory:
    """Tests for the consuming low-level API."""

    def test_union_area(self):
        """Two overlapping 2x2 boxes cover an area of seven."""
        a = PolygonsSet.from_box(0, 2, 0, 2)
        b = PolygonsSet.from_box(1, 3, 1, 3)
        assert RegionFactory().union(a, b).size == pytest.approx(7.0)

    def test_intersection_area(self):
        """Overlap of two shifted boxes."""
        a = PolygonsSet.from_box(0, 2, 0, 2)
        b = PolygonsSet.from_box(1, 3, 1, 3)
        assert RegionFactory().intersection(a, b).size == pytest.approx(1.0)

    def test_difference_area(self):
        """A box with a hole punched out."""
        a = PolygonsSet.from_box(0, 3, 0, 3)
        b = PolygonsSet.from_box(1, 2, 1, 2)
        assert RegionFactory().difference(a, b).size == pytest.approx(8.0)

    def test_xor_area(self):
        """Symmetric difference excludes the overlap."""
        a = PolygonsSet.from_box(0, 2, 0, 2)
        b = PolygonsSet.from_box(1, 3, 1, 3)
        assert RegionFactory().xor(a, b).size == pytest.approx(6.0)

    def test_union_all(self):
        """Folding disjoint boxes keeps one loop per box."""
        boxes = [PolygonsSet.from_box(i, i + 1, 0, 1) for i in range(0, 6, 2)]
        union = RegionFactory().union_all(boxes)
        assert union.size == pytest.approx(3.0)
        assert len(union.get_vertices()) == 3

    def test_intersection_all(self):
        """Folding intersections of three boxes."""
        boxes = [PolygonsSet.from_box(0, 3, 0, 3),
                 PolygonsSet.from_box(1, 4, 0, 3),
                 PolygonsSet.from_box(0, 3, 1, 4)]
        assert RegionFactory().intersection_all(boxes).size == pytest.approx(4.0)

    def test_fold_of_nothing(self):
        """Folding no region gives None."""
        assert RegionFactory().union_all([]) is None

    def test_build_convex(self):
        """Three lines bound a triangle."""
        lines = [Line((0, 0), (1, 0)), Line((1, 0), (0, 1)), Line((0, 1), (0, 0))]
        region = RegionFactory().build_convex(lines)
        assert isinstance(region, PolygonsSet)
        assert region.size == pytest.approx(0.5)

    def test_build_convex_empty(self):
        """No lines gives None."""
        assert RegionFactory().build_convex([]) is None

    def test_complement_leaves_operand(self, square):
        """Complement returns a new region and keeps the operand."""
        complement = RegionFactory().complement(square)
        assert square.size == pytest.approx(4.0)
        assert complement.size == math.inf
        assert complement.check_point((1, 1)) is Location.OUTSIDE
        assert complement.check_point((5, 5)) is Location.INSIDE


class TestAlgebraLaws:
    """Algebraic identities between region operations."""

    def test_union_commutes(self, square, triangle):
        """a | b equals b | a."""
        assert_same_region(square | triangle, triangle | square)

    def test_intersection_commutes(self, square, triangle):
        """a & b equals b & a."""
        assert_same_region(square & triangle, triangle & square)

    def test_difference_is_intersection_with_complement(self, square, triangle):
        """a - b equals a & ~b."""
        assert_same_region(square - triangle, square & ~triangle)

    def test_xor_is_union_minus_intersection(self, square, triangle):
        """a ^ b equals (a | b) - (a & b)."""
        assert_same_region(square ^ triangle, (square | triangle) - (square & triangle))

    def test_union_idempotent(self, square):
        """a | a equals a."""
        assert_same_region(square | square, square)

    def test_intersection_idempotent(self, triangle):
        """a & a equals a."""
        assert_same_region(triangle & triangle, triangle)

    def test_double_complement(self, triangle):
        """~~a equals a."""
        assert_same_region(~~triangle, triangle)

    def test_operands_survive(self, square, triangle):
        """Operators never modify their operands."""
        square | triangle
        square - triangle
        assert square.size == pytest.approx(4.0)
        assert triangle.size == pytest.approx(0.5 * 2.5 * 3.5)

    def test_containment_monotonicity(self):
        """Containment is one way and absorbs in union."""
        inner = PolygonsSet.from_box(1, 2, 1, 2)
        outer = PolygonsSet.from_box(0, 3, 0, 3)
        assert outer.contains(inner)
        assert not inner.contains(outer)
        assert_same_region(inner | outer, outer)

    def test_union_with_empty_and_full(self, square):
        """Empty and whole space act as identity and absorbing elements."""
        assert_same_region(square | PolygonsSet.empty(), square)
        assert (square | PolygonsSet.whole_space()).is_full()
        assert (square & PolygonsSet.empty()).is_empty()


class TestRegionQueries:
    """Tests for generic region queries."""

    def test_empty_and_full(self):
        """Emptiness and fullness of simple regions."""
        assert PolygonsSet().is_full()
        assert not PolygonsSet().is_empty()
        assert PolygonsSet.empty().is_empty()
        assert (PolygonsSet.from_box(0, 1, 0, 1) - PolygonsSet.from_box(-1, 2, -1, 2)).is_empty()

    def test_side(self, square):
        """Side of a square with respect to lines."""
        assert square.side(Line((5, 0), (5, 1))) is Side.MINUS
        assert square.side(Line((5, 1), (5, 0))) is Side.PLUS
        assert square.side(Line((1, -1), (1, 1))) is Side.BOTH

    def test_boundary_size(self, square):
        """Perimeter of a square."""
        assert square.boundary_size == pytest.approx(8.0)

    def test_cross_section(self):
        """A line across a ring keeps two pieces."""
        ring = PolygonsSet.from_box(0, 3, 0, 3) - PolygonsSet.from_box(1, 2, 1, 2)
        inside = ring.intersection(Line((-1, 1.5), (1, 1.5)).whole_hyperplane())
        assert inside.size == pytest.approx(2.0)
        assert len(inside.get_segments()) == 2

    def test_cross_section_miss(self, square):
        """A line missing the region gives None."""
        assert square.intersection(Line((0, 5), (1, 5)).whole_hyperplane()) is None

    def test_intersection_with_region(self, square, triangle):
        """intersection() with a region gives the region intersection."""
        result = square.intersection(triangle)
        assert isinstance(result, PolygonsSet)
        assert_same_region(result, square & triangle)
        assert square.size == pytest.approx(4.0)
        assert triangle.size == pytest.approx(0.5 * 2.5 * 3.5)
