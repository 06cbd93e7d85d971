"""
Planar region made of polygons.

``PolygonsSet`` is the 2D region of the package: any combination of
polygons, holes, disjoint components and unbounded parts, stored as an
inside/outside BSP tree cut by lines. On top of the generic region queries
it rebuilds the boundary vertex loops and derives area, barycenter,
bounding box, longest edge and a polygon classification from them.
"""

import logging
import math
from typing import Iterable, List, Optional, Tuple

import numpy as np

from ..core.errors import InvalidGeometryError, PolygonValidityError, ValidityRule
from ..core.geometry import (
    EPS,
    NAN_VECTOR,
    Location,
    Vector2D,
    as_vertex_array,
    remove_consecutive_duplicates,
)
from ..intervals import IntervalsSet
from ..partitioning.bsp_tree import BSPTree
from ..partitioning.region import AbstractRegion, build_tree_from_boundary
from ..partitioning.region_factory import RegionFactory
from .classification import PolygonClassification, classify_loops, sort_vertices
from .line import Line
from .loops import Loop, build_vertex_loops
from .sub_line import SubLine


logger = logging.getLogger(__name__)


class PolygonsSet(AbstractRegion):
    """
    Region of the plane bounded by polygonal loops.

    Parameters
    ----------
    tree : BSPTree, optional
        Inside/outside tree cut by ``SubLine``s. The whole plane when omitted.
    tolerance : float
        Tolerance below which points are considered identical.

    Examples
    --------
    >>> square = PolygonsSet.from_loops([[(0, 0), (2, 0), (2, 2), (0, 2)]])
    >>> hole = PolygonsSet.from_box(0.5, 1.5, 0.5, 1.5)
    >>> ring = square - hole
    >>> ring.size
    3.0
    >>> ring.check_point((1.0, 1.0))
    <Location.OUTSIDE: 'outside'>
    """

    # Minimum number of distinguishable vertices in a loop
    MIN_POINT_NB = 3

    def __init__(self, tree: Optional[BSPTree] = None, tolerance: float = EPS):
        super().__init__(tree, tolerance)
        self._vertices: Optional[List[Loop]] = None
        self._classification: Optional[PolygonClassification] = None
        self._bounds: Optional[Tuple[float, float, float, float]] = None

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def whole_space(cls, tolerance: float = EPS) -> "PolygonsSet":
        return cls(tolerance=tolerance)

    @classmethod
    def empty(cls, tolerance: float = EPS) -> "PolygonsSet":
        return cls(BSPTree(False), tolerance)

    @classmethod
    def from_boundary(cls, boundary: Iterable[SubLine], tolerance: float = EPS) -> "PolygonsSet":
        """
        Build a region from its boundary sub-lines.

        Each sub-line must have the inside on its left (minus side). The
        sub-lines need not be connected; overlapping or crossing elements
        give the even/odd partition of the plane they induce.
        """
        return cls(build_tree_from_boundary(list(boundary)), tolerance)

    @classmethod
    def from_loops(cls, loops, tolerance: float = EPS) -> "PolygonsSet":
        """
        Build a region from vertex loops.

        Parameters
        ----------
        loops : sequence of array_like
            Loops of ``(x, y)`` vertices (or a single ``(M, 2)`` array).
            Each loop is closed implicitly. Outer boundaries go
            counter-clockwise, holes clockwise.
        tolerance : float
            Consecutive vertices closer than this are merged.

        Returns
        -------
        PolygonsSet
            The region; the whole plane for an empty loop list.

        Raises
        ------
        InvalidGeometryError
            If a loop is not made of 2D points or has fewer than three
            distinguishable vertices.
        """
        if isinstance(loops, np.ndarray) and loops.ndim == 2:
            loops = [loops]

        boundary: List[SubLine] = []
        for loop in loops:
            vertices = remove_consecutive_duplicates(as_vertex_array(loop), tolerance)
            if len(vertices) < cls.MIN_POINT_NB:
                raise InvalidGeometryError(
                    f"A loop needs at least {cls.MIN_POINT_NB} distinct vertices, got {len(vertices)}"
                )
            for start, end in zip(vertices, np.roll(vertices, -1, axis=0)):
                boundary.append(SubLine.from_points(start, end, tolerance))

        logger.debug("Building polygons set from %d boundary edges", len(boundary))
        return cls(build_tree_from_boundary(boundary), tolerance)

    @classmethod
    def from_box(cls, x_min: float, x_max: float, y_min: float, y_max: float,
                 tolerance: float = EPS) -> "PolygonsSet":
        """
        Axis-aligned rectangle.

        Raises
        ------
        InvalidGeometryError
            If the bounds are not strictly increasing.
        """
        if x_min >= x_max or y_min >= y_max:
            raise InvalidGeometryError(
                f"Invalid box bounds: x [{x_min}, {x_max}], y [{y_min}, {y_max}]"
            )

        min_min = Vector2D(x_min, y_min)
        max_min = Vector2D(x_max, y_min)
        max_max = Vector2D(x_max, y_max)
        min_max = Vector2D(x_min, y_max)
        region = RegionFactory().build_convex([
            Line(min_min, max_min, tolerance),
            Line(max_min, max_max, tolerance),
            Line(max_max, min_max, tolerance),
            Line(min_max, min_min, tolerance),
        ])
        return cls(region.get_tree(False), tolerance)

    @classmethod
    def from_sorted_vertices(cls, points, tolerance: float = EPS) -> "PolygonsSet":
        """
        Single polygon from unordered vertices.

        The vertices are sorted counter-clockwise around their centroid
        before building the loop, which gives a simple polygon for
        star-shaped vertex sets.
        """
        loops = sort_vertices([as_vertex_array(points).tolist()])
        if not loops:
            raise InvalidGeometryError("Cannot build a polygon without vertices")
        return cls.from_loops(loops, tolerance)

    def build_new(self, tree: BSPTree) -> "PolygonsSet":
        return type(self)(tree, self.tolerance)

    # ------------------------------------------------------------------
    # Boundary loops
    # ------------------------------------------------------------------

    def get_vertices(self) -> List[Loop]:
        """
        Boundary of the region as vertex loops.

        Returns
        -------
        list of list
            Open loops first. Closed loops list their vertices once, with
            the inside on the left (counter-clockwise around finite areas).
            Open loops start with None followed by a dummy point, the real
            vertices and a final dummy point; the dummy points only give the
            direction of the infinite edges. No boundary gives an empty list.
        """
        if self._vertices is None:
            tree = self.get_tree(True)
            self._vertices = build_vertex_loops(tree, self.tolerance)
        return [list(loop) for loop in self._vertices]

    def vertices_as_arrays(self) -> List[np.ndarray]:
        """Closed loops as ``(M, 2)`` arrays (open loops are skipped)."""
        return [np.asarray(loop, dtype=np.float64)
                for loop in self.get_vertices() if loop and loop[0] is not None]

    # ------------------------------------------------------------------
    # Geometrical properties
    # ------------------------------------------------------------------

    def _compute_geometrical_properties(self) -> None:
        loops = self.get_vertices()

        if not loops:
            tree = self.get_tree(False)
            if tree.cut is None and tree.attribute:
                # the instance covers the whole space
                self._size = math.inf
                self._barycenter = NAN_VECTOR
            else:
                self._size = 0.0
                self._barycenter = Vector2D(0.0, 0.0)
            return

        if loops[0][0] is None:
            # an open loop: the region is infinite
            self._size = math.inf
            self._barycenter = NAN_VECTOR
            return

        total = 0.0
        sum_x = 0.0
        sum_y = 0.0
        for poly in self.vertices_as_arrays():
            x0, y0 = poly[:, 0], poly[:, 1]
            x1, y1 = np.roll(x0, -1), np.roll(y0, -1)
            factor = x0 * y1 - y0 * x1
            total += float(np.sum(factor))
            sum_x += float(np.sum(factor * (x0 + x1)))
            sum_y += float(np.sum(factor * (y0 + y1)))

        if total < 0:
            # a finite outside surrounded by an infinite inside
            self._size = math.inf
            self._barycenter = NAN_VECTOR
        elif total == 0:
            self._size = 0.0
            self._barycenter = NAN_VECTOR
        else:
            self._size = total / 2
            self._barycenter = Vector2D(sum_x / (3 * total), sum_y / (3 * total))

    def get_classification(self) -> PolygonClassification:
        if self._classification is None:
            self._classification = classify_loops(self.get_vertices(), self.tolerance)
        return self._classification

    def check_polygon_set(self) -> bool:
        """
        Check that the region is a single simple bounded polygon.

        Returns
        -------
        bool
            Always True; failures raise.

        Raises
        ------
        PolygonValidityError
            With ``rule`` VERTEX_COUNT, DEGENERATE, CROSSING_BORDER or
            UNBOUNDED depending on the first violated rule.
        """
        loops = self.get_vertices()
        classification = self.get_classification()

        if not loops or (loops[0][0] is not None and len(loops) == 1
                         and len(remove_consecutive_duplicates(
                             np.asarray(loops[0], dtype=np.float64), self.tolerance))
                         < self.MIN_POINT_NB):
            raise PolygonValidityError(ValidityRule.VERTEX_COUNT, classification)
        if classification is PolygonClassification.DEGENERATE:
            raise PolygonValidityError(ValidityRule.DEGENERATE, classification)
        if classification is PolygonClassification.CROSSING_BORDER:
            raise PolygonValidityError(ValidityRule.CROSSING_BORDER, classification)
        if math.isinf(self.size):
            raise PolygonValidityError(ValidityRule.UNBOUNDED, classification)
        return True

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """``(min_x, min_y, max_x, max_y)`` of the region."""
        if self._bounds is None:
            if math.isinf(self.size):
                self._bounds = (-math.inf, -math.inf, math.inf, math.inf)
            else:
                arrays = self.vertices_as_arrays()
                if not arrays:
                    self._bounds = (0.0, 0.0, 0.0, 0.0)
                else:
                    stacked = np.vstack(arrays)
                    mins = stacked.min(axis=0)
                    maxs = stacked.max(axis=0)
                    self._bounds = (float(mins[0]), float(mins[1]),
                                    float(maxs[0]), float(maxs[1]))
        return self._bounds

    def get_min_x(self) -> float:
        return self.bounds[0]

    def get_min_y(self) -> float:
        return self.bounds[1]

    def get_max_x(self) -> float:
        return self.bounds[2]

    def get_max_y(self) -> float:
        return self.bounds[3]

    def get_bigger_length(self) -> float:
        """
        Length of the longest boundary edge.

        Returns
        -------
        float
            ``inf`` when the boundary has an open loop, 0 without boundary.
        """
        loops = self.get_vertices()
        if not loops:
            return 0.0
        if loops[0][0] is None:
            return math.inf

        bigger = 0.0
        for poly in self.vertices_as_arrays():
            edges = np.roll(poly, -1, axis=0) - poly
            bigger = max(bigger, float(np.max(np.hypot(edges[:, 0], edges[:, 1]))))
        return bigger

    # ------------------------------------------------------------------
    # Point and line queries
    # ------------------------------------------------------------------

    def contains_points(self, points) -> np.ndarray:
        """
        Vectorized inside test.

        Parameters
        ----------
        points : array_like
            Points of shape (N, 2).

        Returns
        -------
        np.ndarray
            Boolean mask, True for points inside or on the boundary.
        """
        points = np.atleast_2d(np.asarray(points, dtype=np.float64))
        return np.array([self.check_point(p) is not Location.OUTSIDE for p in points], dtype=bool)

    def line_intersection(self, line: Line) -> IntervalsSet:
        """
        Cross-section of the region along a line.

        Returns
        -------
        IntervalsSet
            Abscissas (along ``line``) of the parts inside the region.
        """
        inside = self.intersection(line.whole_hyperplane())
        if inside is None:
            return IntervalsSet.empty(line.tolerance)
        return inside.remaining_region

    # ------------------------------------------------------------------
    # Transformations
    # ------------------------------------------------------------------

    def translate(self, dx: float, dy: float) -> "PolygonsSet":
        """Copy of the region shifted by ``(dx, dy)``."""
        return self.build_new(_translate_tree(self.get_tree(False), dx, dy))

    def __repr__(self) -> str:
        tree = self.get_tree(False)
        if tree.cut is None:
            return f"PolygonsSet({'whole plane' if tree.attribute else 'empty'})"
        return f"PolygonsSet(nodes={tree.node_count()}, tolerance={self.tolerance:g})"


def _translate_tree(node: BSPTree, dx: float, dy: float) -> BSPTree:
    root = BSPTree()
    stack = [(node, root)]
    while stack:
        source, target = stack.pop()
        if source.cut is None:
            target.attribute = source.attribute
        else:
            target.cut = source.cut.translated(dx, dy)
            target.plus = BSPTree()
            target.minus = BSPTree()
            stack.append((source.plus, target.plus))
            stack.append((source.minus, target.minus))
    return root
