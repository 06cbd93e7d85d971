"""
Sub-line: a line restricted to a set of abscissa intervals.

This is the 2D sub-hyperplane type used as BSP cut and as boundary element.
"""

import math
from typing import List, Optional

from ..core.geometry import ANGULAR_EPS, EPS, Location, Side, Vector2D, as_vector
from ..intervals import IntervalsSet
from ..partitioning.hyperplane import SplitSubHyperplane
from .line import Line
from .segment import Segment


class SubLine:
    """
    Part of a line.

    Parameters
    ----------
    line : Line
        Supporting line.
    remaining_region : IntervalsSet
        Abscissas (along ``line``) covered by the sub-line.
    """

    __slots__ = ('hyperplane', 'remaining_region')

    def __init__(self, line: Line, remaining_region: IntervalsSet):
        self.hyperplane = line
        self.remaining_region = remaining_region

    @classmethod
    def from_points(cls, start, end, tolerance: float = EPS) -> "SubLine":
        """Sub-line covering the segment from ``start`` to ``end``."""
        line = Line(start, end, tolerance)
        return cls(line, IntervalsSet(line.to_sub_space(start), line.to_sub_space(end), tolerance))

    @property
    def line(self) -> Line:
        return self.hyperplane

    def __repr__(self) -> str:
        return f"SubLine({self.hyperplane!r}, {self.remaining_region!r})"

    @property
    def size(self) -> float:
        return self.remaining_region.size

    def is_empty(self) -> bool:
        return self.remaining_region.is_empty()

    def copy(self) -> "SubLine":
        return SubLine(self.hyperplane, self.remaining_region.copy())

    def covers(self, point) -> bool:
        location = self.remaining_region.check_point(self.hyperplane.to_sub_space(point))
        return location is not Location.OUTSIDE

    # ------------------------------------------------------------------
    # Partitioning
    # ------------------------------------------------------------------

    def _plus_above(self, line: Line) -> bool:
        # the offset with respect to ``line`` grows along this sub-line
        return line.sin * self.hyperplane.cos - line.cos * self.hyperplane.sin > 0.0

    def side(self, line: Line) -> Side:
        """Position of the sub-line with respect to a line."""
        this_line = self.hyperplane
        crossing = this_line.intersection(line)
        if crossing is None:
            global_offset = line.offset_of_line(this_line)
            if global_offset < -this_line.tolerance:
                return Side.MINUS
            if global_offset > this_line.tolerance:
                return Side.PLUS
            return Side.HYPER

        return self.remaining_region.side(this_line.to_sub_space(crossing), self._plus_above(line))

    def split(self, line: Line) -> SplitSubHyperplane:
        """
        Split the sub-line in two parts by a line.

        Parallel lines send the whole sub-line to one side; a sub-line
        lying on ``line`` goes to the plus part.

        Returns
        -------
        SplitSubHyperplane
            Plus and minus parts, either of which may be empty.
        """
        this_line = self.hyperplane
        crossing = this_line.intersection(line)
        tolerance = this_line.tolerance

        if crossing is None:
            empty = SubLine(this_line, IntervalsSet.empty(tolerance))
            if line.offset_of_line(this_line) < -tolerance:
                return SplitSubHyperplane(empty, self)
            return SplitSubHyperplane(self, empty)

        plus, minus = self.remaining_region.split(this_line.to_sub_space(crossing),
                                                  self._plus_above(line))
        return SplitSubHyperplane(SubLine(this_line, plus), SubLine(this_line, minus))

    def reunite(self, other: "SubLine") -> "SubLine":
        """Union with a sub-line lying on the same line."""
        return SubLine(self.hyperplane, self.remaining_region.union(other.remaining_region))

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def _point_at(self, abscissa: float) -> Vector2D:
        line = self.hyperplane
        if math.isfinite(abscissa):
            return line.to_space(abscissa)
        # unbounded end: infinite along each axis the line actually moves on
        x = math.copysign(math.inf, abscissa * line.cos) if abs(line.cos) > ANGULAR_EPS \
            else -line.origin_offset * line.sin
        y = math.copysign(math.inf, abscissa * line.sin) if abs(line.sin) > ANGULAR_EPS \
            else line.origin_offset * line.cos
        return Vector2D(x, y)

    def get_segments(self) -> List[Segment]:
        """
        Segments making up the sub-line, in increasing abscissa order.

        Unbounded ends are reported with infinite coordinates.
        """
        return [Segment(self._point_at(interval.lower), self._point_at(interval.upper),
                        self.hyperplane)
                for interval in self.remaining_region]

    def intersection(self, other: "SubLine", include_end_points: bool = True) -> Optional[Vector2D]:
        """
        Crossing point of two sub-lines.

        Parameters
        ----------
        other : SubLine
            Other sub-line.
        include_end_points : bool
            If False, crossings at the end of either sub-line are ignored.

        Returns
        -------
        Vector2D or None
            The crossing point, None if the sub-lines do not cross (parallel
            sub-lines never cross, even when they overlap).
        """
        crossing = self.hyperplane.intersection(other.hyperplane)
        if crossing is None:
            return None

        loc1 = self.remaining_region.check_point(self.hyperplane.to_sub_space(crossing))
        loc2 = other.remaining_region.check_point(other.hyperplane.to_sub_space(crossing))

        if include_end_points:
            if loc1 is not Location.OUTSIDE and loc2 is not Location.OUTSIDE:
                return crossing
            return None
        if loc1 is Location.INSIDE and loc2 is Location.INSIDE:
            return crossing
        return None

    def translated(self, dx: float, dy: float) -> "SubLine":
        line = self.hyperplane
        shift = line.cos * dx + line.sin * dy
        return SubLine(line.translated(dx, dy), self.remaining_region.shifted(shift))

    def contains_point(self, point) -> bool:
        """True if ``point`` lies on the sub-line (tolerance included)."""
        point = as_vector(point)
        return self.hyperplane.contains(point) and self.covers(point)
