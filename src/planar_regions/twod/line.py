"""
Oriented infinite 2D line.

A line is stored as its direction angle (with cached cosine and sine) and
the signed offset of the origin. Points are mapped to a 1D abscissa along
the line and back. The offset of a point is positive on the right of the
direction of travel (the plus side) and negative on its left (the minus
side), so a counter-clockwise loop has its interior on the minus side of
every edge.
"""

import math
from typing import TYPE_CHECKING, Optional

from ..core.errors import InvalidGeometryError
from ..core.geometry import ANGULAR_EPS, EPS, Vector2D, as_vector, normalize_angle
from ..intervals import IntervalsSet

if TYPE_CHECKING:
    from .sub_line import SubLine
    from .polygons_set import PolygonsSet


class Line:
    """
    Oriented line through two points.

    Parameters
    ----------
    p1 : (x, y)
        First point; the line is oriented from ``p1`` to ``p2``.
    p2 : (x, y)
        Second point.
    tolerance : float
        Distance below which points are considered to belong to the line.

    Raises
    ------
    InvalidGeometryError
        If the two points coincide.
    """

    __slots__ = ('angle', 'cos', 'sin', 'origin_offset', 'tolerance')

    def __init__(self, p1, p2, tolerance: float = EPS):
        p1 = as_vector(p1)
        p2 = as_vector(p2)
        dx = p2.x - p1.x
        dy = p2.y - p1.y
        d = math.hypot(dx, dy)
        if d <= tolerance:
            raise InvalidGeometryError(f"Cannot build a line through coincident points {p1} and {p2}")

        self.angle = normalize_angle(math.pi + math.atan2(-dy, -dx), math.pi)
        self.cos = math.cos(self.angle)
        self.sin = math.sin(self.angle)
        self.origin_offset = (p2.x * p1.y - p1.x * p2.y) / d
        self.tolerance = tolerance

    @classmethod
    def from_angle(cls, point, angle: float, tolerance: float = EPS) -> "Line":
        """Line through ``point`` with direction ``angle`` (radians)."""
        point = as_vector(point)
        angle = normalize_angle(angle, math.pi)
        cos = math.cos(angle)
        sin = math.sin(angle)
        return cls._from_parameters(angle, cos, sin, cos * point.y - sin * point.x, tolerance)

    @classmethod
    def _from_parameters(cls, angle: float, cos: float, sin: float,
                         origin_offset: float, tolerance: float) -> "Line":
        line = cls.__new__(cls)
        line.angle = angle
        line.cos = cos
        line.sin = sin
        line.origin_offset = origin_offset
        line.tolerance = tolerance
        return line

    def __repr__(self) -> str:
        return f"Line(angle={self.angle:.6g}, origin_offset={self.origin_offset:.6g})"

    def copy(self) -> "Line":
        return Line._from_parameters(self.angle, self.cos, self.sin,
                                     self.origin_offset, self.tolerance)

    def reverse(self) -> "Line":
        """Same line with the opposite orientation."""
        angle = self.angle + math.pi if self.angle < math.pi else self.angle - math.pi
        return Line._from_parameters(angle, -self.cos, -self.sin,
                                     -self.origin_offset, self.tolerance)

    # ------------------------------------------------------------------
    # Point mapping
    # ------------------------------------------------------------------

    def to_sub_space(self, point) -> float:
        """Abscissa of the projection of ``point`` on the line."""
        return self.cos * point[0] + self.sin * point[1]

    def to_space(self, abscissa: float) -> Vector2D:
        """Point of the line at ``abscissa``."""
        return Vector2D(abscissa * self.cos - self.origin_offset * self.sin,
                        abscissa * self.sin + self.origin_offset * self.cos)

    def point_at(self, abscissa: float, offset: float) -> Vector2D:
        """Point at ``abscissa`` along the line and signed ``offset`` across it."""
        d_offset = offset - self.origin_offset
        return Vector2D(abscissa * self.cos + d_offset * self.sin,
                        abscissa * self.sin - d_offset * self.cos)

    def offset(self, point) -> float:
        """Signed distance of a point (positive on the plus/right side)."""
        return self.sin * point[0] - self.cos * point[1] + self.origin_offset

    def offset_of_line(self, line: "Line") -> float:
        """Offset of a parallel line with respect to this one."""
        if self.cos * line.cos + self.sin * line.sin > 0:
            return self.origin_offset - line.origin_offset
        return self.origin_offset + line.origin_offset

    def distance(self, point) -> float:
        return abs(self.offset(point))

    def contains(self, point) -> bool:
        return abs(self.offset(point)) < self.tolerance

    # ------------------------------------------------------------------
    # Relations with other lines
    # ------------------------------------------------------------------

    def intersection(self, other: "Line") -> Optional[Vector2D]:
        """
        Crossing point of two lines.

        Returns
        -------
        Vector2D or None
            None if the lines are parallel (sine of their angle below
            ``ANGULAR_EPS``).
        """
        d = self.sin * other.cos - other.sin * self.cos
        if abs(d) < ANGULAR_EPS:
            return None
        return Vector2D((self.cos * other.origin_offset - other.cos * self.origin_offset) / d,
                        (self.sin * other.origin_offset - other.sin * self.origin_offset) / d)

    def same_orientation_as(self, other: "Line") -> bool:
        return self.sin * other.sin + self.cos * other.cos >= 0.0

    def is_parallel_to(self, other: "Line") -> bool:
        return abs(self.sin * other.cos - self.cos * other.sin) < ANGULAR_EPS

    # ------------------------------------------------------------------
    # Derived lines and regions
    # ------------------------------------------------------------------

    def translate_to_point(self, point) -> "Line":
        """Parallel line with the same orientation passing through ``point``."""
        point = as_vector(point)
        return Line._from_parameters(self.angle, self.cos, self.sin,
                                     self.cos * point.y - self.sin * point.x, self.tolerance)

    def translated(self, dx: float, dy: float) -> "Line":
        return Line._from_parameters(self.angle, self.cos, self.sin,
                                     self.origin_offset - self.sin * dx + self.cos * dy,
                                     self.tolerance)

    def whole_hyperplane(self) -> "SubLine":
        """Sub-line covering the whole line."""
        from .sub_line import SubLine
        return SubLine(self, IntervalsSet(tolerance=self.tolerance))

    def whole_space(self) -> "PolygonsSet":
        """Region covering the whole plane."""
        from .polygons_set import PolygonsSet
        return PolygonsSet(tolerance=self.tolerance)
