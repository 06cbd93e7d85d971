"""
Oriented segment of a line.
"""

import math
from dataclasses import dataclass
from typing import Optional

from ..core.geometry import Vector2D
from .line import Line


@dataclass(frozen=True)
class Segment:
    """
    Part of a line between two points.

    Attributes
    ----------
    start : Vector2D or None
        Start point; None stands for an unbounded start while boundary
        loops are being rebuilt.
    end : Vector2D or None
        End point; None for an unbounded end.
    line : Line
        Supporting line, oriented from start to end.
    """
    start: Optional[Vector2D]
    end: Optional[Vector2D]
    line: Line

    @property
    def is_bounded(self) -> bool:
        return (self.start is not None and self.end is not None
                and math.isfinite(self.start.x) and math.isfinite(self.start.y)
                and math.isfinite(self.end.x) and math.isfinite(self.end.y))

    @property
    def length(self) -> float:
        if not self.is_bounded:
            return math.inf
        return self.start.distance(self.end)

    def distance(self, point) -> float:
        """
        Distance between a point and the segment.

        Projections falling outside the segment use the closest end point.
        """
        if not self.is_bounded:
            return self.line.distance(point)

        delta_x = self.end.x - self.start.x
        delta_y = self.end.y - self.start.y
        px = point[0] - self.start.x
        py = point[1] - self.start.y
        dot = px * delta_x + py * delta_y
        squared = delta_x * delta_x + delta_y * delta_y

        if squared == 0.0 or dot <= 0.0:
            return math.hypot(px, py)
        if dot >= squared:
            return math.hypot(point[0] - self.end.x, point[1] - self.end.y)
        r = dot / squared
        return math.hypot(point[0] - (self.start.x + r * delta_x),
                          point[1] - (self.start.y + r * delta_y))
