"""
One-dimensional interval sets.

Sub-hyperplanes of the 2D layer are lines restricted to a set of abscissas.
This module provides that set: an ordered list of disjoint closed intervals,
possibly unbounded, compared with a tolerance.

Intervals shorter than the tolerance are dropped and intervals separated by
a gap no larger than the tolerance are fused, so the set never holds pieces
that the tolerance cannot tell apart from a single point.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

from ..core.geometry import EPS, Location, Side


@dataclass(frozen=True)
class Interval:
    """
    Closed interval ``[lower, upper]``.

    Attributes
    ----------
    lower : float
        Lower bound, may be ``-inf``.
    upper : float
        Upper bound, may be ``+inf``.
    """
    lower: float
    upper: float

    @property
    def size(self) -> float:
        return self.upper - self.lower

    @property
    def midpoint(self) -> float:
        return 0.5 * (self.lower + self.upper)

    def check_point(self, x: float, tolerance: float = EPS) -> Location:
        """Locate an abscissa with respect to the interval."""
        if x < self.lower - tolerance or x > self.upper + tolerance:
            return Location.OUTSIDE
        if abs(x - self.lower) <= tolerance or abs(x - self.upper) <= tolerance:
            return Location.BOUNDARY
        return Location.INSIDE


def _normalize(intervals: Iterable[Tuple[float, float]], tolerance: float) -> List[Interval]:
    """Sort, drop tiny pieces and fuse overlapping or touching intervals."""
    pieces = sorted(
        (float(lower), float(upper)) for lower, upper in intervals
        if upper - lower > tolerance
    )

    merged: List[Interval] = []
    for lower, upper in pieces:
        if merged and lower <= merged[-1].upper + tolerance:
            if upper > merged[-1].upper:
                merged[-1] = Interval(merged[-1].lower, upper)
        else:
            merged.append(Interval(lower, upper))
    return merged


class IntervalsSet:
    """
    Ordered set of disjoint closed intervals on the real line.

    Parameters
    ----------
    lower : float
        Lower bound of the initial interval. Default ``-inf``.
    upper : float
        Upper bound of the initial interval. Default ``+inf``.
    tolerance : float
        Tolerance below which abscissas are considered equal.

    Examples
    --------
    >>> s = IntervalsSet(0.0, 1.0).union(IntervalsSet(2.0, 3.0))
    >>> [(i.lower, i.upper) for i in s]
    [(0.0, 1.0), (2.0, 3.0)]
    """

    def __init__(self, lower: float = -math.inf, upper: float = math.inf,
                 tolerance: float = EPS):
        self.tolerance = tolerance
        self._intervals = _normalize([(lower, upper)], tolerance)

    @classmethod
    def from_intervals(cls, intervals: Iterable[Tuple[float, float]],
                       tolerance: float = EPS) -> "IntervalsSet":
        """Build a set from arbitrary (possibly overlapping) ``(lower, upper)`` pairs."""
        result = cls.empty(tolerance)
        result._intervals = _normalize(intervals, tolerance)
        return result

    @classmethod
    def empty(cls, tolerance: float = EPS) -> "IntervalsSet":
        result = cls.__new__(cls)
        result.tolerance = tolerance
        result._intervals = []
        return result

    def _build(self, intervals: List[Interval]) -> "IntervalsSet":
        result = IntervalsSet.empty(self.tolerance)
        result._intervals = intervals
        return result

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[Interval]:
        return iter(self._intervals)

    def __len__(self) -> int:
        return len(self._intervals)

    def __repr__(self) -> str:
        body = ", ".join(f"[{i.lower:g}, {i.upper:g}]" for i in self._intervals)
        return f"IntervalsSet({body})"

    def as_list(self) -> List[Interval]:
        return list(self._intervals)

    def is_empty(self) -> bool:
        return not self._intervals

    def is_full(self) -> bool:
        return (len(self._intervals) == 1
                and self._intervals[0].lower == -math.inf
                and self._intervals[0].upper == math.inf)

    @property
    def size(self) -> float:
        """Total length of the set (``inf`` when unbounded)."""
        return sum(i.size for i in self._intervals)

    @property
    def inf(self) -> float:
        """Lowest bound (``+inf`` for an empty set)."""
        return self._intervals[0].lower if self._intervals else math.inf

    @property
    def sup(self) -> float:
        """Highest bound (``-inf`` for an empty set)."""
        return self._intervals[-1].upper if self._intervals else -math.inf

    def check_point(self, x: float) -> Location:
        """Locate an abscissa with respect to the set."""
        for interval in self._intervals:
            location = interval.check_point(x, self.tolerance)
            if location is not Location.OUTSIDE:
                return location
        return Location.OUTSIDE

    # ------------------------------------------------------------------
    # Partitioning
    # ------------------------------------------------------------------

    def side(self, x: float, plus_above: bool) -> Side:
        """
        Position of the set with respect to the oriented point ``x``.

        Parameters
        ----------
        x : float
            Splitting abscissa.
        plus_above : bool
            True if abscissas greater than ``x`` are on the plus side.

        Returns
        -------
        Side
            HYPER when the set is empty or collapses onto ``x``.
        """
        above = any(i.upper > x + self.tolerance for i in self._intervals)
        below = any(i.lower < x - self.tolerance for i in self._intervals)
        plus, minus = (above, below) if plus_above else (below, above)
        if plus and minus:
            return Side.BOTH
        if plus:
            return Side.PLUS
        if minus:
            return Side.MINUS
        return Side.HYPER

    def split(self, x: float, plus_above: bool) -> Tuple["IntervalsSet", "IntervalsSet"]:
        """
        Split the set at ``x``.

        Returns
        -------
        tuple of IntervalsSet
            ``(plus_part, minus_part)``; either may be empty.
        """
        above = self.intersection(IntervalsSet(x, math.inf, self.tolerance))
        below = self.intersection(IntervalsSet(-math.inf, x, self.tolerance))
        return (above, below) if plus_above else (below, above)

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------

    def union(self, other: "IntervalsSet") -> "IntervalsSet":
        pairs = [(i.lower, i.upper) for i in self._intervals]
        pairs.extend((i.lower, i.upper) for i in other)
        return self._build(_normalize(pairs, self.tolerance))

    def complement(self) -> "IntervalsSet":
        pairs = []
        cursor = -math.inf
        for interval in self._intervals:
            pairs.append((cursor, interval.lower))
            cursor = interval.upper
        pairs.append((cursor, math.inf))
        return self._build(_normalize(pairs, self.tolerance))

    def intersection(self, other: "IntervalsSet") -> "IntervalsSet":
        pairs = []
        i = j = 0
        mine, theirs = self._intervals, other.as_list()
        while i < len(mine) and j < len(theirs):
            lower = max(mine[i].lower, theirs[j].lower)
            upper = min(mine[i].upper, theirs[j].upper)
            if lower < upper:
                pairs.append((lower, upper))
            if mine[i].upper < theirs[j].upper:
                i += 1
            else:
                j += 1
        return self._build(_normalize(pairs, self.tolerance))

    def difference(self, other: "IntervalsSet") -> "IntervalsSet":
        return self.intersection(other.complement())

    def shifted(self, delta: float) -> "IntervalsSet":
        """Translate every interval by ``delta``."""
        return self._build([Interval(i.lower + delta, i.upper + delta) for i in self._intervals])

    def copy(self) -> "IntervalsSet":
        return self._build(list(self._intervals))
