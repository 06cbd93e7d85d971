"""
Capabilities the BSP tree needs from hyperplanes and sub-hyperplanes.

The tree and region algebra only use these protocols, so they work for any
dimension that provides a concrete hyperplane type. In this package the 2D
``Line`` / ``SubLine`` pair is that concrete type.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, Optional, Protocol, TypeVar

from ..core.geometry import Side

if TYPE_CHECKING:
    from .region import AbstractRegion


P = TypeVar("P")


class Hyperplane(Protocol[P]):
    """Oriented hyperplane splitting the space into a plus and a minus half."""

    tolerance: float

    def offset(self, point: P) -> float:
        """Signed distance of a point (positive on the plus side)."""
        ...

    def whole_hyperplane(self) -> "SubHyperplane[P]":
        ...

    def whole_space(self) -> "AbstractRegion":
        ...

    def same_orientation_as(self, other: "Hyperplane[P]") -> bool:
        ...

    def copy(self) -> "Hyperplane[P]":
        ...


class SubHyperplane(Protocol[P]):
    """Part of a hyperplane, limited by a region of the hyperplane's own sub-space."""

    hyperplane: Hyperplane[P]

    @property
    def size(self) -> float:
        ...

    def is_empty(self) -> bool:
        ...

    def side(self, hyperplane: Hyperplane[P]) -> Side:
        ...

    def split(self, hyperplane: Hyperplane[P]) -> "SplitSubHyperplane[P]":
        ...

    def reunite(self, other: "SubHyperplane[P]") -> "SubHyperplane[P]":
        ...

    def covers(self, point: P) -> bool:
        """True if the projection of ``point`` falls within the extent (tolerance included)."""
        ...

    def copy(self) -> "SubHyperplane[P]":
        ...


@dataclass(frozen=True)
class SplitSubHyperplane(Generic[P]):
    """Parts of a sub-hyperplane on each side of a splitting hyperplane (possibly empty)."""
    plus: SubHyperplane[P]
    minus: SubHyperplane[P]

    def side(self) -> Side:
        plus_found = not self.plus.is_empty()
        minus_found = not self.minus.is_empty()
        if plus_found and minus_found:
            return Side.BOTH
        if plus_found:
            return Side.PLUS
        if minus_found:
            return Side.MINUS
        return Side.HYPER


@dataclass(frozen=True)
class BoundaryAttribute(Generic[P]):
    """
    Boundary parts of an internal node's cut.

    Attributes
    ----------
    plus_outside : SubHyperplane or None
        Part of the cut with the outside on its plus side and the inside on
        its minus side.
    plus_inside : SubHyperplane or None
        Part of the cut with the inside on its plus side and the outside on
        its minus side.
    """
    plus_outside: Optional[SubHyperplane[P]]
    plus_inside: Optional[SubHyperplane[P]]
