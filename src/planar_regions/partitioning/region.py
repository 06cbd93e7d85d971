"""
Dimension-generic region backed by an inside/outside BSP tree.

Concrete regions (``PolygonsSet`` in 2D) subclass ``AbstractRegion`` and
provide ``build_new`` and ``_compute_geometrical_properties``; everything
else (point location, emptiness, containment, cross-sections, boundary
attributes, set operators) is implemented here on top of the tree.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..core.errors import InternalError
from ..core.geometry import EPS, Location, Side
from .bsp_tree import ROOT_PATH, BSPTree, Order
from .hyperplane import BoundaryAttribute, Hyperplane, SubHyperplane
from .region_factory import RegionFactory


logger = logging.getLogger(__name__)


def build_tree_from_boundary(boundary: Sequence[SubHyperplane]) -> BSPTree:
    """
    Build an inside/outside tree from a boundary representation.

    Each boundary element must have the inside of the region on its minus
    side and the outside on its plus side. Elements may come in any order
    and do not need to be connected; overlapping or crossing elements are
    accepted and yield the even/odd partition of the plane they induce.

    Parameters
    ----------
    boundary : sequence of SubHyperplane
        Boundary elements. An empty sequence gives the whole space.

    Returns
    -------
    BSPTree
        Tree with boolean leaf attributes.
    """
    if not boundary:
        return BSPTree(True)

    # larger elements first, they give better balanced trees
    ordered = sorted(boundary, key=lambda sub: sub.size, reverse=True)

    tree = BSPTree()
    _insert_cuts(tree, ordered)
    if tree.cut is None:
        return BSPTree(True)
    _label_leaves(tree)

    logger.debug("Built tree with %d nodes from %d boundary elements",
                 tree.node_count(), len(boundary))
    return tree


def _insert_cuts(root: BSPTree, boundary: List[SubHyperplane]) -> None:
    """
    Insert boundary elements as cuts below ``root``.

    At each node the first element crossing the cell becomes the cut and the
    remaining ones are distributed to the two children.
    """
    stack = [(root, boundary, ROOT_PATH)]
    while stack:
        node, elements, path = stack.pop()

        index = 0
        inserted: Optional[Hyperplane] = None
        while inserted is None and index < len(elements):
            candidate = elements[index].hyperplane
            index += 1
            if node.insert_cut(candidate.copy(), path):
                inserted = candidate

        remaining = elements[index:]
        if inserted is None or not remaining:
            continue

        plus_list: List[SubHyperplane] = []
        minus_list: List[SubHyperplane] = []
        for other in remaining:
            side = other.side(inserted)
            if side is Side.PLUS:
                plus_list.append(other)
            elif side is Side.MINUS:
                minus_list.append(other)
            elif side is Side.BOTH:
                parts = other.split(inserted)
                plus_list.append(parts.plus)
                minus_list.append(parts.minus)
            # elements lying on the cut hyperplane are already represented

        hyperplane = node.cut.hyperplane
        stack.append((node.minus, minus_list, path + ((hyperplane, False),)))
        stack.append((node.plus, plus_list, path + ((hyperplane, True),)))


def _label_leaves(root: BSPTree) -> None:
    # outside on the plus side of the closest cut, inside on its minus side
    stack = [(root.plus, True), (root.minus, False)]
    while stack:
        node, on_plus_side = stack.pop()
        if node.cut is None:
            node.attribute = not on_plus_side
        else:
            stack.append((node.plus, True))
            stack.append((node.minus, False))


class _BoundaryBuilder:
    """Visitor computing the boundary attribute of every internal node."""

    def visit_order(self, node: BSPTree) -> Order:
        return Order.PLUS_MINUS_SUB

    def visit_internal_node(self, node: BSPTree) -> None:
        plus_outside = None
        plus_inside = None

        # characterize the cut sub-hyperplane, first with respect to the plus sub-tree
        plus_char = _characterize(node.plus, node.cut.copy())

        if plus_char[0] is not None and not plus_char[0].is_empty():
            # parts with outside cells on their plus side: look for inside cells on their minus side
            minus_char = _characterize(node.minus, plus_char[0])
            if minus_char[1] is not None and not minus_char[1].is_empty():
                plus_outside = minus_char[1]

        if plus_char[1] is not None and not plus_char[1].is_empty():
            # parts with inside cells on their plus side: look for outside cells on their minus side
            minus_char = _characterize(node.minus, plus_char[1])
            if minus_char[0] is not None and not minus_char[0].is_empty():
                plus_inside = minus_char[0]

        node.attribute = BoundaryAttribute(plus_outside, plus_inside)

    def visit_leaf_node(self, node: BSPTree) -> None:
        pass


def _characterize(node: BSPTree, sub: SubHyperplane) -> List[Optional[SubHyperplane]]:
    """
    Split ``sub`` according to the leaves it reaches below ``node``.

    Returns
    -------
    list
        ``[outside_part, inside_part]``, each None when nothing reached
        that kind of leaf.
    """
    characterization: List[Optional[SubHyperplane]] = [None, None]
    stack = [(node, sub)]
    while stack:
        node, sub = stack.pop()
        if sub.is_empty():
            continue

        if node.cut is None:
            index = 1 if node.attribute else 0
            if characterization[index] is None:
                characterization[index] = sub
            else:
                characterization[index] = characterization[index].reunite(sub)
            continue

        hyperplane = node.cut.hyperplane
        side = sub.side(hyperplane)
        if side is Side.PLUS:
            stack.append((node.plus, sub))
        elif side is Side.MINUS:
            stack.append((node.minus, sub))
        elif side is Side.BOTH:
            parts = sub.split(hyperplane)
            stack.append((node.minus, parts.minus))
            stack.append((node.plus, parts.plus))
        else:
            raise InternalError("cut sub-hyperplane lies on the hyperplane of one of its descendants")

    return characterization


class _BoundarySizeVisitor:
    """Visitor summing the size of the boundary parts."""

    def __init__(self):
        self.size = 0.0

    def visit_order(self, node: BSPTree) -> Order:
        return Order.MINUS_SUB_PLUS

    def visit_internal_node(self, node: BSPTree) -> None:
        attribute = node.attribute
        if attribute.plus_outside is not None:
            self.size += attribute.plus_outside.size
        if attribute.plus_inside is not None:
            self.size += attribute.plus_inside.size

    def visit_leaf_node(self, node: BSPTree) -> None:
        pass


class AbstractRegion(ABC):
    """
    Region of a space described by the inside leaves of a BSP tree.

    Parameters
    ----------
    tree : BSPTree, optional
        Inside/outside tree; leaves must carry boolean attributes. When
        omitted the region is the whole space.
    tolerance : float
        Tolerance used for point location and derived computations.
    """

    def __init__(self, tree: Optional[BSPTree] = None, tolerance: float = EPS):
        self._tree = BSPTree(True) if tree is None else tree
        self.tolerance = tolerance
        self._size: Optional[float] = None
        self._barycenter = None

    @abstractmethod
    def build_new(self, tree: BSPTree) -> "AbstractRegion":
        """Build a region of the same type (and tolerance) from a tree."""

    @abstractmethod
    def _compute_geometrical_properties(self) -> None:
        """Compute and store size and barycenter."""

    def copy(self) -> "AbstractRegion":
        return self.build_new(self._tree.copy())

    # ------------------------------------------------------------------
    # Tree access
    # ------------------------------------------------------------------

    def get_tree(self, include_boundary_attributes: bool = False) -> BSPTree:
        """
        Underlying tree.

        Parameters
        ----------
        include_boundary_attributes : bool
            If True, make sure internal nodes carry their
            ``BoundaryAttribute`` before returning the tree.
        """
        if (include_boundary_attributes and self._tree.cut is not None
                and self._tree.attribute is None):
            self._tree.visit(_BoundaryBuilder())
        return self._tree

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_empty(self, node: Optional[BSPTree] = None) -> bool:
        """True if no inside cell exists (below ``node``, root by default)."""
        node = self._tree if node is None else node
        return not any(leaf.attribute for leaf in node.leaves())

    def is_full(self, node: Optional[BSPTree] = None) -> bool:
        """True if every cell is inside (below ``node``, root by default)."""
        node = self._tree if node is None else node
        return all(leaf.attribute for leaf in node.leaves())

    def contains(self, region: "AbstractRegion") -> bool:
        """True if ``region`` lies entirely inside this region."""
        return RegionFactory().difference(region.copy(), self.copy()).is_empty()

    def check_point(self, point) -> Location:
        """
        Locate a point with respect to the region.

        The tree is descended comparing the point offset with each cut.
        When the point is within tolerance of a cut hyperplane and projects
        inside the cut's extent, both children are examined: if they agree
        their answer is returned, otherwise the point is on the boundary.

        Returns
        -------
        Location
            INSIDE, OUTSIDE or BOUNDARY.
        """
        found = set()
        stack = [self._tree]
        while stack:
            cell = stack.pop().get_cell(point, self.tolerance)
            if cell.cut is None:
                found.add(Location.INSIDE if cell.attribute else Location.OUTSIDE)
                if len(found) > 1:
                    return Location.BOUNDARY
            elif not cell.cut.covers(point):
                # close to the hyperplane but away from the cut itself
                offset = cell.cut.hyperplane.offset(point)
                stack.append(cell.plus if offset >= 0 else cell.minus)
            else:
                stack.append(cell.plus)
                stack.append(cell.minus)
        return found.pop()

    def side(self, hyperplane: Hyperplane) -> Side:
        """
        Position of the whole region with respect to a hyperplane.

        Returns
        -------
        Side
            PLUS / MINUS if all inside cells are on that side, BOTH if
            they are on both sides, HYPER if the region collapses onto it.
        """
        found = {'plus': False, 'minus': False}
        stack = [(self._tree, hyperplane.whole_hyperplane())]
        while stack and not (found['plus'] and found['minus']):
            node, sub = stack.pop()
            if node.cut is None:
                if node.attribute:
                    # an inside cell expanding across the hyperplane
                    found['plus'] = True
                    found['minus'] = True
                continue

            cut_hyperplane = node.cut.hyperplane
            sub_side = sub.side(cut_hyperplane)
            if sub_side is Side.PLUS:
                # the sub-hyperplane is entirely in the plus sub-tree
                key = 'plus' if node.cut.side(sub.hyperplane) is Side.PLUS else 'minus'
                if not self.is_empty(node.minus):
                    found[key] = True
                stack.append((node.plus, sub))
            elif sub_side is Side.MINUS:
                # the sub-hyperplane is entirely in the minus sub-tree
                key = 'plus' if node.cut.side(sub.hyperplane) is Side.PLUS else 'minus'
                if not self.is_empty(node.plus):
                    found[key] = True
                stack.append((node.minus, sub))
            elif sub_side is Side.BOTH:
                parts = sub.split(cut_hyperplane)
                stack.append((node.minus, parts.minus))
                stack.append((node.plus, parts.plus))
            else:
                # the sub-hyperplane and the cut share the same hyperplane
                plus_used = node.plus.cut is not None or bool(node.plus.attribute)
                minus_used = node.minus.cut is not None or bool(node.minus.attribute)
                if cut_hyperplane.same_orientation_as(sub.hyperplane):
                    found['plus'] = found['plus'] or plus_used
                    found['minus'] = found['minus'] or minus_used
                else:
                    found['minus'] = found['minus'] or plus_used
                    found['plus'] = found['plus'] or minus_used

        if found['plus']:
            return Side.BOTH if found['minus'] else Side.PLUS
        return Side.MINUS if found['minus'] else Side.HYPER

    def intersection(self, other):
        """
        Intersect the region with another region or with a sub-hyperplane.

        Parameters
        ----------
        other : AbstractRegion or SubHyperplane
            A region of the same space, or a sub-hyperplane whose
            cross-section with the region is wanted.

        Returns
        -------
        AbstractRegion, SubHyperplane or None
            For a region, a new region (neither operand is modified). For a
            sub-hyperplane, its part lying inside the region, None if it
            misses the region.
        """
        if isinstance(other, AbstractRegion):
            return RegionFactory().intersection(self.copy(), other.copy())
        return _inside_part(self._tree, other)

    @property
    def boundary_size(self) -> float:
        """Size of the boundary (perimeter in 2D)."""
        visitor = _BoundarySizeVisitor()
        self.get_tree(True).visit(visitor)
        return visitor.size

    @property
    def size(self) -> float:
        """Size of the region (area in 2D)."""
        if self._size is None:
            self._compute_geometrical_properties()
        return self._size

    def get_size(self) -> float:
        return self.size

    @property
    def barycenter(self):
        if self._barycenter is None:
            self._compute_geometrical_properties()
        return self._barycenter

    # ------------------------------------------------------------------
    # Set operators (operands are copied, never consumed)
    # ------------------------------------------------------------------

    def union(self, other: "AbstractRegion") -> "AbstractRegion":
        return RegionFactory().union(self.copy(), other.copy())

    def xor(self, other: "AbstractRegion") -> "AbstractRegion":
        return RegionFactory().xor(self.copy(), other.copy())

    def difference(self, other: "AbstractRegion") -> "AbstractRegion":
        return RegionFactory().difference(self.copy(), other.copy())

    def complement(self) -> "AbstractRegion":
        return RegionFactory().complement(self)

    def __or__(self, other: "AbstractRegion") -> "AbstractRegion":
        return self.union(other)

    def __and__(self, other: "AbstractRegion") -> "AbstractRegion":
        return self.intersection(other)

    def __xor__(self, other: "AbstractRegion") -> "AbstractRegion":
        return self.xor(other)

    def __sub__(self, other: "AbstractRegion") -> "AbstractRegion":
        return self.difference(other)

    def __invert__(self) -> "AbstractRegion":
        return self.complement()


def _inside_part(root: BSPTree, sub: SubHyperplane) -> Optional[SubHyperplane]:
    """Part of ``sub`` reaching inside leaves below ``root``, None if there is none."""
    pieces: List[SubHyperplane] = []
    stack = [(root, sub)]
    while stack:
        node, sub = stack.pop()
        if node.cut is None:
            if node.attribute:
                pieces.append(sub.copy())
            continue

        hyperplane = node.cut.hyperplane
        side = sub.side(hyperplane)
        if side is Side.PLUS:
            stack.append((node.plus, sub))
        elif side is Side.MINUS:
            stack.append((node.minus, sub))
        elif side is Side.BOTH:
            parts = sub.split(hyperplane)
            stack.append((node.minus, parts.minus))
            stack.append((node.plus, parts.plus))
        else:
            # on the cut: keep what is inside on both sides; a descendant
            # never shares this hyperplane so the nesting is shallow
            minus_part = _inside_part(node.minus, sub)
            if minus_part is not None:
                stack.append((node.plus, minus_part))

    if not pieces:
        return None
    result = pieces[0]
    for piece in pieces[1:]:
        result = result.reunite(piece)
    return result
