"""
Binary Space Partitioning tree.

A node is either a leaf, whose ``attribute`` is the boolean inside flag of
its cell, or an internal node holding a cut sub-hyperplane and two children.
The ``plus`` child covers the cell part on the plus side of the cut, the
``minus`` child the part on its minus side. Internal nodes may cache a
``BoundaryAttribute`` in their ``attribute``.

Nodes do not know their parent. Operations that need the chain of ancestors
(fitting a cut to its cell, chopping a subtree inserted at some position)
take a ``CellPath``: the ``(hyperplane, on_plus_side)`` pairs leading from
the root to the node.

Ownership: a node exclusively owns its cut and children. ``merge`` consumes
both operand trees and may recycle their nodes in the result.
"""

from enum import Enum
from typing import Callable, Iterator, List, Optional, Protocol, Tuple

from ..core.geometry import Side
from .hyperplane import Hyperplane, SubHyperplane


# Ancestor context of a node: (cut hyperplane, node lies on its plus side)
CellPath = Tuple[Tuple[Hyperplane, bool], ...]

ROOT_PATH: CellPath = ()


class Order(Enum):
    """Visiting order for the (plus sub-tree, minus sub-tree, cut) triplet."""
    PLUS_MINUS_SUB = "plus_minus_sub"
    PLUS_SUB_MINUS = "plus_sub_minus"
    MINUS_PLUS_SUB = "minus_plus_sub"
    MINUS_SUB_PLUS = "minus_sub_plus"
    SUB_PLUS_MINUS = "sub_plus_minus"
    SUB_MINUS_PLUS = "sub_minus_plus"


class BSPTreeVisitor(Protocol):
    def visit_order(self, node: "BSPTree") -> Order:
        ...

    def visit_internal_node(self, node: "BSPTree") -> None:
        ...

    def visit_leaf_node(self, node: "BSPTree") -> None:
        ...


# (leaf, tree, path, leaf_from_instance) -> subtree to place at path
LeafMerger = Callable[["BSPTree", "BSPTree", CellPath, bool], "BSPTree"]


def fit_to_cell(sub: SubHyperplane, path: CellPath) -> SubHyperplane:
    """
    Restrict a sub-hyperplane to the convex cell described by ``path``.

    Parameters
    ----------
    sub : SubHyperplane
        Sub-hyperplane to chop.
    path : CellPath
        Ancestors of the cell, from the root down.

    Returns
    -------
    SubHyperplane
        The part of ``sub`` inside the cell (possibly empty).
    """
    for hyperplane, on_plus in reversed(path):
        parts = sub.split(hyperplane)
        sub = parts.plus if on_plus else parts.minus
    return sub


class BSPTree:
    """
    Node of a BSP tree.

    Parameters
    ----------
    attribute : object, optional
        Leaf attribute. Region trees use ``True`` for inside cells and
        ``False`` for outside cells.
    """

    __slots__ = ('cut', 'plus', 'minus', 'attribute')

    def __init__(self, attribute=None):
        self.cut: Optional[SubHyperplane] = None
        self.plus: Optional["BSPTree"] = None
        self.minus: Optional["BSPTree"] = None
        self.attribute = attribute

    @classmethod
    def internal(cls, cut: SubHyperplane, plus: "BSPTree", minus: "BSPTree",
                 attribute=None) -> "BSPTree":
        """Build an internal node from its cut and two (owned) children."""
        node = cls(attribute)
        node.cut = cut
        node.plus = plus
        node.minus = minus
        return node

    def __repr__(self) -> str:
        if self.cut is None:
            return f"BSPTree(leaf={self.attribute!r})"
        return f"BSPTree(cut={self.cut!r}, nodes={self.node_count()})"

    @property
    def is_leaf(self) -> bool:
        return self.cut is None

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def insert_cut(self, hyperplane: Hyperplane, path: CellPath = ROOT_PATH) -> bool:
        """
        Turn this leaf into an internal node cut by ``hyperplane``.

        The whole hyperplane is first restricted to the cell of the node; if
        nothing is left the node becomes (or stays) a leaf.

        Parameters
        ----------
        hyperplane : Hyperplane
            Cutting hyperplane.
        path : CellPath
            Ancestors of this node.

        Returns
        -------
        bool
            True if the cut was inserted, False if it does not cross the cell.
        """
        chopped = fit_to_cell(hyperplane.whole_hyperplane(), path)
        if chopped.is_empty():
            self.cut = None
            self.plus = None
            self.minus = None
            return False

        self.cut = chopped
        self.plus = BSPTree()
        self.minus = BSPTree()
        return True

    def copy(self) -> "BSPTree":
        """Deep copy of the subtree rooted at this node."""
        root = BSPTree(self.attribute)
        stack = [(self, root)]
        while stack:
            source, target = stack.pop()
            if source.cut is not None:
                target.cut = source.cut.copy()
                target.plus = BSPTree(source.plus.attribute)
                target.minus = BSPTree(source.minus.attribute)
                stack.append((source.plus, target.plus))
                stack.append((source.minus, target.minus))
        return root

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_cell(self, point, tolerance: float) -> "BSPTree":
        """
        Descend towards the cell containing ``point``.

        Returns
        -------
        BSPTree
            The leaf whose cell contains the point, or the first internal
            node whose cut hyperplane lies within ``tolerance`` of it.
        """
        node = self
        while node.cut is not None:
            offset = node.cut.hyperplane.offset(point)
            if abs(offset) < tolerance:
                return node
            node = node.plus if offset > 0 else node.minus
        return node

    def visit(self, visitor: BSPTreeVisitor) -> None:
        """
        Walk the tree, letting the visitor pick the order at each internal node.

        The walk keeps its own stack, so arbitrarily deep trees can be visited.
        """
        # entries are (node, visit its cut now)
        stack = [(self, False)]
        while stack:
            node, cut_step = stack.pop()
            if cut_step:
                visitor.visit_internal_node(node)
            elif node.cut is None:
                visitor.visit_leaf_node(node)
            else:
                for step in reversed(_VISIT_STEPS[visitor.visit_order(node)]):
                    if step == 'sub':
                        stack.append((node, True))
                    else:
                        stack.append((getattr(node, step), False))

    def nodes(self) -> Iterator["BSPTree"]:
        """Iterate over every node of the subtree, parents before children."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            if node.cut is not None:
                stack.append(node.minus)
                stack.append(node.plus)

    def leaves(self) -> Iterator["BSPTree"]:
        """Iterate over the leaves, plus sides first."""
        return (node for node in self.nodes() if node.cut is None)

    def node_count(self) -> int:
        return sum(1 for _ in self.nodes())

    def depth(self) -> int:
        deepest = 0
        stack = [(self, 0)]
        while stack:
            node, level = stack.pop()
            if node.cut is None:
                deepest = max(deepest, level)
            else:
                stack.append((node.plus, level + 1))
                stack.append((node.minus, level + 1))
        return deepest

    # ------------------------------------------------------------------
    # Simplification
    # ------------------------------------------------------------------

    def condense(self) -> None:
        """Collapse this node into a leaf if its two leaf children agree."""
        if (self.cut is not None
                and self.plus.cut is None
                and self.minus.cut is None
                and self.plus.attribute == self.minus.attribute):
            self.attribute = self.plus.attribute
            self.cut = None
            self.plus = None
            self.minus = None

    def simplify(self) -> None:
        """Condense the whole subtree bottom-up."""
        internal = [node for node in self.nodes() if node.cut is not None]
        # children come after their parent in the list
        for node in reversed(internal):
            node.condense()

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------

    def merge(self, tree: "BSPTree", leaf_merger: LeafMerger) -> "BSPTree":
        """
        Merge this tree with another one.

        Both trees are walked simultaneously; as soon as one side reaches a
        leaf, ``leaf_merger`` decides what subtree replaces the pair. Both
        operands are consumed: their nodes may be reused in the result and
        must not be used afterwards.

        Parameters
        ----------
        tree : BSPTree
            Other operand.
        leaf_merger : LeafMerger
            Called as ``leaf_merger(leaf, tree, path, leaf_from_instance)``
            where ``leaf_from_instance`` tells whether the leaf comes from
            ``self``.

        Returns
        -------
        BSPTree
            Root of the merged tree.
        """
        results: List["BSPTree"] = []
        # (False, node, other, path) merges a pair; (True, merged, None, path)
        # collects the two merged children of ``merged``
        stack = [(False, self, tree, ROOT_PATH)]
        while stack:
            collect, node, other, path = stack.pop()
            if collect:
                node.minus = results.pop()
                node.plus = results.pop()
                node.condense()
                if node.cut is not None:
                    node.cut = fit_to_cell(node.cut.hyperplane.whole_hyperplane(), path)
                results.append(node)
            elif node.cut is None:
                # cell/tree operation
                results.append(leaf_merger(node, other, path, True))
            elif other.cut is None:
                # tree/cell operation
                results.append(leaf_merger(other, node, path, False))
            else:
                # tree/tree operation
                merged = other.split(node.cut)
                hyperplane = merged.cut.hyperplane
                stack.append((True, merged, None, path))
                stack.append((False, node.minus, merged.minus, path + ((hyperplane, False),)))
                stack.append((False, node.plus, merged.plus, path + ((hyperplane, True),)))
        return results.pop()

    def split(self, sub: SubHyperplane) -> "BSPTree":
        """
        Build a tree equivalent to this one but rooted at ``sub``.

        The returned tree has ``sub`` as its root cut; its plus and minus
        children hold the parts of this tree lying on each side of the
        hyperplane of ``sub``. This tree is left untouched.

        Parameters
        ----------
        sub : SubHyperplane
            Partitioning sub-hyperplane; it must already be fitted to the
            cell of this node.

        Returns
        -------
        BSPTree
            New tree partitioned by ``sub``.
        """
        results: List["BSPTree"] = []
        stack = [(_SPLIT, self, sub, None)]
        while stack:
            action, node, part, cut_parts = stack.pop()

            if action is _SPLIT:
                if node.cut is None:
                    results.append(BSPTree.internal(part, node.copy(), BSPTree(node.attribute)))
                    continue

                c_hyperplane = node.cut.hyperplane
                side = part.side(c_hyperplane)
                if side is Side.PLUS:
                    # the partitioning sub-hyperplane is entirely in the plus sub-tree
                    stack.append((_REATTACH_MINUS, node, part, None))
                    stack.append((_SPLIT, node.plus, part, None))
                elif side is Side.MINUS:
                    # the partitioning sub-hyperplane is entirely in the minus sub-tree
                    stack.append((_REATTACH_PLUS, node, part, None))
                    stack.append((_SPLIT, node.minus, part, None))
                elif side is Side.BOTH:
                    sub_parts = part.split(c_hyperplane)
                    stack.append((_JOIN, node, part, node.cut.split(part.hyperplane)))
                    stack.append((_SPLIT, node.minus, sub_parts.minus, None))
                    stack.append((_SPLIT, node.plus, sub_parts.plus, None))
                elif c_hyperplane.same_orientation_as(part.hyperplane):
                    # both cuts lie on the same hyperplane
                    results.append(BSPTree.internal(part, node.plus.copy(), node.minus.copy(),
                                                    node.attribute))
                else:
                    results.append(BSPTree.internal(part, node.minus.copy(), node.plus.copy(),
                                                    node.attribute))

            elif action is _REATTACH_MINUS:
                # put the untouched minus child back beside the split plus child
                split_p = results[-1]
                if node.cut.side(part.hyperplane) is Side.PLUS:
                    split_p.plus = BSPTree.internal(node.cut.copy(), split_p.plus,
                                                    node.minus.copy(), node.attribute)
                    split_p.plus.condense()
                else:
                    split_p.minus = BSPTree.internal(node.cut.copy(), split_p.minus,
                                                     node.minus.copy(), node.attribute)
                    split_p.minus.condense()

            elif action is _REATTACH_PLUS:
                split_m = results[-1]
                if node.cut.side(part.hyperplane) is Side.PLUS:
                    split_m.plus = BSPTree.internal(node.cut.copy(), node.plus.copy(),
                                                    split_m.plus, node.attribute)
                    split_m.plus.condense()
                else:
                    split_m.minus = BSPTree.internal(node.cut.copy(), node.plus.copy(),
                                                     split_m.minus, node.attribute)
                    split_m.minus.condense()

            else:
                split_minus = results.pop()
                split_plus = results.pop()
                split_b = BSPTree.internal(part, split_plus, split_minus)
                split_b.plus.cut = cut_parts.plus
                split_b.minus.cut = cut_parts.minus
                split_b.plus.minus, split_b.minus.plus = split_b.minus.plus, split_b.plus.minus
                split_b.plus.condense()
                split_b.minus.condense()
                results.append(split_b)

        return results.pop()

    def fit_into(self, path: CellPath) -> "BSPTree":
        """
        Chop this subtree so it lies in the cell described by ``path``.

        Used when a subtree coming from another tree is inserted at some
        position of a merge result.

        Returns
        -------
        BSPTree
            This node, condensed if the chopping allows it.
        """
        if self.cut is not None:
            for hyperplane, on_plus in reversed(path):
                parts = self.cut.split(hyperplane)
                self.cut = parts.plus if on_plus else parts.minus
                self.plus._chop_off(hyperplane, on_plus)
                self.minus._chop_off(hyperplane, on_plus)
            self.condense()
        return self

    def _chop_off(self, hyperplane: Hyperplane, keep_plus: bool) -> None:
        # restrict every cut of the subtree to one side of ``hyperplane``
        for node in self.nodes():
            if node.cut is not None:
                parts = node.cut.split(hyperplane)
                node.cut = parts.plus if keep_plus else parts.minus


# Children and cut sequence of each visiting order
_VISIT_STEPS = {
    Order.PLUS_MINUS_SUB: ('plus', 'minus', 'sub'),
    Order.PLUS_SUB_MINUS: ('plus', 'sub', 'minus'),
    Order.MINUS_PLUS_SUB: ('minus', 'plus', 'sub'),
    Order.MINUS_SUB_PLUS: ('minus', 'sub', 'plus'),
    Order.SUB_PLUS_MINUS: ('sub', 'plus', 'minus'),
    Order.SUB_MINUS_PLUS: ('sub', 'minus', 'plus'),
}

# Work items of the split stack
_SPLIT = 'split'
_REATTACH_MINUS = 'reattach_minus'
_REATTACH_PLUS = 'reattach_plus'
_JOIN = 'join'
