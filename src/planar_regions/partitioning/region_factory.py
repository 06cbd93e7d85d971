"""
Boolean algebra on regions.

All four binary operations run the same tree merge; they only
differ by the 2x2 truth table of their ``BooleanOperator``. When one
operand reaches a leaf, the table restricted to that leaf's value is a
function of the other operand's inside flag, which is either a constant,
the identity, or a negation: the other subtree is then respectively
replaced by a constant leaf, kept verbatim, or complemented.

The binary operations consume their operands. Pass ``region.copy()`` when
the original must survive.
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from .bsp_tree import ROOT_PATH, BSPTree, CellPath, Order
from .hyperplane import BoundaryAttribute, Hyperplane

if TYPE_CHECKING:
    from .region import AbstractRegion


logger = logging.getLogger(__name__)


class BooleanOperator(Enum):
    """
    Binary set operations, valued by their truth table.

    ``table[inside_a][inside_b]`` is the inside flag of the result.
    """
    UNION = ((False, True), (True, True))
    INTERSECTION = ((False, False), (False, True))
    XOR = ((False, True), (True, False))
    DIFFERENCE = ((False, False), (True, False))

    def apply(self, inside_a: bool, inside_b: bool) -> bool:
        return self.value[bool(inside_a)][bool(inside_b)]


class _OperatorMerger:
    """Leaf merger shared by every boolean operator."""

    def __init__(self, operator: BooleanOperator):
        self.operator = operator

    def __call__(self, leaf: BSPTree, tree: BSPTree, path: CellPath,
                 leaf_from_instance: bool) -> BSPTree:
        inside = bool(leaf.attribute)
        if leaf_from_instance:
            if_outside = self.operator.apply(inside, False)
            if_inside = self.operator.apply(inside, True)
        else:
            if_outside = self.operator.apply(False, inside)
            if_inside = self.operator.apply(True, inside)

        if if_outside == if_inside:
            # the other operand does not matter in this cell
            return BSPTree(if_inside)
        if if_inside:
            return tree.fit_into(path)
        return complement_tree(tree).fit_into(path)


class _NodesCleaner:
    """Visitor dropping cached boundary attributes of internal nodes."""

    def visit_order(self, node: BSPTree) -> Order:
        return Order.PLUS_SUB_MINUS

    def visit_internal_node(self, node: BSPTree) -> None:
        node.attribute = None

    def visit_leaf_node(self, node: BSPTree) -> None:
        pass


def complement_tree(node: BSPTree) -> BSPTree:
    """
    Copy of a tree with every leaf flag flipped.

    The tree shape is kept; cached boundary attributes are carried over with
    their inside and outside parts swapped.
    """
    root = BSPTree()
    stack = [(node, root)]
    while stack:
        source, target = stack.pop()
        if source.cut is None:
            target.attribute = not source.attribute
            continue

        attribute = source.attribute
        if attribute is not None:
            attribute = BoundaryAttribute(
                None if attribute.plus_inside is None else attribute.plus_inside.copy(),
                None if attribute.plus_outside is None else attribute.plus_outside.copy(),
            )
        target.attribute = attribute
        target.cut = source.cut.copy()
        target.plus = BSPTree()
        target.minus = BSPTree()
        stack.append((source.plus, target.plus))
        stack.append((source.minus, target.minus))
    return root


class RegionFactory:
    """
    Set operations between regions.

    Examples
    --------
    >>> factory = RegionFactory()
    >>> ring = factory.difference(PolygonsSet.from_box(0, 3, 0, 3),
    ...                           PolygonsSet.from_box(1, 2, 1, 2))
    >>> ring.size
    8.0
    """

    def combine(self, operator: BooleanOperator,
                region1: "AbstractRegion", region2: "AbstractRegion") -> "AbstractRegion":
        """
        Apply a boolean operator to two regions, consuming both.

        Parameters
        ----------
        operator : BooleanOperator
            Operation to apply.
        region1, region2 : AbstractRegion
            Operands; their trees are recycled and must not be used again.

        Returns
        -------
        AbstractRegion
            Simplified result, same type and tolerance as ``region1``.
        """
        tree = region1.get_tree(False).merge(region2.get_tree(False), _OperatorMerger(operator))
        tree.visit(_NodesCleaner())
        tree.simplify()
        logger.debug("%s produced a tree with %d nodes", operator.name, tree.node_count())
        return region1.build_new(tree)

    def union(self, region1: "AbstractRegion", region2: "AbstractRegion") -> "AbstractRegion":
        return self.combine(BooleanOperator.UNION, region1, region2)

    def intersection(self, region1: "AbstractRegion", region2: "AbstractRegion") -> "AbstractRegion":
        return self.combine(BooleanOperator.INTERSECTION, region1, region2)

    def xor(self, region1: "AbstractRegion", region2: "AbstractRegion") -> "AbstractRegion":
        return self.combine(BooleanOperator.XOR, region1, region2)

    def difference(self, region1: "AbstractRegion", region2: "AbstractRegion") -> "AbstractRegion":
        return self.combine(BooleanOperator.DIFFERENCE, region1, region2)

    def complement(self, region: "AbstractRegion") -> "AbstractRegion":
        """Complement of a region; the operand is left untouched."""
        return region.build_new(complement_tree(region.get_tree(False)))

    def union_all(self, regions: Iterable["AbstractRegion"]) -> Optional["AbstractRegion"]:
        """Union of several regions, consuming them. None for no region."""
        return self._fold(BooleanOperator.UNION, regions)

    def intersection_all(self, regions: Iterable["AbstractRegion"]) -> Optional["AbstractRegion"]:
        """Intersection of several regions, consuming them. None for no region."""
        return self._fold(BooleanOperator.INTERSECTION, regions)

    def _fold(self, operator: BooleanOperator,
              regions: Iterable["AbstractRegion"]) -> Optional["AbstractRegion"]:
        result = None
        for region in regions:
            result = region if result is None else self.combine(operator, result, region)
        return result

    def build_convex(self, hyperplanes: Sequence[Hyperplane]) -> Optional["AbstractRegion"]:
        """
        Build a convex region as the intersection of the minus half-spaces.

        The tree is built directly as a chain of cuts, each one inserted in
        the minus child of the previous one; hyperplanes that do not cross
        the remaining cell are skipped.

        Parameters
        ----------
        hyperplanes : sequence of Hyperplane
            Bounding hyperplanes, inside on their minus side.

        Returns
        -------
        AbstractRegion or None
            The convex region, or None when no hyperplane is given.
        """
        if not hyperplanes:
            return None

        # use the first hyperplane to build the right class
        region = hyperplanes[0].whole_space()
        node = region.get_tree(False)
        node.attribute = True
        path = ROOT_PATH
        for hyperplane in hyperplanes:
            if node.insert_cut(hyperplane, path):
                node.attribute = None
                node.plus.attribute = False
                path = path + ((node.cut.hyperplane, False),)
                node = node.minus
                node.attribute = True
        return region
