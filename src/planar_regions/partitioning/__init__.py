"""
Dimension-generic BSP trees and region algebra.
"""

from .hyperplane import Hyperplane, SubHyperplane, SplitSubHyperplane, BoundaryAttribute
from .bsp_tree import BSPTree, BSPTreeVisitor, CellPath, Order, ROOT_PATH, fit_to_cell
from .region_factory import BooleanOperator, RegionFactory, complement_tree
from .region import AbstractRegion, build_tree_from_boundary

__all__ = [
    # Hyperplane capabilities
    'Hyperplane',
    'SubHyperplane',
    'SplitSubHyperplane',
    'BoundaryAttribute',
    # Tree
    'BSPTree',
    'BSPTreeVisitor',
    'CellPath',
    'Order',
    'ROOT_PATH',
    'fit_to_cell',
    # Algebra
    'BooleanOperator',
    'RegionFactory',
    'complement_tree',
    'AbstractRegion',
    'build_tree_from_boundary',
]
