"""
Boundary loop reconstruction.

The boundary of a region is available as an unordered set of oriented
segments, one batch per internal node of the tree. This module collects
them and chains them into vertex loops:

- Closed loops are cyclic lists of vertices with no repeated end point.
- Open loops (unbounded regions) start with ``None``, then a dummy point
  giving the direction of the first infinite edge, the real vertices, and a
  dummy point giving the direction of the last infinite edge.
- A single infinite line is ``[None, far_point_before, far_point_after]``.

Every segment has the inside of the region on its left, so closed loops
around finite areas are counter-clockwise and holes are clockwise.
"""

import logging
import math
from typing import List, Optional, Sequence

import numpy as np
from scipy.spatial import cKDTree

from ..core.errors import InternalError
from ..core.geometry import ANGULAR_EPS, EPS, Vector2D
from ..partitioning.bsp_tree import BSPTree, Order
from .segment import Segment


logger = logging.getLogger(__name__)

# Abscissa used to materialize the two ends of an unbounded line
FLOAT_MAX = float(np.finfo(np.float32).max)

Loop = List[Optional[Vector2D]]


class _SegmentsCollector:
    """Visitor gathering the oriented boundary segments of a tree."""

    def __init__(self):
        self.segments: List[Segment] = []

    def visit_order(self, node: BSPTree) -> Order:
        return Order.MINUS_SUB_PLUS

    def visit_internal_node(self, node: BSPTree) -> None:
        attribute = node.attribute
        if attribute.plus_outside is not None:
            self._add_contribution(attribute.plus_outside, reverse=False)
        if attribute.plus_inside is not None:
            self._add_contribution(attribute.plus_inside, reverse=True)

    def visit_leaf_node(self, node: BSPTree) -> None:
        pass

    def _add_contribution(self, sub, reverse: bool) -> None:
        line = sub.hyperplane
        for interval in sub.remaining_region:
            start = None if math.isinf(interval.lower) else line.to_space(interval.lower)
            end = None if math.isinf(interval.upper) else line.to_space(interval.upper)
            if reverse:
                self.segments.append(Segment(end, start, line.reverse()))
            else:
                self.segments.append(Segment(start, end, line))


def collect_boundary_segments(tree: BSPTree) -> List[Segment]:
    """
    Oriented boundary segments of a tree whose boundary attributes are set.

    Parameters
    ----------
    tree : BSPTree
        Tree returned by ``region.get_tree(True)``.

    Returns
    -------
    list of Segment
        Segments with the inside on their left; unbounded ends are None.
    """
    collector = _SegmentsCollector()
    tree.visit(collector)
    return collector.segments


def follow_loops(segments: Sequence[Segment], tolerance: float = EPS) -> List[List[Segment]]:
    """
    Chain boundary segments into loops.

    Open chains are followed first, then closed ones starting from the
    lexicographically smallest start point. At each step the unused segment
    whose start is nearest to the current end (within ``tolerance``) is
    appended.

    Parameters
    ----------
    segments : sequence of Segment
        Boundary segments, in any order.
    tolerance : float
        Maximum gap between the end of a segment and the start of the next.

    Returns
    -------
    list of list of Segment
        Loops, open ones first.

    Raises
    ------
    InternalError
        If a loop cannot be continued, or if a closed loop runs into an
        unbounded segment.
    """
    if not segments:
        return []

    open_indices = [i for i, segment in enumerate(segments) if segment.start is None]
    owners = np.array([i for i, segment in enumerate(segments) if segment.start is not None],
                      dtype=np.intp)

    lookup = None
    closed_order: List[int] = []
    if len(owners) > 0:
        starts = np.array([segments[i].start for i in owners], dtype=np.float64)
        lookup = cKDTree(starts)
        closed_order = owners[np.lexsort((starts[:, 1], starts[:, 0]))].tolist()

    used = np.zeros(len(segments), dtype=bool)

    def next_segment(end: Vector2D) -> Optional[int]:
        if lookup is None:
            return None
        best, best_distance = None, math.inf
        for k in lookup.query_ball_point(end, r=tolerance):
            index = int(owners[k])
            if used[index]:
                continue
            distance = end.distance(segments[index].start)
            if distance < best_distance:
                best, best_distance = index, distance
        return best

    loops: List[List[Segment]] = []
    for first in open_indices + closed_order:
        if used[first]:
            continue
        used[first] = True

        loop = [segments[first]]
        is_open = loop[0].start is None
        end = loop[0].end
        while end is not None and (is_open or end.distance(loop[0].start) > tolerance):
            index = next_segment(end)
            if index is None:
                raise InternalError(f"boundary loop cannot be continued after point {tuple(end)}")
            used[index] = True
            loop.append(segments[index])
            end = segments[index].end

        if end is None and not is_open:
            raise InternalError("closed boundary loop runs into an unbounded segment")

        loops.append(loop)

    return loops


def _same_direction(first: Segment, second: Segment) -> bool:
    a, b = first.line, second.line
    return (abs(a.sin * b.cos - a.cos * b.sin) <= ANGULAR_EPS
            and a.cos * b.cos + a.sin * b.sin > 0.0)


def merge_collinear(loop: List[Segment], closed: bool) -> List[Segment]:
    """
    Fuse consecutive segments with the same direction.

    Consecutive segments of a loop share an end point, so parallel ones lie
    on the same line.
    """
    merged: List[Segment] = []
    for segment in loop:
        if merged and _same_direction(merged[-1], segment):
            merged[-1] = Segment(merged[-1].start, segment.end, merged[-1].line)
        else:
            merged.append(segment)

    if closed and len(merged) > 1 and _same_direction(merged[-1], merged[0]):
        merged[0] = Segment(merged[-1].start, merged[0].end, merged[-1].line)
        merged.pop()

    return merged


def _to_vertices(loop: List[Segment]) -> Loop:
    first = loop[0]
    if first.start is not None:
        return [segment.start for segment in loop]

    if len(loop) == 1:
        # single infinite line
        return [None, first.line.to_space(-FLOAT_MAX), first.line.to_space(FLOAT_MAX)]

    # dummy points only carry the direction of the infinite edges
    x = first.line.to_sub_space(first.end)
    x -= max(1.0, abs(x / 2))
    vertices: Loop = [None, first.line.to_space(x)]
    vertices.extend(segment.end for segment in loop[:-1])

    last = loop[-1]
    x = last.line.to_sub_space(last.start)
    x += max(1.0, abs(x / 2))
    vertices.append(last.line.to_space(x))
    return vertices


def build_vertex_loops(tree: BSPTree, tolerance: float = EPS) -> List[Loop]:
    """
    Vertex loops of the boundary of a tree.

    Parameters
    ----------
    tree : BSPTree
        Tree with boundary attributes computed.
    tolerance : float
        Maximum gap between consecutive segments of a loop.

    Returns
    -------
    list of Loop
        Open loops first, then closed loops.
    """
    if tree.cut is None:
        return []

    loops: List[Loop] = []
    for loop in follow_loops(collect_boundary_segments(tree), tolerance):
        closed = loop[0].start is not None
        loop = merge_collinear(loop, closed)
        if closed and len(loop) <= 2:
            logger.debug("Dropping infinitely thin boundary loop starting at %s",
                         tuple(loop[0].start))
            continue
        loops.append(_to_vertices(loop))

    logger.debug("Rebuilt %d boundary loops", len(loops))
    return loops
