"""
Polygon classification and vertex ordering.

Contains:
- The polygon classification enum
- Classification of reconstructed vertex loops
- Centroid-angle sorting of vertices
"""

from enum import Enum
from typing import List, Optional, Sequence

import numpy as np

from ..core.geometry import ANGULAR_EPS, EPS, TWO_PI, Vector2D, remove_consecutive_duplicates
from .sub_line import SubLine


class PolygonClassification(Enum):
    """Shape of the boundary of a polygons set."""
    CONVEX = "convex"
    CONCAVE = "concave"
    CROSSING_BORDER = "crossing_border"
    DEGENERATE = "degenerate"


def _has_crossing_edges(vertices: np.ndarray, tolerance: float) -> bool:
    """True if two non-adjacent edges of a closed loop touch or cross."""
    n = len(vertices)
    edges = [SubLine.from_points(vertices[i], vertices[(i + 1) % n], tolerance) for i in range(n)]
    for i in range(n):
        for j in range(i + 2, n):
            if i == 0 and j == n - 1:
                # first and last edges share the closing vertex
                continue
            if edges[i].intersection(edges[j], include_end_points=True) is not None:
                return True
    return False


def _turning_signs(vertices: np.ndarray) -> np.ndarray:
    """Signs of the normalized turns at each vertex, collinear vertices dropped."""
    edges = np.roll(vertices, -1, axis=0) - vertices
    previous = np.roll(edges, 1, axis=0)
    lengths = np.hypot(edges[:, 0], edges[:, 1])
    cross = previous[:, 0] * edges[:, 1] - previous[:, 1] * edges[:, 0]
    turns = cross / (lengths * np.roll(lengths, 1))
    return np.sign(turns[np.abs(turns) > ANGULAR_EPS])


def classify_loops(loops: Sequence[Sequence[Optional[Vector2D]]],
                   tolerance: float = EPS) -> PolygonClassification:
    """
    Classify the boundary loops of a polygons set.

    Parameters
    ----------
    loops : sequence of loops
        Loops as returned by ``PolygonsSet.get_vertices``; open loops start
        with None.
    tolerance : float
        Distance below which vertices are duplicates and edges touch.

    Returns
    -------
    PolygonClassification
        CONVEX or CONCAVE for a single simple loop, CROSSING_BORDER when
        non-adjacent edges meet (or for an open boundary carrying real
        vertices), DEGENERATE otherwise.
    """
    if not loops:
        return PolygonClassification.DEGENERATE

    for loop in loops:
        if len(loop) > 0 and loop[0] is None:
            if len(loop) > 3:
                return PolygonClassification.CROSSING_BORDER
            return PolygonClassification.DEGENERATE

    if len(loops) > 1:
        return PolygonClassification.DEGENERATE

    if len(loops[0]) == 0:
        return PolygonClassification.DEGENERATE
    vertices = remove_consecutive_duplicates(np.asarray(loops[0], dtype=np.float64), tolerance)
    if len(vertices) < 3:
        return PolygonClassification.DEGENERATE

    if _has_crossing_edges(vertices, tolerance):
        return PolygonClassification.CROSSING_BORDER

    signs = _turning_signs(vertices)
    if len(signs) == 0:
        return PolygonClassification.DEGENERATE
    if np.all(signs == signs[0]):
        return PolygonClassification.CONVEX
    return PolygonClassification.CONCAVE


def sort_vertices(loops: Sequence[Sequence[Optional[Vector2D]]],
                  trigonometric_sense: bool = True) -> List[List[Vector2D]]:
    """
    Reorder vertices by their angle around the centroid.

    Every non-None vertex of every loop is pooled; the result is a single
    loop. Only star-shaped vertex sets (with respect to their centroid) are
    guaranteed to come out as simple polygons.

    Parameters
    ----------
    loops : sequence of loops
        Vertex loops; None entries are ignored.
    trigonometric_sense : bool
        True for counter-clockwise order, False for clockwise.

    Returns
    -------
    list of list of Vector2D
        A list holding the sorted loop, or an empty list for no vertex.
    """
    points = [point for loop in loops for point in loop if point is not None]
    if not points:
        return []

    arr = np.asarray(points, dtype=np.float64)
    center = arr.mean(axis=0)
    angles = np.mod(np.arctan2(arr[:, 1] - center[1], arr[:, 0] - center[0]), TWO_PI)

    order = np.argsort(angles, kind='stable')
    if not trigonometric_sense:
        order = order[::-1]

    return [[Vector2D(float(arr[k, 0]), float(arr[k, 1])) for k in order]]
