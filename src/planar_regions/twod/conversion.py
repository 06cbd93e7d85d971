"""
Shapely interoperability.

Contains conversions between bounded polygons sets and shapely
``Polygon`` / ``MultiPolygon`` geometries.
"""

import math
from typing import List, Union

import numpy as np
from shapely.geometry import MultiPolygon, Polygon

from ..core.errors import InvalidGeometryError
from ..core.geometry import EPS, ensure_ccw, ensure_cw, signed_area
from .polygons_set import PolygonsSet


def _ring_to_array(ring) -> np.ndarray:
    coords = np.array(ring.coords, dtype=np.float64)[:, :2]
    # Remove the closing duplicate vertex that Shapely adds
    if len(coords) > 1 and np.allclose(coords[0], coords[-1]):
        coords = coords[:-1]
    return coords


def to_shapely(region: PolygonsSet) -> Union[Polygon, MultiPolygon]:
    """
    Convert a bounded polygons set to a shapely geometry.

    Counter-clockwise loops become shells; each clockwise loop becomes a
    hole of the smallest shell containing it.

    Parameters
    ----------
    region : PolygonsSet
        Bounded region.

    Returns
    -------
    Polygon or MultiPolygon
        An empty ``Polygon`` for an empty region, a ``Polygon`` for a single
        component, a ``MultiPolygon`` otherwise.

    Raises
    ------
    InvalidGeometryError
        If the region is unbounded.
    """
    if math.isinf(region.size):
        raise InvalidGeometryError("Cannot convert an unbounded region to a shapely geometry")

    shells: List[np.ndarray] = []
    holes: List[np.ndarray] = []
    for loop in region.vertices_as_arrays():
        (shells if signed_area(loop) > 0 else holes).append(loop)

    if not shells:
        return Polygon()

    shell_polys = [Polygon(shell) for shell in shells]
    assigned: List[List[np.ndarray]] = [[] for _ in shells]
    for hole in holes:
        sample = Polygon(hole).representative_point()
        candidates = [i for i, poly in enumerate(shell_polys) if poly.contains(sample)]
        if not candidates:
            raise InvalidGeometryError("Hole loop is not enclosed by any outer loop")
        owner = min(candidates, key=lambda i: shell_polys[i].area)
        assigned[owner].append(hole)

    polygons = [Polygon(shell, assigned[i]) for i, shell in enumerate(shells)]
    if len(polygons) == 1:
        return polygons[0]
    return MultiPolygon(polygons)


def from_shapely(geometry: Union[Polygon, MultiPolygon], tolerance: float = EPS) -> PolygonsSet:
    """
    Convert a shapely polygon or multi-polygon to a polygons set.

    Shells are oriented counter-clockwise and holes clockwise before the
    loops are handed to ``PolygonsSet.from_loops``.

    Parameters
    ----------
    geometry : Polygon or MultiPolygon
        Shapely geometry.
    tolerance : float
        Tolerance of the resulting region.

    Returns
    -------
    PolygonsSet
        Equivalent region; empty for an empty geometry.
    """
    if isinstance(geometry, Polygon):
        parts = [] if geometry.is_empty else [geometry]
    elif isinstance(geometry, MultiPolygon):
        parts = [part for part in geometry.geoms if not part.is_empty]
    else:
        raise InvalidGeometryError(f"Unsupported geometry type: {geometry.geom_type}")

    if not parts:
        return PolygonsSet.empty(tolerance)

    loops = []
    for part in parts:
        loops.append(ensure_ccw(_ring_to_array(part.exterior)))
        for interior in part.interiors:
            loops.append(ensure_cw(_ring_to_array(interior)))

    return PolygonsSet.from_loops(loops, tolerance)
