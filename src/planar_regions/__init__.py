"""
Planar Regions - BSP-based boolean algebra on planar polygonal regions.

This package represents arbitrary regions of the plane with inside/outside
Binary Space Partitioning trees cut by lines. Regions may:
- Have holes and several disjoint components
- Be unbounded (half-planes, complements of polygons)
- Be combined by union, intersection, xor, difference and complement

Main Functions
--------------
PolygonsSet.from_loops : Build a region from vertex loops
PolygonsSet.from_box : Build an axis-aligned rectangle
PolygonsSet.get_vertices : Rebuild the boundary vertex loops
PolygonsSet.check_point : Locate a point (INSIDE / OUTSIDE / BOUNDARY)
RegionFactory : Low-level boolean operations consuming their operands
classify_loops : Classify boundary loops (CONVEX / CONCAVE / ...)
sort_vertices : Order vertices by angle around their centroid

Example
-------
>>> from planar_regions import PolygonsSet, Location

>>> a = PolygonsSet.from_box(0, 2, 0, 2)
>>> b = PolygonsSet.from_box(1, 3, 1, 3)
>>> union = a | b
>>> union.size
7.0
>>> union.check_point((2.5, 0.5)) is Location.OUTSIDE
True
"""

from .core.errors import (
    PlanarRegionsError,
    InvalidGeometryError,
    PolygonValidityError,
    ValidityRule,
    InternalError,
)
from .core.geometry import EPS, ANGULAR_EPS, NAN_VECTOR, Vector2D, Location, Side
from .intervals import Interval, IntervalsSet
from .partitioning import (
    AbstractRegion,
    BooleanOperator,
    BSPTree,
    Order,
    RegionFactory,
    build_tree_from_boundary,
)
from .twod import (
    Line,
    Segment,
    SubLine,
    PolygonClassification,
    PolygonsSet,
    classify_loops,
    sort_vertices,
    to_shapely,
    from_shapely,
)
from .visualization.plotting import plot_polygons_set

__all__ = [
    # Errors
    'PlanarRegionsError',
    'InvalidGeometryError',
    'PolygonValidityError',
    'ValidityRule',
    'InternalError',
    # Core geometry
    'EPS',
    'ANGULAR_EPS',
    'NAN_VECTOR',
    'Vector2D',
    'Location',
    'Side',
    # Intervals
    'Interval',
    'IntervalsSet',
    # Trees and algebra
    'AbstractRegion',
    'BooleanOperator',
    'BSPTree',
    'Order',
    'RegionFactory',
    'build_tree_from_boundary',
    # Planar regions
    'Line',
    'Segment',
    'SubLine',
    'PolygonClassification',
    'PolygonsSet',
    'classify_loops',
    'sort_vertices',
    # Shapely interop
    'to_shapely',
    'from_shapely',
    # Visualization
    'plot_polygons_set',
]
