"""
Planar specialization: lines, sub-lines and polygons sets.
"""

from .line import Line
from .segment import Segment
from .sub_line import SubLine
from .loops import FLOAT_MAX, build_vertex_loops, collect_boundary_segments, follow_loops
from .classification import PolygonClassification, classify_loops, sort_vertices
from .polygons_set import PolygonsSet
from .conversion import to_shapely, from_shapely

__all__ = [
    # Hyperplane layer
    'Line',
    'Segment',
    'SubLine',
    # Boundary loops
    'FLOAT_MAX',
    'build_vertex_loops',
    'collect_boundary_segments',
    'follow_loops',
    # Classification
    'PolygonClassification',
    'classify_loops',
    'sort_vertices',
    # Regions
    'PolygonsSet',
    # Shapely interop
    'to_shapely',
    'from_shapely',
]
