"""
Core geometry primitives and errors.
"""

from .errors import (
    PlanarRegionsError,
    InvalidGeometryError,
    PolygonValidityError,
    ValidityRule,
    InternalError,
)
from .geometry import (
    EPS,
    ANGULAR_EPS,
    NAN_VECTOR,
    Vector2D,
    Location,
    Side,
    normalize_angle,
    as_vector,
    as_vertex_array,
    signed_area,
    polygon_area,
    ensure_ccw,
    ensure_cw,
    remove_consecutive_duplicates,
)

__all__ = [
    # Errors
    'PlanarRegionsError',
    'InvalidGeometryError',
    'PolygonValidityError',
    'ValidityRule',
    'InternalError',
    # Geometry
    'EPS',
    'ANGULAR_EPS',
    'NAN_VECTOR',
    'Vector2D',
    'Location',
    'Side',
    'normalize_angle',
    'as_vector',
    'as_vertex_array',
    'signed_area',
    'polygon_area',
    'ensure_ccw',
    'ensure_cw',
    'remove_consecutive_duplicates',
]
