"""
Core geometry primitives shared by every layer of the package.

Contains:
- The default numerical tolerance
- The 2D point value type
- Point and side location enums
- Angle normalization
- Polygon area / orientation helpers on numpy vertex arrays
"""

import math
from enum import Enum
from typing import NamedTuple

import numpy as np

from .errors import InvalidGeometryError


# Numerical tolerance for floating point comparisons
EPS = 1e-10

# Threshold on the sine of the angle between two directions below which they
# are parallel; independent of the distance tolerance of a region
ANGULAR_EPS = 1e-10

TWO_PI = 2.0 * math.pi


class Vector2D(NamedTuple):
    """
    Immutable 2D point / vector.

    Being a tuple, it converts to and from ``(x, y)`` pairs and numpy rows
    without ceremony: ``np.asarray([Vector2D(0, 1), Vector2D(2, 3)])`` is a
    ``(2, 2)`` array.
    """
    x: float
    y: float

    def add(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x + other[0], self.y + other[1])

    def subtract(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x - other[0], self.y - other[1])

    def scale(self, factor: float) -> "Vector2D":
        return Vector2D(self.x * factor, self.y * factor)

    def norm(self) -> float:
        return math.hypot(self.x, self.y)

    def distance(self, other: "Vector2D") -> float:
        return math.hypot(self.x - other[0], self.y - other[1])

    def dot(self, other: "Vector2D") -> float:
        return self.x * other[0] + self.y * other[1]

    def cross(self, other: "Vector2D") -> float:
        """Z component of the 3D cross product of the two vectors."""
        return self.x * other[1] - self.y * other[0]

    def is_nan(self) -> bool:
        return math.isnan(self.x) or math.isnan(self.y)


NAN_VECTOR = Vector2D(float("nan"), float("nan"))


class Location(Enum):
    """Position of a point with respect to a region."""
    INSIDE = "inside"
    OUTSIDE = "outside"
    BOUNDARY = "boundary"


class Side(Enum):
    """Position of a sub-hyperplane with respect to a hyperplane."""
    PLUS = "plus"
    MINUS = "minus"
    BOTH = "both"
    HYPER = "hyper"


def normalize_angle(angle: float, center: float) -> float:
    """
    Normalize an angle in a 2π wide interval around a center value.

    Parameters
    ----------
    angle : float
        Angle to normalize.
    center : float
        Center of the target interval ``[center - π, center + π)``.

    Returns
    -------
    float
        Normalized angle.
    """
    return angle - TWO_PI * math.floor((angle + math.pi - center) / TWO_PI)


def as_vector(point) -> Vector2D:
    """Convert any ``(x, y)`` pair into a Vector2D."""
    if isinstance(point, Vector2D):
        return point
    x, y = point
    return Vector2D(float(x), float(y))


def as_vertex_array(poly) -> np.ndarray:
    """
    Validate and convert a vertex sequence to a float array.

    Parameters
    ----------
    poly : array_like
        Sequence of ``(x, y)`` pairs or array of shape (M, 2).

    Returns
    -------
    np.ndarray
        Vertices of shape (M, 2), dtype float64.

    Raises
    ------
    InvalidGeometryError
        If the input is not a list of 2D points.
    """
    try:
        arr = np.asarray(poly, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidGeometryError(f"Cannot interpret vertices as 2D points: {exc}") from exc

    if arr.size == 0:
        return arr.reshape(0, 2)

    if arr.ndim != 2 or arr.shape[1] != 2:
        raise InvalidGeometryError(f"Expected vertices of shape (M, 2), got {arr.shape}")

    if not np.all(np.isfinite(arr)):
        raise InvalidGeometryError("Vertices must have finite coordinates")

    return arr


def signed_area(poly: np.ndarray) -> float:
    """
    Compute the signed area of a polygon using the shoelace formula.

    Parameters
    ----------
    poly : np.ndarray
        Polygon vertices of shape (M, 2).

    Returns
    -------
    float
        Positive for counter-clockwise winding, negative for clockwise.
    """
    n = len(poly)
    if n < 3:
        return 0.0

    x = poly[:, 0]
    y = poly[:, 1]
    return float(0.5 * np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))


def polygon_area(poly: np.ndarray) -> float:
    """
    Compute the (unsigned) area of a polygon using the shoelace formula.

    Parameters
    ----------
    poly : np.ndarray
        Polygon vertices of shape (M, 2).

    Returns
    -------
    float
        Area of the polygon.
    """
    return abs(signed_area(poly))


def ensure_ccw(poly: np.ndarray) -> np.ndarray:
    """
    Ensure polygon vertices are in counter-clockwise order.

    Parameters
    ----------
    poly : np.ndarray
        Polygon vertices of shape (M, 2).

    Returns
    -------
    np.ndarray
        Polygon vertices in CCW order.
    """
    if signed_area(poly) < 0:
        # Clockwise, reverse to make CCW
        return poly[::-1].copy()
    return poly


def ensure_cw(poly: np.ndarray) -> np.ndarray:
    """Ensure polygon vertices are in clockwise order."""
    if signed_area(poly) > 0:
        return poly[::-1].copy()
    return poly


def remove_consecutive_duplicates(poly: np.ndarray, tolerance: float = EPS) -> np.ndarray:
    """
    Drop vertices closer than ``tolerance`` to their predecessor.

    The loop is treated as closed, so a last vertex equal to the first one
    is dropped as well.

    Parameters
    ----------
    poly : np.ndarray
        Polygon vertices of shape (M, 2).
    tolerance : float
        Distance below which two vertices are considered equal.

    Returns
    -------
    np.ndarray
        Filtered vertices of shape (K, 2), K <= M.
    """
    if len(poly) == 0:
        return poly

    kept = [poly[0]]
    for vertex in poly[1:]:
        if np.hypot(*(vertex - kept[-1])) > tolerance:
            kept.append(vertex)

    # Closing duplicate
    while len(kept) > 1 and np.hypot(*(kept[-1] - kept[0])) <= tolerance:
        kept.pop()

    return np.array(kept, dtype=np.float64)
