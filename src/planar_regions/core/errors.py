"""
Exception hierarchy.

Input problems are ``ValueError`` subclasses so callers validating user data
can catch them the usual way; broken internal invariants are
``RuntimeError`` subclasses and are not meant to be recovered from.
"""

from enum import Enum
from typing import Optional


class PlanarRegionsError(Exception):
    """Base class for every error raised by the package."""


class InvalidGeometryError(PlanarRegionsError, ValueError):
    """Malformed geometric input (coincident points, too few vertices, bad shapes...)."""


class ValidityRule(Enum):
    """Rule violated by a polygons set rejected by ``check_polygon_set``."""
    VERTEX_COUNT = "vertex_count"
    DEGENERATE = "degenerate"
    CROSSING_BORDER = "crossing_border"
    UNBOUNDED = "unbounded"


class PolygonValidityError(InvalidGeometryError):
    """
    A polygons set is not a single simple bounded polygon.

    Attributes
    ----------
    rule : ValidityRule
        The violated rule.
    classification : PolygonClassification or None
        Classification computed for the polygons set.
    """

    def __init__(self, rule: ValidityRule, classification: Optional[Enum] = None):
        self.rule = rule
        self.classification = classification
        message = f"invalid polygon: {rule.value}"
        if classification is not None:
            message += f" (classification {classification.name})"
        super().__init__(message)


class InternalError(PlanarRegionsError, RuntimeError):
    """Inconsistent tree or boundary state; usually a tolerance too small for the input scale."""
