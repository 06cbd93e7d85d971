"""
One-dimensional interval sets used as sub-hyperplane extents.
"""

from .intervals_set import Interval, IntervalsSet

__all__ = ['Interval', 'IntervalsSet']
