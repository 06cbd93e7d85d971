"""
Visualization utilities.
"""

from .plotting import plot_polygons_set

__all__ = ['plot_polygons_set']
