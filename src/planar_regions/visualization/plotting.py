"""
Visualization utilities for polygons sets.

Contains plotting functions for:
- Closed boundary loops (shells and holes)
- Point classification against a region
"""

import math
from typing import Optional

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import PathPatch
from matplotlib.path import Path

from ..core.geometry import Location, signed_area
from ..twod.polygons_set import PolygonsSet


_LOCATION_STYLE = {
    Location.INSIDE: ('steelblue', 'Inside'),
    Location.OUTSIDE: ('coral', 'Outside'),
    Location.BOUNDARY: ('gold', 'Boundary'),
}


def _region_path(loops) -> Path:
    """Compound path of closed loops; holes are clockwise so nonzero filling cuts them out."""
    vertices = []
    codes = []
    for loop in loops:
        vertices.extend(loop.tolist())
        vertices.append(loop[0].tolist())
        codes.append(Path.MOVETO)
        codes.extend([Path.LINETO] * (len(loop) - 1))
        codes.append(Path.CLOSEPOLY)
    return Path(np.asarray(vertices, dtype=np.float64), codes)


def plot_polygons_set(
    region: PolygonsSet,
    points: Optional[np.ndarray] = None,
    ax: Optional[plt.Axes] = None,
    title: str = "Polygons set",
    show_vertices: bool = True,
    show_stats: bool = True
) -> plt.Axes:
    """
    Visualize the closed boundary loops of a region.

    Parameters
    ----------
    region : PolygonsSet
        Region to draw. Open boundary loops are not drawn.
    points : np.ndarray, optional
        Points of shape (N, 2), colored by their location in the region.
    ax : plt.Axes, optional
        Matplotlib axes to plot on. Creates new figure if None.
    title : str
        Plot title.
    show_vertices : bool
        Whether to mark the loop vertices.
    show_stats : bool
        Whether to show region statistics.

    Returns
    -------
    plt.Axes
        The matplotlib axes object.
    """
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(8, 8))

    loops = region.vertices_as_arrays()

    if loops:
        ax.add_patch(PathPatch(_region_path(loops), facecolor='green', alpha=0.15,
                               edgecolor='none', zorder=1))

    for loop in loops:
        closed_loop = np.vstack([loop, loop[0]])
        style = 'k-' if signed_area(loop) > 0 else 'k--'
        ax.plot(closed_loop[:, 0], closed_loop[:, 1], style, linewidth=2, zorder=3)
        if show_vertices:
            ax.scatter(loop[:, 0], loop[:, 1], c='black', s=40, marker='s', zorder=4)

    if points is not None:
        points = np.atleast_2d(np.asarray(points, dtype=np.float64))
        locations = np.array([region.check_point(p) for p in points], dtype=object)
        for location, (color, label) in _LOCATION_STYLE.items():
            mask = locations == location
            if np.any(mask):
                ax.scatter(points[mask, 0], points[mask, 1],
                           c=color, alpha=0.6, s=20, label=label, zorder=2)
        ax.legend(loc='upper right')

    if show_stats:
        size = region.size
        stats_text = (
            f"Loops: {len(region.get_vertices())}\n"
            f"Class: {region.get_classification().name}\n"
            f"Area: {'inf' if math.isinf(size) else f'{size:.2f}'}"
        )
        ax.text(
            0.02, 0.98, stats_text,
            transform=ax.transAxes,
            verticalalignment='top',
            fontfamily='monospace',
            fontsize=9,
            bbox=dict(boxstyle='round', facecolor='white', alpha=0.8)
        )

    ax.set_xlabel('X')
    ax.set_ylabel('Y')
    ax.set_title(title)
    ax.set_aspect('equal', adjustable='datalim')
    ax.grid(True, alpha=0.3)
    ax.autoscale_view()

    return ax
