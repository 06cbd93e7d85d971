"""
Smoke tests for the plotting helpers (non-interactive backend).
"""

import matplotlib
matplotlib.use('Agg')

import matplotlib.pyplot as plt
import numpy as np
import pytest

from planar_regions import PolygonsSet, plot_polygons_set


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')


class TestPlotPolygonsSet:
    """Tests for plot_polygons_set()."""

    def test_returns_axes(self):
        """Plotting returns the axes with the default title."""
        ax = plot_polygons_set(PolygonsSet.from_box(0, 1, 0, 1))
        assert isinstance(ax, plt.Axes)
        assert ax.get_title() == "Polygons set"

    def test_one_line_per_loop(self):
        """Each loop is drawn once and the region filled once."""
        ring = PolygonsSet.from_box(0, 3, 0, 3) - PolygonsSet.from_box(1, 2, 1, 2)
        ax = plot_polygons_set(ring, show_stats=False)
        assert len(ax.lines) == 2
        assert len(ax.patches) == 1

    def test_points_add_legend(self):
        """Located points appear in the legend by location."""
        region = PolygonsSet.from_box(0, 1, 0, 1)
        points = np.array([[0.5, 0.5], [2.0, 2.0], [1.0, 0.5]])
        ax = plot_polygons_set(region, points=points)
        labels = [text.get_text() for text in ax.get_legend().get_texts()]
        assert labels == ['Inside', 'Outside', 'Boundary']

    def test_existing_axes(self):
        """Given axes are reused."""
        fig, ax = plt.subplots()
        result = plot_polygons_set(PolygonsSet.from_box(0, 1, 0, 1), ax=ax, title="Box")
        assert result is ax
        assert ax.get_title() == "Box"

    def test_unbounded_region(self):
        """Unbounded regions draw their open loop and report infinite area."""
        ax = plot_polygons_set(~PolygonsSet.from_box(0, 1, 0, 1))
        assert len(ax.lines) == 1
        assert 'inf' in ax.texts[0].get_text()
