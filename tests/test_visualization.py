"""
Test reachability and cluster plots
"""

import matplotlib.pyplot as plt
import numpy as np

from optics_order.clustering.optics import OPTICS
from optics_order.visualization.plot_reachability import ReachabilityVisualizer, plot_reachability


def test_plot_reachability_saves_figure(tmp_path, blob_points):
    optics = OPTICS(epsilon=2, min_pts=3)
    optics.run(blob_points)

    save_path = tmp_path / "reachability.png"
    fig = ReachabilityVisualizer(dpi=50).plot_reachability(
        optics.get_reachability_plot(), labels=optics.labels_, save_path=str(save_path))

    assert isinstance(fig, plt.Figure)
    assert save_path.exists()


def test_plot_reachability_all_undefined():
    optics = OPTICS(epsilon=1, min_pts=2)
    optics.run([[0, 0], [10, 10]])

    fig = ReachabilityVisualizer().plot_reachability(optics.get_reachability_plot())

    assert fig.axes[0].get_ylim()[1] > 0


def test_plot_reachability_empty():
    fig = ReachabilityVisualizer().plot_reachability([])

    assert isinstance(fig, plt.Figure)


def test_plot_clusters_2d(tmp_path, blob_points):
    optics = OPTICS(epsilon=2, min_pts=3)
    optics.run(blob_points)

    save_path = tmp_path / "clusters.png"
    fig = ReachabilityVisualizer(dpi=50).plot_clusters_2d(
        blob_points, optics.labels_, save_path=str(save_path))

    assert isinstance(fig, plt.Figure)
    assert save_path.exists()


def test_plot_clusters_2d_degenerate_hull():
    """Collinear and coincident clusters are drawn without a hull."""
    points = np.array([[0, 0], [0, 1], [0, 2], [0, 3], [5, 5], [5, 5], [5, 5], [5, 5]], dtype=float)
    labels = np.array([0, 0, 0, 0, 1, 1, 1, 1])

    fig = ReachabilityVisualizer().plot_clusters_2d(points, labels)

    assert isinstance(fig, plt.Figure)


def test_plot_reachability_helper(tmp_path, two_cluster_points):
    optics = OPTICS(epsilon=3, min_pts=2)
    optics.run(two_cluster_points)

    fig = plot_reachability(optics, save_path=str(tmp_path / "helper.png"))

    assert "epsilon=3" in fig.axes[0].get_title()
    assert (tmp_path / "helper.png").exists()
