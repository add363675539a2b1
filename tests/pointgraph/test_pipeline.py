import matplotlib

matplotlib.use("Agg")
import numpy as np
import pytest

from pointgraph.config import BuildConfig, DelfinConfig, DtscanConfig
from pointgraph.datastructures import BuildMode
from pointgraph.default_config import DEFAULTS
from pointgraph.pipeline import analyze
from pointgraph.visualize import plot_graph

from tests.pointgraph.helpers_clouds import cloud_with_hole


def test_analyze_runs_both_analyses():
    pts = cloud_with_hole()
    res = analyze(
        pts,
        delfin=DelfinConfig(min_area=200.0, min_distance=15.0),
        dtscan=DtscanConfig(min_pts=4, max_closeness=5.0),
        build=BuildConfig(workers=2, chunk_size=256),
    )
    assert res.graph.mode is BuildMode.FULL
    assert res.voids
    assert res.clusters
    assert len(res.points) == len(pts)


def test_analyze_builds_only_what_is_needed():
    pts = cloud_with_hole()

    res = analyze(pts, dtscan=DtscanConfig(min_pts=4, max_closeness=5.0))
    assert res.graph.mode is BuildMode.CONNECTIONS
    assert res.voids == []

    res = analyze(pts, delfin=DelfinConfig(min_area=200.0, min_distance=15.0))
    assert res.graph.mode is BuildMode.TRIANGLES
    assert res.clusters == []


def test_analyze_empty_points():
    res = analyze(np.zeros((0, 2)), delfin=DelfinConfig.from_defaults(), dtscan=DtscanConfig.from_defaults())
    assert res.voids == []
    assert res.clusters == []


def test_config_defaults_and_validation():
    d = DelfinConfig.from_defaults()
    assert d.min_area == DEFAULTS["DELFIN_MIN_AREA"]
    assert d.min_triangles == 2
    assert DtscanConfig.from_defaults().min_pts == DEFAULTS["DTSCAN_MIN_PTS"]
    assert BuildConfig.from_defaults().chunk_size == DEFAULTS["BUILD_CHUNK_SIZE"]

    with pytest.raises(ValueError):
        DelfinConfig(min_area=0.0, min_distance=0.0, min_triangles=1)
    with pytest.raises(ValueError):
        DtscanConfig(min_pts=-1, max_closeness=1.0)


def test_plot_graph():
    pts = cloud_with_hole(n=300)
    res = analyze(
        pts,
        delfin=DelfinConfig(min_area=100.0, min_distance=12.0),
        dtscan=DtscanConfig(min_pts=4, max_closeness=8.0),
    )
    ax = plot_graph(pts, res.graph, voids=res.voids, clusters=res.clusters)
    assert ax.get_title() == f"{len(res.voids)} voids, {len(res.clusters)} clusters"
    assert len(ax.collections) >= 1
