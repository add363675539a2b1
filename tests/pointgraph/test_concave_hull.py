import numpy as np
import pytest
from shapely.geometry import MultiPoint

from pointgraph.concave_hull import concave_hull, hull_polygon, order_hull_edges
from pointgraph.datastructures import Edge
from pointgraph.errors import ConcaveHullError

from tests.pointgraph.helpers_clouds import two_blobs


def _square_with_center():
    return np.array([
        [0.0, 0.0],
        [4.0, 0.0],
        [4.0, 4.0],
        [0.0, 4.0],
        [2.0, 2.0],
    ], dtype=np.float64)


def _assert_ring(path, edges):
    n = len(path)
    steps = {Edge.of(path[i], path[(i + 1) % n]) for i in range(n)}
    assert steps == set(edges)


def test_square_hull_is_its_corners_in_order():
    pts = _square_with_center()
    path = concave_hull(pts, [0, 1, 2, 3, 4], alpha=10.0)

    assert sorted(path) == [0, 1, 2, 3]
    _assert_ring(path, [Edge(0, 1), Edge(1, 2), Edge(2, 3), Edge(0, 3)])
    assert hull_polygon(pts, path).area == pytest.approx(16.0)


def test_hull_uses_global_indices_of_subset():
    pts = np.vstack([np.full((3, 2), 99.0), _square_with_center()])
    path = concave_hull(pts, [7, 3, 4, 5, 6, 7])
    assert sorted(path) == [3, 4, 5, 6]


def test_hull_of_blob_encloses_its_points():
    pts = two_blobs(n_per_blob=40)
    path = concave_hull(pts, range(40))
    poly = hull_polygon(pts, path)
    assert poly.is_valid
    # alpha defaults to infinity: the boundary is the convex hull
    assert poly.area == pytest.approx(MultiPoint(pts[:40]).convex_hull.area)
    assert poly.buffer(1e-9).covers(MultiPoint(pts[:40]))
    assert np.pi * 0.5 < poly.area <= np.pi


def test_alpha_too_small_fails():
    pts = _square_with_center()
    with pytest.raises(ConcaveHullError):
        concave_hull(pts, [0, 1, 2, 3, 4], alpha=0.5)


def test_degenerate_subset_fails():
    pts = np.column_stack([np.arange(5.0), np.zeros(5)])
    with pytest.raises(ConcaveHullError):
        concave_hull(pts, range(5))
    with pytest.raises(ConcaveHullError):
        concave_hull(pts, [])


def test_subset_out_of_range():
    pts = _square_with_center()
    with pytest.raises(IndexError):
        concave_hull(pts, [0, 1, 9])


def test_order_open_chain():
    assert order_hull_edges([(3, 2), (1, 2)]) == [1, 2, 3]
    assert order_hull_edges([(5, 6)]) == [5, 6]


def test_order_closed_ring():
    path = order_hull_edges([(0, 1), (2, 1), (2, 0)])
    assert path == [0, 1, 2]


def test_order_failures():
    with pytest.raises(ConcaveHullError):
        order_hull_edges([])
    # vertex 0 has three boundary edges
    with pytest.raises(ConcaveHullError):
        order_hull_edges([(0, 1), (0, 2), (0, 3)])
    # two separate pieces
    with pytest.raises(ConcaveHullError):
        order_hull_edges([(0, 1), (1, 2), (2, 0), (5, 6)])
