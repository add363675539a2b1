import numpy as np
import pytest

from pointgraph.builder import build_graph, build_graph_from_points
from pointgraph.datastructures import BuildMode, Edge
from pointgraph.delfin import find_voids, region_area, region_polygon, region_vertices
from pointgraph.errors import MissingCapabilityError

from tests.pointgraph.helpers_clouds import HOLE_CENTER, HOLE_RADIUS, cloud_with_hole, unit_square


def _centroid(points, graph, region):
    poly = region_polygon(points, graph, region)
    return np.array([poly.centroid.x, poly.centroid.y])


def test_square_is_one_void():
    pts, tris = unit_square()
    g = build_graph(pts, tris, BuildMode.TRIANGLES)

    voids = find_voids(g, min_area=1.0, min_distance=1.4)
    assert voids == [{0, 1}]
    assert region_area(g, voids[0]) == pytest.approx(1.0)
    assert region_vertices(g, voids[0]) == {0, 1, 2, 3}
    assert region_polygon(pts, g, voids[0]).area == pytest.approx(1.0)


def test_square_thresholds_filter():
    pts, tris = unit_square()
    g = build_graph(pts, tris)

    assert find_voids(g, min_area=1.01, min_distance=1.4) == []
    assert find_voids(g, min_area=0.0, min_distance=1.5) == []
    assert find_voids(g, min_area=0.0, min_distance=0.0, min_triangles=3) == []


def test_growth_follows_terminal_edges_only():
    # 0,1 share terminal edge (0,1); 2 points its terminal edge (1,3) at 1;
    # 3 touches 2 along (3,4) but its own terminal edge (3,5) lies outside
    pts = np.array([
        [0.0, 0.0], [10.0, 0.0], [5.0, 1.0], [5.0, -6.0], [12.0, -7.0], [9.0, -13.0],
    ])
    tris = [0, 1, 2, 0, 1, 3, 1, 3, 4, 3, 4, 5]
    g = build_graph(pts, tris, BuildMode.TRIANGLES)

    assert [t.terminal_edge for t in g.triangles] == [Edge(0, 1), Edge(0, 1), Edge(1, 3), Edge(3, 5)]
    assert g.edge_to_triangles[Edge(3, 4)] == [2, 3]

    assert find_voids(g, min_area=0.0, min_distance=9.5) == [{0, 1, 2}]


def test_min_triangles_below_two_rejected():
    pts, tris = unit_square()
    g = build_graph(pts, tris)
    with pytest.raises(ValueError):
        find_voids(g, 0.0, 0.0, min_triangles=1)


def test_hole_is_found():
    pts = cloud_with_hole()
    g = build_graph_from_points(pts, BuildMode.TRIANGLES)

    voids = find_voids(g, min_area=200.0, min_distance=15.0)
    assert voids

    largest = max(voids, key=lambda r: region_area(g, r))
    assert region_area(g, largest) >= 200.0
    assert np.linalg.norm(_centroid(pts, g, largest) - HOLE_CENTER) < HOLE_RADIUS


def test_voids_disjoint_and_meet_thresholds():
    pts = cloud_with_hole(n=1500, seed=11)
    g = build_graph_from_points(pts)
    min_area = 50.0

    voids = find_voids(g, min_area=min_area, min_distance=6.0)
    assert voids

    seen = set()
    for r in voids:
        assert len(r) >= 2
        assert region_area(g, r) >= min_area
        assert seen.isdisjoint(r)
        seen |= r


def test_find_voids_is_idempotent():
    pts = cloud_with_hole()
    g = build_graph_from_points(pts)

    a = find_voids(g, 100.0, 10.0)
    b = find_voids(g, 100.0, 10.0)
    assert a == b


def test_statistical_variant_finds_hole():
    pts = cloud_with_hole()
    g = build_graph_from_points(pts, BuildMode.TRIANGLES)

    voids = find_voids(g, min_area=3.0, min_distance=3.0, statistical=True)
    assert voids
    largest = max(voids, key=lambda r: region_area(g, r))
    assert np.linalg.norm(_centroid(pts, g, largest) - HOLE_CENTER) < HOLE_RADIUS


def test_requires_triangle_records():
    pts, tris = unit_square()
    g = build_graph(pts, tris, BuildMode.CONNECTIONS)
    with pytest.raises(MissingCapabilityError):
        find_voids(g, 0.0, 0.0)


def test_empty_graph_has_no_voids():
    g = build_graph(np.zeros((0, 2)), [])
    assert find_voids(g, 0.0, 0.0) == []
    assert find_voids(g, 0.0, 0.0, statistical=True) == []
