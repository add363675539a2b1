from __future__ import annotations

from collections import deque
from typing import Iterable, List, Set

import numpy as np
import structlog
from shapely.geometry import Polygon
from shapely.ops import unary_union

from .datastructures import DerivedGraph, Edge
from .statistics import population_zscores, sum_zscore

logger = structlog.get_logger()


def _grow_region(graph: DerivedGraph, seed: int, processed: Set[int]) -> Set[int]:
    """
    Grow one void from a seed triangle.

    The seed and every triangle across its terminal edge start the region.
    After that a triangle joins only if its own terminal edge is an edge of
    the region, i.e. both sides agree that the shared edge is locally longest.
    """
    triangles = graph.triangles
    e2t = graph.edge_to_triangles

    region: Set[int] = set()
    frontier: deque = deque()
    queued: Set[Edge] = set()

    def admit(t: int) -> None:
        region.add(t)
        processed.add(t)
        for e in triangles[t].edges():
            if e not in queued:
                queued.add(e)
                frontier.append(e)

    admit(seed)
    for t in e2t.get(triangles[seed].terminal_edge, ()):
        if t not in processed:
            admit(t)

    while frontier:
        edge = frontier.popleft()
        for t in e2t.get(edge, ()):
            if t in processed:
                continue
            if triangles[t].terminal_edge == edge:
                admit(t)

    return region


def find_voids(
    graph: DerivedGraph,
    min_area: float,
    min_distance: float,
    *,
    min_triangles: int = 2,
    statistical: bool = False,
) -> List[Set[int]]:
    """
    DELFIN: greedy longest-edge-first region growing over triangle records.

    Seeds are triangles whose terminal edge length (z-score if statistical)
    is >= min_distance, processed longest first with ties broken by triangle
    index. Each triangle belongs to at most one region. Regions with fewer
    than min_triangles triangles, or whose area (z-score of the area sum if
    statistical) is below min_area, are dropped.

    Returns a list of triangle-index sets, in seed order.
    """
    if min_triangles < 2:
        raise ValueError("min_triangles must be >= 2")

    triangles = graph.triangles
    if not triangles:
        return []

    lengths = np.fromiter(
        (graph.edge_lengths[t.terminal_edge] for t in triangles),
        dtype=np.float64,
        count=len(triangles),
    )
    score = population_zscores(lengths) if statistical else lengths

    candidates = np.flatnonzero(score >= float(min_distance))
    # descending score, ascending index on ties
    order = candidates[np.lexsort((candidates, -score[candidates]))]

    processed: Set[int] = set()
    regions: List[Set[int]] = []
    for seed in order.tolist():
        if seed in processed:
            continue
        region = _grow_region(graph, seed, processed)
        if len(region) >= min_triangles:
            regions.append(region)

    areas = np.fromiter((t.area for t in triangles), dtype=np.float64, count=len(triangles))
    if statistical:
        mu = float(areas.mean())
        sigma = float(areas.std())

        def area_score(region):
            return sum_zscore(areas[list(region)].sum(), len(region), mu, sigma)
    else:
        def area_score(region):
            return float(areas[list(region)].sum())

    voids = [r for r in regions if area_score(r) >= float(min_area)]

    logger.info(
        "delfin_done",
        seeds=len(order),
        grown=len(regions),
        voids=len(voids),
        statistical=statistical,
    )
    return voids


def region_area(graph: DerivedGraph, region: Iterable[int]) -> float:
    triangles = graph.triangles
    return float(sum(triangles[t].area for t in region))


def region_vertices(graph: DerivedGraph, region: Iterable[int]) -> Set[int]:
    """
    Point ids bounding a void: terminal-edge endpoints plus the opposite
    vertex of every member triangle.
    """
    triangles = graph.triangles
    out: Set[int] = set()
    for t in region:
        rec = triangles[t]
        out.update(rec.terminal_edge)
        out.add(rec.opposite_vertex())
    return out


def region_polygon(points, graph: DerivedGraph, region: Iterable[int]):
    """
    Union of the member triangles as a shapely geometry (Polygon, or
    MultiPolygon if the triangles only touch at vertices).
    """
    P = np.asarray(points, dtype=np.float64)
    triangles = graph.triangles
    polys = [Polygon(P[list(triangles[t].vertices)]) for t in region]
    if not polys:
        return Polygon()
    return unary_union(polys)
