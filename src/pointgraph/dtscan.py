from __future__ import annotations

from typing import Dict, List, Set

import structlog

from .datastructures import DerivedGraph, Edge
from .statistics import population_zscores

logger = structlog.get_logger()


def _closeness(graph: DerivedGraph, statistical: bool) -> Dict[Edge, float]:
    if not statistical:
        return graph.edge_lengths
    edges = list(graph.edge_lengths)
    z = population_zscores([graph.edge_lengths[e] for e in edges])
    return dict(zip(edges, z.tolist()))


def find_clusters(
    graph: DerivedGraph,
    min_pts: int,
    max_closeness: float,
    *,
    statistical: bool = False,
) -> List[List[int]]:
    """
    DTSCAN: DBSCAN over the triangulation's vertex adjacency instead of a
    radius query.

    A vertex is core when it has >= min_pts neighbours and every edge to them
    is <= max_closeness (edge-length z-score if statistical). Each unvisited
    core vertex seeds a cluster that grows through any edge passing the same
    closeness test. A vertex is claimed by the first cluster that reaches it
    and never shared, so border points are not duplicated across clusters.

    Works on 2D and 3D graphs; needs vertex_connections.
    """
    conn = graph.vertex_connections
    if not conn:
        return []

    closeness = _closeness(graph, statistical)
    limit = float(max_closeness)

    def is_close(u: int, v: int) -> bool:
        value = closeness.get(Edge.of(u, v))
        return value is not None and value <= limit

    visited: Set[int] = set()
    clusters: List[List[int]] = []

    for vertex in sorted(conn):
        if vertex in visited:
            continue
        neighbors = conn[vertex]
        if len(neighbors) < min_pts or not all(is_close(vertex, n) for n in neighbors):
            continue

        cluster: List[int] = []
        stack = [vertex]
        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            cluster.append(current)
            for n in conn.get(current, ()):
                if n not in visited and is_close(current, n):
                    stack.append(n)

        clusters.append(cluster)

    logger.info("dtscan_done", vertices=len(conn), clusters=len(clusters), clustered=len(visited))
    return clusters
