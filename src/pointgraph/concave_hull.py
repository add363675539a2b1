from __future__ import annotations

from collections import Counter, defaultdict
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

import numpy as np
import structlog
from shapely.geometry import Polygon

from .datastructures import Edge
from .default_config import DEFAULTS
from .errors import ConcaveHullError
from .geometry import as_points
from .triangulation import triangulate

logger = structlog.get_logger()


def order_hull_edges(edges: Iterable[Tuple[int, int]]) -> List[int]:
    """
    Stitch boundary edges into one continuous vertex path.

    - closed ring: every vertex once, starting at the first edge's lower
      endpoint (the start is not repeated at the end)
    - open chain: k edges give k+1 vertices, from the lower-indexed end

    Raises ConcaveHullError on an empty edge set, a vertex shared by more
    than two edges, or edges that do not form a single connected piece.
    """
    unique = list(dict.fromkeys(Edge.of(u, v) for u, v in edges))
    if not unique:
        raise ConcaveHullError("no boundary edges to order")

    adj: Dict[int, List[int]] = defaultdict(list)
    for e in unique:
        adj[e.a].append(e.b)
        adj[e.b].append(e.a)

    branching = sorted(v for v, nbs in adj.items() if len(nbs) > 2)
    if branching:
        raise ConcaveHullError(f"boundary branches at vertices {branching[:10]}")

    ends = sorted(v for v, nbs in adj.items() if len(nbs) == 1)
    start = ends[0] if ends else unique[0].a

    path = [start]
    used: Set[Edge] = set()
    current = start
    while True:
        nxt = next((n for n in adj[current] if Edge.of(current, n) not in used), None)
        if nxt is None:
            break
        used.add(Edge.of(current, nxt))
        if nxt == start:
            break
        path.append(nxt)
        current = nxt

    if len(used) != len(unique):
        raise ConcaveHullError(
            f"boundary is not a single path: linked {len(used)} of {len(unique)} edges"
        )
    return path


def concave_hull(points, vertex_subset: Sequence[int], alpha: Optional[float] = None) -> List[int]:
    """
    Ordered boundary of a vertex subset.

    The subset is re-triangulated on its own. Edges shorter than alpha are
    counted once per triangle; the ones counted exactly once lie on the
    boundary and are stitched into a path (global vertex ids).
    """
    P = as_points(points, dim=2)
    idx = np.asarray(list(dict.fromkeys(int(v) for v in vertex_subset)), dtype=np.int64)
    if idx.size and (idx.min() < 0 or idx.max() >= len(P)):
        raise IndexError(f"vertex subset references points outside [0, {len(P)})")
    alpha = float(DEFAULTS["HULL_ALPHA"] if alpha is None else alpha)

    local = triangulate(P[idx]) if idx.size else np.zeros(0, dtype=np.int64)
    if local.size == 0:
        raise ConcaveHullError(f"triangulation of {idx.size} subset points produced no triangles")

    tris = idx[local.reshape(-1, 3)]
    counts: Counter = Counter()
    for a, b, c in tris.tolist():
        for u, v in ((a, b), (b, c), (c, a)):
            if float(np.linalg.norm(P[u] - P[v])) < alpha:
                counts[Edge.of(u, v)] += 1

    boundary = [e for e, n in counts.items() if n == 1]
    if not boundary:
        raise ConcaveHullError(f"no edge shorter than alpha={alpha} lies on the boundary")

    logger.debug("concave_hull_edges", subset=int(idx.size), triangles=len(tris), boundary=len(boundary))
    return order_hull_edges(boundary)


def hull_polygon(points, ordered: Sequence[int]) -> Polygon:
    P = np.asarray(points, dtype=np.float64)
    if len(ordered) < 3:
        raise ConcaveHullError(f"a polygon needs at least 3 vertices, got {len(ordered)}")
    return Polygon(P[list(ordered)])
