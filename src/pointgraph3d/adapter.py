from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Optional

import numpy as np
import structlog

from pointgraph.builder import map_chunks
from pointgraph.datastructures import BuildMode, DerivedGraph, Edge
from pointgraph.errors import TriangleIndexError
from pointgraph.geometry import as_points, segment_lengths

from .mesh import OUTER, TetrahedralMesh, tetrahedralize

logger = structlog.get_logger()

_PAIRS = tuple(combinations(range(4), 2))


@dataclass
class _EdgePartial:
    lo: np.ndarray
    hi: np.ndarray
    lengths: np.ndarray


def _check_mesh(tets: np.ndarray, n_points: int) -> None:
    if tets.ndim != 2 or tets.shape[1] != 4:
        raise ValueError(f"tetrahedra must be (K,4), got shape {tets.shape}")
    n_outer = np.count_nonzero(tets == OUTER, axis=1)
    if np.any(n_outer > 1):
        row = int(np.flatnonzero(n_outer > 1)[0])
        raise ValueError(f"tetrahedron {row} has more than one outer node: {tets[row].tolist()}")
    bad = (tets != OUTER) & ((tets < 0) | (tets >= n_points))
    if np.any(bad):
        row = int(np.flatnonzero(np.any(bad, axis=1))[0])
        raise TriangleIndexError(
            f"tetrahedron {row} references vertex outside [0, {n_points}): {tets[row].tolist()}"
        )


def _edge_partial(points: np.ndarray, tets: np.ndarray) -> _EdgePartial:
    # pairs touching OUTER are dropped, so an outer tetrahedron leaves
    # exactly the triangle of its three real vertices
    lo, hi = [], []
    for i, j in _PAIRS:
        real = (tets[:, i] != OUTER) & (tets[:, j] != OUTER)
        a = tets[real, i]
        b = tets[real, j]
        lo.append(np.minimum(a, b))
        hi.append(np.maximum(a, b))
    lo = np.concatenate(lo)
    hi = np.concatenate(hi)
    return _EdgePartial(lo=lo, hi=hi, lengths=segment_lengths(points, lo, hi))


def build_graph_3d(
    points,
    mesh: TetrahedralMesh,
    *,
    workers: Optional[int] = None,
    chunk_size: Optional[int] = None,
) -> DerivedGraph:
    """
    Populate edge_lengths and vertex_connections from a tetrahedral mesh.

    Only DTSCAN runs on the result: there are no triangle records, so void
    detection raises MissingCapabilityError on a 3D graph.
    """
    P = as_points(points, dim=3)
    tets = np.asarray(mesh.tetrahedra, dtype=np.int64)
    if tets.size == 0:
        tets = tets.reshape(0, 4)
    _check_mesh(tets, len(P))

    graph = DerivedGraph(
        n_points=len(P),
        dim=3,
        mode=BuildMode.CONNECTIONS,
        _vertex_connections={},
    )

    partials = map_chunks(
        lambda s, e: _edge_partial(P, tets[s:e]),
        len(tets),
        chunk_size=chunk_size,
        workers=workers,
    )

    elen = graph.edge_lengths
    conn = graph._vertex_connections
    for part in partials:
        for a, b, length in zip(part.lo.tolist(), part.hi.tolist(), part.lengths.tolist()):
            elen[Edge(a, b)] = length
            conn.setdefault(a, set()).add(b)
            conn.setdefault(b, set()).add(a)

    logger.debug("build_graph_3d_done", n_points=len(P), tetrahedra=len(tets), edges=graph.edge_count())
    return graph


def build_graph_3d_from_points(points, **kwargs) -> DerivedGraph:
    P = as_points(points, dim=3)
    return build_graph_3d(P, tetrahedralize(P), **kwargs)
