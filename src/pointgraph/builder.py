from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Optional, TypeVar

import numpy as np
import structlog

from .datastructures import BuildMode, DerivedGraph, Edge, TriangleRecord
from .default_config import DEFAULTS
from .errors import TriangleIndexError
from .geometry import as_points, segment_lengths, triangle_areas
from .triangulation import triangulate

logger = structlog.get_logger()

T = TypeVar("T")

# edge k of a triangle joins local vertices _EDGE_ENUM[k]; this order is the
# terminal-edge tie-break: among equal lengths the earliest edge wins
_EDGE_ENUM = ((0, 1), (1, 2), (2, 0))


@dataclass
class _TrianglePartial:
    """
    Geometry of one chunk of triangles, computed without touching the shared graph.
    """
    start: int
    tris: np.ndarray       # (m,3) input order
    edge_lo: np.ndarray    # (m,3) canonical min endpoint per enumerated edge
    edge_hi: np.ndarray    # (m,3) canonical max endpoint
    lengths: np.ndarray    # (m,3)
    terminal: np.ndarray   # (m,) position of the longest edge in _EDGE_ENUM
    areas: Optional[np.ndarray]


def default_workers() -> int:
    return int(DEFAULTS["BUILD_WORKERS"] or min(32, os.cpu_count() or 1))


def map_chunks(
    fn: Callable[[int, int], T],
    n_items: int,
    *,
    chunk_size: Optional[int] = None,
    workers: Optional[int] = None,
) -> List[T]:
    """
    Split range(n_items) into contiguous chunks, run fn(start, stop) for each
    on a thread pool and return the results in chunk order.
    """
    if n_items <= 0:
        return []
    chunk_size = int(DEFAULTS["BUILD_CHUNK_SIZE"] if chunk_size is None else chunk_size)
    if chunk_size <= 0:
        raise ValueError("chunk_size must be > 0")
    workers = int(default_workers() if workers is None else workers)
    if workers <= 0:
        raise ValueError("workers must be > 0")

    bounds = [(s, min(s + chunk_size, n_items)) for s in range(0, n_items, chunk_size)]
    logger.debug("build_chunks", n_items=n_items, chunks=len(bounds), workers=workers)

    if len(bounds) == 1 or workers == 1:
        return [fn(s, e) for s, e in bounds]

    with ThreadPoolExecutor(max_workers=min(workers, len(bounds)), thread_name_prefix="pointgraph") as ex:
        return list(ex.map(lambda b: fn(*b), bounds))


def as_triangle_array(triangle_indices, n_points: int, width: int = 3) -> np.ndarray:
    """
    Reshape a flat (or already grouped) index array into (M,width) and check
    every index against the point count. Raises before anything is built.
    """
    T_ = np.asarray(triangle_indices)
    if T_.size == 0:
        return np.zeros((0, width), dtype=np.int64)
    if not np.issubdtype(T_.dtype, np.integer):
        raise ValueError(f"triangle indices must be integers, got dtype {T_.dtype}")
    if T_.size % width != 0:
        raise ValueError(f"triangle index array length {T_.size} is not divisible by {width}")
    T_ = T_.astype(np.int64, copy=False).reshape(-1, width)

    bad = (T_ < 0) | (T_ >= n_points)
    if np.any(bad):
        row = int(np.flatnonzero(np.any(bad, axis=1))[0])
        raise TriangleIndexError(
            f"element {row} references vertex outside [0, {n_points}): {T_[row].tolist()}"
        )
    return T_


def _triangle_partial(points: np.ndarray, tris: np.ndarray, start: int, with_areas: bool) -> _TrianglePartial:
    first = np.stack([tris[:, i] for i, _ in _EDGE_ENUM], axis=1)
    second = np.stack([tris[:, j] for _, j in _EDGE_ENUM], axis=1)
    lo = np.minimum(first, second)
    hi = np.maximum(first, second)

    lengths = segment_lengths(points, lo.reshape(-1), hi.reshape(-1)).reshape(-1, 3)
    # argmax returns the first maximal position, so exact ties favour v0v1, then v1v2
    terminal = np.argmax(lengths, axis=1) if len(lengths) else np.zeros(0, dtype=np.int64)

    return _TrianglePartial(
        start=start,
        tris=tris,
        edge_lo=lo,
        edge_hi=hi,
        lengths=lengths,
        terminal=terminal,
        areas=triangle_areas(points, tris) if with_areas else None,
    )


def _merge_partial(graph: DerivedGraph, part: _TrianglePartial) -> None:
    lo = part.edge_lo.tolist()
    hi = part.edge_hi.tolist()
    lengths = part.lengths.tolist()
    terminal = part.terminal.tolist()
    areas = part.areas.tolist() if part.areas is not None else None
    tris = part.tris.tolist()

    e2t = graph.edge_to_triangles
    elen = graph.edge_lengths
    conn = graph._vertex_connections
    records = graph._triangles

    for k in range(len(tris)):
        t = part.start + k
        edges = [Edge(lo[k][j], hi[k][j]) for j in range(3)]
        for j, e in enumerate(edges):
            elen[e] = lengths[k][j]
            e2t.setdefault(e, []).append(t)
            if conn is not None:
                conn.setdefault(e.a, set()).add(e.b)
                conn.setdefault(e.b, set()).add(e.a)

        if records is not None:
            records[t] = TriangleRecord(
                index=t,
                vertices=tuple(sorted(tris[k])),
                area=areas[k],
                terminal_edge=edges[terminal[k]],
            )


def build_graph(
    points,
    triangle_indices,
    mode: BuildMode | int = BuildMode.FULL,
    *,
    workers: Optional[int] = None,
    chunk_size: Optional[int] = None,
) -> DerivedGraph:
    """
    Build the derived graph of a 2D triangulation.

    points: (N,2) finite coordinates
    triangle_indices: flat vertex-index array (length divisible by 3) or (M,3)
    mode: BuildMode or 0/1/2, selects triangle records and/or vertex connections

    Geometry is computed per chunk on a thread pool; each chunk fills a
    private partial result that is merged into the graph on the calling
    thread, in chunk order. Edge lengths are a pure function of the two
    endpoints, so the same edge reached from two triangles merges to the
    same value.
    """
    mode = BuildMode(int(mode))
    P = as_points(points, dim=2)
    tris = as_triangle_array(triangle_indices, len(P), width=3)

    graph = DerivedGraph(
        n_points=len(P),
        dim=2,
        mode=mode,
        _triangles=[None] * len(tris) if mode.with_triangles else None,
        _vertex_connections={} if mode.with_connections else None,
    )
    if len(tris) == 0:
        logger.debug("build_graph_empty", n_points=len(P))
        return graph

    partials = map_chunks(
        lambda s, e: _triangle_partial(P, tris[s:e], s, mode.with_triangles),
        len(tris),
        chunk_size=chunk_size,
        workers=workers,
    )
    for part in partials:
        _merge_partial(graph, part)

    logger.debug(
        "build_graph_done",
        n_points=len(P),
        triangles=len(tris),
        edges=graph.edge_count(),
        mode=mode.name,
    )
    return graph


def build_graph_from_points(points, mode: BuildMode | int = BuildMode.FULL, **kwargs) -> DerivedGraph:
    P = as_points(points, dim=2)
    return build_graph(P, triangulate(P), mode, **kwargs)
