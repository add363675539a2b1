from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Set

import numpy as np
import structlog

from .builder import build_graph
from .config import BuildConfig, DelfinConfig, DtscanConfig
from .datastructures import BuildMode, DerivedGraph
from .delfin import find_voids
from .dtscan import find_clusters
from .geometry import as_points
from .triangulation import triangulate

logger = structlog.get_logger()


@dataclass
class Analysis:
    points: np.ndarray
    graph: DerivedGraph
    voids: List[Set[int]] = field(default_factory=list)
    clusters: List[List[int]] = field(default_factory=list)


def _mode_for(delfin: Optional[DelfinConfig], dtscan: Optional[DtscanConfig]) -> BuildMode:
    if delfin is not None and dtscan is None:
        return BuildMode.TRIANGLES
    if dtscan is not None and delfin is None:
        return BuildMode.CONNECTIONS
    return BuildMode.FULL


def analyze(
    points,
    *,
    delfin: Optional[DelfinConfig] = None,
    dtscan: Optional[DtscanConfig] = None,
    build: Optional[BuildConfig] = None,
) -> Analysis:
    """
    points -> triangulation -> derived graph -> DELFIN and/or DTSCAN.

    The graph is built with only the structures the requested analyses need.
    """
    P = as_points(points, dim=2)
    build = build or BuildConfig()
    mode = _mode_for(delfin, dtscan)

    graph = build_graph(P, triangulate(P), mode, workers=build.workers, chunk_size=build.chunk_size)
    result = Analysis(points=P, graph=graph)

    if delfin is not None:
        result.voids = find_voids(
            graph,
            delfin.min_area,
            delfin.min_distance,
            min_triangles=delfin.min_triangles,
            statistical=delfin.statistical,
        )
    if dtscan is not None:
        result.clusters = find_clusters(
            graph,
            dtscan.min_pts,
            dtscan.max_closeness,
            statistical=dtscan.statistical,
        )

    logger.info(
        "analysis_done",
        n_points=len(P),
        mode=mode.name,
        voids=len(result.voids),
        clusters=len(result.clusters),
    )
    return result
