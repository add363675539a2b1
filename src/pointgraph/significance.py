from __future__ import annotations

from typing import Iterable, List, Sequence, Set

import numpy as np
from shapely.geometry import MultiPoint

from .datastructures import DerivedGraph
from .delfin import region_area, region_vertices
from .statistics import CSRModel


def csr_model_for(graph: DerivedGraph) -> CSRModel:
    """
    CSR null model using the triangulated area (the convex hull) as the
    study window.
    """
    area = float(sum(t.area for t in graph.triangles))
    return CSRModel(n_points=graph.n_points, area=area)


def void_zscores(
    graph: DerivedGraph,
    regions: Iterable[Set[int]],
    model: CSRModel | None = None,
) -> List[float]:
    """
    Poisson z-score of each void: points on the void (its bounding
    vertices) against lambda * void area. Strongly negative means the area
    is emptier than complete spatial randomness predicts.
    """
    regions = list(regions)
    if not regions:
        return []
    model = model or csr_model_for(graph)
    return [
        model.zscore(len(region_vertices(graph, r)), region_area(graph, r))
        for r in regions
    ]


def cluster_zscores(points, clusters: Iterable[Sequence[int]], model: CSRModel) -> List[float]:
    """
    Poisson z-score of each cluster, using the convex hull of its points as
    its area. Clusters with no area (fewer than 3 non-collinear points)
    score 0.
    """
    P = np.asarray(points, dtype=np.float64)
    out = []
    for c in clusters:
        hull = MultiPoint([tuple(p) for p in P[list(c)]]).convex_hull
        out.append(model.zscore(len(c), hull.area) if hull.area > 0 else 0.0)
    return out
