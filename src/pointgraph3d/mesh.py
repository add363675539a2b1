from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np
import structlog
from scipy.spatial import Delaunay, QhullError

from pointgraph.geometry import as_points

logger = structlog.get_logger()

OUTER = -1  # sentinel node: the point at infinity beyond a convex-hull facet


@dataclass(frozen=True)
class TetrahedralMesh:
    """
    Tetrahedra as (K,4) node rows. A row is either four real vertex ids or
    three real ids plus OUTER, the latter standing for a convex-hull facet.
    """
    tetrahedra: np.ndarray

    def __len__(self) -> int:
        return int(len(self.tetrahedra))

    def nodes(self, index: int) -> Tuple[int, int, int, int]:
        return tuple(int(v) for v in self.tetrahedra[index])

    def is_outer(self, index: int) -> bool:
        return bool(np.any(self.tetrahedra[index] == OUTER))

    def outer_count(self) -> int:
        return int(np.count_nonzero(np.any(self.tetrahedra == OUTER, axis=1)))


def empty_mesh() -> TetrahedralMesh:
    return TetrahedralMesh(tetrahedra=np.zeros((0, 4), dtype=np.int64))


def tetrahedralize(points) -> TetrahedralMesh:
    """
    3D Delaunay tetrahedralization. Every convex-hull facet additionally
    yields an outer tetrahedron whose node opposite the facet is OUTER.

    Fewer than 4 points or a degenerate (coplanar) set gives an empty mesh.
    """
    P = as_points(points, dim=3)
    if len(P) < 4:
        return empty_mesh()

    try:
        tri = Delaunay(P)
    except QhullError as exc:
        logger.warning("tetrahedralization_degenerate", n_points=len(P), reason=str(exc).strip().split("\n", 1)[0])
        return empty_mesh()

    simplices = np.asarray(tri.simplices, dtype=np.int64)
    simplex, slot = np.nonzero(np.asarray(tri.neighbors) == -1)

    outer = simplices[simplex].copy()
    outer[np.arange(len(outer)), slot] = OUTER

    logger.debug("tetrahedralize_done", n_points=len(P), tetrahedra=len(simplices), hull_facets=len(outer))
    return TetrahedralMesh(tetrahedra=np.vstack([simplices, outer]))
