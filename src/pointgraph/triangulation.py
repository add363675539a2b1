import numpy as np
import structlog
from scipy.spatial import Delaunay, QhullError

from .geometry import as_points

logger = structlog.get_logger()


def triangulate(points) -> np.ndarray:
    """
    Delaunay triangulation of a (N,2) point set as a flat vertex-index array
    (length divisible by 3, one triple per triangle).

    Fewer than 3 points or a degenerate set (all collinear / coincident)
    produce an empty array instead of an error.
    """
    P = as_points(points, dim=2)
    if len(P) < 3:
        return np.zeros(0, dtype=np.int64)

    try:
        tri = Delaunay(P)
    except QhullError as exc:
        logger.warning("triangulation_degenerate", n_points=len(P), reason=str(exc).strip().split("\n", 1)[0])
        return np.zeros(0, dtype=np.int64)

    return np.asarray(tri.simplices, dtype=np.int64).reshape(-1)
