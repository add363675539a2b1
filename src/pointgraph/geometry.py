import numpy as np


def as_points(points, dim: int = 2) -> np.ndarray:
    """
    Validate a point array and return it as (N,dim) float64.
    Non-finite coordinates are rejected here so that no NaN ever reaches
    the length / area orderings downstream.
    """
    P = np.asarray(points, dtype=np.float64)
    if P.size == 0:
        return np.zeros((0, dim), dtype=np.float64)
    if P.ndim != 2 or P.shape[1] != dim:
        raise ValueError(f"points must be (N,{dim}), got shape {P.shape}")
    if not np.all(np.isfinite(P)):
        bad = np.flatnonzero(~np.all(np.isfinite(P), axis=1))
        raise ValueError(f"points contain non-finite coordinates at rows {bad[:10].tolist()}")
    return P


def distance(p, q) -> float:
    return float(np.linalg.norm(np.asarray(q, dtype=np.float64) - np.asarray(p, dtype=np.float64)))


def bearing(p, q) -> float:
    """
    Direction from p to q in degrees, counter-clockwise from +x, in [0, 360).
    """
    dx = float(q[0]) - float(p[0])
    dy = float(q[1]) - float(p[1])
    return float(np.degrees(np.arctan2(dy, dx)) % 360.0)


def segment_lengths(points: np.ndarray, a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.linalg.norm(points[b] - points[a], axis=1)


def triangle_areas(points: np.ndarray, tris: np.ndarray) -> np.ndarray:
    """
    Shoelace area of each (M,3) triangle, 2D points only.
    """
    p0 = points[tris[:, 0]]
    p1 = points[tris[:, 1]]
    p2 = points[tris[:, 2]]
    twice = (
        p0[:, 0] * (p1[:, 1] - p2[:, 1])
        + p1[:, 0] * (p2[:, 1] - p0[:, 1])
        + p2[:, 0] * (p0[:, 1] - p1[:, 1])
    )
    return np.abs(twice) * 0.5
