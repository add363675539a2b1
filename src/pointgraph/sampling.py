import numpy as np
import shapely
from shapely.geometry import Polygon


def sample_points_in_square(
    center: tuple[float, float],
    side_length: float,
    n: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Uniform sampling in the axis-aligned square of the given side around center.
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    half = 0.5 * float(side_length)
    lo = np.asarray(center, dtype=np.float64) - half
    return lo + rng.random((int(n), 2)) * float(side_length)


def sample_points_in_disc(
    center: tuple[float, float],
    radius: float,
    n: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Uniform sampling in a disc (sqrt on the radius keeps the density flat).
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    theta = rng.uniform(0.0, 2.0 * np.pi, int(n))
    r = np.sqrt(rng.random(int(n))) * float(radius)
    return np.column_stack([center[0] + r * np.cos(theta), center[1] + r * np.sin(theta)])


def sample_points_in_polygon(
    polygon_xy: np.ndarray,
    n: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Rejection sampling inside a simple polygon, drawing batches from its bbox.
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    poly = Polygon(polygon_xy)
    if poly.is_empty or not poly.is_valid or poly.area <= 0:
        raise ValueError("polygon_xy must be a valid polygon with positive area")

    minx, miny, maxx, maxy = poly.bounds
    out = np.zeros((0, 2), dtype=np.float64)
    while len(out) < n:
        k = max(64, 2 * (n - len(out)))
        cand = np.column_stack([rng.uniform(minx, maxx, k), rng.uniform(miny, maxy, k)])
        inside = shapely.contains_xy(poly, cand[:, 0], cand[:, 1])
        out = np.vstack([out, cand[inside]])
    return out[:n]
