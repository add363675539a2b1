from __future__ import annotations

import numpy as np


def sample_points_in_cube(
    center: tuple[float, float, float],
    side_length: float,
    n: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Uniform sampling in the axis-aligned cube of the given side around center.
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    half = 0.5 * float(side_length)
    lo = np.asarray(center, dtype=np.float64) - half
    return lo + rng.random((int(n), 3)) * float(side_length)

