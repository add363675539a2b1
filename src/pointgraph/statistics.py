from __future__ import annotations

from dataclasses import dataclass

import numpy as np


def population_zscores(values) -> np.ndarray:
    """
    (x - mean) / std over the whole population (ddof=0).
    A constant population has no spread; every z-score is then 0.
    """
    x = np.asarray(values, dtype=np.float64)
    if x.size == 0:
        return np.zeros(0, dtype=np.float64)
    sigma = float(x.std())
    if sigma == 0.0:
        return np.zeros_like(x)
    return (x - float(x.mean())) / sigma


def sum_zscore(total: float, n: int, mean: float, std: float) -> float:
    """
    z-score of a sum of n draws from a population with the given mean / std.
    """
    if n <= 0 or std == 0.0:
        return 0.0
    return (float(total) - n * float(mean)) / (float(std) * np.sqrt(n))


@dataclass(frozen=True)
class CSRModel:
    """
    Complete spatial randomness: a homogeneous Poisson process with intensity
    n_points / area. Counts in a sub-region of area a are Poisson(lambda * a).
    """
    n_points: int
    area: float

    def __post_init__(self):
        if self.area <= 0:
            raise ValueError("study area must be > 0")

    @property
    def intensity(self) -> float:
        return self.n_points / self.area

    def expected(self, area: float) -> float:
        return self.intensity * float(area)

    def zscore(self, observed: float, area: float) -> float:
        """
        Negative: sparser than CSR (void-like). Positive: denser (cluster-like).
        """
        mu = self.expected(area)
        if mu <= 0.0:
            return 0.0
        return (float(observed) - mu) / np.sqrt(mu)
