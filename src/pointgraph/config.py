from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .default_config import DEFAULTS


@dataclass(frozen=True)
class BuildConfig:
    workers: Optional[int] = None
    chunk_size: Optional[int] = None

    @classmethod
    def from_defaults(cls) -> "BuildConfig":
        return cls(workers=DEFAULTS["BUILD_WORKERS"], chunk_size=DEFAULTS["BUILD_CHUNK_SIZE"])


@dataclass(frozen=True)
class DelfinConfig:
    """
    Void detection thresholds. With statistical=True both thresholds are
    z-scores instead of absolute area / length.
    """
    min_area: float
    min_distance: float
    min_triangles: int = 2
    statistical: bool = False

    def __post_init__(self):
        if int(self.min_triangles) < 2:
            raise ValueError("min_triangles must be >= 2")

    @classmethod
    def from_defaults(cls) -> "DelfinConfig":
        return cls(
            min_area=DEFAULTS["DELFIN_MIN_AREA"],
            min_distance=DEFAULTS["DELFIN_MIN_DISTANCE"],
            min_triangles=DEFAULTS["DELFIN_MIN_TRIANGLES"],
        )


@dataclass(frozen=True)
class DtscanConfig:
    min_pts: int
    max_closeness: float
    statistical: bool = False

    def __post_init__(self):
        if int(self.min_pts) < 0:
            raise ValueError("min_pts must be >= 0")

    @classmethod
    def from_defaults(cls) -> "DtscanConfig":
        return cls(
            min_pts=DEFAULTS["DTSCAN_MIN_PTS"],
            max_closeness=DEFAULTS["DTSCAN_MAX_CLOSENESS"],
        )
