from typing import Any, Dict

DEFAULTS: Dict[str, Any] = {
    # graph build
    "BUILD_WORKERS": None,        # None -> min(32, cpu_count)
    "BUILD_CHUNK_SIZE": 4096,     # triangles (or tetrahedra) per worker task

    # DELFIN
    "DELFIN_MIN_AREA": 1000.0,
    "DELFIN_MIN_DISTANCE": 200.0,
    "DELFIN_MIN_TRIANGLES": 2,

    # DTSCAN
    "DTSCAN_MIN_PTS": 5,
    "DTSCAN_MAX_CLOSENESS": 100.5,

    # concave hull
    "HULL_ALPHA": float("inf"),
}
