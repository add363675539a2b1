from .mesh import OUTER, TetrahedralMesh, tetrahedralize
from .adapter import build_graph_3d, build_graph_3d_from_points
from .sampling import sample_points_in_cube

__all__ = [
    "OUTER",
    "TetrahedralMesh",
    "tetrahedralize",
    "build_graph_3d",
    "build_graph_3d_from_points",
    "sample_points_in_cube",
]
