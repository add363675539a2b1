from .datastructures import BuildMode, DerivedGraph, Edge, TriangleRecord
from .errors import ConcaveHullError, MissingCapabilityError, PointGraphError, TriangleIndexError
from .triangulation import triangulate
from .builder import build_graph, build_graph_from_points
from .delfin import find_voids, region_area, region_polygon, region_vertices
from .dtscan import find_clusters
from .concave_hull import concave_hull, hull_polygon, order_hull_edges
from .statistics import CSRModel, population_zscores
from .significance import cluster_zscores, csr_model_for, void_zscores
from .config import BuildConfig, DelfinConfig, DtscanConfig
from .pipeline import Analysis, analyze

__all__ = [
    "BuildMode",
    "DerivedGraph",
    "Edge",
    "TriangleRecord",
    "PointGraphError",
    "TriangleIndexError",
    "MissingCapabilityError",
    "ConcaveHullError",
    "triangulate",
    "build_graph",
    "build_graph_from_points",
    "find_voids",
    "region_area",
    "region_vertices",
    "region_polygon",
    "find_clusters",
    "concave_hull",
    "hull_polygon",
    "order_hull_edges",
    "CSRModel",
    "population_zscores",
    "csr_model_for",
    "void_zscores",
    "cluster_zscores",
    "BuildConfig",
    "DelfinConfig",
    "DtscanConfig",
    "Analysis",
    "analyze",
]

from .sampling import sample_points_in_disc, sample_points_in_polygon, sample_points_in_square

__all__ += [
    "sample_points_in_square",
    "sample_points_in_disc",
    "sample_points_in_polygon",
]
