from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, FrozenSet, List, NamedTuple, Optional, Set, Tuple

from .errors import MissingCapabilityError


class Edge(NamedTuple):
    """Unordered vertex pair, always stored as (min, max)."""
    a: int
    b: int

    @classmethod
    def of(cls, u: int, v: int) -> "Edge":
        u = int(u)
        v = int(v)
        return cls(u, v) if u <= v else cls(v, u)


class BuildMode(IntEnum):
    """
    Which parts of the derived graph get populated.

    edge_to_triangles and edge_lengths are always built.
    """
    FULL = 0          # triangles + vertex_connections
    CONNECTIONS = 1   # vertex_connections only (DTSCAN)
    TRIANGLES = 2     # triangles only (DELFIN)

    @property
    def with_triangles(self) -> bool:
        return self in (BuildMode.FULL, BuildMode.TRIANGLES)

    @property
    def with_connections(self) -> bool:
        return self in (BuildMode.FULL, BuildMode.CONNECTIONS)


@dataclass(frozen=True)
class TriangleRecord:
    index: int
    vertices: Tuple[int, int, int]  # sorted
    area: float
    terminal_edge: Edge             # longest edge

    def edges(self) -> Tuple[Edge, Edge, Edge]:
        v0, v1, v2 = self.vertices
        return Edge(v0, v1), Edge(v1, v2), Edge(v0, v2)

    def opposite_vertex(self) -> int:
        """Vertex not on the terminal edge."""
        for v in self.vertices:
            if v not in self.terminal_edge:
                return v
        raise ValueError(f"triangle {self.index} is degenerate: {self.vertices}")


@dataclass
class DerivedGraph:
    """
    Adjacency structures derived from a triangulation.

    Built once by the graph builder, read-only afterwards. Structures that the
    build mode skipped raise MissingCapabilityError when accessed, so a graph
    built for DTSCAN cannot be queried for triangle areas by accident.
    """
    n_points: int
    dim: int
    mode: BuildMode
    edge_to_triangles: Dict[Edge, List[int]] = field(default_factory=dict)
    edge_lengths: Dict[Edge, float] = field(default_factory=dict)
    _triangles: Optional[List[TriangleRecord]] = None
    _vertex_connections: Optional[Dict[int, Set[int]]] = None

    @property
    def has_triangles(self) -> bool:
        return self._triangles is not None

    @property
    def has_connections(self) -> bool:
        return self._vertex_connections is not None

    @property
    def triangles(self) -> List[TriangleRecord]:
        if self._triangles is None:
            raise MissingCapabilityError(
                f"graph built with mode={self.mode.name} (dim={self.dim}) has no triangle records"
            )
        return self._triangles

    @property
    def vertex_connections(self) -> Dict[int, Set[int]]:
        if self._vertex_connections is None:
            raise MissingCapabilityError(
                f"graph built with mode={self.mode.name} has no vertex connections"
            )
        return self._vertex_connections

    def triangle_count(self) -> int:
        return len(self._triangles) if self._triangles is not None else 0

    def edge_count(self) -> int:
        return len(self.edge_lengths)

    def is_empty(self) -> bool:
        return not self.edge_lengths

    def neighbors(self, vertex: int) -> FrozenSet[int]:
        return frozenset(self.vertex_connections.get(int(vertex), ()))

    def edge_length(self, u: int, v: int) -> float:
        return self.edge_lengths[Edge.of(u, v)]
