class PointGraphError(Exception):
    """Base class for errors raised by pointgraph."""


class TriangleIndexError(PointGraphError, IndexError):
    """A triangle (or tetrahedron) references a vertex outside the point array."""


class MissingCapabilityError(PointGraphError, AttributeError):
    """The graph was built in a mode that does not populate the requested structure."""


class ConcaveHullError(PointGraphError, ValueError):
    """Boundary edges could not be produced or linked into a single path."""
