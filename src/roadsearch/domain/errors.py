from roadsearch.domain.entities.geography import Node


class PathfindingError(Exception):
    """Base class for search failures reported to the query context."""


class MissingAdjacencyError(PathfindingError, LookupError):
    def __init__(self, node: Node):
        super().__init__(f"no adjacency entry for node {node.id!r}; graph is incomplete")
        self.node = node


class NoRouteError(PathfindingError):
    def __init__(self, start: Node, end: Node):
        super().__init__(f"no route from {start.id!r} to {end.id!r}")
        self.start, self.end = start, end


class MapFormatError(ValueError):
    """Raised by map loaders for malformed documents."""
