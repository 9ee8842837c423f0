from typing import Protocol, runtime_checkable

from roadsearch.domain.entities.geography import Adjacency, Node, Point, RoadGraph
from roadsearch.domain.entities.query import AlgorithmType, RunOutput


# ------------- Collaborators --------------------
@runtime_checkable
class GraphSource(Protocol):
    """
    Responsibilities:
      • Produce a fully built RoadGraph (node ids deduplicated, edges resolved).
      • Node positions are already in canvas space when they leave here.
    """

    def load(self) -> RoadGraph: ...


@runtime_checkable
class Projector(Protocol):
    """Map geographic degrees onto canvas coordinates."""

    def project(self, longitude: float, latitude: float) -> Point: ...


# ------------- Search --------------------
@runtime_checkable
class SearchFn(Protocol):
    """
    The engine seam the query context calls on a cache miss.
    Must raise a PathfindingError subclass rather than return a partial path.
    """

    def __call__(
        self,
        start: Node,
        end: Node,
        adjacency: Adjacency,
        mark_passed_edges: bool,
        algorithm: AlgorithmType,
        heuristic_weight: float,
        use_manhattan: bool,
        *,
        base_multiplier: float,
        hooks=None,
    ) -> RunOutput: ...
