from dataclasses import dataclass
from enum import Enum

from roadsearch.domain.entities.geography import Edge, Node


class AlgorithmType(Enum):
    ASTAR = "astar"
    HYBRID_ASTAR = "hybrid_astar"
    DIJKSTRA = "dijkstra"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def uses_heuristic(self) -> bool:
        return self is not AlgorithmType.DIJKSTRA

    def __str__(self) -> str:
        return self.label


_LABELS = {
    AlgorithmType.ASTAR: "A Star",
    AlgorithmType.HYBRID_ASTAR: "Hybrid A Star",
    AlgorithmType.DIJKSTRA: "Dijkstra",
}


@dataclass(frozen=True)
class QuerySignature:
    """Everything that determines a search result; the memo key."""

    start: Node
    end: Node
    mark_passed_edges: bool
    algorithm: AlgorithmType
    heuristic_weight: float
    use_manhattan: bool


@dataclass(frozen=True)
class RunOutput:
    selected_edges: frozenset[Edge] = frozenset()
    passed_edges: frozenset[Edge] = frozenset()
    total_cost: float = 0.0

    @property
    def total_km(self) -> float:
        return self.total_cost / 1000.0

    def ordered_path(self, start: Node) -> list[Edge]:
        """Chain ``selected_edges`` into a walk beginning at ``start``."""
        by_start = {e.start: e for e in self.selected_edges}
        path: list[Edge] = []
        cur = start
        while cur in by_start and len(path) < len(self.selected_edges):
            e = by_start[cur]
            path.append(e)
            cur = e.end
        return path
