from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

import numpy as np


# Core geometry types used by the search
@dataclass(frozen=True)
class Point:
    x: float  # canvas units, already projected
    y: float


@dataclass(frozen=True, order=True)
class Node:
    """A graph vertex. Identity, ordering and hashing use ``id`` only."""

    id: str
    position: Point = field(default=Point(0.0, 0.0), compare=False)

    def __str__(self) -> str:
        return f"[id: {self.id}][x: {self.position.x}][y: {self.position.y}]"


@dataclass(frozen=True, order=True)
class Edge:
    """A directed edge. ``length`` takes no part in identity, so a
    reconstructed path edge of length 0 equals the graph edge it stands for."""

    start: Node
    end: Node
    length: float = field(default=0.0, compare=False)

    def __str__(self) -> str:
        return f"[from: {self.start.id}][to: {self.end.id}][length: {self.length}]"


Adjacency = Mapping[Node, Sequence[Edge]]


def build_adjacency(nodes: Iterable[Node], edges: Iterable[Edge]) -> dict[Node, list[Edge]]:
    # every known node gets an entry, even without outgoing edges
    adjacency: dict[Node, list[Edge]] = {n: [] for n in nodes}
    for e in edges:
        adjacency.setdefault(e.start, []).append(e)
    return adjacency


class RoadGraph:
    """Nodes, directed edges and the adjacency view built from them.

    The graph is treated as immutable once built: searches and the query
    context hold references to ``adjacency`` and never copy it.
    """

    def __init__(self, nodes: Iterable[Node] = (), edges: Iterable[Edge] = ()):
        self.nodes: list[Node] = list(nodes)
        self.edges: list[Edge] = list(edges)
        self.adjacency: dict[Node, list[Edge]] = build_adjacency(self.nodes, self.edges)
        self._by_id = {n.id: n for n in self.nodes}
        self._xy = np.array(
            [(n.position.x, n.position.y) for n in self.nodes], dtype=float
        ).reshape(-1, 2)

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node: Node) -> bool:
        return node.id in self._by_id

    def is_loaded(self) -> bool:
        return bool(self.nodes) and bool(self.edges)

    def node(self, node_id: str) -> Node:
        return self._by_id[node_id]  # raises KeyError if missing

    def nearest_node(self, p: Point) -> Node:
        if not self.nodes:
            raise ValueError("nearest_node on an empty graph")
        d = np.hypot(self._xy[:, 0] - p.x, self._xy[:, 1] - p.y)
        return self.nodes[int(np.argmin(d))]
