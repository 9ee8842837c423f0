import heapq

from roadsearch.domain.entities.geography import Node


class Frontier:
    """Min-priority queue of nodes.

    Pushing a node that is already queued replaces its priority; a node that
    was popped may be pushed again. Equal priorities pop in insertion order.
    """

    def __init__(self):
        self._q: list[tuple[float, int, Node]] = []
        self._live: dict[Node, int] = {}
        self._seq = 0

    def __len__(self) -> int:
        return len(self._live)

    def __bool__(self) -> bool:
        return bool(self._live)

    def __contains__(self, node: Node) -> bool:
        return node in self._live

    def push(self, node: Node, priority: float) -> None:
        self._seq += 1
        self._live[node] = self._seq
        heapq.heappush(self._q, (priority, self._seq, node))

    def pop(self) -> tuple[Node, float]:
        while self._q:
            priority, seq, node = heapq.heappop(self._q)
            # stale entries left behind by a priority update are skipped
            if self._live.get(node) == seq:
                del self._live[node]
                return node, priority
        raise IndexError("pop from an empty frontier")
