import time

from roadsearch.domain.entities.geography import Adjacency, Edge, Node
from roadsearch.domain.entities.query import AlgorithmType, RunOutput
from roadsearch.domain.errors import MissingAdjacencyError, NoRouteError, PathfindingError
from roadsearch.domain.mechanics.mechanics_distance import MULTIPLICITY_BASE, Heuristic
from roadsearch.domain.mechanics.mechanics_frontier import Frontier
from roadsearch.domain.mechanics.mechanics_priorities import make_priority
from roadsearch.runtime.hooks import NoopHooks, SearchHooks


def search(
    start: Node,
    end: Node,
    adjacency: Adjacency,
    mark_passed_edges: bool = False,
    algorithm: AlgorithmType = AlgorithmType.DIJKSTRA,
    heuristic_weight: float = 1.0,
    use_manhattan: bool = True,
    *,
    base_multiplier: float = MULTIPLICITY_BASE,
    hooks: SearchHooks | None = None,
) -> RunOutput:
    """Uniform-cost search from ``start`` to ``end`` with a per-algorithm priority.

    ``heuristic_weight`` only affects HYBRID_ASTAR; ``use_manhattan`` is ignored
    by DIJKSTRA. Raises MissingAdjacencyError when a visited node has no entry
    in ``adjacency`` and NoRouteError when ``end`` is never reached.
    """
    hooks = hooks or NoopHooks()
    priority_of = make_priority(algorithm)
    h = Heuristic(use_manhattan=use_manhattan, base_multiplier=base_multiplier)

    t0 = time.perf_counter()
    hooks.search_start(start=start.id, end=end.id, algorithm=algorithm.value)

    passed_edges: set[Edge] = set()
    total_cost: float | None = None

    frontier = Frontier()
    frontier.push(start, 0.0)
    came_from: dict[Node, Node | None] = {start: None}
    cost_so_far: dict[Node, float] = {start: 0.0}
    pops = 0

    while frontier:
        current, _ = frontier.pop()
        pops += 1

        if current == end:
            total_cost = cost_so_far[current]
            break

        try:
            out_edges = adjacency[current]
        except KeyError:
            hooks.search_failed(algorithm=algorithm.value, reason="missing_adjacency", node=current.id)
            raise MissingAdjacencyError(current) from None

        for edge in out_edges:
            if mark_passed_edges:
                passed_edges.add(edge)

            new_cost = cost_so_far[current] + edge.length
            nxt = edge.end
            if nxt not in cost_so_far or new_cost < cost_so_far[nxt]:
                cost_so_far[nxt] = new_cost
                frontier.push(nxt, priority_of(new_cost, nxt, end, heuristic_weight, h))
                came_from[nxt] = current

    if total_cost is None:
        hooks.search_failed(
            algorithm=algorithm.value, reason="no_route", start=start.id, end=end.id, pops=pops
        )
        raise NoRouteError(start, end)

    selected_edges = reconstruct_path(came_from, start, end)
    hooks.search_end(
        algorithm=algorithm.value,
        pops=pops,
        visited=len(cost_so_far),
        passed=len(passed_edges),
        cost=total_cost,
        hops=len(selected_edges),
        ms=(time.perf_counter() - t0) * 1000,
    )
    return RunOutput(frozenset(selected_edges), frozenset(passed_edges), total_cost)


def reconstruct_path(came_from: dict[Node, Node | None], start: Node, end: Node) -> set[Edge]:
    """Walk predecessors back from ``end``; edges carry length 0."""
    selected: set[Edge] = set()
    current, steps = end, 0
    while current != start:
        prev = came_from.get(current)
        if prev is None:
            raise NoRouteError(start, end)
        steps += 1
        if steps > len(came_from):
            raise PathfindingError(f"predecessor cycle while rebuilding {start.id!r} -> {end.id!r}")
        selected.add(Edge(prev, current, 0.0))
        current = prev
    return selected
