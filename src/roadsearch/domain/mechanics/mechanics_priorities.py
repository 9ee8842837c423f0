from collections.abc import Callable

from roadsearch.domain.entities.geography import Node
from roadsearch.domain.entities.query import AlgorithmType
from roadsearch.domain.mechanics.mechanics_distance import Heuristic

# (new_cost, next_node, goal, weight, heuristic) -> frontier priority
PriorityFn = Callable[[float, Node, Node, float, Heuristic], float]

_priority_registry: dict[AlgorithmType, PriorityFn] = {}


def register_priority(kind: AlgorithmType):
    def deco(fn: PriorityFn):
        _priority_registry[kind] = fn
        return fn

    return deco


def make_priority(kind: AlgorithmType) -> PriorityFn:
    try:
        return _priority_registry[kind]
    except KeyError:
        raise ValueError(f"Unknown algorithm {kind!r}")


@register_priority(AlgorithmType.DIJKSTRA)
def _dijkstra(new_cost, nxt, goal, weight, h):
    return new_cost


@register_priority(AlgorithmType.ASTAR)
def _astar(new_cost, nxt, goal, weight, h):
    # Not canonical A*: ranks by the heuristic alone (greedy best-first) and
    # ignores both new_cost and weight. HYBRID_ASTAR is the cost + heuristic form.
    return h(nxt, goal)


@register_priority(AlgorithmType.HYBRID_ASTAR)
def _hybrid_astar(new_cost, nxt, goal, weight, h):
    return new_cost + h(nxt, goal, weight)
