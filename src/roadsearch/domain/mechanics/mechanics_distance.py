import math
from enum import Enum

from roadsearch.domain.entities.geography import Node, Point

# arbitrary value found by trial and error on the Luxembourg road map; lets the
# weight knob take simple values like 1.5 or 2.0 instead of 19_500 or 26_000
MULTIPLICITY_BASE = 13_000.0


class Metric(Enum):
    EUCLIDEAN = "euclidean"
    MANHATTAN = "manhattan"

    @classmethod
    def of(cls, use_manhattan: bool) -> "Metric":
        return cls.MANHATTAN if use_manhattan else cls.EUCLIDEAN


def euclidean_distance(a: Point, b: Point) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def manhattan_distance(a: Point, b: Point) -> float:
    return abs(b.x - a.x) + abs(b.y - a.y)


_DISTANCE = {
    Metric.EUCLIDEAN: euclidean_distance,
    Metric.MANHATTAN: manhattan_distance,
}


def distance(a: Point, b: Point, *, use_manhattan: bool) -> float:
    return _DISTANCE[Metric.of(use_manhattan)](a, b)


class Heuristic:
    """Scaled straight-line (or grid) distance between two nodes."""

    def __init__(self, *, use_manhattan: bool = True, base_multiplier: float = MULTIPLICITY_BASE):
        self.metric = Metric.of(use_manhattan)
        self.base = base_multiplier
        self._dist = _DISTANCE[self.metric]

    def __call__(self, a: Node, b: Node, weight: float = 1.0) -> float:
        return self.base * weight * self._dist(a.position, b.position)
