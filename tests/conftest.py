"""Shared graph fixtures."""

import pytest

from roadsearch.domain.entities.geography import Edge, Node, Point, RoadGraph


def road(a: Node, b: Node, length: float) -> list[Edge]:
    """A two-way road as a pair of directed edges."""
    return [Edge(a, b, length), Edge(b, a, length)]


@pytest.fixture
def diamond() -> RoadGraph:
    # A-B (1), B-C (1), A-C (3), C-D (1); positions ~1e-4 apart like projected map units
    a = Node("A", Point(0.0, 0.0))
    b = Node("B", Point(0.0001, 0.0001))
    c = Node("C", Point(0.0002, 0.0))
    d = Node("D", Point(0.0003, 0.0))
    edges = road(a, b, 1.0) + road(b, c, 1.0) + road(a, c, 3.0) + road(c, d, 1.0)
    return RoadGraph([a, b, c, d], edges)
