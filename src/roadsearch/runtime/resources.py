# roadsearch/runtime/resources.py
import pickle
from functools import lru_cache

from roadsearch.domain.entities.geography import RoadGraph


@lru_cache(maxsize=8)
def load_graph_from_path(file: str, fmt: str) -> RoadGraph:
    if fmt == "pickle":
        with open(file, "rb") as f:
            g = pickle.load(f)
        if not isinstance(g, RoadGraph):
            raise TypeError(f"{file!r} does not hold a RoadGraph (got {type(g).__name__})")
        return g
    raise ValueError(f"Unsupported graph fmt {fmt!r}")


def dump_graph(graph: RoadGraph, file: str) -> None:
    with open(file, "wb") as f:
        pickle.dump(graph, f)
