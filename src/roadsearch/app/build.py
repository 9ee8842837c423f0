# roadsearch/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from roadsearch.app.protocols import GraphSource
from roadsearch.app.query_context import QueryContext
from roadsearch.config.models import EngineModel
from roadsearch.domain.entities.geography import Node, RoadGraph
from roadsearch.io.search_logging import SearchLogging  # JSON logs
from roadsearch.runtime.hooks import NoopHooks, SearchHooks
from roadsearch.runtime.registries import make_graph_source


@dataclass
class App:
    config: EngineModel
    graph: RoadGraph
    context: QueryContext
    hooks: SearchHooks

    def route(self, start_id: str, end_id: str) -> QueryContext:
        """Resolve node ids and run (or reuse) the query against the loaded graph."""
        start, end = self._lookup(start_id), self._lookup(end_id)
        self.context.compute(start, end, self.graph.adjacency)
        return self.context

    def _lookup(self, node_id: str) -> Node:
        # unknown ids still reach the engine so they end in the context's error state
        try:
            return self.graph.node(node_id)
        except KeyError:
            return Node(node_id)


def build(
    cfg: EngineModel | Mapping,
    *,
    graph: RoadGraph | None = None,
    source: GraphSource | None = None,
    use_logging: bool = True,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, EngineModel) else EngineModel.model_validate(cfg)

    # 1) Hooks
    hooks = (
        SearchLogging(session=model.name, level=model.log.level, debug=model.log.debug)
        if use_logging
        else NoopHooks()
    )

    # 2) Graph: explicit graph > explicit source > configured map > empty
    if graph is None:
        if source is None and model.map is not None:
            source = make_graph_source(model.map, deps={"projection": model.projection})
        graph = source.load() if source is not None else RoadGraph()

    # 3) Query context
    context = QueryContext.from_options(model.query, model.heuristic, hooks=hooks)

    return App(model, graph, context, hooks)
