# roadsearch/app/query_context.py
from roadsearch.app.protocols import SearchFn
from roadsearch.config.models import HeuristicModel, QueryOptionsModel
from roadsearch.domain.entities.geography import Adjacency, Edge, Node
from roadsearch.domain.entities.query import AlgorithmType, QuerySignature, RunOutput
from roadsearch.domain.errors import PathfindingError
from roadsearch.domain.mechanics.mechanics_distance import MULTIPLICITY_BASE
from roadsearch.domain.mechanics.mechanics_search import search
from roadsearch.runtime.hooks import NoopHooks, SearchHooks


class QueryContext:
    """
    Per-session front of the search engine.

    The toggles (algorithm, heuristic_weight, use_manhattan, mark_passed_edges)
    are plain attributes the viewer writes to. ``compute`` is meant to be called
    every frame: it returns immediately while the query is unchanged, and every
    distinct QuerySignature is searched at most once per adjacency view.
    """

    def __init__(
        self,
        *,
        algorithm: AlgorithmType = AlgorithmType.HYBRID_ASTAR,
        heuristic_weight: float = 1.0,
        use_manhattan: bool = True,
        mark_passed_edges: bool = False,
        base_multiplier: float = MULTIPLICITY_BASE,
        search_fn: SearchFn = search,
        hooks: SearchHooks | None = None,
    ):
        self.algorithm = algorithm
        self.heuristic_weight = heuristic_weight
        self.use_manhattan = use_manhattan
        self.mark_passed_edges = mark_passed_edges
        self.base_multiplier = base_multiplier
        self._search = search_fn
        self._hooks = hooks or NoopHooks()

        self.total_cost = 0.0
        self.error: PathfindingError | None = None
        self._current = RunOutput()
        self._last: QuerySignature | None = None
        self._computed: dict[QuerySignature, RunOutput | PathfindingError] = {}
        # memo entries are only valid for the adjacency object they were computed on
        self._adjacency: Adjacency | None = None

        self.searches = 0
        self.hits = 0

    @classmethod
    def from_options(
        cls,
        options: QueryOptionsModel,
        heuristic: HeuristicModel | None = None,
        **kw,
    ) -> "QueryContext":
        heuristic = heuristic or HeuristicModel()
        return cls(
            algorithm=options.algorithm,
            heuristic_weight=options.heuristic_weight,
            use_manhattan=options.use_manhattan,
            mark_passed_edges=options.mark_passed_edges,
            base_multiplier=heuristic.base_multiplier,
            **kw,
        )

    # --------------- current result -----------------------------

    @property
    def selected_edges(self) -> frozenset[Edge]:
        return self._current.selected_edges

    @property
    def passed_edges(self) -> frozenset[Edge]:
        return self._current.passed_edges

    @property
    def result(self) -> RunOutput:
        return self._current

    @property
    def last_query(self) -> QuerySignature | None:
        return self._last

    @property
    def has_route(self) -> bool:
        return self._last is not None and self.error is None

    def __len__(self) -> int:
        return len(self._computed)

    def is_edge_selected(self, edge: Edge) -> bool:
        return edge in self._current.selected_edges

    def is_edge_passed(self, edge: Edge) -> bool:
        return edge in self._current.passed_edges

    def is_using_astar(self) -> bool:
        return self.algorithm.uses_heuristic

    # --------------- queries -----------------------------

    def signature(self, start: Node, end: Node) -> QuerySignature:
        return QuerySignature(
            start=start,
            end=end,
            mark_passed_edges=self.mark_passed_edges,
            algorithm=self.algorithm,
            heuristic_weight=self.heuristic_weight,
            use_manhattan=self.use_manhattan,
        )

    def is_new_query(self, start: Node, end: Node) -> bool:
        return self._last is None or self._last != self.signature(start, end)

    def compute(self, start: Node, end: Node, adjacency: Adjacency) -> None:
        if self._adjacency is not adjacency:
            if self._adjacency is not None:
                self.reset(reason="adjacency_changed")
            self._adjacency = adjacency

        if not self.is_new_query(start, end):
            return

        sig = self.signature(start, end)
        if sig in self._computed:
            self.hits += 1
            self._hooks.cache_hit(signature=sig)
        else:
            self._hooks.cache_miss(signature=sig)
            self._computed[sig] = self._run(sig, adjacency)

        self._apply(self._computed[sig])
        self._last = sig

    def reset(self, *, reason: str = "manual") -> None:
        """Forget every memoized result and the current one."""
        self._hooks.cache_reset(entries=len(self._computed), reason=reason)
        self._computed.clear()
        self._current = RunOutput()
        self.total_cost = 0.0
        self.error = None
        self._last = None

    # --------------- helpers -----------------------------

    def _run(self, sig: QuerySignature, adjacency: Adjacency) -> RunOutput | PathfindingError:
        self.searches += 1
        try:
            return self._search(
                sig.start,
                sig.end,
                adjacency,
                sig.mark_passed_edges,
                sig.algorithm,
                sig.heuristic_weight,
                sig.use_manhattan,
                base_multiplier=self.base_multiplier,
                hooks=self._hooks,
            )
        except PathfindingError as exc:
            # failures are memoized like results; drop the frames so the
            # memo does not pin the search state
            exc.__context__ = None
            return exc.with_traceback(None)

    def _apply(self, outcome: RunOutput | PathfindingError) -> None:
        if isinstance(outcome, PathfindingError):
            self._current, self.error = RunOutput(), outcome
        else:
            self._current, self.error = outcome, None
        self.total_cost = self._current.total_cost
