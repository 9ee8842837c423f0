# io/search_logging.py
import json
import logging
import sys

from roadsearch.domain.entities.query import QuerySignature
from roadsearch.runtime.hooks import NoopHooks


def _default_json_logger(name="roadsearch", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


def _shape_signature(sig: QuerySignature) -> dict:
    return {
        "start": sig.start.id,
        "end": sig.end.id,
        "algorithm": sig.algorithm.value,
        "weight": sig.heuristic_weight,
        "manhattan": sig.use_manhattan,
        "mark_passed": sig.mark_passed_edges,
    }


class SearchLogging(NoopHooks):
    """
    Structured logs for searches and for the query context's memo table.
    Searches and failures log at INFO/WARNING; cache traffic only in debug mode.
    """

    def __init__(
        self,
        session: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
    ):
        self.session, self.debug = session, debug
        self.log = logger or _default_json_logger(level=level)

    def _emit(self, level: str, msg: str, **extra):
        self.log.log(getattr(logging, level), msg, extra={"extra": {"session": self.session, **extra}})

    # search lifecycle

    def search_start(self, *, start, end, algorithm):
        if self.debug:
            self._emit("DEBUG", "search_start", start=start, end=end, algorithm=algorithm)

    def search_end(self, *, algorithm, pops, visited, passed, cost, hops, ms):
        self._emit(
            "INFO",
            "search_end",
            algorithm=algorithm,
            pops=pops,
            visited=visited,
            passed=passed,
            cost=cost,
            hops=hops,
            ms=round(ms, 3),
        )

    def search_failed(self, *, algorithm, reason: str, **kw):
        self._emit("WARNING", "search_failed", algorithm=algorithm, reason=reason, **kw)

    # memo table

    def cache_hit(self, *, signature):
        if self.debug:
            self._emit("DEBUG", "cache_hit", **_shape_signature(signature))

    def cache_miss(self, *, signature):
        if self.debug:
            self._emit("DEBUG", "cache_miss", **_shape_signature(signature))

    def cache_reset(self, *, entries, reason: str):
        self._emit("INFO", "cache_reset", entries=entries, reason=reason)
