# runtime/hooks.py
from typing import Protocol


class SearchHooks(Protocol):
    def search_start(self, *, start, end, algorithm): ...
    def search_end(self, *, algorithm, pops, visited, passed, cost, hops, ms): ...
    def search_failed(self, *, algorithm, reason: str, **kw): ...
    def cache_hit(self, *, signature): ...
    def cache_miss(self, *, signature): ...
    def cache_reset(self, *, entries, reason: str): ...


class NoopHooks:
    def search_start(self, **_):
        pass

    def search_end(self, **_):
        pass

    def search_failed(self, **_):
        pass

    def cache_hit(self, **_):
        pass

    def cache_miss(self, **_):
        pass

    def cache_reset(self, **_):
        pass
