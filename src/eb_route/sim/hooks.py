# sim/hooks.py
from typing import Protocol

from eb_route.domain.entities.route import RouteQuery, RouteResult


class EngineHooks(Protocol):
    def network_loaded(self, *, nodes, edges, **kw): ...
    def patterns_applied(self, *, edges, congestion, shortcuts): ...
    def query_start(self, query: RouteQuery): ...
    def query_end(self, query: RouteQuery, result: RouteResult, *, settled, relaxed, ms): ...
    def query_rejected(self, query: RouteQuery, *, reason: str): ...


class NoopHooks:
    def network_loaded(self, **_):
        pass

    def patterns_applied(self, **_):
        pass

    def query_start(self, *_, **__):
        pass

    def query_end(self, *_, **__):
        pass

    def query_rejected(self, *_, **__):
        pass
