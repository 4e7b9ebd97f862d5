from typing import Protocol, runtime_checkable

from eb_route.domain.entities.geography import Edge
from eb_route.domain.entities.route import RouteQuery, RouteResult


# ------------- Mechanics --------------------
@runtime_checkable
class EdgeWeight(Protocol):
    """
    Search cost of traversing one edge at a given hour-of-day.
    Must be >= 0 for the label-setting search to stay correct.
    Units depend on the mode (meters for distance, seconds otherwise).
    """

    def weight(self, edge: Edge, hour: int) -> float: ...


@runtime_checkable
class RouteFinder(Protocol):
    """
    Responsibilities:
      • Validate a query against the network before searching.
      • Return the minimum-cost route, or an empty result when unreachable.
    """

    def route(self, query: RouteQuery) -> RouteResult: ...


@runtime_checkable
class UniformSource(Protocol):
    """Anything with random() -> float in [0, 1); numpy Generators qualify."""

    def random(self) -> float: ...
