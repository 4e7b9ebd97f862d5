import heapq
import math
import time
from numbers import Integral
from typing import Literal

from eb_route.app.protocols import RouteFinder
from eb_route.domain.entities.route import CostMode, RouteQuery, RouteResult
from eb_route.domain.errors import InvalidQueryParameter
from eb_route.domain.mechanics.mechanics_costs import CostModel
from eb_route.domain.network import RoadNetwork
from eb_route.sim.hooks import EngineHooks, NoopHooks

HourPolicy = Literal["reject", "clamp", "wrap"]


def normalize_hour(hour: int, policy: HourPolicy = "reject") -> int:
    # bool is an Integral too; True must not pass as hour 1
    if isinstance(hour, bool) or not isinstance(hour, Integral):
        raise InvalidQueryParameter(f"hour must be an integer, got {hour!r}")
    hour = int(hour)
    if 0 <= hour <= 23:
        return hour
    if policy == "clamp":
        return min(23, max(0, hour))
    if policy == "wrap":
        return hour % 24
    raise InvalidQueryParameter(f"hour must be in 0..23, got {hour}")


class PathFinder(RouteFinder):
    """
    Dijkstra over a RoadNetwork with mode-dependent edge weights.

    The heap holds (cost, seq, node); seq keeps pops deterministic on cost
    ties. There is no decrease-key, so stale entries are skipped on pop.
    The search stops as soon as the destination is popped.
    """

    def __init__(
        self,
        network: RoadNetwork,
        cost_model: CostModel | None = None,
        *,
        hour_policy: HourPolicy = "reject",
        hooks: EngineHooks | None = None,
    ):
        self.G = network
        self.costs = cost_model or CostModel()
        self.hour_policy = hour_policy
        self.hooks = hooks or NoopHooks()

    def validate(self, query: RouteQuery) -> RouteQuery:
        """Return the query with its hour normalized, or raise InvalidQueryParameter."""
        try:
            mode = CostMode(query.mode)
            hour = normalize_hour(query.hour, self.hour_policy)
            for label, nid in (("origin", query.origin), ("destination", query.destination)):
                if not self.G.has_node(nid):
                    raise InvalidQueryParameter(f"{label} node {nid} is not in the network")
        except InvalidQueryParameter as exc:
            self.hooks.query_rejected(query, reason=str(exc))
            raise
        except ValueError as exc:
            self.hooks.query_rejected(query, reason=str(exc))
            raise InvalidQueryParameter(f"unknown cost mode {query.mode!r}") from exc
        if mode is query.mode and hour == query.hour:
            return query
        return RouteQuery(query.origin, query.destination, mode, hour)

    def route(self, query: RouteQuery) -> RouteResult:
        q = self.validate(query)
        t0 = time.perf_counter()
        self.hooks.query_start(q)

        prev, settled, relaxed = self._search(q)
        result = RouteResult(mode=q.mode)
        if q.destination == q.origin or q.destination in prev:
            result.path = self._unwind(prev, q.origin, q.destination)
            result.total_distance_m, result.estimated_time_s = self.measure(result.path, q.hour)

        self.hooks.query_end(
            q,
            result,
            settled=settled,
            relaxed=relaxed,
            ms=(time.perf_counter() - t0) * 1000,
        )
        return result

    def _search(self, q: RouteQuery) -> tuple[dict[int, int], int, int]:
        weigh = self.costs.weight_fn(q.mode).weight
        hour, goal = q.hour, q.destination
        best: dict[int, float] = {q.origin: 0.0}  # missing => infinity
        prev: dict[int, int] = {}
        heap: list[tuple[float, int, int]] = [(0.0, 0, q.origin)]
        seq = settled = relaxed = 0

        while heap:
            d, _, u = heapq.heappop(heap)
            if u == goal:
                break
            if d > best.get(u, math.inf):
                continue  # stale
            settled += 1
            for edge in self.G.get_edges(u) or ():
                v = edge.to
                if v not in self.G:
                    continue  # dangling destination
                nd = d + weigh(edge, hour)
                if nd < best.get(v, math.inf):
                    best[v] = nd
                    prev[v] = u
                    seq += 1
                    heapq.heappush(heap, (nd, seq, v))
                    relaxed += 1
        return prev, settled, relaxed

    @staticmethod
    def _unwind(prev: dict[int, int], origin: int, destination: int) -> list[int]:
        path = [destination]
        while path[-1] != origin:
            path.append(prev[path[-1]])
        path.reverse()
        return path

    def measure(self, path: list[int], hour: int) -> tuple[float, float]:
        """
        Physical distance and learned-speed travel time along a node path.
        Parallel edges: the first one in adjacency order is used.
        """
        dist = secs = 0.0
        for u, v in zip(path, path[1:]):
            for edge in self.G.get_edges(u) or ():
                if edge.to == v:
                    dist += edge.distance_m
                    secs += self.costs.travel_time_s(edge, hour)
                    break
        return dist, secs
