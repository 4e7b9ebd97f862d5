# eb_route/services/comparison.py
from dataclasses import dataclass, field

from eb_route.app.protocols import RouteFinder
from eb_route.domain.entities.route import CostMode, RouteQuery, RouteResult

BASELINE = CostMode.SPEED_LIMIT


@dataclass
class ModeDelta:
    mode: CostMode
    time_s: float  # negative => faster than baseline
    distance_m: float


@dataclass
class RouteComparison:
    origin: int
    destination: int
    hour: int
    routes: dict[CostMode, RouteResult] = field(default_factory=dict)

    @property
    def baseline(self) -> RouteResult:
        return self.routes[BASELINE]

    def deltas(self) -> list[ModeDelta]:
        """Per non-baseline mode, time/distance difference vs. the speed-limit route."""
        base = self.baseline
        if not base.found:
            return []
        return [
            ModeDelta(
                mode,
                r.estimated_time_s - base.estimated_time_s,
                r.total_distance_m - base.total_distance_m,
            )
            for mode, r in self.routes.items()
            if mode is not BASELINE and r.found
        ]

    @property
    def shortest_is_slower(self) -> bool:
        """True when the distance-optimal route takes longer than the baseline."""
        d, base = self.routes.get(CostMode.DISTANCE), self.baseline
        return bool(d and d.found and base.found and d.estimated_time_s > base.estimated_time_s)

    @property
    def learned_saving_s(self) -> float:
        learned, base = self.routes.get(CostMode.LEARNED), self.baseline
        if not (learned and learned.found and base.found):
            return 0.0
        return max(0.0, base.estimated_time_s - learned.estimated_time_s)


class RouteComparisonService:
    def __init__(self, finder: RouteFinder, modes: tuple[CostMode, ...] = tuple(CostMode)):
        self.finder, self.modes = finder, modes

    def compare(self, origin: int, destination: int, hour: int) -> RouteComparison:
        cmp = RouteComparison(origin, destination, hour)
        for mode in self.modes:
            cmp.routes[mode] = self.finder.route(RouteQuery(origin, destination, mode, hour))
        return cmp
