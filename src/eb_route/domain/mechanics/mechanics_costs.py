from dataclasses import dataclass, field
from types import MappingProxyType

from eb_route.app.protocols import EdgeWeight
from eb_route.domain.entities.geography import Edge
from eb_route.domain.entities.route import CostMode
from eb_route.domain.mechanics.mechanics_speeds import RushHourSpeed, kmh_to_mps


class DistanceWeight(EdgeWeight):
    """Meters. Never compare against the time-based weights."""

    def weight(self, edge: Edge, hour: int) -> float:
        return edge.distance_m


class SpeedLimitWeight(EdgeWeight):
    """Seconds at the posted limit; independent of hour."""

    def weight(self, edge: Edge, hour: int) -> float:
        return edge.distance_m / kmh_to_mps(edge.speed_limit_kmh)


class LearnedWeight(EdgeWeight):
    """Seconds at the rush-hour-adjusted speed times the crowd multiplier."""

    def __init__(self, rush: RushHourSpeed):
        self.rush = rush

    def weight(self, edge: Edge, hour: int) -> float:
        return edge.distance_m / kmh_to_mps(self.rush.learned_kmh(edge, hour))


@dataclass
class CostModel:
    """
    Maps (edge, mode, hour) to a traversal cost. The same rush-hour model
    also produces the reported travel time, whatever mode drove the search.
    """

    rush: RushHourSpeed = field(default_factory=RushHourSpeed)
    weights: dict[CostMode, EdgeWeight] = field(default_factory=dict)

    def __post_init__(self):
        table = {
            CostMode.DISTANCE: DistanceWeight(),
            CostMode.SPEED_LIMIT: SpeedLimitWeight(),
            CostMode.LEARNED: LearnedWeight(self.rush),
        }
        table.update(self.weights)
        self.weights = MappingProxyType(table)

    def weight_fn(self, mode: CostMode) -> EdgeWeight:
        try:
            return self.weights[mode]
        except KeyError:
            raise ValueError(f"No edge weight registered for mode {mode!r}")

    def cost(self, edge: Edge, mode: CostMode, hour: int) -> float:
        return self.weight_fn(mode).weight(edge, hour)

    def travel_time_s(self, edge: Edge, hour: int) -> float:
        return edge.distance_m / kmh_to_mps(self.rush.learned_kmh(edge, hour))
