from collections.abc import Iterable, Mapping
from types import MappingProxyType

from eb_route.domain.entities.geography import Edge, RoadClass

# Posted speed by road class (km/h); anything unmatched is UNCLASSIFIED
DEFAULT_SPEED_LIMITS_KMH: Mapping[RoadClass, float] = MappingProxyType(
    {
        RoadClass.MOTORWAY: 100.0,
        RoadClass.MOTORWAY_LINK: 100.0,
        RoadClass.TRUNK: 80.0,
        RoadClass.TRUNK_LINK: 80.0,
        RoadClass.PRIMARY: 65.0,
        RoadClass.PRIMARY_LINK: 65.0,
        RoadClass.SECONDARY: 55.0,
        RoadClass.TERTIARY: 40.0,
        RoadClass.RESIDENTIAL: 40.0,
        RoadClass.LIVING_STREET: 20.0,
        RoadClass.UNCLASSIFIED: 50.0,
    }
)

DEFAULT_RUSH_WINDOWS: tuple[tuple[int, int], ...] = ((7, 9), (17, 19))

# Rush-hour speed factor by class; classes not listed keep the posted limit
DEFAULT_RUSH_DERATING: Mapping[RoadClass, float] = MappingProxyType(
    {
        RoadClass.MOTORWAY: 0.4,
        RoadClass.TRUNK: 0.4,
        RoadClass.PRIMARY: 0.6,
        RoadClass.SECONDARY: 0.8,
        RoadClass.TERTIARY: 0.8,
    }
)


def kmh_to_mps(v_kmh: float) -> float:
    return v_kmh * 1000.0 / 3600.0


class SpeedTable:
    """Road class -> posted speed limit (km/h). Read-only once built."""

    def __init__(self, limits_kmh: Mapping[RoadClass, float] | None = None):
        table = dict(DEFAULT_SPEED_LIMITS_KMH)
        if limits_kmh:
            table.update({RoadClass.parse(k): float(v) for k, v in limits_kmh.items()})
        self._limits = MappingProxyType(table)

    @property
    def limits(self) -> Mapping[RoadClass, float]:
        return self._limits

    def limit_kmh(self, road_class: RoadClass) -> float:
        return self._limits.get(road_class, self._limits[RoadClass.UNCLASSIFIED])


class RushHourSpeed:
    """
    Time-of-day speed: posted limit outside the rush windows, derated by
    road class inside them (window bounds inclusive). The crowd multiplier
    is applied on top by learned_kmh().
    """

    def __init__(
        self,
        windows: Iterable[tuple[int, int]] = DEFAULT_RUSH_WINDOWS,
        derating: Mapping[RoadClass, float] | None = None,
    ):
        self.windows = tuple((int(a), int(b)) for a, b in windows)
        src = DEFAULT_RUSH_DERATING if derating is None else derating
        self.derating = MappingProxyType({RoadClass.parse(k): float(v) for k, v in src.items()})

    def is_rush(self, hour: int) -> bool:
        return any(a <= hour <= b for a, b in self.windows)

    def factor(self, road_class: RoadClass, hour: int) -> float:
        if not self.is_rush(hour):
            return 1.0
        return self.derating.get(road_class, 1.0)

    def adjusted_kmh(self, edge: Edge, hour: int) -> float:
        return edge.speed_limit_kmh * self.factor(edge.road_class, hour)

    def learned_kmh(self, edge: Edge, hour: int) -> float:
        return self.adjusted_kmh(edge, hour) * edge.crowd_multiplier
