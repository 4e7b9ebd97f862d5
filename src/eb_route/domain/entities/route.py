from dataclasses import dataclass, field
from enum import Enum


class CostMode(str, Enum):
    DISTANCE = "distance"
    SPEED_LIMIT = "speed_limit"
    LEARNED = "learned"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    CostMode.DISTANCE: "Pure Distance",
    CostMode.SPEED_LIMIT: "Speed Limit (Traditional GPS)",
    CostMode.LEARNED: "Learned Patterns (Advanced)",
}


@dataclass(frozen=True)
class RouteQuery:
    origin: int
    destination: int
    mode: CostMode = CostMode.SPEED_LIMIT
    hour: int = 12  # local civil hour 0..23


@dataclass
class RouteResult:
    path: list[int] = field(default_factory=list)  # empty => unreachable
    total_distance_m: float = 0.0
    estimated_time_s: float = 0.0
    mode: CostMode = CostMode.SPEED_LIMIT

    @property
    def found(self) -> bool:
        return bool(self.path)
