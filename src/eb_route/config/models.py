from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from eb_route.domain.entities.geography import RoadClass
from eb_route.domain.mechanics.mechanics_speeds import (
    DEFAULT_RUSH_DERATING,
    DEFAULT_RUSH_WINDOWS,
    DEFAULT_SPEED_LIMITS_KMH,
)


def _road_class(v):
    # same tag rules as ingestion, but config typos should fail loudly
    rc = RoadClass.parse(v)
    if rc is RoadClass.UNCLASSIFIED and v not in (RoadClass.UNCLASSIFIED, "unclassified"):
        raise ValueError(f"unknown road class {v!r}")
    return rc


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


# ----------------- SPEEDS ---------------------


class SpeedTableModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)
    limits_kmh: dict[RoadClass, float] = Field(
        default_factory=lambda: dict(DEFAULT_SPEED_LIMITS_KMH)
    )

    @field_validator("limits_kmh", mode="before")
    @classmethod
    def _keys(cls, v):
        return {_road_class(k): s for k, s in dict(v).items()}

    @field_validator("limits_kmh")
    @classmethod
    def _positive(cls, v: dict[RoadClass, float]):
        bad = [k.value for k, s in v.items() if s <= 0]
        if bad:
            raise ValueError(f"speed limits must be > 0 (got non-positive for {bad})")
        return v


class RushHourModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)
    windows: list[tuple[int, int]] = Field(default_factory=lambda: list(DEFAULT_RUSH_WINDOWS))
    derating: dict[RoadClass, float] = Field(default_factory=lambda: dict(DEFAULT_RUSH_DERATING))

    @field_validator("derating", mode="before")
    @classmethod
    def _keys(cls, v):
        return {_road_class(k): f for k, f in dict(v).items()}

    @model_validator(mode="after")
    def _check(self):
        for a, b in self.windows:
            if not (0 <= a <= b <= 23):
                raise ValueError(f"rush window {(a, b)} must satisfy 0 <= start <= end <= 23")
        for rc, f in self.derating.items():
            if not (0 < f <= 1):
                raise ValueError(f"derating for {rc.value!r} must be in (0, 1], got {f}")
        return self


# ----------------- PATTERN SIMULATORS ---------------------


class PatternRuleModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)
    road_classes: list[RoadClass]
    probability: float = Field(ge=0.0, le=1.0)
    multiplier: float = Field(gt=0.0)
    label: Literal["congestion", "shortcut"]

    @field_validator("road_classes", mode="before")
    @classmethod
    def _keys(cls, v):
        return [_road_class(k) for k in v]


def _default_rules() -> list[PatternRuleModel]:
    return [
        PatternRuleModel(
            road_classes=["motorway", "trunk"], probability=0.05, multiplier=0.6, label="congestion"
        ),
        PatternRuleModel(
            road_classes=["primary", "secondary"], probability=0.03, multiplier=1.4, label="shortcut"
        ),
        PatternRuleModel(
            road_classes=["residential"], probability=0.02, multiplier=1.2, label="shortcut"
        ),
    ]


class PatternsCrowdModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)
    kind: Literal["crowd"] = "crowd"
    stream: str = "crowd_patterns"
    rules: list[PatternRuleModel] = Field(default_factory=_default_rules)

    @model_validator(mode="after")
    def _disjoint(self):
        seen: set[RoadClass] = set()
        for rule in self.rules:
            dup = seen.intersection(rule.road_classes)
            if dup:
                raise ValueError(f"road classes {sorted(r.value for r in dup)} match several rules")
            seen.update(rule.road_classes)
        return self


class PatternsNoneModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)
    kind: Literal["none"] = "none"


PatternsUnion = Annotated[PatternsCrowdModel | PatternsNoneModel, Field(discriminator="kind")]


# ------------------------------------------------------------------


class EngineModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)
    name: str = "default"
    run_id: str = "local"
    seed: int | None = None  # None => non-deterministic
    hour_policy: Literal["reject", "clamp", "wrap"] = "reject"
    log: LogModel = LogModel()
    speeds: SpeedTableModel = Field(default_factory=SpeedTableModel)
    rush_hour: RushHourModel = Field(default_factory=RushHourModel)
    patterns: PatternsUnion = Field(default_factory=PatternsCrowdModel)
