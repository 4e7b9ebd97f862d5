# runtime/registries.py
from collections.abc import Callable
from typing import Any

from eb_route.config.models import (
    PatternsCrowdModel,
    PatternsNoneModel,
    PatternsUnion,
    RushHourModel,
    SpeedTableModel,
)
from eb_route.domain.mechanics.mechanics_patterns import NoPatterns, PatternRule, PatternSimulator
from eb_route.domain.mechanics.mechanics_speeds import RushHourSpeed, SpeedTable

PatternsFactory = Callable[[PatternsUnion, dict[str, Any]], PatternSimulator | NoPatterns]

_patterns_registry: dict[str, PatternsFactory] = {}


# ------------------- Speed tables ---------------------------


def make_speed_table(cfg: SpeedTableModel) -> SpeedTable:
    return SpeedTable(cfg.limits_kmh)


def make_rush_hour(cfg: RushHourModel) -> RushHourSpeed:
    return RushHourSpeed(windows=cfg.windows, derating=cfg.derating)


# ------------------- Pattern simulators ---------------------------


def register_patterns(kind: str):
    def deco(fn: PatternsFactory):
        _patterns_registry[kind] = fn
        return fn

    return deco


def make_patterns(cfg: PatternsUnion, *, deps: dict[str, Any]) -> PatternSimulator | NoPatterns:
    """
    deps can include:
      - 'rng_registry': RNGRegistry  # required by 'crowd'
      - 'hooks': EngineHooks
    """
    try:
        factory = _patterns_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown patterns kind {cfg.kind!r}")
    return factory(cfg, deps)


@register_patterns("crowd")
def _make_crowd(cfg: PatternsCrowdModel, deps):
    rules = [
        PatternRule(frozenset(r.road_classes), r.probability, r.multiplier, r.label)
        for r in cfg.rules
    ]
    rng = deps["rng_registry"].stream(cfg.stream)
    return PatternSimulator(rng, rules, hooks=deps.get("hooks"))


@register_patterns("none")
def _make_none(cfg: PatternsNoneModel, deps):
    return NoPatterns(hooks=deps.get("hooks"))
