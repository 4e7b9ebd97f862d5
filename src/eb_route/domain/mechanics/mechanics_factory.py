# eb_route/domain/mechanics/mechanics_factory.py
from dataclasses import dataclass

from eb_route.config.models import EngineModel
from eb_route.domain.mechanics.mechanics_costs import CostModel
from eb_route.domain.mechanics.mechanics_patterns import NoPatterns, PatternSimulator
from eb_route.domain.mechanics.mechanics_routers import PathFinder
from eb_route.domain.network import RoadNetwork
from eb_route.runtime.registries import make_patterns, make_rush_hour, make_speed_table
from eb_route.sim.hooks import EngineHooks
from eb_route.sim.rng import RNGRegistry


@dataclass
class Mechanics:
    network: RoadNetwork
    cost_model: CostModel
    patterns: PatternSimulator | NoPatterns
    finder: PathFinder


def build_mechanics(
    cfg: EngineModel,
    rng_registry: RNGRegistry,
    *,
    network: RoadNetwork | None = None,
    hooks: EngineHooks | None = None,
) -> Mechanics:
    if network is None:
        network = RoadNetwork(make_speed_table(cfg.speeds))
    cost_model = CostModel(rush=make_rush_hour(cfg.rush_hour))
    patterns = make_patterns(cfg.patterns, deps={"rng_registry": rng_registry, "hooks": hooks})
    finder = PathFinder(network, cost_model, hour_policy=cfg.hour_policy, hooks=hooks)
    return Mechanics(network=network, cost_model=cost_model, patterns=patterns, finder=finder)
