# eb_route/app/build.py
import os
from collections.abc import Mapping
from dataclasses import dataclass

from eb_route.config.models import EngineModel
from eb_route.domain.entities.route import RouteQuery, RouteResult
from eb_route.domain.mechanics.mechanics_factory import Mechanics, build_mechanics
from eb_route.domain.mechanics.mechanics_patterns import PatternReport
from eb_route.domain.network import RoadNetwork
from eb_route.io.engine_logging import EngineLogging
from eb_route.io.osm import IngestReport, load_osm
from eb_route.io.recorder import Recorder
from eb_route.services.comparison import RouteComparison, RouteComparisonService
from eb_route.sim.hooks import EngineHooks, NoopHooks
from eb_route.sim.rng import RNGRegistry


@dataclass
class App:
    config: EngineModel
    rng: RNGRegistry
    hooks: EngineHooks
    mechanics: Mechanics
    comparison: RouteComparisonService

    @property
    def network(self) -> RoadNetwork:
        return self.mechanics.network

    # ------------- lifecycle: ingest -> patterns -> queries -------------

    def load_osm(self, path: str | os.PathLike) -> IngestReport:
        report = load_osm(path, self.network)
        self.hooks.network_loaded(
            nodes=self.network.node_count(), edges=self.network.edge_count(), ways=report.ways
        )
        return report

    def apply_patterns(self) -> PatternReport:
        return self.mechanics.patterns.apply(self.network)

    def route(self, query: RouteQuery) -> RouteResult:
        return self.mechanics.finder.route(query)

    def compare(self, origin: int, destination: int, hour: int) -> RouteComparison:
        return self.comparison.compare(origin, destination, hour)

    def sample_endpoints(self, count: int = 2) -> list[int]:
        """Random distinct nodes that have at least one outgoing edge."""
        candidates = [n for n in self.network.node_ids() if self.network.get_edges(n)]
        if len(candidates) < count:
            return []
        picks = self.rng.stream("samples").choice(len(candidates), size=count, replace=False)
        return [candidates[int(i)] for i in picks]


def build(
    cfg: EngineModel | Mapping | None = None,
    *,
    network: RoadNetwork | None = None,
    use_logging: bool = True,
    recorder: Recorder | None = None,
) -> App:
    # 0) Validate config
    if cfg is None:
        model = EngineModel()
    else:
        model = cfg if isinstance(cfg, EngineModel) else EngineModel.model_validate(cfg)

    # 1) RNG
    rng_registry = RNGRegistry(model.seed, scenario=model.name)

    # 2) Hooks
    hooks = (
        EngineLogging(
            run_id=model.run_id,
            level=model.log.level,
            debug=model.log.debug,
            recorder=recorder,
        )
        if use_logging
        else NoopHooks()
    )

    # 3) Network, cost model, patterns, router
    mechanics = build_mechanics(model, rng_registry, network=network, hooks=hooks)

    # 4) Services
    comparison = RouteComparisonService(mechanics.finder)

    return App(model, rng_registry, hooks, mechanics, comparison)
