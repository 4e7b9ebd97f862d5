from collections.abc import Iterable
from dataclasses import dataclass

from eb_route.app.protocols import UniformSource
from eb_route.domain.entities.geography import RoadClass
from eb_route.domain.network import RoadNetwork
from eb_route.sim.hooks import EngineHooks, NoopHooks


@dataclass(frozen=True)
class PatternRule:
    road_classes: frozenset[RoadClass]
    probability: float
    multiplier: float
    label: str  # "congestion" | "shortcut"


# Stand-in for a crowd-sourced feed; no statistical fidelity intended
DEFAULT_PATTERN_RULES: tuple[PatternRule, ...] = (
    PatternRule(frozenset({RoadClass.MOTORWAY, RoadClass.TRUNK}), 0.05, 0.6, "congestion"),
    PatternRule(frozenset({RoadClass.PRIMARY, RoadClass.SECONDARY}), 0.03, 1.4, "shortcut"),
    PatternRule(frozenset({RoadClass.RESIDENTIAL}), 0.02, 1.2, "shortcut"),
)


@dataclass
class PatternReport:
    edges_scanned: int = 0
    congestion_points: int = 0
    shortcuts_found: int = 0


class PatternSimulator:
    """
    One-shot pass that overwrites crowd multipliers on a random subset of
    edges, then freezes the network. One uniform draw per edge whose road
    class belongs to a rule; other edges are left at their multiplier.
    """

    def __init__(
        self,
        rng: UniformSource,
        rules: Iterable[PatternRule] = DEFAULT_PATTERN_RULES,
        hooks: EngineHooks | None = None,
    ):
        self.rng, self.hooks = rng, hooks or NoopHooks()
        self.rules: dict[RoadClass, PatternRule] = {}
        for rule in rules:
            for rc in rule.road_classes:
                if rc in self.rules:
                    raise ValueError(f"road class {rc.value!r} appears in more than one rule")
                self.rules[rc] = rule

    def apply(self, network: RoadNetwork) -> PatternReport:
        network.check_mutable()  # once per load
        report = PatternReport()
        for _, edge in network.iter_edges():
            report.edges_scanned += 1
            rule = self.rules.get(edge.road_class)
            if rule is None:
                continue
            if self.rng.random() < rule.probability:
                edge.crowd_multiplier = rule.multiplier
                if rule.label == "congestion":
                    report.congestion_points += 1
                else:
                    report.shortcuts_found += 1
        network.freeze()
        self.hooks.patterns_applied(
            edges=report.edges_scanned,
            congestion=report.congestion_points,
            shortcuts=report.shortcuts_found,
        )
        return report


class NoPatterns:
    """Leaves every multiplier at 1.0; still freezes the network."""

    def __init__(self, hooks: EngineHooks | None = None):
        self.hooks = hooks or NoopHooks()

    def apply(self, network: RoadNetwork) -> PatternReport:
        network.check_mutable()
        network.freeze()
        report = PatternReport(edges_scanned=network.edge_count())
        self.hooks.patterns_applied(edges=report.edges_scanned, congestion=0, shortcuts=0)
        return report
