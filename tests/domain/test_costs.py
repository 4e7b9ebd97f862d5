import pytest

from eb_route.domain.entities.geography import Edge, RoadClass
from eb_route.domain.entities.route import CostMode
from eb_route.domain.mechanics.mechanics_costs import CostModel
from eb_route.domain.mechanics.mechanics_speeds import DEFAULT_SPEED_LIMITS_KMH, RushHourSpeed


def _edge(rc: RoadClass, dist=1000.0, mult=1.0) -> Edge:
    return Edge(2, dist, DEFAULT_SPEED_LIMITS_KMH[rc], rc, mult)


@pytest.fixture
def costs() -> CostModel:
    return CostModel()


# ---------- mode formulas


def test_distance_mode_is_meters_and_ignores_hour_and_crowd(costs):
    e = _edge(RoadClass.MOTORWAY, 1234.0, mult=0.6)
    assert costs.cost(e, CostMode.DISTANCE, 8) == 1234.0
    assert costs.cost(e, CostMode.DISTANCE, 12) == 1234.0


def test_speed_limit_mode_is_seconds_at_posted_limit(costs):
    e = _edge(RoadClass.MOTORWAY, 1000.0)  # 100 km/h
    assert costs.cost(e, CostMode.SPEED_LIMIT, 12) == pytest.approx(36.0)


@pytest.mark.parametrize("rc", list(RoadClass))
def test_distance_and_speed_limit_modes_are_hour_invariant(costs, rc):
    e = _edge(rc, 750.0, mult=1.4)
    for mode in (CostMode.DISTANCE, CostMode.SPEED_LIMIT):
        values = {costs.cost(e, mode, h) for h in range(24)}
        assert len(values) == 1


@pytest.mark.parametrize(
    "rc",
    [
        RoadClass.MOTORWAY,
        RoadClass.TRUNK,
        RoadClass.PRIMARY,
        RoadClass.SECONDARY,
        RoadClass.TERTIARY,
    ],
)
def test_learned_mode_rush_hour_differs_for_derated_classes(costs, rc):
    e = _edge(rc)
    assert costs.cost(e, CostMode.LEARNED, 8) > costs.cost(e, CostMode.LEARNED, 12)


@pytest.mark.parametrize(
    "rc",
    [RoadClass.RESIDENTIAL, RoadClass.LIVING_STREET, RoadClass.UNCLASSIFIED, RoadClass.MOTORWAY_LINK],
)
def test_learned_mode_rush_hour_equal_for_unaffected_classes(costs, rc):
    e = _edge(rc)
    assert costs.cost(e, CostMode.LEARNED, 8) == costs.cost(e, CostMode.LEARNED, 12)


@pytest.mark.parametrize(
    "rc,factor",
    [
        (RoadClass.MOTORWAY, 0.4),
        (RoadClass.TRUNK, 0.4),
        (RoadClass.PRIMARY, 0.6),
        (RoadClass.SECONDARY, 0.8),
        (RoadClass.TERTIARY, 0.8),
    ],
)
def test_rush_derating_factors(costs, rc, factor):
    e = _edge(rc)
    rush = costs.cost(e, CostMode.LEARNED, 17)
    calm = costs.cost(e, CostMode.LEARNED, 12)
    assert rush == pytest.approx(calm / factor)


@pytest.mark.parametrize("hour,is_rush", [(6, False), (7, True), (9, True), (10, False),
                                          (16, False), (17, True), (19, True), (20, False)])
def test_rush_windows_have_inclusive_bounds(hour, is_rush):
    assert RushHourSpeed().is_rush(hour) is is_rush


def test_crowd_multiplier_exact_cost_off_peak(costs):
    e = _edge(RoadClass.PRIMARY, 900.0, mult=1.4)
    expected = 900.0 / (65.0 * 1.4 * 1000 / 3600)
    assert costs.cost(e, CostMode.LEARNED, 12) == expected


def test_crowd_multiplier_stacks_on_rush_derating(costs):
    e = _edge(RoadClass.MOTORWAY, 1000.0, mult=0.6)
    # 100 km/h * 0.4 * 0.6 = 24 km/h
    assert costs.cost(e, CostMode.LEARNED, 8) == pytest.approx(1000.0 / (24.0 / 3.6))


def test_travel_time_matches_learned_cost(costs):
    e = _edge(RoadClass.SECONDARY, 500.0, mult=1.4)
    for h in (3, 8, 18):
        assert costs.travel_time_s(e, h) == costs.cost(e, CostMode.LEARNED, h)


def test_weights_table_is_read_only(costs):
    with pytest.raises(TypeError):
        costs.weights[CostMode.DISTANCE] = None
