import pytest

from eb_route.domain.entities.geography import RoadClass
from eb_route.domain.errors import NetworkFrozen
from eb_route.domain.mechanics.mechanics_speeds import SpeedTable
from eb_route.domain.network import RoadNetwork


def test_node_count_is_distinct_ids_last_write_wins():
    g = RoadNetwork()
    g.add_node(1, 0.0, 0.0)
    g.add_node(2, 0.0, 1.0)
    g.add_node(1, 5.0, 6.0)
    assert g.node_count() == 2
    n = g.get_node(1)
    assert (n.lat, n.lon) == (5.0, 6.0)


def test_missing_node_is_none_not_error():
    g = RoadNetwork()
    assert g.get_node(99) is None
    assert g.get_edges(99) is None
    assert not g.has_node(99)


def test_edge_source_alone_does_not_make_a_node():
    g = RoadNetwork()
    g.add_edge(5, 6, 10.0)
    assert not g.has_node(5)
    g.add_node(5, 0.0, 0.0)
    assert g.has_node(5) and 5 in g


def test_known_node_without_edges_returns_empty_sequence():
    g = RoadNetwork()
    g.add_node(1, 0.0, 0.0)
    assert list(g.get_edges(1)) == []


def test_edges_keep_insertion_order_and_parallel_duplicates():
    g = RoadNetwork()
    g.add_node(1, 0.0, 0.0)
    g.add_node(2, 0.0, 1.0)
    g.add_edge(1, 2, 100.0, "primary")
    g.add_edge(1, 2, 80.0, "residential")
    g.add_edge(1, 3, 10.0)  # dangling destination is accepted
    edges = g.get_edges(1)
    assert [(e.to, e.distance_m) for e in edges] == [(2, 100.0), (2, 80.0), (3, 10.0)]
    assert g.edge_count() == 3


def test_edge_count_sums_all_adjacency_lists():
    g = RoadNetwork()
    for i in range(4):
        g.add_node(i, 0.0, float(i))
    for i in range(3):
        g.add_edge(i, i + 1, 10.0)
        g.add_edge(i + 1, i, 10.0)
    assert g.edge_count() == 6


@pytest.mark.parametrize(
    "tag,kmh",
    [
        ("motorway", 100.0),
        ("motorway_link", 100.0),
        ("motorway-link", 100.0),
        ("trunk", 80.0),
        ("trunk_link", 80.0),
        ("primary", 65.0),
        ("primary_link", 65.0),
        ("secondary", 55.0),
        ("tertiary", 40.0),
        ("residential", 40.0),
        ("living_street", 20.0),
        ("living-street", 20.0),
        ("unclassified", 50.0),
        ("service", 50.0),
        ("Motorway", 50.0),  # case-sensitive
    ],
)
def test_speed_limit_follows_road_class_table(tag, kmh):
    g = RoadNetwork()
    e = g.add_edge(1, 2, 10.0, tag)
    assert e.speed_limit_kmh == kmh


def test_speed_limit_is_fixed_at_creation():
    g = RoadNetwork()
    e = g.add_edge(1, 2, 10.0, "motorway")
    e.crowd_multiplier = 0.6
    assert e.speed_limit_kmh == 100.0
    assert e.road_class is RoadClass.MOTORWAY


def test_custom_speed_table_overrides_one_class():
    g = RoadNetwork(SpeedTable({RoadClass.RESIDENTIAL: 30.0}))
    assert g.add_edge(1, 2, 10.0, "residential").speed_limit_kmh == 30.0
    assert g.add_edge(1, 2, 10.0, "motorway").speed_limit_kmh == 100.0


def test_frozen_network_rejects_mutation():
    g = RoadNetwork()
    g.add_node(1, 0.0, 0.0)
    g.freeze()
    with pytest.raises(NetworkFrozen):
        g.add_node(2, 0.0, 0.0)
    with pytest.raises(NetworkFrozen):
        g.add_edge(1, 2, 1.0)
    assert g.node_count() == 1
