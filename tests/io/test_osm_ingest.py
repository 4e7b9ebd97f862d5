import pytest

from eb_route.domain.entities.geography import RoadClass
from eb_route.domain.network import RoadNetwork
from eb_route.io.osm import OSMReadError, haversine_m, load_osm

OSM = """<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6">
  <node id="1" lat="52.5200000" lon="13.4050000"/>
  <node id="2" lat="52.5210000" lon="13.4050000"/>
  <node id="3" lat="52.5220000" lon="13.4050000">
    <tag k="highway" v="traffic_signals"/>
  </node>
  <node id="4" lat="52.5230000" lon="13.4060000"/>
  <way id="100">
    <nd ref="1"/>
    <nd ref="2"/>
    <nd ref="3"/>
    <tag k="highway" v="primary"/>
    <tag k="name" v="Main Street"/>
  </way>
  <way id="101">
    <nd ref="3"/>
    <nd ref="4"/>
    <tag k="building" v="yes"/>
  </way>
  <way id="102">
    <nd ref="3"/>
    <nd ref="99"/>
    <nd ref="4"/>
    <tag k="highway" v="living_street"/>
  </way>
</osm>
"""


@pytest.fixture
def loaded(tmp_path):
    p = tmp_path / "map.osm"
    p.write_text(OSM, encoding="utf-8")
    g = RoadNetwork()
    report = load_osm(p, g)
    return g, report


def test_nodes_and_highway_ways_are_ingested(loaded):
    g, report = loaded
    assert g.node_count() == 4
    assert report.nodes == 4
    assert report.ways == 2  # the building way is ignored
    assert report.skipped_segments == 2  # 3->99 and 99->4


def test_each_segment_becomes_two_directed_edges(loaded):
    g, report = loaded
    assert report.edges == 4
    assert g.edge_count() == 4
    assert [e.to for e in g.get_edges(2)] == [1, 3]
    fwd, back = g.get_edges(1)[0], g.get_edges(2)[0]
    assert fwd.distance_m == back.distance_m
    assert fwd.road_class is RoadClass.PRIMARY
    assert fwd.speed_limit_kmh == 65.0


def test_segment_length_is_haversine(loaded):
    g, _ = loaded
    e = g.get_edges(1)[0]
    assert e.distance_m == pytest.approx(111.19, abs=0.05)  # 0.001 deg of latitude


def test_haversine_known_distance():
    # Berlin -> Paris, roughly 878 km
    assert haversine_m(52.52, 13.405, 48.8566, 2.3522) == pytest.approx(877_500, rel=0.01)


def test_haversine_zero():
    assert haversine_m(10.0, 20.0, 10.0, 20.0) == 0.0


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_osm(tmp_path / "nowhere.osm", RoadNetwork())


def test_malformed_file_raises(tmp_path):
    p = tmp_path / "broken.osm"
    p.write_text('<?xml version="1.0"?>\n<osm version="0.6"><node id="1" lat=', encoding="utf-8")
    with pytest.raises(OSMReadError):
        load_osm(p, RoadNetwork())


def test_frozen_network_refuses_ingest(tmp_path):
    from eb_route.domain.errors import NetworkFrozen

    p = tmp_path / "map.osm"
    p.write_text(OSM, encoding="utf-8")
    g = RoadNetwork()
    g.freeze()
    with pytest.raises(NetworkFrozen):
        load_osm(p, g)
