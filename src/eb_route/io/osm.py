"""
OpenStreetMap ingestion.

Reads an OSM file (XML or PBF, picked by extension) with pyosmium into a
RoadNetwork: every node becomes a node, and every way carrying a
``highway`` tag contributes a pair of directed edges per consecutive node
pair (great-circle length, road class from the tag). Segments whose
endpoints were never declared are dropped.
"""

import logging
import math
import os
from dataclasses import dataclass

import osmium

from eb_route.domain.network import RoadNetwork

log = logging.getLogger("eb_route.osm")

EARTH_RADIUS_M = 6371000.0


class OSMReadError(RuntimeError):
    """The map file exists but osmium could not decode it."""


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters between two WGS84 points."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlmb = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


@dataclass
class IngestReport:
    nodes: int = 0
    ways: int = 0
    edges: int = 0
    skipped_segments: int = 0


class RoadHandler(osmium.SimpleHandler):
    """Adds nodes straight into the network and buffers highway ways."""

    def __init__(self, network: RoadNetwork):
        super().__init__()
        self.network = network
        self.nodes = 0
        self.ways: list[tuple[list[int], str]] = []

    def node(self, n):
        if not n.location.valid():
            return
        self.network.add_node(n.id, n.location.lat, n.location.lon)
        self.nodes += 1

    def way(self, w):
        highway = w.tags.get("highway")
        if highway is None:
            return
        refs = [nd.ref for nd in w.nodes]
        if len(refs) >= 2:
            # osmium objects are only valid inside the callback; keep plain values
            self.ways.append((refs, highway or "unclassified"))


def _add_way(network: RoadNetwork, refs: list[int], highway: str, report: IngestReport) -> None:
    for a, b in zip(refs, refs[1:]):
        na, nb = network.get_node(a), network.get_node(b)
        if na is None or nb is None:
            report.skipped_segments += 1
            continue
        d = haversine_m(na.lat, na.lon, nb.lat, nb.lon)
        network.add_edge(a, b, d, highway)
        network.add_edge(b, a, d, highway)
        report.edges += 2
    report.ways += 1


def load_osm(path: str | os.PathLike, network: RoadNetwork) -> IngestReport:
    """Parse an OSM file into network.

    Raises FileNotFoundError for a missing path and OSMReadError when the
    file cannot be decoded.
    """
    path = os.fspath(path)
    if not os.path.isfile(path):
        raise FileNotFoundError(f"no such OSM file: {path}")

    network.check_mutable()
    handler = RoadHandler(network)
    try:
        handler.apply_file(path)
    except RuntimeError as exc:
        raise OSMReadError(f"cannot read {path}: {exc}") from exc

    report = IngestReport(nodes=handler.nodes)
    for refs, highway in handler.ways:
        _add_way(network, refs, highway, report)

    log.info(
        "parsed %s: %d nodes, %d highway ways, %d edges (%d segments skipped)",
        path,
        report.nodes,
        report.ways,
        report.edges,
        report.skipped_segments,
    )
    return report
