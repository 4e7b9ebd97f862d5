# io/export.py
import json
import os
from collections.abc import Iterable

from eb_route.domain.entities.route import CostMode, RouteResult
from eb_route.domain.network import RoadNetwork
from eb_route.sim.clock import minutes

MODE_COLORS = {
    CostMode.DISTANCE: "#FF6B6B",
    CostMode.SPEED_LIMIT: "#4ECDC4",
    CostMode.LEARNED: "#95E1D3",
}


def route_to_dict(network: RoadNetwork, route: RouteResult) -> dict:
    waypoints = []
    for nid in route.path:
        node = network.get_node(nid)
        waypoints.append({"id": nid, "lat": node.lat, "lon": node.lon})
    return {
        "mode": route.mode.value,
        "label": route.mode.label,
        "color": MODE_COLORS[route.mode],
        "total_distance_km": round(route.total_distance_m / 1000.0, 3),
        "estimated_time_min": round(minutes(route.estimated_time_s), 1),
        "waypoints": waypoints,
    }


def routes_to_json(network: RoadNetwork, routes: Iterable[RouteResult]) -> dict:
    return {"routes": [route_to_dict(network, r) for r in routes]}


def write_routes(path: str | os.PathLike, network: RoadNetwork, routes: Iterable[RouteResult]):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(routes_to_json(network, routes), f, indent=2)
        f.write("\n")
