# domain/network.py
from __future__ import annotations

from collections.abc import Iterator, Sequence

from eb_route.domain.entities.geography import Edge, Node, RoadClass
from eb_route.domain.errors import NetworkFrozen
from eb_route.domain.mechanics.mechanics_speeds import SpeedTable


class RoadNetwork:
    """
    Node storage plus per-origin adjacency lists of directed edges.

    Edges may point at node ids that were never added; they are kept but
    the router will not traverse them. Parallel edges are independent.
    Mutation stops at freeze(); afterwards the network is read-only and
    safe to share between reader threads.
    """

    def __init__(self, speed_table: SpeedTable | None = None):
        self.speeds = speed_table or SpeedTable()
        self._nodes: dict[int, Node] = {}
        self._adj: dict[int, list[Edge]] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def check_mutable(self) -> None:
        if self._frozen:
            raise NetworkFrozen("road network is frozen; no further nodes or edges")

    # ------------- ingestion -----------------

    def add_node(self, node_id: int, lat: float, lon: float) -> None:
        self.check_mutable()
        self._nodes[node_id] = Node(node_id, lat, lon)  # last write wins

    def add_edge(
        self,
        from_id: int,
        to_id: int,
        distance_m: float,
        road_class: str | RoadClass = RoadClass.UNCLASSIFIED,
    ) -> Edge:
        # distance_m >= 0 is the caller's job; negative values break the search
        self.check_mutable()
        rc = RoadClass.parse(road_class)
        edge = Edge(to_id, distance_m, self.speeds.limit_kmh(rc), rc)
        self._adj.setdefault(from_id, []).append(edge)
        return edge

    # ------------- lookup --------------------

    def get_node(self, node_id: int) -> Node | None:
        return self._nodes.get(node_id)

    def get_edges(self, node_id: int) -> Sequence[Edge] | None:
        """Outgoing edges in insertion order; None when the node is unknown."""
        if node_id not in self._nodes:
            return None
        return self._adj.get(node_id, ())

    def has_node(self, node_id: int) -> bool:
        return node_id in self._nodes

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return sum(len(edges) for edges in self._adj.values())

    def node_ids(self) -> Iterator[int]:
        return iter(self._nodes)

    def iter_edges(self) -> Iterator[tuple[int, Edge]]:
        """Yield (from_id, edge) over every stored edge, dangling ones included."""
        for u, edges in self._adj.items():
            for e in edges:
                yield u, e

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes
