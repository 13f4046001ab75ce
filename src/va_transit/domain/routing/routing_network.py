# domain/routing/routing_network.py
import numpy as np
from scipy.spatial import KDTree

from va_transit.app.protocols import TransitGraph
from va_transit.domain.entities.geography import Point, euclidean_distance
from va_transit.domain.entities.network import TransitRouterEdge, TransitRouterNode
from va_transit.domain.entities.schedule import TransitSchedule


class TransitRouterNetwork(TransitGraph):
    """Router graph: one node per (line, route, route stop), transit + transfer edges."""

    def __init__(self):
        self.nodes: list[TransitRouterNode] = []
        self.edges: list[TransitRouterEdge] = []
        self._out: dict[int, list[TransitRouterEdge]] = {}
        self._tree: KDTree | None = None

    def __len__(self) -> int:
        return len(self.nodes)

    @classmethod
    def from_schedule(
        cls, schedule: TransitSchedule, max_beeline_walk_connection_distance_m: float
    ) -> "TransitRouterNetwork":
        net = cls()
        boardable: set[int] = set()
        alightable: set[int] = set()
        for line in schedule.lines.values():
            for route in line.routes.values():
                prev = None
                for i, rs in enumerate(route.stops):
                    node = net._add_node(rs, route, line)
                    if i < len(route.stops) - 1:
                        boardable.add(node.index)
                    if i > 0:
                        alightable.add(node.index)
                    if prev is not None:
                        net._add_edge(
                            prev,
                            node,
                            euclidean_distance(prev.stop.stop.coord, node.stop.stop.coord),
                            route=route,
                            line=line,
                        )
                    prev = node
        net._build_index()

        # transfers: alight somewhere, walk (maybe 0 m), board something else
        for idx in sorted(alightable):
            node = net.nodes[idx]
            here = node.stop.stop.coord
            for other in net.nearest_nodes(here, max_beeline_walk_connection_distance_m):
                if other.index not in boardable or other is node:
                    continue
                if other.line is node.line and other.stop.stop == node.stop.stop:
                    continue
                net._add_edge(node, other, euclidean_distance(here, other.stop.stop.coord))
        return net

    def _add_node(self, rs, route, line) -> TransitRouterNode:
        node = TransitRouterNode(index=len(self.nodes), stop=rs, route=route, line=line)
        self.nodes.append(node)
        return node

    def _add_edge(self, a, b, length_m, *, route=None, line=None) -> TransitRouterEdge:
        e = TransitRouterEdge(a, b, length_m, route=route, line=line)
        self.edges.append(e)
        self._out.setdefault(a.index, []).append(e)
        return e

    def _build_index(self) -> None:
        if not self.nodes:
            self._tree = None
            return
        coords = np.array([(n.stop.stop.coord.x, n.stop.stop.coord.y) for n in self.nodes])
        self._tree = KDTree(coords)

    # ---- TransitGraph ----

    def out_edges(self, node: TransitRouterNode) -> list[TransitRouterEdge]:
        return self._out.get(node.index, [])

    def nearest_nodes(self, point: Point, radius_m: float) -> list[TransitRouterNode]:
        if self._tree is None:
            return []
        idx = self._tree.query_ball_point([point.x, point.y], radius_m)
        found = [self.nodes[int(i)] for i in idx]
        found.sort(key=lambda n: (euclidean_distance(point, n.stop.stop.coord), n.index))
        return found

    def nearest_node(self, point: Point) -> TransitRouterNode:
        if self._tree is None:
            raise LookupError("no nodes in transit router network")
        _, i = self._tree.query([point.x, point.y], k=1)
        return self.nodes[int(i)]
