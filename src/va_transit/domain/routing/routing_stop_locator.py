# domain/routing/routing_stop_locator.py
from va_transit.app.protocols import TransitGraph
from va_transit.domain.entities.geography import Point, euclidean_distance
from va_transit.domain.entities.network import TransitRouterNode
from va_transit.domain.errors import EmptyGraphError


class StopLocator:
    def __init__(self, graph: TransitGraph, *, search_radius_m: float, extension_radius_m: float):
        self.graph = graph
        self.search_radius_m, self.extension_radius_m = search_radius_m, extension_radius_m

    def nearest_node(self, point: Point) -> TransitRouterNode:
        if len(self.graph) == 0:
            raise EmptyGraphError()
        return self.graph.nearest_node(point)

    def nearest_nodes(
        self, point: Point, radius_m: float | None = None
    ) -> tuple[list[TransitRouterNode], bool]:
        """Return (nodes, extended). Fewer than two hits widens the radius past the nearest stop."""
        if len(self.graph) == 0:
            raise EmptyGraphError()
        radius = self.search_radius_m if radius_m is None else radius_m
        nodes = list(self.graph.nearest_nodes(point, radius))
        if len(nodes) >= 2:
            return nodes, False
        # a second stop may sit just beyond the border of the search area
        nearest = self.graph.nearest_node(point)
        d = euclidean_distance(point, nearest.stop.stop.coord)
        return list(self.graph.nearest_nodes(point, d + self.extension_radius_m)), True
