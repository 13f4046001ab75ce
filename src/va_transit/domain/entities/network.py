# domain/entities/network.py
from dataclasses import dataclass

from va_transit.domain.entities.schedule import TransitLine, TransitRoute, TransitRouteStop


@dataclass(eq=False)
class TransitRouterNode:
    index: int
    stop: TransitRouteStop
    route: TransitRoute
    line: TransitLine


@dataclass(eq=False)
class TransitRouterEdge:
    from_node: TransitRouterNode
    to_node: TransitRouterNode
    length_m: float
    route: TransitRoute | None = None  # None => transfer edge
    line: TransitLine | None = None

    @property
    def is_transfer(self) -> bool:
        return self.line is None


@dataclass(frozen=True)
class InitialNode:
    """Entry/exit weight of a candidate node; both values are additive inputs to the search."""

    initial_cost: float
    initial_time: float


@dataclass(frozen=True)
class Path:
    nodes: tuple[TransitRouterNode, ...]
    edges: tuple[TransitRouterEdge, ...]
    travel_time: float  # excludes the source node's initial time
    travel_cost: float  # excludes both candidate initial costs

    @property
    def first_node(self) -> TransitRouterNode:
        return self.nodes[0]

    @property
    def last_node(self) -> TransitRouterNode:
        return self.nodes[-1]
