from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable

from va_transit.domain.entities.geography import Point
from va_transit.domain.entities.legs import Leg
from va_transit.domain.entities.network import (
    InitialNode,
    Path,
    TransitRouterEdge,
    TransitRouterNode,
)
from va_transit.domain.entities.person import Person
from va_transit.domain.entities.schedule import TransitRoute, TransitRouteStop


# ------------- Transit data --------------------
@runtime_checkable
class TransitGraph(Protocol):
    """
    Read-only router graph built once from the schedule.
    Units: meters for coordinates/distances.
    """

    def __len__(self) -> int: ...
    def nearest_nodes(self, point: Point, radius_m: float) -> Sequence[TransitRouterNode]: ...
    def nearest_node(self, point: Point) -> TransitRouterNode: ...
    def out_edges(self, node: TransitRouterNode) -> Sequence[TransitRouterEdge]: ...


@runtime_checkable
class ScheduleLookup(Protocol):
    def next_departure_time(
        self, route: TransitRoute, stop: TransitRouteStop, after_time: float
    ) -> float:
        """Earliest departure of `route` at `stop` not before `after_time` (seconds)."""


# ------------- Costs --------------------
@runtime_checkable
class TravelTimeAndDisutility(Protocol):
    """
    Responsibilities:
      • Time and disutility of router-graph edges at a given clock time.
      • Beeline walking time/disutility between two arbitrary points.
    """

    def link_travel_time(
        self, edge: TransitRouterEdge, time: float, person: Person | None
    ) -> float: ...
    def link_travel_disutility(
        self, edge: TransitRouterEdge, time: float, person: Person | None
    ) -> float: ...
    def walk_travel_time(self, person: Person | None, a: Point, b: Point) -> float: ...
    def walk_travel_disutility(self, person: Person | None, a: Point, b: Point) -> float: ...


@runtime_checkable
class AccessEgressModel(Protocol):
    """
    Responsibilities:
      • Choose the first/last mile mode and price it as a complete Leg.
      • Tell teleported modes (single leg, no network path) from network modes.
      • Price the direct origin-destination trip.
    """

    def price_leg(
        self, person: Person | None, a: Point, b: Point, time: float, surcharge_on: bool
    ) -> Leg: ...
    def is_teleported_mode(self, mode: str) -> bool: ...
    def direct_disutility(self, person: Person | None, a: Point, b: Point) -> float: ...


# ------------- Search --------------------
@runtime_checkable
class PathSearch(Protocol):
    def search(
        self,
        graph: TransitGraph,
        disutility: TravelTimeAndDisutility,
        travel_time: TravelTimeAndDisutility,
        sources: Mapping[TransitRouterNode, InitialNode],
        sinks: Mapping[TransitRouterNode, InitialNode],
        person: Person | None,
    ) -> Path | None: ...


@runtime_checkable
class Facility(Protocol):
    coord: Point
