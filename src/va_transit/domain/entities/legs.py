# domain/entities/legs.py
from dataclasses import dataclass, replace

from va_transit.domain.entities.geography import Point
from va_transit.domain.entities.schedule import TransitStopFacility


class TransportMode:
    walk = "walk"
    transit_walk = "transit_walk"
    access_walk = "access_walk"
    egress_walk = "egress_walk"
    pt = "pt"
    drt = "drt"


WALK_MODES = frozenset(
    {
        TransportMode.walk,
        TransportMode.transit_walk,
        TransportMode.access_walk,
        TransportMode.egress_walk,
    }
)


@dataclass(frozen=True)
class GenericRoute:
    start: Point
    end: Point
    distance_m: float
    travel_time: float
    start_link_id: str | None = None
    end_link_id: str | None = None


@dataclass(frozen=True)
class TransitPassengerRoute:
    access_stop: TransitStopFacility
    line_id: str
    route_id: str
    egress_stop: TransitStopFacility
    distance_m: float
    travel_time: float
    network_distance_m: float = 0.0  # summed router-graph edge lengths while on board

    @property
    def start(self) -> Point:
        return self.access_stop.coord

    @property
    def end(self) -> Point:
        return self.egress_stop.coord


Route = GenericRoute | TransitPassengerRoute


@dataclass(frozen=True)
class Leg:
    mode: str
    departure_time: float
    travel_time: float
    route: Route

    @property
    def arrival_time(self) -> float:
        return self.departure_time + self.travel_time

    @property
    def distance_m(self) -> float:
        return self.route.distance_m

    def starting_at(self, t: float) -> "Leg":
        return replace(self, departure_time=t)
