# domain/entities/schedule.py
from dataclasses import dataclass, field

from va_transit.domain.entities.geography import Point


@dataclass(frozen=True)
class TransitStopFacility:
    id: str
    coord: Point
    link_id: str | None = None  # reference link in the physical network


@dataclass(frozen=True)
class TransitRouteStop:
    stop: TransitStopFacility
    arrival_offset: float | None = None  # seconds after the route's departure; None => undefined
    departure_offset: float | None = None

    @property
    def effective_arrival_offset(self) -> float:
        return self.arrival_offset if self.arrival_offset is not None else self.departure_offset

    @property
    def effective_departure_offset(self) -> float:
        return self.departure_offset if self.departure_offset is not None else self.arrival_offset


@dataclass(frozen=True)
class Departure:
    id: str
    departure_time: float  # at the first stop of the route


# routes and lines compare by identity
@dataclass(eq=False)
class TransitRoute:
    id: str
    transport_mode: str
    stops: list[TransitRouteStop]
    departures: list[Departure] = field(default_factory=list)


@dataclass(eq=False)
class TransitLine:
    id: str
    routes: dict[str, TransitRoute] = field(default_factory=dict)


@dataclass
class TransitSchedule:
    facilities: dict[str, TransitStopFacility] = field(default_factory=dict)
    lines: dict[str, TransitLine] = field(default_factory=dict)

    def add_facility(self, stop: TransitStopFacility) -> None:
        if stop.id in self.facilities:
            raise ValueError(f"duplicate stop facility {stop.id!r}")
        self.facilities[stop.id] = stop

    def add_line(self, line: TransitLine) -> None:
        if line.id in self.lines:
            raise ValueError(f"duplicate transit line {line.id!r}")
        self.lines[line.id] = line
