# io/schedule_io.py
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, model_validator

from va_transit.domain.entities.geography import Point
from va_transit.domain.entities.schedule import (
    Departure,
    TransitLine,
    TransitRoute,
    TransitRouteStop,
    TransitSchedule,
    TransitStopFacility,
)


class StopFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    id: str
    x: float
    y: float
    link_id: str | None = None


class RouteStopFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    stop: str
    arrival_offset: float | None = None
    departure_offset: float | None = None

    @model_validator(mode="after")
    def _one_offset(self):
        if self.arrival_offset is None and self.departure_offset is None:
            raise ValueError(f"route stop {self.stop!r} needs an arrival or departure offset")
        return self


class RouteFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    id: str
    mode: str = "bus"
    stops: list[RouteStopFileModel]
    departures: list[float] = Field(default_factory=list)  # seconds at the first stop

    @model_validator(mode="after")
    def _two_stops(self):
        if len(self.stops) < 2:
            raise ValueError(f"route {self.id!r} needs at least two stops")
        return self


class LineFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    id: str
    routes: list[RouteFileModel]


class ScheduleFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    stops: list[StopFileModel]
    lines: list[LineFileModel] = Field(default_factory=list)


def schedule_from_dict(data: ScheduleFileModel | Mapping) -> TransitSchedule:
    model = data if isinstance(data, ScheduleFileModel) else ScheduleFileModel.model_validate(data)
    sched = TransitSchedule()
    for s in model.stops:
        sched.add_facility(TransitStopFacility(s.id, Point(s.x, s.y), s.link_id))
    for ln in model.lines:
        line = TransitLine(ln.id)
        for r in ln.routes:
            try:
                stops = [
                    TransitRouteStop(
                        sched.facilities[rs.stop], rs.arrival_offset, rs.departure_offset
                    )
                    for rs in r.stops
                ]
            except KeyError as e:
                raise ValueError(f"route {r.id!r} references unknown stop {e.args[0]!r}") from e
            departures = [
                Departure(f"{r.id}_{i}", float(t)) for i, t in enumerate(sorted(r.departures))
            ]
            line.routes[r.id] = TransitRoute(r.id, r.mode, stops, departures)
        sched.add_line(line)
    return sched
