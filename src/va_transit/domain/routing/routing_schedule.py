# domain/routing/routing_schedule.py
import math

import numpy as np

from va_transit.app.protocols import ScheduleLookup
from va_transit.domain.entities.schedule import TransitRoute, TransitRouteStop, TransitSchedule
from va_transit.sim.clock import DAY


class PreparedTransitSchedule(ScheduleLookup):
    """Next-departure lookup over per-route sorted departure arrays, built lazily."""

    def __init__(self, schedule: TransitSchedule | None = None):
        self.schedule = schedule
        self._sorted: dict[int, np.ndarray] = {}

    def _departures(self, route: TransitRoute) -> np.ndarray:
        key = id(route)
        deps = self._sorted.get(key)
        if deps is None:
            deps = np.sort(np.array([d.departure_time for d in route.departures], dtype=float))
            self._sorted[key] = deps
        return deps

    def next_departure_time(
        self, route: TransitRoute, stop: TransitRouteStop, after_time: float
    ) -> float:
        deps = self._departures(route)
        if deps.size == 0:
            return math.inf
        offset = stop.effective_departure_offset or 0.0
        at_terminus = after_time - offset
        day_shift = 0.0
        if at_terminus >= DAY:
            day_shift = (at_terminus // DAY) * DAY
            at_terminus -= day_shift
        pos = int(np.searchsorted(deps, at_terminus, side="left"))
        if pos >= deps.size:
            # nothing left today; first run of the next day
            return float(deps[0]) + DAY + day_shift + offset
        return float(deps[pos]) + day_shift + offset
