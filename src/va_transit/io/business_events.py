# io/business_events.py

from dataclasses import dataclass


# Base type for analytics records (not part of the returned itinerary)
@dataclass
class BizEvent:
    run_id: str
    t: float  # requested departure time
    seq: int  # request sequence on the router instance
    name: str


@dataclass
class RouteCalculatedBiz(BizEvent):
    person_id: str | None
    origin: tuple[float, float]
    destination: tuple[float, float]
    n_legs: int
    n_pt_legs: int
    direct: bool
    arrival_t: float | None = None
    cost: float | None = None


@dataclass
class RouteNotFoundBiz(BizEvent):
    person_id: str | None
    origin: tuple[float, float]
    destination: tuple[float, float]
