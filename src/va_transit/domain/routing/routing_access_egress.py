# domain/routing/routing_access_egress.py
from va_transit.app.protocols import AccessEgressModel, TravelTimeAndDisutility
from va_transit.config.models import AccessModeModel, RouterModel
from va_transit.domain.entities.geography import (
    Point,
    euclidean_distance,
    manhattan_distance,
)
from va_transit.domain.entities.legs import WALK_MODES, GenericRoute, Leg
from va_transit.domain.errors import UnsupportedModeError


class BeelineWalkAccessEgress(AccessEgressModel):
    def __init__(
        self,
        *,
        walk: TravelTimeAndDisutility,
        mode: str = "walk",
        speed_mps: float = 3.0 / 3.6,
        beeline_distance_factor: float = 1.3,
    ):
        self.walk, self.mode, self.speed = walk, mode, speed_mps
        self.factor = beeline_distance_factor

    def price_leg(self, person, a: Point, b: Point, time: float, surcharge_on: bool) -> Leg:
        d = self.factor * euclidean_distance(a, b)
        t = d / self.speed
        return Leg(self.mode, time, t, GenericRoute(a, b, d, t))

    def is_teleported_mode(self, mode: str) -> bool:
        return mode == self.mode

    def direct_disutility(self, person, a: Point, b: Point) -> float:
        return self.walk.walk_travel_disutility(person, a, b)


class DistanceBasedAccessEgress(AccessEgressModel):
    """
    Picks the access/egress mode by beeline distance: first entry whose max_distance_m
    covers it, else the last one. Teleported modes travel beeline * factor, network
    modes travel the Manhattan distance.

    Travel time surcharge applies once per leg when either end lies on a discouraged
    stop: access legs end at the stop, egress legs start there. It only applies while
    surcharge_on is set; callers flip it per router instance, never per stop.
    """

    def __init__(
        self,
        *,
        walk: TravelTimeAndDisutility,
        modes: list[AccessModeModel],
        beeline_distance_factor: float = 1.3,
        surcharge_s: float = 0.0,
        discouraged_stops: list[tuple[float, float]] | None = None,
        discourage_tolerance_m: float = 1.0,
    ):
        self.walk, self.modes, self.factor = walk, list(modes), beeline_distance_factor
        self.surcharge_s = surcharge_s
        self.discouraged = [Point(float(x), float(y)) for x, y in (discouraged_stops or [])]
        self.tol = discourage_tolerance_m
        self._teleported = {m.mode for m in self.modes if m.teleported}

    def _pick(self, beeline_m: float) -> AccessModeModel:
        for m in self.modes:
            if beeline_m <= m.max_distance_m:
                return m
        return self.modes[-1]

    def _is_discouraged(self, p: Point) -> bool:
        return any(euclidean_distance(p, q) <= self.tol for q in self.discouraged)

    def price_leg(self, person, a: Point, b: Point, time: float, surcharge_on: bool) -> Leg:
        beeline = euclidean_distance(a, b)
        m = self._pick(beeline)
        d = self.factor * beeline if m.teleported else manhattan_distance(a, b)
        t = d / m.speed_mps
        if surcharge_on and self.surcharge_s > 0 and (
            self._is_discouraged(b) or self._is_discouraged(a)
        ):
            t += self.surcharge_s
        return Leg(m.mode, time, t, GenericRoute(a, b, d, t))

    def is_teleported_mode(self, mode: str) -> bool:
        return mode in self._teleported

    def direct_disutility(self, person, a: Point, b: Point) -> float:
        return self.walk.walk_travel_disutility(person, a, b)


class AccessEgressPricer:
    """Prices first/last mile legs and turns them into search entry/exit costs."""

    def __init__(self, model: AccessEgressModel, cfg: RouterModel):
        self.model, self.cfg = model, cfg

    def price(self, person, a: Point, b: Point, time: float, surcharge_on: bool) -> Leg:
        return self.model.price_leg(person, a, b, time, surcharge_on)

    def initial_cost(self, leg: Leg) -> float:
        # marginal utilities are negative; negate to get a positive cost
        t, d = leg.travel_time, leg.distance_m
        if leg.mode in WALK_MODES:
            return (
                -t * self.cfg.marginal_utility_of_travel_time_walk_utl_s
                - d * self.cfg.marginal_utility_of_travel_distance_pt_utl_m
            )
        params = self.cfg.mode_params.get(leg.mode)
        if params is None:
            raise UnsupportedModeError(leg.mode)
        return (
            -t * params.marginal_utility_of_travel_time_utl_s
            - d * params.marginal_utility_of_travel_distance_utl_m
        )
