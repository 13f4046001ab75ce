# domain/routing/routing_core.py
from va_transit.app.protocols import (
    AccessEgressModel,
    Facility,
    PathSearch,
    ScheduleLookup,
    TransitGraph,
    TravelTimeAndDisutility,
)
from va_transit.config.models import RouterModel
from va_transit.domain.entities.geography import Point
from va_transit.domain.entities.legs import Leg, TransportMode
from va_transit.domain.routing.routing_access_egress import AccessEgressPricer
from va_transit.domain.routing.routing_candidates import CandidateNodeSetBuilder
from va_transit.domain.routing.routing_itinerary import ItineraryBuilder
from va_transit.domain.routing.routing_stop_locator import StopLocator
from va_transit.io.business_events import RouteCalculatedBiz, RouteNotFoundBiz
from va_transit.sim.hooks import NoopHooks, RouterHooks


class VariableAccessTransitRouter:
    """
    Door-to-door pt router with a variable first/last mile.

    Not safe for concurrent requests: the path search keeps per-call state and the
    surcharge flag is read unsynchronised. Build one instance per worker; the graph
    and schedule it reads must not change once it exists.
    """

    def __init__(
        self,
        cfg: RouterModel,
        *,
        network: TransitGraph,
        schedule: ScheduleLookup,
        travel: TravelTimeAndDisutility,
        access_egress: AccessEgressModel,
        path_search: PathSearch,
        surcharge_on: bool,
        hooks: RouterHooks | None = None,
        run_id: str = "local",
        instance: int = 0,
    ):
        self.cfg = cfg
        self.network, self.schedule, self.travel = network, schedule, travel
        self.access_egress, self.path_search = access_egress, path_search
        self._surcharge_on = bool(surcharge_on)
        self.hooks = hooks or NoopHooks()
        self.run_id = run_id
        self._seq = 0

        self.locator = StopLocator(
            network,
            search_radius_m=cfg.search_radius_m,
            extension_radius_m=cfg.extension_radius_m,
        )
        self.pricer = AccessEgressPricer(access_egress, cfg)
        self.candidates = CandidateNodeSetBuilder(
            self.locator, self.pricer, surcharge_on=self._surcharge_on, hooks=self.hooks
        )
        self.itinerary = ItineraryBuilder(cfg, schedule, access_egress, travel)
        self.hooks.router_start(surcharge_on=self._surcharge_on, instance=instance)

    @property
    def surcharge_on(self) -> bool:
        return self._surcharge_on

    def calc_route(
        self, from_facility: Facility, to_facility: Facility, departure_time: float, person
    ) -> list[Leg] | None:
        return self.route(person, from_facility.coord, to_facility.coord, departure_time)

    def route(
        self, person, origin: Point, destination: Point, departure_time: float
    ) -> list[Leg] | None:
        self._seq += 1
        pid = getattr(person, "id", None)
        self.hooks.route_start(
            person_id=pid, origin=origin, destination=destination, t=departure_time
        )
        try:
            return self._route(person, pid, origin, destination, departure_time)
        except Exception as exc:
            self.hooks.error(person_id=pid, t=departure_time, exc=exc)
            raise

    def _route(self, person, pid, origin, destination, departure_time):
        from_nodes = self.candidates.build(person, origin, departure_time, side="origin")
        to_nodes = self.candidates.build(person, destination, departure_time, side="destination")

        path = self.path_search.search(
            self.network, self.travel, self.travel, from_nodes, to_nodes, person
        )
        if path is None:
            fallback = self.cfg.fallback_to_direct_on_no_path
            self.hooks.no_path(person_id=pid, t=departure_time, fallback=fallback)
            if not fallback:
                self.hooks.biz(
                    RouteNotFoundBiz(
                        run_id=self.run_id,
                        t=departure_time,
                        seq=self._seq,
                        name="RouteNotFound",
                        person_id=pid,
                        origin=(origin.x, origin.y),
                        destination=(destination.x, destination.y),
                    )
                )
                return None
            legs = self.direct_legs(person, origin, destination, departure_time)
            return self._done(pid, origin, destination, departure_time, legs, direct=True)

        direct_cost = self.access_egress.direct_disutility(person, origin, destination)
        path_cost = (
            path.travel_cost
            + from_nodes[path.first_node].initial_cost
            + to_nodes[path.last_node].initial_cost
        )
        if direct_cost * self.cfg.direct_walk_factor < path_cost:
            self.hooks.direct_chosen(
                person_id=pid, t=departure_time, direct_cost=direct_cost, path_cost=path_cost
            )
            legs = self.direct_legs(person, origin, destination, departure_time)
            return self._done(
                pid, origin, destination, departure_time, legs, direct=True, cost=direct_cost
            )

        legs = self.itinerary.build(departure_time, path, origin, destination, person)
        return self._done(pid, origin, destination, departure_time, legs, cost=path_cost)

    def direct_legs(self, person, origin: Point, destination: Point, time: float) -> list[Leg]:
        return [self.itinerary.direct_leg(person, origin, destination, time)]

    def _done(self, pid, origin, destination, t, legs, *, direct=False, cost=None):
        n_pt = sum(1 for leg in legs if leg.mode == TransportMode.pt)
        self.hooks.route_end(
            person_id=pid, t=t, legs=len(legs), pt_legs=n_pt, direct=direct or n_pt == 0
        )
        self.hooks.biz(
            RouteCalculatedBiz(
                run_id=self.run_id,
                t=t,
                seq=self._seq,
                name="RouteCalculated",
                person_id=pid,
                origin=(origin.x, origin.y),
                destination=(destination.x, destination.y),
                n_legs=len(legs),
                n_pt_legs=n_pt,
                direct=direct or n_pt == 0,
                arrival_t=legs[-1].arrival_time if legs else None,
                cost=cost,
            )
        )
        return legs
