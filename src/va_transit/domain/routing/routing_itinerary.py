# domain/routing/routing_itinerary.py
from dataclasses import dataclass, replace

from va_transit.app.protocols import AccessEgressModel, ScheduleLookup, TravelTimeAndDisutility
from va_transit.config.models import RouterModel
from va_transit.domain.entities.geography import Point, euclidean_distance
from va_transit.domain.entities.legs import (
    GenericRoute,
    Leg,
    TransitPassengerRoute,
    TransportMode,
)
from va_transit.domain.entities.network import Path, TransitRouterEdge, TransitRouterNode
from va_transit.domain.entities.schedule import (
    TransitLine,
    TransitRoute,
    TransitRouteStop,
    TransitStopFacility,
)
from va_transit.domain.errors import ItineraryInconsistencyError


# ---- scan states ----


@dataclass(frozen=True)
class NoLine:
    pass


@dataclass(frozen=True)
class OnLine:
    line: TransitLine
    route: TransitRoute
    boarding: TransitRouteStop
    access_stop: TransitStopFacility
    distance_m: float  # edge lengths since boarding


NO_LINE = NoLine()


@dataclass
class ScanContext:
    """Mutable bookkeeping of one reconstruction; discarded with the request."""

    person: object
    from_point: Point
    to_point: Point
    time: float
    legs: list[Leg]
    state: NoLine | OnLine = NO_LINE
    access_stop: TransitStopFacility | None = None  # last stop reached by pt or transfer
    pt_legs: int = 0
    prev_edge: TransitRouterEdge | None = None

    def append(self, leg: Leg) -> Leg:
        leg = leg.starting_at(self.time)
        self.legs.append(leg)
        self.time = leg.arrival_time
        return leg


class ItineraryBuilder:
    """
    Turns a least-cost path through the router graph into timed legs.

    Transitions are driven by the edge kind and whether the edge continues the open
    route:
      NoLine  + transfer           -> NoLine
      NoLine  + transit            -> OnLine   (emits transfer walk or first access)
      OnLine  + transfer           -> NoLine   (emits pt leg)
      OnLine  + transit same route -> OnLine   (distance only)
      OnLine  + transit new route  -> OnLine   (emits pt leg, then as NoLine + transit)
    """

    def __init__(
        self,
        cfg: RouterModel,
        schedule: ScheduleLookup,
        access_egress: AccessEgressModel,
        walk: TravelTimeAndDisutility,
    ):
        self.cfg, self.schedule, self.access_egress, self.walk = cfg, schedule, access_egress, walk

    def build(
        self, departure_time: float, path: Path, from_point: Point, to_point: Point, person
    ) -> list[Leg]:
        ctx = ScanContext(person, from_point, to_point, departure_time, [])
        for edge in path.edges:
            if edge.is_transfer:
                self.on_transfer(ctx, edge)
            else:
                self.on_transit(ctx, edge)
            ctx.prev_edge = edge
        self.finish(ctx)
        if ctx.pt_legs == 0:
            # only walking between stops; report as a direct trip
            return [self.direct_leg(person, from_point, to_point, departure_time)]
        return ctx.legs

    # ---- transitions ----

    def on_transfer(self, ctx: ScanContext, edge: TransitRouterEdge) -> None:
        if isinstance(ctx.state, OnLine):
            # pt distance is the closing edge's length, not the on-board sum
            self._close_pt_leg(ctx, edge.from_node, distance_m=edge.length_m)
        ctx.state = NO_LINE

    def on_transit(self, ctx: ScanContext, edge: TransitRouterEdge) -> None:
        state = ctx.state
        if isinstance(state, OnLine):
            if edge.route is state.route:
                ctx.state = replace(state, distance_m=state.distance_m + edge.length_m)
                return
            # route changed without a transfer edge in between
            alight = ctx.prev_edge.to_node
            d = self.cfg.beeline_distance_factor * euclidean_distance(
                state.access_stop.coord, alight.stop.stop.coord
            )
            self._close_pt_leg(ctx, alight, distance_m=d)
            ctx.state = NO_LINE
        board = edge.from_node.stop
        if board is None:
            raise self._inconsistent(ctx, "transit edge without a boarding stop")
        boarding_stop = board.stop
        if ctx.access_stop != boarding_stop:
            if ctx.access_stop is not None:
                self._transfer_walk(ctx, ctx.access_stop, boarding_stop)
            else:
                self._first_access(ctx, boarding_stop)
        ctx.state = OnLine(
            line=edge.line,
            route=edge.route,
            boarding=board,
            access_stop=boarding_stop,
            distance_m=edge.length_m,
        )
        ctx.access_stop = boarding_stop

    def finish(self, ctx: ScanContext) -> None:
        if isinstance(ctx.state, OnLine):
            egress = ctx.prev_edge.to_node
            d = self.cfg.beeline_distance_factor * euclidean_distance(
                ctx.state.access_stop.coord, egress.stop.stop.coord
            )
            self._close_pt_leg(ctx, egress, distance_m=d)
            ctx.state = NO_LINE
        if ctx.prev_edge is None:
            return
        if ctx.access_stop is None:
            # no use of pt
            ctx.append(self._priced(ctx, ctx.from_point, ctx.to_point))
            return
        self._last_egress(ctx, ctx.access_stop)

    # ---- leg emitters ----

    def _close_pt_leg(self, ctx: ScanContext, egress: TransitRouterNode, *, distance_m: float):
        state: OnLine = ctx.state
        egress_stop = egress.stop.stop
        departure = self.schedule.next_departure_time(state.route, state.boarding, ctx.time)
        arrival = departure + (
            egress.stop.effective_arrival_offset - state.boarding.effective_departure_offset
        )
        travel = arrival - ctx.time
        route = TransitPassengerRoute(
            access_stop=state.access_stop,
            line_id=state.line.id,
            route_id=state.route.id,
            egress_stop=egress_stop,
            distance_m=distance_m,
            travel_time=travel,
            network_distance_m=state.distance_m,
        )
        ctx.append(Leg(TransportMode.pt, ctx.time, travel, route))
        ctx.pt_legs += 1
        ctx.access_stop = egress_stop

    def _connecting_walk(self, ctx: ScanContext, a: Point, b: Point, start_link, end_link) -> Leg:
        t = self.walk.walk_travel_time(ctx.person, a, b) + self.cfg.additional_transfer_time_s
        d = self.cfg.beeline_distance_factor * euclidean_distance(a, b)
        route = GenericRoute(a, b, d, t, start_link_id=start_link, end_link_id=end_link)
        return Leg(TransportMode.transit_walk, ctx.time, t, route)

    def _transfer_walk(
        self, ctx: ScanContext, alighted: TransitStopFacility, boarding: TransitStopFacility
    ) -> None:
        # KNOWN DISCREPANCY: time and distance run alighted -> boarding stop; it is unresolved
        # whether the reverse direction was meant. Kept as is.
        ctx.append(
            self._connecting_walk(
                ctx, alighted.coord, boarding.coord, alighted.link_id, boarding.link_id
            )
        )

    def _first_access(self, ctx: ScanContext, boarding: TransitStopFacility) -> None:
        leg = self._priced(ctx, ctx.from_point, boarding.coord)
        if self.access_egress.is_teleported_mode(leg.mode):
            ctx.append(replace(leg, route=replace(leg.route, end_link_id=boarding.link_id)))
            return
        leg = ctx.append(leg)
        ctx.append(
            self._connecting_walk(
                ctx, leg.route.end, boarding.coord, leg.route.end_link_id, boarding.link_id
            )
        )

    def _last_egress(self, ctx: ScanContext, alighted: TransitStopFacility) -> None:
        eleg = self._priced(ctx, alighted.coord, ctx.to_point)
        if self.access_egress.is_teleported_mode(eleg.mode):
            ctx.append(replace(eleg, route=replace(eleg.route, start_link_id=alighted.link_id)))
            return
        ctx.append(
            self._connecting_walk(
                ctx, alighted.coord, eleg.route.start, alighted.link_id, eleg.route.start_link_id
            )
        )
        ctx.append(eleg)

    # ---- helpers ----

    def _priced(self, ctx: ScanContext, a: Point, b: Point) -> Leg:
        leg = self.access_egress.price_leg(ctx.person, a, b, ctx.time, False)
        if leg is None or leg.route is None:
            raise self._inconsistent(ctx, "access/egress model returned no leg")
        return leg

    def direct_leg(self, person, a: Point, b: Point, time: float) -> Leg:
        leg = self.access_egress.price_leg(person, a, b, time, False)
        if leg is None or leg.route is None:
            raise ItineraryInconsistencyError(
                "access/egress model returned no direct leg",
                person=person,
                from_point=a,
                to_point=b,
                time=time,
            )
        return leg.starting_at(time)

    @staticmethod
    def _inconsistent(ctx: ScanContext, reason: str) -> ItineraryInconsistencyError:
        return ItineraryInconsistencyError(
            reason,
            person=ctx.person,
            from_point=ctx.from_point,
            to_point=ctx.to_point,
            time=ctx.time,
        )
