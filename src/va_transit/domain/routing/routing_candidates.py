# domain/routing/routing_candidates.py
from va_transit.domain.entities.geography import Point
from va_transit.domain.entities.network import InitialNode, TransitRouterNode
from va_transit.domain.routing.routing_access_egress import AccessEgressPricer
from va_transit.domain.routing.routing_stop_locator import StopLocator
from va_transit.sim.hooks import NoopHooks, RouterHooks


class CandidateNodeSetBuilder:
    """
    Weighted entry/exit nodes around a point. The surcharge flag is the router
    instance's: all discouraged stops of one request share the same treatment.
    """

    def __init__(
        self,
        locator: StopLocator,
        pricer: AccessEgressPricer,
        *,
        surcharge_on: bool,
        hooks: RouterHooks | None = None,
    ):
        self.locator, self.pricer, self.surcharge_on = locator, pricer, surcharge_on
        self.hooks = hooks or NoopHooks()

    def build(
        self, person, point: Point, departure_time: float, *, side: str = "origin"
    ) -> dict[TransitRouterNode, InitialNode]:
        nodes, extended = self.locator.nearest_nodes(point)
        out: dict[TransitRouterNode, InitialNode] = {}  # insertion order matters downstream
        for node in nodes:
            leg = self.pricer.price(
                person, point, node.stop.stop.coord, departure_time, self.surcharge_on
            )
            out[node] = InitialNode(
                initial_cost=self.pricer.initial_cost(leg),
                initial_time=departure_time + leg.travel_time,
            )
        self.hooks.candidates(side=side, point=point, n=len(out), extended=extended)
        return out
