# domain/routing/routing_disutility.py
from va_transit.app.protocols import ScheduleLookup, TravelTimeAndDisutility
from va_transit.config.models import RouterModel
from va_transit.domain.entities.geography import Point, euclidean_distance
from va_transit.domain.entities.network import TransitRouterEdge


class TransitTravelTimeAndDisutility(TravelTimeAndDisutility):
    """
    Edge costs for the router graph. Marginal utilities in RouterModel are negative
    (utils per second / per meter); every value returned here is a positive cost.
    """

    def __init__(self, cfg: RouterModel, schedule: ScheduleLookup):
        self.cfg, self.schedule = cfg, schedule

    # ---- edges ----

    def _wait_and_ride(self, edge: TransitRouterEdge, time: float) -> tuple[float, float]:
        board = edge.from_node.stop
        departure = self.schedule.next_departure_time(edge.route, board, time)
        ride = edge.to_node.stop.effective_arrival_offset - board.effective_departure_offset
        return departure - time, ride

    def link_travel_time(self, edge: TransitRouterEdge, time: float, person=None) -> float:
        if edge.is_transfer:
            walk = edge.length_m / self.cfg.beeline_walk_speed_mps
            return walk + self.cfg.additional_transfer_time_s
        wait, ride = self._wait_and_ride(edge, time)
        return wait + ride

    def link_travel_disutility(self, edge: TransitRouterEdge, time: float, person=None) -> float:
        c = self.cfg
        if edge.is_transfer:
            walk = edge.length_m / c.beeline_walk_speed_mps
            return (
                -walk * c.marginal_utility_of_travel_time_walk_utl_s
                - c.additional_transfer_time_s * c.marginal_utility_of_waiting_pt_utl_s
                - c.utility_of_line_switch_utl
            )
        wait, ride = self._wait_and_ride(edge, time)
        return (
            -ride * c.marginal_utility_of_travel_time_pt_utl_s
            - wait * c.marginal_utility_of_waiting_pt_utl_s
            - edge.length_m * c.marginal_utility_of_travel_distance_pt_utl_m
        )

    # ---- beeline walking between arbitrary points ----

    def walk_travel_time(self, person, a: Point, b: Point) -> float:
        return euclidean_distance(a, b) / self.cfg.beeline_walk_speed_mps

    def walk_travel_disutility(self, person, a: Point, b: Point) -> float:
        c = self.cfg
        t = self.walk_travel_time(person, a, b)
        d = c.beeline_distance_factor * euclidean_distance(a, b)
        return (
            -t * c.marginal_utility_of_travel_time_walk_utl_s
            - d * c.marginal_utility_of_travel_distance_pt_utl_m
        )
