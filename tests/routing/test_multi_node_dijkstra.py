# tests/routing/test_multi_node_dijkstra.py
import pytest

from va_transit.config.models import RouterModel
from va_transit.domain.entities.network import InitialNode
from va_transit.domain.routing.routing_disutility import TransitTravelTimeAndDisutility
from va_transit.domain.routing.routing_network import TransitRouterNetwork
from va_transit.domain.routing.routing_path_search import MultiNodeDijkstra
from va_transit.domain.routing.routing_schedule import PreparedTransitSchedule
from va_transit.sim.clock import hms


def _setup(schedule, **router):
    cfg = RouterModel(**router)
    net = TransitRouterNetwork.from_schedule(schedule, 100.0)
    travel = TransitTravelTimeAndDisutility(cfg, PreparedTransitSchedule(schedule))
    return net, travel


def _node(net, stop_id):
    (node,) = [n for n in net.nodes if n.stop.stop.id == stop_id]
    return node


def test_least_cost_path_along_a_line(corridor):
    net, travel = _setup(corridor)
    a, c = _node(net, "A"), _node(net, "C")
    path = MultiNodeDijkstra().search(
        net,
        travel,
        travel,
        {a: InitialNode(0.5, hms(6, 5))},
        {c: InitialNode(0.7, hms(6, 5))},
    )
    assert [n.stop.stop.id for n in path.nodes] == ["A", "B", "C"]
    assert len(path.edges) == 2
    # wait 5 min, ride 10 min; initial values are not part of the path
    assert path.travel_time == pytest.approx(900.0)
    cfg = travel.cfg
    assert path.travel_cost == pytest.approx(
        -300.0 * cfg.marginal_utility_of_waiting_pt_utl_s
        - 600.0 * cfg.marginal_utility_of_travel_time_pt_utl_s
    )


def test_transfer_used_between_lines(two_lines):
    net, travel = _setup(two_lines, beeline_walk_speed_mps=1.0)
    a, d = _node(net, "A"), _node(net, "D")
    path = MultiNodeDijkstra().search(
        net, travel, travel, {a: InitialNode(0.0, hms(8))}, {d: InitialNode(0.0, hms(8))}
    )
    assert [e.is_transfer for e in path.edges] == [False, True, False]
    # A 08:00 -> B 08:02, walk 50 s, next L2 run at 08:05, arrive 08:07
    assert path.travel_time == pytest.approx(420.0)


def test_cheapest_source_and_sink_win(two_lines):
    net, travel = _setup(two_lines, beeline_walk_speed_mps=1.0)
    a, b2, d = _node(net, "A"), _node(net, "B2"), _node(net, "D")
    path = MultiNodeDijkstra().search(
        net,
        travel,
        travel,
        {a: InitialNode(0.0, hms(8)), b2: InitialNode(0.1, hms(8))},
        {d: InitialNode(0.0, hms(8))},
    )
    assert path.first_node is b2
    assert path.last_node is d
    assert len(path.edges) == 1


def test_source_that_is_also_a_sink_gives_an_empty_path(corridor):
    net, travel = _setup(corridor)
    a = _node(net, "A")
    path = MultiNodeDijkstra().search(
        net, travel, travel, {a: InitialNode(1.0, hms(6))}, {a: InitialNode(1.0, hms(6))}
    )
    assert path.edges == ()
    assert path.nodes == (a,)
    assert path.travel_time == 0.0
    assert path.travel_cost == 0.0


def test_unreachable_sink_returns_none(corridor):
    net, travel = _setup(corridor)
    a, c = _node(net, "A"), _node(net, "C")
    # nothing leaves C
    assert (
        MultiNodeDijkstra().search(
            net, travel, travel, {c: InitialNode(0.0, hms(6))}, {a: InitialNode(0.0, hms(6))}
        )
        is None
    )
    assert MultiNodeDijkstra().search(net, travel, travel, {}, {a: InitialNode(0.0, 0.0)}) is None
