# tests/routing/test_access_egress_pricing.py
import pytest

from va_transit.config.models import AccessModeModel, ModeParamsModel, RouterModel
from va_transit.domain.entities.geography import Point
from va_transit.domain.entities.legs import GenericRoute, Leg
from va_transit.domain.errors import UnsupportedModeError
from va_transit.domain.routing.routing_access_egress import (
    AccessEgressPricer,
    BeelineWalkAccessEgress,
    DistanceBasedAccessEgress,
)
from va_transit.domain.routing.routing_candidates import CandidateNodeSetBuilder
from va_transit.domain.routing.routing_disutility import TransitTravelTimeAndDisutility
from va_transit.domain.routing.routing_network import TransitRouterNetwork
from va_transit.domain.routing.routing_schedule import PreparedTransitSchedule
from va_transit.domain.routing.routing_stop_locator import StopLocator
from va_transit.sim.clock import hms


def _leg(mode, t, d):
    return Leg(mode, 0.0, t, GenericRoute(Point(0.0, 0.0), Point(d, 0.0), d, t))


def _by_stop(candidates):
    return {n.stop.stop.id: v for n, v in candidates.items()}


def _walk(cfg):
    return TransitTravelTimeAndDisutility(cfg, PreparedTransitSchedule())


def _distance_based(cfg, **kw):
    modes = kw.pop(
        "modes",
        [
            AccessModeModel(mode="walk", max_distance_m=300.0, speed_mps=1.0),
            AccessModeModel(mode="drt", max_distance_m=5000.0, speed_mps=10.0, teleported=False),
        ],
    )
    return DistanceBasedAccessEgress(
        walk=_walk(cfg), modes=modes, beeline_distance_factor=cfg.beeline_distance_factor, **kw
    )


def test_walk_leg_priced_on_beeline_times_factor():
    cfg = RouterModel(beeline_distance_factor=1.3)
    model = BeelineWalkAccessEgress(walk=_walk(cfg), speed_mps=1.3, beeline_distance_factor=1.3)
    leg = model.price_leg(None, Point(0.0, 0.0), Point(300.0, 400.0), hms(8), False)
    assert leg.mode == "walk"
    assert leg.departure_time == hms(8)
    assert leg.distance_m == pytest.approx(650.0)
    assert leg.travel_time == pytest.approx(500.0)
    assert model.is_teleported_mode("walk")
    assert not model.is_teleported_mode("drt")


def test_walk_initial_cost():
    cfg = RouterModel(marginal_utility_of_travel_distance_pt_utl_m=-0.002)
    pricer = AccessEgressPricer(None, cfg)
    cost = pricer.initial_cost(_leg("walk", 100.0, 80.0))
    assert cost == pytest.approx(100.0 * 18.0 / 3600 + 80.0 * 0.002)
    # the other walk flavours are priced the same
    assert pricer.initial_cost(_leg("access_walk", 100.0, 80.0)) == pytest.approx(cost)


def test_drt_initial_cost_uses_its_mode_params():
    cfg = RouterModel()
    cost = AccessEgressPricer(None, cfg).initial_cost(_leg("drt", 360.0, 3000.0))
    assert cost == pytest.approx(360.0 * 10.0 / 3600)


def test_configured_mode_params_replace_defaults():
    cfg = RouterModel(
        mode_params={
            "bike": ModeParamsModel(
                marginal_utility_of_travel_time_utl_s=-0.01,
                marginal_utility_of_travel_distance_utl_m=-0.001,
            )
        }
    )
    pricer = AccessEgressPricer(None, cfg)
    assert pricer.initial_cost(_leg("bike", 100.0, 500.0)) == pytest.approx(1.5)
    with pytest.raises(UnsupportedModeError):
        pricer.initial_cost(_leg("drt", 100.0, 500.0))


def test_unknown_mode_is_fatal():
    with pytest.raises(UnsupportedModeError) as ei:
        AccessEgressPricer(None, RouterModel()).initial_cost(_leg("car", 60.0, 1000.0))
    assert ei.value.mode == "car"
    assert "car" in str(ei.value)


def test_distance_based_picks_mode_by_beeline():
    cfg = RouterModel(beeline_distance_factor=1.0)
    model = _distance_based(cfg)
    near = model.price_leg(None, Point(0.0, 0.0), Point(200.0, 0.0), 0.0, False)
    assert (near.mode, near.travel_time) == ("walk", pytest.approx(200.0))
    far = model.price_leg(None, Point(0.0, 0.0), Point(300.0, 400.0), 0.0, False)
    # network mode: Manhattan distance
    assert far.mode == "drt"
    assert far.distance_m == pytest.approx(700.0)
    assert far.travel_time == pytest.approx(70.0)
    beyond = model.price_leg(None, Point(0.0, 0.0), Point(9000.0, 0.0), 0.0, False)
    assert beyond.mode == "drt"
    assert model.is_teleported_mode("walk")
    assert not model.is_teleported_mode("drt")


def test_surcharge_only_when_switched_on():
    cfg = RouterModel(beeline_distance_factor=1.0)
    stop = Point(200.0, 0.0)
    model = _distance_based(cfg, surcharge_s=600.0, discouraged_stops=[(200.0, 0.0)])
    off = model.price_leg(None, Point(0.0, 0.0), stop, 0.0, False)
    on = model.price_leg(None, Point(0.0, 0.0), stop, 0.0, True)
    assert on.travel_time == pytest.approx(off.travel_time + 600.0)
    # egress direction
    back = model.price_leg(None, stop, Point(0.0, 0.0), 0.0, True)
    assert back.travel_time == pytest.approx(off.travel_time + 600.0)
    other = model.price_leg(None, Point(0.0, 0.0), Point(0.0, 200.0), 0.0, True)
    assert other.travel_time == pytest.approx(200.0)


def test_surcharge_added_once_when_both_ends_are_discouraged():
    cfg = RouterModel(beeline_distance_factor=1.0)
    a, b = Point(0.0, 0.0), Point(200.0, 0.0)
    model = _distance_based(cfg, surcharge_s=600.0, discouraged_stops=[(0.0, 0.0), (200.0, 0.0)])
    leg = model.price_leg(None, a, b, 0.0, True)
    assert leg.travel_time == pytest.approx(200.0 + 600.0)
    # within tolerance of a discouraged stop still counts
    near = model.price_leg(None, Point(0.0, -300.0), Point(200.5, 0.0), 0.0, True)
    assert near.travel_time == pytest.approx(near.distance_m / 10.0 + 600.0)


def test_candidates_carry_cost_and_arrival_time(two_lines, person):
    cfg = RouterModel(beeline_distance_factor=1.0)
    net = TransitRouterNetwork.from_schedule(two_lines, 100.0)
    locator = StopLocator(net, search_radius_m=500.0, extension_radius_m=200.0)
    pricer = AccessEgressPricer(
        BeelineWalkAccessEgress(walk=_walk(cfg), speed_mps=1.0, beeline_distance_factor=1.0), cfg
    )
    seen = []

    class Hooks:
        def candidates(self, **kw):
            seen.append(kw)

    builder = CandidateNodeSetBuilder(locator, pricer, surcharge_on=False, hooks=Hooks())
    out = builder.build(person, Point(1000.0, -30.0), hms(8), side="destination")

    assert [n.stop.stop.id for n in out] == ["B", "B2"]
    b, b2 = out.values()
    assert b.initial_time == pytest.approx(hms(8) + 30.0)
    assert b2.initial_time == pytest.approx(hms(8) + 80.0)
    assert b.initial_cost == pytest.approx(30.0 * 18.0 / 3600)
    assert seen == [
        {"side": "destination", "point": Point(1000.0, -30.0), "n": 2, "extended": False}
    ]


def test_candidates_apply_instance_surcharge(two_lines, person):
    cfg = RouterModel(beeline_distance_factor=1.0)
    net = TransitRouterNetwork.from_schedule(two_lines, 100.0)
    locator = StopLocator(net, search_radius_m=100.0, extension_radius_m=0.0)
    pricer = AccessEgressPricer(
        _distance_based(cfg, surcharge_s=600.0, discouraged_stops=[(1000.0, 0.0)]), cfg
    )
    origin = Point(1000.0, 20.0)
    plain = CandidateNodeSetBuilder(locator, pricer, surcharge_on=False).build(
        person, origin, hms(8)
    )
    taxed = CandidateNodeSetBuilder(locator, pricer, surcharge_on=True).build(
        person, origin, hms(8)
    )
    plain, taxed = _by_stop(plain), _by_stop(taxed)
    assert taxed["B"].initial_time == pytest.approx(plain["B"].initial_time + 600.0)
    assert taxed["B"].initial_cost > plain["B"].initial_cost
    assert taxed["B2"] == plain["B2"]
