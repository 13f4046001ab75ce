# domain/routing/routing_factory.py
from va_transit.config.models import RouterSetupModel, SurchargeModel
from va_transit.domain.entities.schedule import TransitSchedule
from va_transit.domain.routing.routing_core import VariableAccessTransitRouter
from va_transit.domain.routing.routing_disutility import TransitTravelTimeAndDisutility
from va_transit.domain.routing.routing_network import TransitRouterNetwork
from va_transit.domain.routing.routing_schedule import PreparedTransitSchedule
from va_transit.runtime.registries import make_access_egress, make_path_search
from va_transit.sim.hooks import RouterHooks
from va_transit.sim.rng import RNGRegistry


def draw_surcharge_flag(cfg: SurchargeModel, rng_registry: RNGRegistry, instance: int) -> bool:
    """
    One flag per router instance, fixed for its lifetime. A fresh instance per
    iteration/worker with the random policy gives each traveller the surcharge on
    roughly every other routing.
    """
    if cfg.policy == "on":
        return True
    if cfg.policy == "off":
        return False
    return rng_registry.coin("variable_surcharge", instance)


def build_network(cfg: RouterSetupModel, schedule: TransitSchedule) -> TransitRouterNetwork:
    return TransitRouterNetwork.from_schedule(
        schedule, cfg.router.max_beeline_walk_connection_distance_m
    )


def build_router(
    cfg: RouterSetupModel,
    schedule: TransitSchedule,
    rng_registry: RNGRegistry,
    *,
    network: TransitRouterNetwork | None = None,
    hooks: RouterHooks | None = None,
    instance: int = 0,
) -> VariableAccessTransitRouter:
    # network and schedule are shared read-only across instances
    network = network if network is not None else build_network(cfg, schedule)
    prepared = PreparedTransitSchedule(schedule)
    travel = TransitTravelTimeAndDisutility(cfg.router, prepared)
    access_egress = make_access_egress(
        cfg.access_egress, deps={"walk": travel, "router": cfg.router}
    )
    path_search = make_path_search(cfg.path_search)

    return VariableAccessTransitRouter(
        cfg.router,
        network=network,
        schedule=prepared,
        travel=travel,
        access_egress=access_egress,
        path_search=path_search,
        surcharge_on=draw_surcharge_flag(cfg.surcharge, rng_registry, instance),
        hooks=hooks,
        run_id=cfg.run_id,
        instance=instance,
    )
