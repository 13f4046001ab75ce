# va_transit/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from va_transit.config.models import RouterSetupModel
from va_transit.domain.entities.schedule import TransitSchedule
from va_transit.domain.routing.routing_core import VariableAccessTransitRouter
from va_transit.domain.routing.routing_factory import build_network, build_router
from va_transit.domain.routing.routing_network import TransitRouterNetwork
from va_transit.io.recorder import JsonlSink, Recorder
from va_transit.io.router_logging import RouterLogging
from va_transit.runtime.resources import load_schedule_from_path
from va_transit.sim.hooks import NoopHooks, RouterHooks
from va_transit.sim.rng import RNGRegistry


@dataclass
class App:
    config: RouterSetupModel
    rng: RNGRegistry
    schedule: TransitSchedule
    network: TransitRouterNetwork
    router: VariableAccessTransitRouter
    hooks: RouterHooks


def build(
    cfg: RouterSetupModel | Mapping,
    *,
    schedule: TransitSchedule | None = None,
    instance: int = 0,
    use_logging: bool = True,
    recorder: Recorder | None = None,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, RouterSetupModel) else RouterSetupModel.model_validate(cfg)

    # 1) RNG
    rng_registry = RNGRegistry(model.seed, scenario=model.name)

    # 2) Schedule & router graph (read-only from here on)
    if schedule is None:
        if model.schedule is None:
            raise ValueError("no schedule given and no schedule file configured")
        schedule = load_schedule_from_path(model.schedule.file, model.schedule.fmt)
    network = build_network(model, schedule)

    # 3) Hooks
    hooks = (
        RouterLogging(
            run_id=model.run_id,
            recorder=recorder or Recorder(JsonlSink()),
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
        )
        if use_logging
        else NoopHooks()
    )

    # 4) Router
    router = build_router(
        model, schedule, rng_registry, network=network, hooks=hooks, instance=instance
    )
    return App(model, rng_registry, schedule, network, router, hooks)
