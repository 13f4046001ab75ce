# runtime/registries.py
from collections.abc import Callable
from typing import Any

from va_transit.app.protocols import AccessEgressModel, PathSearch
from va_transit.config.models import (
    AccessEgressDistanceBasedModel,
    AccessEgressUnion,
    AccessEgressWalkModel,
    PathSearchDijkstraModel,
    PathSearchUnion,
)
from va_transit.domain.routing.routing_access_egress import (
    BeelineWalkAccessEgress,
    DistanceBasedAccessEgress,
)
from va_transit.domain.routing.routing_path_search import MultiNodeDijkstra

AccessEgressFactory = Callable[[AccessEgressUnion, dict[str, Any]], AccessEgressModel]
PathSearchFactory = Callable[[PathSearchUnion, dict[str, Any]], PathSearch]

_access_egress_registry: dict[str, AccessEgressFactory] = {}
_path_search_registry: dict[str, PathSearchFactory] = {}


# ------------------- Access / egress models ---------------------------


def register_access_egress(kind: str):
    def deco(fn: AccessEgressFactory):
        _access_egress_registry[kind] = fn
        return fn

    return deco


def make_access_egress(cfg: AccessEgressUnion, *, deps: dict) -> AccessEgressModel:
    """
    deps must include:
      - 'walk':   TravelTimeAndDisutility for direct-trip pricing
      - 'router': RouterModel (beeline factor)
    """
    try:
        factory = _access_egress_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown access/egress kind {cfg.kind!r}") from None
    return factory(cfg, deps)


@register_access_egress("walk")
def _make_walk(cfg: AccessEgressWalkModel, deps):
    return BeelineWalkAccessEgress(
        walk=deps["walk"],
        mode=cfg.mode,
        speed_mps=cfg.speed_mps,
        beeline_distance_factor=deps["router"].beeline_distance_factor,
    )


@register_access_egress("distance_based")
def _make_distance_based(cfg: AccessEgressDistanceBasedModel, deps):
    return DistanceBasedAccessEgress(
        walk=deps["walk"],
        modes=cfg.modes,
        beeline_distance_factor=deps["router"].beeline_distance_factor,
        surcharge_s=cfg.surcharge_s,
        discouraged_stops=cfg.discouraged_stops,
        discourage_tolerance_m=cfg.discourage_tolerance_m,
    )


# ---------------------- Path searches ----------------------------


def register_path_search(kind: str):
    def deco(fn: PathSearchFactory):
        _path_search_registry[kind] = fn
        return fn

    return deco


def make_path_search(cfg: PathSearchUnion, *, deps: dict | None = None) -> PathSearch:
    try:
        factory = _path_search_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown path search kind {cfg.kind!r}") from None
    return factory(cfg, deps or {})


@register_path_search("dijkstra")
def _make_dijkstra(cfg: PathSearchDijkstraModel, deps):
    return MultiNodeDijkstra()
