import os
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = 1


# ----------------- ROUTER ---------------------


class ModeParamsModel(BaseModel):
    """Marginal utilities for a non-walk access/egress mode (negative = disutility)."""

    model_config = ConfigDict(extra="forbid")
    marginal_utility_of_travel_time_utl_s: float
    marginal_utility_of_travel_distance_utl_m: float = 0.0

    @field_validator(
        "marginal_utility_of_travel_time_utl_s", "marginal_utility_of_travel_distance_utl_m"
    )
    @classmethod
    def _nonpos(cls, v: float, info: ValidationInfo) -> float:
        if v > 0:
            raise ValueError(f"{info.field_name} must be <= 0 (a disutility)")
        return v


def _default_mode_params() -> dict[str, ModeParamsModel]:
    return {
        "drt": ModeParamsModel(
            marginal_utility_of_travel_time_utl_s=-4.0 / 3600 - 6.0 / 3600,
            marginal_utility_of_travel_distance_utl_m=0.0,
        )
    }


class RouterModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    search_radius_m: float = 1000.0
    extension_radius_m: float = 200.0
    additional_transfer_time_s: float = 0.0
    beeline_distance_factor: float = 1.3
    beeline_walk_speed_mps: float = 3.0 / 3.6 / 1.3
    direct_walk_factor: float = 1.0
    max_beeline_walk_connection_distance_m: float = 100.0

    # utils per second / meter; performing opportunity cost already folded in
    marginal_utility_of_travel_time_walk_utl_s: float = -12.0 / 3600 - 6.0 / 3600
    marginal_utility_of_travel_time_pt_utl_s: float = -6.0 / 3600 - 6.0 / 3600
    marginal_utility_of_waiting_pt_utl_s: float = -6.0 / 3600 - 6.0 / 3600
    marginal_utility_of_travel_distance_pt_utl_m: float = 0.0
    utility_of_line_switch_utl: float = -1.0

    mode_params: dict[str, ModeParamsModel] = Field(default_factory=_default_mode_params)
    fallback_to_direct_on_no_path: bool = False

    @field_validator(
        "search_radius_m",
        "extension_radius_m",
        "additional_transfer_time_s",
        "max_beeline_walk_connection_distance_m",
    )
    @classmethod
    def _nonneg(cls, v: float, info: ValidationInfo) -> float:
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v

    @field_validator(
        "marginal_utility_of_travel_time_walk_utl_s",
        "marginal_utility_of_travel_time_pt_utl_s",
        "marginal_utility_of_waiting_pt_utl_s",
        "marginal_utility_of_travel_distance_pt_utl_m",
        "utility_of_line_switch_utl",
    )
    @classmethod
    def _nonpos(cls, v: float, info: ValidationInfo) -> float:
        if v > 0:
            raise ValueError(f"{info.field_name} must be <= 0 (a disutility)")
        return v

    @field_validator("beeline_distance_factor", "beeline_walk_speed_mps", "direct_walk_factor")
    @classmethod
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v


# ----------------- ACCESS / EGRESS ---------------------

WalkMode = Literal["walk", "transit_walk", "access_walk", "egress_walk"]


class AccessEgressWalkModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["walk"] = "walk"
    mode: WalkMode = "walk"
    speed_mps: float = 3.0 / 3.6

    @field_validator("speed_mps")
    @classmethod
    def _positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("speed_mps must be > 0")
        return v


class AccessModeModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    mode: str
    max_distance_m: float
    speed_mps: float
    teleported: bool = True


class AccessEgressDistanceBasedModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["distance_based"] = "distance_based"
    modes: list[AccessModeModel] = Field(
        default_factory=lambda: [
            AccessModeModel(mode="walk", max_distance_m=1000.0, speed_mps=3.0 / 3.6),
            AccessModeModel(mode="drt", max_distance_m=10_000.0, speed_mps=25.0 / 3.6),
        ]
    )
    surcharge_s: float = 0.0
    discouraged_stops: list[tuple[float, float]] = Field(default_factory=list)
    discourage_tolerance_m: float = 1.0

    @model_validator(mode="after")
    def _check_modes(self):
        if not self.modes:
            raise ValueError("at least one access/egress mode is required")
        limits = [m.max_distance_m for m in self.modes]
        if limits != sorted(limits):
            raise ValueError("access/egress modes must be ordered by max_distance_m")
        if any(m.speed_mps <= 0 for m in self.modes):
            raise ValueError("access/egress mode speeds must be > 0")
        if self.surcharge_s < 0:
            raise ValueError("surcharge_s must be >= 0")
        return self


AccessEgressUnion = Annotated[
    AccessEgressWalkModel | AccessEgressDistanceBasedModel,
    Field(discriminator="kind"),
]


# ----------------- PATH SEARCH ---------------------


class PathSearchDijkstraModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["dijkstra"] = "dijkstra"


PathSearchUnion = Annotated[PathSearchDijkstraModel, Field(discriminator="kind")]


# ----------------- SURCHARGE / SCHEDULE ---------------------


class SurchargeModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    # "random": one draw per router instance from the RNG registry
    policy: Literal["random", "on", "off"] = "random"


class ScheduleByPath(BaseModel):
    model_config = ConfigDict(extra="forbid")
    file: str
    fmt: Literal["json", "pickle"] = "json"

    @field_validator("file")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


# ------------------------------------------------------------------


class RouterSetupModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    run_id: str = "local"
    seed: int = 123
    log: LogModel = LogModel()
    router: RouterModel = Field(default_factory=RouterModel)
    access_egress: AccessEgressUnion = Field(default_factory=AccessEgressWalkModel)
    path_search: PathSearchUnion = Field(default_factory=PathSearchDijkstraModel)
    surcharge: SurchargeModel = Field(default_factory=SurchargeModel)
    schedule: ScheduleByPath | None = None
