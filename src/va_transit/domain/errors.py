# domain/errors.py
from va_transit.domain.entities.geography import Point


class RoutingError(Exception):
    pass


class ConfigurationError(RoutingError):
    """Fatal setup problem; never retried."""


class UnsupportedModeError(ConfigurationError):
    def __init__(self, mode: str):
        self.mode = mode
        super().__init__(
            f"Unable to provide initial cost for mode {mode!r}: "
            "no marginal utility parameters are set for it"
        )


class EmptyGraphError(ConfigurationError):
    def __init__(self):
        super().__init__("transit router network has no nodes; cannot locate stops")


class ItineraryInconsistencyError(RoutingError):
    def __init__(self, reason: str, *, person, from_point: Point, to_point: Point, time: float):
        self.person, self.from_point, self.to_point, self.time = person, from_point, to_point, time
        super().__init__(
            f"{reason}: person={person!r} from={from_point!r} to={to_point!r} time={time}"
        )
