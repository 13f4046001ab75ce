# io/router_logging.py
import json
import logging
import sys

from va_transit.domain.entities.geography import Point
from va_transit.io.recorder import Recorder
from va_transit.sim.clock import format_time
from va_transit.sim.hooks import NoopHooks


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, default=str)


def _default_json_logger(name="va_transit", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


def _xy(p: Point | None):
    return None if p is None else [p.x, p.y]


class RouterLogging(NoopHooks):
    """
    One place to shape and emit structured logs for route requests,
    plus analytics records through the recorder.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1000,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug, self.sample_every = run_id, debug, max(1, sample_every)
        self.recorder = recorder
        self.log = logger or _default_json_logger(level=level)
        self._requests = 0

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        if extra.get("t") is not None:
            payload["clock"] = format_time(extra["t"])
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    def _sampled(self) -> bool:
        return self.debug and (self._requests % self.sample_every) == 0

    # --------------------------------------------------------

    def router_start(self, *, surcharge_on: bool, instance: int = 0):
        self._emit("INFO", "router_start", surcharge_on=surcharge_on, instance=instance)

    def route_start(self, *, person_id, origin: Point, destination: Point, t: float):
        self._requests += 1
        if self._sampled():
            self._emit(
                "DEBUG",
                "route_start",
                person_id=person_id,
                origin=_xy(origin),
                destination=_xy(destination),
                t=t,
            )

    def candidates(self, *, side: str, point: Point, n: int, extended: bool):
        if self._sampled():
            self._emit("DEBUG", "candidates", side=side, point=_xy(point), n=n, extended=extended)

    def no_path(self, *, person_id, t: float, fallback: bool):
        self._emit("INFO", "no_path", person_id=person_id, t=t, fallback=fallback)

    def direct_chosen(self, *, person_id, t: float, direct_cost: float, path_cost: float):
        if self._sampled():
            self._emit(
                "DEBUG",
                "direct_chosen",
                person_id=person_id,
                t=t,
                direct_cost=direct_cost,
                path_cost=path_cost,
            )

    def route_end(self, *, person_id, t: float, legs: int, pt_legs: int, direct: bool):
        self._emit(
            "INFO",
            "route_end",
            person_id=person_id,
            t=t,
            legs=legs,
            pt_legs=pt_legs,
            direct=direct,
        )

    def error(self, *, person_id, t: float, exc: BaseException):
        self._emit(
            "ERROR",
            "route_error",
            person_id=person_id,
            t=t,
            error=str(exc),
            kind=type(exc).__name__,
        )

    # ------------- Business Event Reporting --------------------------

    def biz(self, ev):
        if self.recorder:
            self.recorder.emit(ev)
