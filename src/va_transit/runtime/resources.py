# runtime/resources.py
import json
import pickle
from functools import lru_cache

from va_transit.domain.entities.schedule import TransitSchedule
from va_transit.io.schedule_io import schedule_from_dict


@lru_cache(maxsize=8)
def load_schedule_from_path(file: str, fmt: str) -> TransitSchedule:
    if fmt == "pickle":
        with open(file, "rb") as f:
            sched = pickle.load(f)
        if not isinstance(sched, TransitSchedule):
            raise TypeError(f"{file!r} does not hold a TransitSchedule")
        return sched
    if fmt == "json":
        with open(file, encoding="utf-8") as f:
            return schedule_from_dict(json.load(f))
    raise ValueError(f"Unsupported schedule fmt {fmt!r}")
