# domain/entities/person.py
from dataclasses import dataclass, field
from typing import Any

from va_transit.domain.entities.geography import Point


@dataclass(frozen=True)
class Person:
    id: str
    attributes: dict[str, Any] = field(default_factory=dict, hash=False, compare=False)


@dataclass(frozen=True)
class ActivityFacility:
    id: str
    coord: Point
    link_id: str | None = None
