# tests/conftest.py
import pytest

from va_transit.domain.entities.person import Person
from va_transit.io.schedule_io import schedule_from_dict
from va_transit.sim.clock import hms


def _every(start: float, end: float, step: float) -> list[float]:
    out, t = [], start
    while t <= end:
        out.append(t)
        t += step
    return out


@pytest.fixture
def person():
    return Person("p1")


@pytest.fixture
def corridor_dict():
    """One line A -> B -> C running diagonally across a 5 km square, every 10 minutes."""
    return {
        "stops": [
            {"id": "A", "x": 100.0, "y": 0.0, "link_id": "lA"},
            {"id": "B", "x": 2500.0, "y": 2500.0, "link_id": "lB"},
            {"id": "C", "x": 4900.0, "y": 5000.0, "link_id": "lC"},
        ],
        "lines": [
            {
                "id": "L1",
                "routes": [
                    {
                        "id": "r1",
                        "stops": [
                            {"stop": "A", "departure_offset": 0.0},
                            {"stop": "B", "arrival_offset": 300.0, "departure_offset": 300.0},
                            {"stop": "C", "arrival_offset": 600.0},
                        ],
                        "departures": _every(hms(6), hms(10), 600.0),
                    }
                ],
            }
        ],
    }


@pytest.fixture
def corridor(corridor_dict):
    return schedule_from_dict(corridor_dict)


@pytest.fixture
def two_lines():
    """L1 A -> B, 50 m walk to B2, L2 B2 -> D; both every 5 minutes from 08:00."""
    deps = _every(hms(8), hms(9), 300.0)
    return schedule_from_dict(
        {
            "stops": [
                {"id": "A", "x": 0.0, "y": 0.0},
                {"id": "B", "x": 1000.0, "y": 0.0},
                {"id": "B2", "x": 1000.0, "y": 50.0},
                {"id": "D", "x": 2000.0, "y": 50.0},
            ],
            "lines": [
                {
                    "id": "L1",
                    "routes": [
                        {
                            "id": "r1",
                            "stops": [
                                {"stop": "A", "departure_offset": 0.0},
                                {"stop": "B", "arrival_offset": 120.0},
                            ],
                            "departures": deps,
                        }
                    ],
                },
                {
                    "id": "L2",
                    "routes": [
                        {
                            "id": "r2",
                            "stops": [
                                {"stop": "B2", "departure_offset": 0.0},
                                {"stop": "D", "arrival_offset": 120.0},
                            ],
                            "departures": deps,
                        }
                    ],
                },
            ],
        }
    )


@pytest.fixture
def unit_cfg():
    """Factor 1 and 1 m/s everywhere so times equal distances."""
    return {
        "name": "test",
        "run_id": "t-1",
        "router": {
            "search_radius_m": 500.0,
            "extension_radius_m": 200.0,
            "beeline_distance_factor": 1.0,
            "beeline_walk_speed_mps": 1.0,
        },
        "access_egress": {"kind": "walk", "speed_mps": 1.0},
        "surcharge": {"policy": "off"},
    }
