# tests/io/test_schedule_io.py
import json
import pickle

import pytest
from pydantic import ValidationError

from va_transit.domain.entities.geography import Point
from va_transit.io.schedule_io import schedule_from_dict
from va_transit.runtime.resources import load_schedule_from_path


def test_schedule_from_dict(corridor):
    assert set(corridor.facilities) == {"A", "B", "C"}
    assert corridor.facilities["B"].coord == Point(2500.0, 2500.0)
    route = corridor.lines["L1"].routes["r1"]
    assert route.transport_mode == "bus"
    assert [rs.stop.id for rs in route.stops] == ["A", "B", "C"]
    # the missing offset falls back to the other one
    assert route.stops[0].effective_arrival_offset == 0.0
    assert route.stops[2].effective_departure_offset == 600.0
    assert route.departures[0].id == "r1_0"
    assert len(route.departures) == 25


def test_unknown_stop_reference(corridor_dict):
    corridor_dict["lines"][0]["routes"][0]["stops"][1]["stop"] = "Z"
    with pytest.raises(ValueError, match="unknown stop 'Z'"):
        schedule_from_dict(corridor_dict)


def test_route_needs_two_stops(corridor_dict):
    del corridor_dict["lines"][0]["routes"][0]["stops"][1:]
    with pytest.raises(ValidationError):
        schedule_from_dict(corridor_dict)


def test_route_stop_needs_an_offset(corridor_dict):
    corridor_dict["lines"][0]["routes"][0]["stops"][1] = {"stop": "B"}
    with pytest.raises(ValidationError):
        schedule_from_dict(corridor_dict)


def test_duplicate_stop_ids(corridor_dict):
    corridor_dict["stops"].append({"id": "A", "x": 0.0, "y": 0.0})
    with pytest.raises(ValueError, match="duplicate"):
        schedule_from_dict(corridor_dict)


def test_load_json_and_pickle(tmp_path, corridor_dict, corridor):
    js = tmp_path / "schedule.json"
    js.write_text(json.dumps(corridor_dict))
    loaded = load_schedule_from_path(str(js), "json")
    assert set(loaded.lines) == {"L1"}

    pk = tmp_path / "schedule.pkl"
    pk.write_bytes(pickle.dumps(corridor))
    assert set(load_schedule_from_path(str(pk), "pickle").facilities) == {"A", "B", "C"}


def test_pickle_of_something_else_is_rejected(tmp_path):
    pk = tmp_path / "other.pkl"
    pk.write_bytes(pickle.dumps({"not": "a schedule"}))
    with pytest.raises(TypeError):
        load_schedule_from_path(str(pk), "pickle")
