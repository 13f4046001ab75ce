import math
from dataclasses import dataclass


# Core geometry types used by routing
@dataclass(frozen=True)
class Point:
    x: float  # meters in projected CRS
    y: float


def euclidean_distance(a: Point, b: Point) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def manhattan_distance(a: Point, b: Point) -> float:
    return abs(b.x - a.x) + abs(b.y - a.y)
