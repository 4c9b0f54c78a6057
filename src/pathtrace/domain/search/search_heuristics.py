import math

from pathtrace.app.protocols import Heuristic
from pathtrace.domain.entities.geography import Node

EARTH_RADIUS_M = 6_371_000.0
M_PER_DEG = 111_000.0


def straight_line_m(a: Node, b: Node, scale: float = M_PER_DEG) -> float:
    return math.hypot(a.lat - b.lat, a.lng - b.lng) * scale


def haversine_m(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    rad = math.pi / 180
    dlat = (lat2 - lat1) * rad
    dlng = (lng2 - lng1) * rad
    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1 * rad) * math.cos(lat2 * rad) * math.sin(dlng / 2) ** 2
    )
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


class StraightLineHeuristic(Heuristic):
    """Euclidean distance on raw degrees, scaled to meters.

    Longitude degrees are treated as equator-length everywhere, so away from the
    equator this can overestimate east-west distance and A* may then return a
    costlier path than Dijkstra.
    """

    def __init__(self, scale: float = M_PER_DEG):
        self.scale = scale

    def __call__(self, node, goal):
        return straight_line_m(node, goal, self.scale)


class HaversineHeuristic(Heuristic):
    """Great-circle meters; admissible when edge weights are haversine lengths."""

    def __call__(self, node, goal):
        return haversine_m(node.lat, node.lng, goal.lat, goal.lng)


class ZeroHeuristic(Heuristic):
    def __call__(self, node, goal):
        return 0.0
