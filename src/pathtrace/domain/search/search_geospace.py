import math

from pathtrace.domain.entities.geography import Graph, NodeId
from pathtrace.domain.search.search_heuristics import haversine_m

REGION_RADIUS_DEG = 0.05


def nearest_node(graph: Graph, lat: float, lng: float) -> tuple[NodeId | None, float]:
    """Closest node by great-circle meters; (None, inf) for an empty graph."""
    best, best_d = None, math.inf
    for n in graph.nodes():
        d = haversine_m(lat, lng, n.lat, n.lng)
        if d < best_d:
            best, best_d = n.id, d
    return best, best_d


def within_region(graph: Graph, lat: float, lng: float, radius_deg: float = REGION_RADIUS_DEG):
    """Whether a point is close enough to the loaded region to snap onto it.

    The region is anchored at the graph's first node; an empty graph has no region.
    """
    anchor = next(graph.nodes(), None)
    if anchor is None:
        return False
    return math.hypot(lat - anchor.lat, lng - anchor.lng) <= radius_deg
