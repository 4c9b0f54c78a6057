# src/pathtrace/io/osm.py
"""Overpass / OpenStreetMap JSON -> Graph.

Expects the `[out:json]` body of a `way["highway"]` query recursed down to its
nodes (`(._;>;); out body;`): a top-level `elements` list of `node` records
(`id`, `lat`, `lon`) and `way` records (`id`, `nodes`, optional `tags`).
"""

import logging
from collections.abc import Mapping

from pathtrace.domain.entities.geography import Graph, Node
from pathtrace.domain.search.search_heuristics import haversine_m

log = logging.getLogger("pathtrace.osm")


def build_graph_from_osm(osm_data: Mapping | None) -> Graph:
    """Every consecutive node pair of a way becomes a two-way edge.

    Weights are haversine meters. One-way tags are ignored. Pairs that touch a node
    the payload never defined are dropped; nodes no way touches are left out.
    """
    if not osm_data:
        return Graph()

    points: dict[str, tuple[float, float]] = {}
    ways = []
    for el in osm_data.get("elements", ()):
        kind = el.get("type")
        if kind == "node":
            points[str(el["id"])] = (float(el["lat"]), float(el["lon"]))
        elif kind == "way" and len(el.get("nodes", ())) > 1:
            ways.append(el)

    adj: dict[str, dict[str, float]] = {}
    dropped = 0
    for way in ways:
        refs = [str(r) for r in way["nodes"]]
        for u, v in zip(refs, refs[1:]):
            if u not in points or v not in points:
                dropped += 1
                continue
            d = haversine_m(*points[u], *points[v])
            adj.setdefault(u, {})[v] = d
            adj.setdefault(v, {})[u] = d

    if dropped:
        log.debug("osm pairs dropped", extra={"extra": {"dropped": dropped}})
    nodes = {nid: Node(nid, *points[nid]) for nid in adj}
    return Graph(nodes, adj)
