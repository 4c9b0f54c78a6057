import math

import pytest

from pathtrace.domain.search.engine import PathfindingEngine
from pathtrace.domain.search.search_heuristics import HaversineHeuristic
from pathtrace.io.synthetic import random_geo_graph
from pathtrace.sim.rng import RNGRegistry

TRIALS = 25


def brute_force(graph, s, t):
    """(min weighted cost, min hop count) over all simple s->t paths."""
    best_cost, best_hops = math.inf, math.inf
    stack = [(s, 0.0, 0, frozenset([s]))]
    while stack:
        u, cost, hops, seen = stack.pop()
        if u == t:
            best_cost, best_hops = min(best_cost, cost), min(best_hops, hops)
            continue
        for v, w in graph.neighbors(u):
            if v in graph and v not in seen:
                stack.append((v, cost + w, hops + 1, seen | {v}))
    return best_cost, best_hops


def small_graphs():
    reg = RNGRegistry(master_seed=2024, scenario="engine-properties")
    for trial in range(TRIALS):
        rng = reg.substream("graph", trial)
        directed = trial % 2 == 1
        g = random_geo_graph(rng, n=7, k=2, directed=directed, detour=(1.0, 2.0))
        ids = list(g)
        yield g, ids[0], ids[-1]


@pytest.fixture(scope="module")
def engine():
    return PathfindingEngine(heuristic=HaversineHeuristic())


def _path_weight(graph, path):
    total = 0.0
    for u, v in zip(path, path[1:]):
        w = graph.weight(u, v)
        assert w is not None, f"{u}->{v} is not an edge"
        total += w
    return total


def test_dijkstra_matches_brute_force(engine):
    for g, s, t in small_graphs():
        best, _ = brute_force(g, s, t)
        tr = engine.run(g, s, t, "dijkstra")
        if best == math.inf:
            assert tr.path == () and tr.cost == math.inf
        else:
            assert tr.cost == pytest.approx(best)


def test_bfs_is_hop_optimal(engine):
    for g, s, t in small_graphs():
        _, hops = brute_force(g, s, t)
        tr = engine.run(g, s, t, "bfs")
        if hops == math.inf:
            assert tr.path == ()
        else:
            assert tr.hops == hops
            assert tr.cost == pytest.approx(_path_weight(g, tr.path))


def test_astar_matches_dijkstra_with_admissible_heuristic(engine):
    for g, s, t in small_graphs():
        a = engine.run(g, s, t, "astar")
        d = engine.run(g, s, t, "dijkstra")
        assert a.found == d.found
        if d.found:
            assert a.cost == pytest.approx(d.cost)
            assert len(a) <= len(g)


@pytest.mark.parametrize("strategy", ["bfs", "dijkstra", "astar"])
def test_trace_invariants(engine, strategy):
    for g, s, t in small_graphs():
        tr = engine.run(g, s, t, strategy)
        assert len(set(tr.visited_order)) == len(tr.visited_order)
        assert all(nid in g for nid in tr.visited_order)
        assert tr.visited_order[0] == s
        if tr.found:
            assert tr.path[0] == s and tr.path[-1] == t
            assert tr.visited_order[-1] == t
            assert tr.cost == pytest.approx(_path_weight(g, tr.path))
        assert engine.run(g, s, t, strategy) == tr


def test_larger_graph_astar_expands_no_more_than_dijkstra(engine):
    reg = RNGRegistry(master_seed=99, scenario="larger")
    g = random_geo_graph(reg.stream("graph"), n=300, k=4, center=(17.385, 78.4867))
    ids = list(g)
    d = engine.run(g, ids[0], ids[-1], "dijkstra")
    a = engine.run(g, ids[0], ids[-1], "astar")
    assert a.cost == pytest.approx(d.cost)
    assert len(a) <= len(d)
