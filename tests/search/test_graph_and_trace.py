import math

import pytest

from pathtrace.domain.entities.geography import Graph, Node
from pathtrace.domain.entities.trace import NO_PATH_COST, SearchTrace
from pathtrace.domain.search.search_core import reconstruct
from pathtrace.domain.search.search_frontiers import FifoFrontier, HeapFrontier
from pathtrace.domain.search.search_heuristics import (
    HaversineHeuristic,
    StraightLineHeuristic,
    haversine_m,
    straight_line_m,
)


def test_graph_lookups(abc_graph):
    assert len(abc_graph) == 3
    assert "B" in abc_graph and "Z" not in abc_graph
    assert abc_graph.node("B") == Node("B", 0.0, 1.0)
    assert abc_graph.node("Z") is None
    assert dict(abc_graph.neighbors("B")) == {"A": 10.0, "C": 5.0}
    assert list(abc_graph.neighbors("Z")) == []
    assert abc_graph.weight("A", "B") == 10.0
    assert abc_graph.weight("A", "C") is None
    assert abc_graph.edge_count() == 4
    assert list(abc_graph) == ["A", "B", "C"]


def test_graph_is_read_only(abc_graph):
    src = {"A": {"lat": 0, "lng": 0, "neighbors": {"B": 1}}}
    g = Graph.from_dict(src)
    src["A"]["neighbors"]["B"] = 99
    assert g.weight("A", "B") == 1.0
    with pytest.raises(TypeError):
        g._adj["A"]["B"] = 5  # mapping proxies reject writes


def test_graph_round_trips_through_dict(abc_graph):
    assert Graph.from_dict(abc_graph.to_dict()).to_dict() == abc_graph.to_dict()


def test_trace_helpers():
    tr = SearchTrace("dijkstra", "A", "C", ("A", "B", "C"), ("A", "B", "C"), 15.0)
    assert len(tr) == 3
    assert tr.revealed(2) == ("A", "B")
    assert tr.revealed(99) == ("A", "B", "C")
    assert tr.revealed(-1) == ()
    miss = SearchTrace.no_path("bfs", "A", "Z", ["A"])
    assert not miss.found and miss.cost == NO_PATH_COST and miss.hops == 0


def test_reconstruct_requires_chain_back_to_source():
    parent = {"S": None, "A": "S", "B": "A", "X": None, "Y": "X"}
    assert reconstruct(parent, "S", "B") == ["S", "A", "B"]
    assert reconstruct(parent, "S", "Y") == []
    assert reconstruct(parent, "S", "Q") == []


def test_frontiers_order():
    fifo = FifoFrontier()
    for nid, p in [("a", 3), ("b", 1), ("c", 2)]:
        fifo.push(nid, p)
    assert [fifo.pop() for _ in range(3)] == ["a", "b", "c"]

    heap = HeapFrontier()
    for nid, p in [("a", 3), ("b", 1), ("c", 1), ("d", 0)]:
        heap.push(nid, p)
    assert [heap.pop() for _ in range(4)] == ["d", "b", "c", "a"]
    assert len(heap) == 0


def test_heuristics():
    a, b = Node("a", 0.0, 0.0), Node("b", 0.0, 1.0)
    assert straight_line_m(a, b) == pytest.approx(111_000.0)
    assert StraightLineHeuristic(scale=1.0)(a, b) == pytest.approx(1.0)
    # one degree along the equator on a 6371 km sphere
    assert haversine_m(0, 0, 0, 1) == pytest.approx(2 * math.pi * 6_371_000 / 360)
    assert HaversineHeuristic()(a, a) == 0.0
