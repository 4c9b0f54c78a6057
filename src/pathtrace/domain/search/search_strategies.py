from pathtrace.app.protocols import Heuristic
from pathtrace.domain.search.search_core import Strategy, first_discovery, strictly_better
from pathtrace.domain.search.search_frontiers import FifoFrontier, HeapFrontier
from pathtrace.domain.search.search_heuristics import StraightLineHeuristic


def breadth_first() -> Strategy:
    # Hop-optimal only. The distance carried along is the weight of the BFS-tree
    # branch, reported as cost but not minimized.
    return Strategy(
        name="bfs",
        frontier=FifoFrontier,
        priority=lambda node, g, goal: 0.0,
        improves=first_discovery,
    )


def dijkstra() -> Strategy:
    return Strategy(
        name="dijkstra",
        frontier=HeapFrontier,
        priority=lambda node, g, goal: g,
        improves=strictly_better,
    )


def astar(heuristic: Heuristic | None = None) -> Strategy:
    h = heuristic or StraightLineHeuristic()

    def f(node, g, goal):
        return g if goal is None else g + h(node, goal)

    return Strategy(name="astar", frontier=HeapFrontier, priority=f, improves=strictly_better)
