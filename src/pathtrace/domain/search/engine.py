# pathtrace/domain/search/engine.py
import time

from pathtrace.app.protocols import Heuristic
from pathtrace.domain.entities.geography import Graph, NodeId
from pathtrace.domain.entities.trace import NO_PATH_COST, SearchTrace
from pathtrace.domain.search.search_core import reconstruct, traverse
from pathtrace.runtime.registries import make_strategy
from pathtrace.sim.hooks import NoopHooks, SearchHooks


class PathfindingEngine:
    """Runs one named strategy over a graph and returns its full trace.

    `run` is synchronous and CPU-bound; hosts with an interactive loop should call
    it off that loop. The graph is only read.
    """

    def __init__(self, *, heuristic: Heuristic | None = None, hooks: SearchHooks | None = None):
        self.heuristic = heuristic
        self._hooks = hooks or NoopHooks()

    def run(self, graph: Graph, source: NodeId, target: NodeId, strategy: str) -> SearchTrace:
        algo = make_strategy(strategy, heuristic=self.heuristic)
        if len(graph) == 0:
            return SearchTrace.no_path(algo.name, source, target)
        if source not in graph:
            raise ValueError(f"source {source!r} is not a node of the graph")

        t0 = time.perf_counter()
        self._hooks.search_start(strategy=algo.name, source=source, target=target, nodes=len(graph))
        tr = traverse(graph, source, target, algo)
        path = reconstruct(tr.parent, source, target) if target in tr.closed else []
        cost = tr.dist[target] if path else NO_PATH_COST
        trace = SearchTrace(algo.name, source, target, tuple(tr.order), tuple(path), cost)
        self._hooks.search_end(
            strategy=algo.name,
            visited=len(trace),
            path_len=len(trace.path),
            cost=cost,
            skipped_edges=tr.skipped_edges,
            ms=(time.perf_counter() - t0) * 1000,
        )
        return trace


def run(graph: Graph, source: NodeId, target: NodeId, strategy: str) -> SearchTrace:
    return PathfindingEngine().run(graph, source, target, strategy)
