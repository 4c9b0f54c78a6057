# pathtrace/domain/search/search_core.py
import math
from collections.abc import Callable
from dataclasses import dataclass, field

from pathtrace.app.protocols import Frontier
from pathtrace.domain.entities.geography import Graph, Node, NodeId

PriorityFn = Callable[[Node, float, Node | None], float]  # (node, g, goal) -> key
ImprovesFn = Callable[[float, float], bool]  # (candidate g, current g) -> relabel?
DoneFn = Callable[[NodeId, NodeId], bool]  # (finalized node, target) -> stop?


def reached_target(nid: NodeId, target: NodeId) -> bool:
    return nid == target


def strictly_better(candidate: float, current: float) -> bool:
    return candidate < current


def first_discovery(candidate: float, current: float) -> bool:
    return current == math.inf


@dataclass(frozen=True)
class Strategy:
    """One search flavour expressed as the knobs of `traverse`."""

    name: str
    frontier: Callable[[], Frontier]
    priority: PriorityFn
    improves: ImprovesFn = strictly_better
    done: DoneFn = reached_target


@dataclass
class Traversal:
    order: list[NodeId] = field(default_factory=list)
    parent: dict[NodeId, NodeId | None] = field(default_factory=dict)
    dist: dict[NodeId, float] = field(default_factory=dict)
    closed: set[NodeId] = field(default_factory=set)
    skipped_edges: int = 0


def traverse(graph: Graph, source: NodeId, target: NodeId, strategy: Strategy) -> Traversal:
    """Expand from `source` in the strategy's frontier order until it says stop.

    Each node is finalized at most once; a neighbor is relabelled only when the
    strategy's improvement rule accepts the new distance, so equal-cost
    alternatives keep the first parent found. Neighbors missing from the graph
    are counted in `skipped_edges` and otherwise ignored.
    """
    tr = Traversal()
    goal = graph.node(target)
    tr.dist[source] = 0.0
    tr.parent[source] = None
    frontier = strategy.frontier()
    frontier.push(source, strategy.priority(graph.node(source), 0.0, goal))

    while len(frontier):
        u = frontier.pop()
        if u in tr.closed:
            continue  # superseded entry
        tr.closed.add(u)
        tr.order.append(u)
        if strategy.done(u, target):
            break
        g = tr.dist[u]
        for v, w in graph.neighbors(u):
            node_v = graph.node(v)
            if node_v is None:
                tr.skipped_edges += 1
                continue
            if v in tr.closed:
                continue
            cand = g + w
            if strategy.improves(cand, tr.dist.get(v, math.inf)):
                tr.dist[v] = cand
                tr.parent[v] = u
                frontier.push(v, strategy.priority(node_v, cand, goal))
    return tr


def reconstruct(parent: dict[NodeId, NodeId | None], source: NodeId, target: NodeId) -> list:
    """Walk parents back from target; empty if the chain never reaches source."""
    if target not in parent:
        return []
    path, u = [], target
    while u is not None:
        path.append(u)
        u = parent[u]
    if path[-1] != source:
        return []
    path.reverse()
    return path
