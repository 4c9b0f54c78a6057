from collections.abc import Hashable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

NodeId = Hashable


@dataclass(frozen=True)
class Node:
    id: NodeId
    lat: float  # degrees
    lng: float


class Graph:
    """Read-only road graph: node id -> Node, plus outgoing weights in meters.

    Lookups of absent ids return None / nothing rather than raising, so a search
    can step over neighbors that the builder referenced but never defined.
    Iteration follows insertion order, which is what makes searches deterministic.
    """

    __slots__ = ("_nodes", "_adj")

    def __init__(
        self,
        nodes: Mapping[NodeId, Node] | None = None,
        adjacency: Mapping[NodeId, Mapping[NodeId, float]] | None = None,
    ):
        nodes = nodes or {}
        adjacency = adjacency or {}
        self._nodes = MappingProxyType(dict(nodes))
        self._adj = MappingProxyType(
            {nid: MappingProxyType(dict(adjacency.get(nid, {}))) for nid in self._nodes}
        )

    @classmethod
    def from_dict(cls, data: Mapping[NodeId, Mapping]) -> "Graph":
        """Build from `{id: {"lat": .., "lng": .., "neighbors": {id: weight}}}`."""
        nodes, adj = {}, {}
        for nid, rec in data.items():
            nodes[nid] = Node(nid, float(rec["lat"]), float(rec["lng"]))
            adj[nid] = {k: float(w) for k, w in rec.get("neighbors", {}).items()}
        return cls(nodes, adj)

    def to_dict(self) -> dict:
        return {
            nid: {"lat": n.lat, "lng": n.lng, "neighbors": dict(self._adj[nid])}
            for nid, n in self._nodes.items()
        }

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, nid: object) -> bool:
        return nid in self._nodes

    def __iter__(self) -> Iterator[NodeId]:
        return iter(self._nodes)

    def node(self, nid: NodeId) -> Node | None:
        return self._nodes.get(nid)

    def nodes(self) -> Iterator[Node]:
        return iter(self._nodes.values())

    def neighbors(self, nid: NodeId) -> Iterator[tuple[NodeId, float]]:
        return iter(self._adj.get(nid, {}).items())

    def weight(self, u: NodeId, v: NodeId) -> float | None:
        return self._adj.get(u, {}).get(v)

    def edge_count(self) -> int:
        return sum(len(a) for a in self._adj.values())
