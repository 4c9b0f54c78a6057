import math
from dataclasses import dataclass

from pathtrace.domain.entities.geography import NodeId

NO_PATH_COST = math.inf


@dataclass(frozen=True)
class SearchTrace:
    """What one search produced.

    visited_order: nodes in the order they were finalized (no duplicates).
    path: source -> target, empty when the target was not reached.
    cost: summed edge weights along `path`; NO_PATH_COST when there is none.
    For BFS the path is hop-minimal and its cost is whatever those hops weigh.
    """

    strategy: str
    source: NodeId
    target: NodeId
    visited_order: tuple[NodeId, ...] = ()
    path: tuple[NodeId, ...] = ()
    cost: float = NO_PATH_COST

    @classmethod
    def no_path(cls, strategy: str, source: NodeId, target: NodeId, visited=()) -> "SearchTrace":
        return cls(strategy, source, target, tuple(visited), (), NO_PATH_COST)

    @property
    def found(self) -> bool:
        return bool(self.path)

    @property
    def hops(self) -> int:
        return max(0, len(self.path) - 1)

    def __len__(self) -> int:
        return len(self.visited_order)

    def revealed(self, n: int) -> tuple[NodeId, ...]:
        return self.visited_order[: max(0, min(n, len(self.visited_order)))]
