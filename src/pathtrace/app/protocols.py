from collections.abc import Callable, Hashable
from typing import Any, Protocol, runtime_checkable

from pathtrace.domain.entities.geography import Node, NodeId


# ------------- Search --------------------
@runtime_checkable
class Frontier(Protocol):
    """
    Discovered-but-not-finalized nodes.
    • push(node, priority): a node may be pushed again with a better priority;
      the older entry stays behind and is skipped once the node is finalized.
    • pop(): next node to finalize; ties go to the earliest push.
    """

    def push(self, nid: NodeId, priority: float) -> None: ...
    def pop(self) -> NodeId: ...
    def __len__(self) -> int: ...


@runtime_checkable
class Heuristic(Protocol):
    """Estimated remaining meters from `node` to `goal`."""

    def __call__(self, node: Node, goal: Node) -> float: ...


# ------------- Playback --------------------
@runtime_checkable
class Scheduler(Protocol):
    """
    Responsibilities:
      • Run `callback` once after `delay` milliseconds (0 = next scheduling turn).
      • Forget a handle on cancel; cancelling a fired or unknown handle does nothing.
    """

    @property
    def now(self) -> float: ...
    def schedule(self, callback: Callable[[], None], delay: float) -> Hashable: ...
    def cancel(self, handle: Any) -> None: ...


@runtime_checkable
class PlaybackListener(Protocol):
    def __call__(self, state) -> None: ...
