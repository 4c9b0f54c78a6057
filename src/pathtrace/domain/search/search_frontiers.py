import heapq
from collections import deque

from pathtrace.app.protocols import Frontier
from pathtrace.domain.entities.geography import NodeId


class FifoFrontier(Frontier):
    """Queue order; priorities are ignored."""

    def __init__(self):
        self._q: deque[NodeId] = deque()

    def push(self, nid, priority):
        self._q.append(nid)

    def pop(self):
        return self._q.popleft()

    def __len__(self):
        return len(self._q)


class HeapFrontier(Frontier):
    """Lowest priority first, FIFO among equal priorities."""

    def __init__(self):
        self._q: list[tuple[float, int, NodeId]] = []
        self._seq = 0

    def push(self, nid, priority):
        self._seq += 1
        heapq.heappush(self._q, (priority, self._seq, nid))

    def pop(self):
        return heapq.heappop(self._q)[2]

    def __len__(self):
        return len(self._q)
