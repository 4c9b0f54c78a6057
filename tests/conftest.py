import pytest

from pathtrace.domain.entities.geography import Graph
from pathtrace.sim.kernel import Kernel
from pathtrace.sim.scheduler import KernelScheduler


class FakeScheduler:
    """Records timers; tests fire them by hand."""

    def __init__(self):
        self.now = 0.0
        self.timers: dict[int, tuple[float, object]] = {}  # handle -> (delay, callback)
        self.cancelled: list[int] = []
        self.fired: list[int] = []
        self._next = 0

    def schedule(self, callback, delay):
        self._next += 1
        self.timers[self._next] = (delay, callback)
        return self._next

    def cancel(self, handle):
        self.cancelled.append(handle)
        self.timers.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self.timers)

    def last_delay(self) -> float:
        return self.timers[max(self.timers)][0]

    def fire_next(self) -> bool:
        if not self.timers:
            return False
        handle = min(self.timers)
        delay, cb = self.timers.pop(handle)
        self.now += delay
        self.fired.append(handle)
        cb()
        return True

    def drain(self, limit: int = 100_000) -> int:
        n = 0
        while n < limit and self.fire_next():
            n += 1
        return n


@pytest.fixture
def fake_scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def kernel_scheduler() -> KernelScheduler:
    return KernelScheduler(Kernel())


@pytest.fixture
def abc_graph() -> Graph:
    # A --10-- B --5-- C, one degree of longitude apart
    return Graph.from_dict(
        {
            "A": {"lat": 0, "lng": 0, "neighbors": {"B": 10}},
            "B": {"lat": 0, "lng": 1, "neighbors": {"A": 10, "C": 5}},
            "C": {"lat": 0, "lng": 2, "neighbors": {"B": 5}},
        }
    )
