# sim/scheduler.py
import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from pathtrace.sim.event import BaseEvent
from pathtrace.sim.kernel import Kernel


@dataclass(order=True)
class TimerFired(BaseEvent):
    callback: Callable[[], None] = field(default=lambda: None, compare=False)
    owner: object = field(default=None, compare=False)


class KernelScheduler:
    """Timer callbacks as kernel events; delays are simulated milliseconds.

    A zero delay lands at the current instant, behind everything already queued
    for it, so it behaves like a single scheduling turn. Several schedulers may
    share one kernel; each fires only the timers it scheduled.
    """

    def __init__(self, kernel: Kernel):
        self.kernel = kernel
        kernel.on(TimerFired, self._fire)

    @property
    def now(self) -> float:
        return self.kernel.now

    def schedule(self, callback: Callable[[], None], delay: float) -> int:
        ev = TimerFired(t=self.kernel.now + max(0.0, delay), callback=callback, owner=self)
        return self.kernel.schedule(ev)

    def cancel(self, handle: int) -> None:
        self.kernel.cancel(handle)

    def _fire(self, ev: TimerFired):
        if ev.owner is self:
            ev.callback()
        return None


class AsyncioScheduler:
    """Wall-clock scheduling on an asyncio loop (milliseconds).

    Without a bound loop, timers go to whichever loop is running when `schedule`
    is called, and `now` falls back to the monotonic clock outside any loop.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def _running_loop(self) -> asyncio.AbstractEventLoop | None:
        if self._loop is not None:
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None

    @property
    def now(self) -> float:
        loop = self._running_loop()
        return (loop.time() if loop is not None else time.monotonic()) * 1000.0

    def schedule(self, callback: Callable[[], None], delay: float) -> asyncio.Handle:
        loop = self._loop or asyncio.get_running_loop()
        if delay <= 0:
            return loop.call_soon(callback)
        return loop.call_later(delay / 1000.0, callback)

    def cancel(self, handle: asyncio.Handle) -> None:
        handle.cancel()
