# pathtrace/app/controllers/playback.py
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from functools import partial

from pathtrace.app.events import (
    PlaybackFinished,
    PlaybackPaused,
    PlaybackReset,
    PlaybackStarted,
    RevealAdvanced,
    SpeedChanged,
    TraceLoaded,
)
from pathtrace.app.protocols import PlaybackListener, Scheduler
from pathtrace.config.models import RevealBatchModel
from pathtrace.domain.entities.geography import NodeId
from pathtrace.domain.entities.trace import SearchTrace
from pathtrace.sim.hooks import NoopHooks, PlaybackHooks


class PlaybackStatus(Enum):
    IDLE = "idle"  # nothing loaded
    READY = "ready"
    PLAYING = "playing"
    PAUSED = "paused"
    FINISHED = "finished"


@dataclass(frozen=True)
class PlaybackState:
    status: PlaybackStatus
    revealed_count: int
    total: int
    speed_ms: int
    generation: int

    @property
    def is_playing(self) -> bool:
        return self.status is PlaybackStatus.PLAYING

    @property
    def is_finished(self) -> bool:
        return self.status is PlaybackStatus.FINISHED


class PlaybackController:
    """
    Replays a SearchTrace's visited_order as a growing revealed prefix.

    States: IDLE -> READY (load) -> PLAYING <-> PAUSED -> FINISHED; play() from
    FINISHED replays from zero; reset() returns to IDLE from anywhere. A trace with
    nothing to reveal is FINISHED as soon as it is loaded.
    While PLAYING, one tick is pending on the scheduler at a time. Each tick waits
    the current speed, then reveals a batch sized by that speed (never past the end).
    The final path is only exposed once FINISHED.

    Any operation that stops or replaces playback cancels the pending tick and
    bumps the tick ticket, so a callback that still fires is recognised as stale
    and ignored. Loading or resetting also bumps the generation.
    Operations with nothing to act on (no trace, already finished) do nothing.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        speed_ms: int = 50,
        batch: RevealBatchModel | None = None,
        hooks: PlaybackHooks | None = None,
    ):
        self.scheduler = scheduler
        self.batch = batch or RevealBatchModel()
        self._hooks = hooks or NoopHooks()
        self._speed = self._check_speed(speed_ms)
        self._trace: SearchTrace | None = None
        self._revealed = 0
        self._status = PlaybackStatus.IDLE
        self._generation = 0
        self._ticket = 0
        self._pending = None
        self._listeners: list[PlaybackListener] = []

    # --------------- Read side -----------------------------

    @property
    def state(self) -> PlaybackState:
        return PlaybackState(
            status=self._status,
            revealed_count=self._revealed,
            total=len(self._trace) if self._trace else 0,
            speed_ms=self._speed,
            generation=self._generation,
        )

    @property
    def trace(self) -> SearchTrace | None:
        return self._trace

    def revealed(self) -> tuple[NodeId, ...]:
        return self._trace.revealed(self._revealed) if self._trace else ()

    def final_path(self) -> tuple[NodeId, ...]:
        if self._trace is None or self._status is not PlaybackStatus.FINISHED:
            return ()
        return self._trace.path

    def subscribe(self, listener: PlaybackListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --------------- Operations -----------------------------

    def load(self, trace: SearchTrace, *, autoplay: bool = False) -> None:
        self._cancel_pending()
        self._generation += 1
        self._trace = trace
        self._revealed = 0
        self._status = PlaybackStatus.READY
        self._emit(TraceLoaded, strategy=trace.strategy, total=len(trace), path_len=len(trace.path))
        if len(trace) == 0:
            self._advance(0)  # nothing to reveal: finished on arrival
            return
        self._notify()
        if autoplay:
            self.play()

    def play(self) -> None:
        if self._status not in (
            PlaybackStatus.READY,
            PlaybackStatus.PAUSED,
            PlaybackStatus.FINISHED,
        ):
            return
        replay = self._status is PlaybackStatus.FINISHED
        if replay:
            self._revealed = 0
        self._status = PlaybackStatus.PLAYING
        self._emit(PlaybackStarted, revealed=self._revealed, replay=replay)
        self._schedule_next()
        self._notify()

    def pause(self) -> None:
        if self._status is not PlaybackStatus.PLAYING:
            return
        self._cancel_pending()
        self._status = PlaybackStatus.PAUSED
        self._emit(PlaybackPaused, revealed=self._revealed)
        self._notify()

    def step(self) -> None:
        if self._status in (PlaybackStatus.IDLE, PlaybackStatus.FINISHED):
            return
        self._cancel_pending()
        if not self._advance(1, stepped=True):
            self._status = PlaybackStatus.PAUSED
            self._emit(PlaybackPaused, revealed=self._revealed)
            self._notify()

    def reset(self) -> None:
        self._cancel_pending()
        self._generation += 1
        self._trace = None
        self._revealed = 0
        self._status = PlaybackStatus.IDLE
        self._emit(PlaybackReset)
        self._notify()

    def set_speed(self, speed_ms: int) -> None:
        """New delay applies from the next scheduled tick; a pending one keeps its own."""
        self._speed = self._check_speed(speed_ms)
        self._emit(SpeedChanged, speed_ms=self._speed)
        self._notify()

    # --------------- Internals -----------------------------

    @staticmethod
    def _check_speed(speed_ms) -> int:
        speed = int(speed_ms)
        if speed < 0:
            raise ValueError(f"speed_ms must be >= 0, got {speed_ms!r}")
        return speed

    def _schedule_next(self) -> None:
        self._ticket += 1
        delay = self._speed
        self._pending = self.scheduler.schedule(partial(self._tick, self._ticket, delay), delay)

    def _cancel_pending(self) -> None:
        self._ticket += 1
        if self._pending is not None:
            self.scheduler.cancel(self._pending)
            self._pending = None

    def _tick(self, ticket: int, delay: int) -> None:
        if ticket != self._ticket or self._status is not PlaybackStatus.PLAYING:
            return  # stale
        self._pending = None
        finished = self._advance(self.batch.size_for(delay))
        if not finished and self._status is PlaybackStatus.PLAYING and self._pending is None:
            self._schedule_next()

    def _advance(self, n: int, *, stepped: bool = False) -> bool:
        """Reveal up to n more entries; returns True once playback has finished."""
        total = len(self._trace)
        before = self._revealed
        self._revealed = min(before + max(1, n), total)
        if self._revealed > before:
            self._emit(
                RevealAdvanced,
                revealed=self._revealed,
                batch=self._revealed - before,
                stepped=stepped,
            )
        if self._revealed < total:
            if not stepped:
                self._notify()
            return False
        self._status = PlaybackStatus.FINISHED
        self._emit(PlaybackFinished, total=total, path_len=len(self._trace.path))
        self._notify()
        return True

    def _emit(self, etype, **fields) -> None:
        self._hooks.biz(etype(t=self.scheduler.now, generation=self._generation, **fields))

    def _notify(self) -> None:
        snapshot = self.state
        for listener in list(self._listeners):
            listener(snapshot)
