# app/events.py
from dataclasses import dataclass

from pathtrace.sim.event import BaseEvent


# Every playback event carries the controller's generation so records from a
# replaced trace can be told apart from the live one.
@dataclass(order=True)
class TraceLoaded(BaseEvent):
    generation: int
    strategy: str
    total: int
    path_len: int


@dataclass(order=True)
class PlaybackStarted(BaseEvent):
    generation: int
    revealed: int
    replay: bool = False


@dataclass(order=True)
class PlaybackPaused(BaseEvent):
    generation: int
    revealed: int


@dataclass(order=True)
class RevealAdvanced(BaseEvent):
    generation: int
    revealed: int
    batch: int
    stepped: bool = False


@dataclass(order=True)
class PlaybackFinished(BaseEvent):
    generation: int
    total: int
    path_len: int


@dataclass(order=True)
class PlaybackReset(BaseEvent):
    generation: int


@dataclass(order=True)
class SpeedChanged(BaseEvent):
    generation: int
    speed_ms: int
