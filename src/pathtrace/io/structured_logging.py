# io/structured_logging.py
import json
import logging
import math
import sys
from dataclasses import asdict, is_dataclass

from pathtrace.app.events import RevealAdvanced
from pathtrace.io.recorder import Recorder
from pathtrace.sim.hooks import NoopHooks


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, default=str)


def _default_json_logger(name="pathtrace", level="INFO", stream=None):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(stream or sys.stdout)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


def _jsonable_cost(cost: float):
    return cost if math.isfinite(cost) else None


class StructuredLogging(NoopHooks):
    """
    One place to shape and emit structured logs for the kernel, the search engine
    and playback transitions. Playback events also go to the recorder, if any.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1000,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug, self.sample_every = run_id, debug, max(1, sample_every)
        self.recorder = recorder
        self.log = logger or _default_json_logger(level=level)
        self._reveals = 0
        self._dispatched = 0

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id, **extra}
        self.log.log(getattr(logging, level), msg, extra={"extra": payload})

    def _shape_event(self, ev) -> dict:
        base = {"t": getattr(ev, "t", None)}
        if is_dataclass(ev):
            data = asdict(ev)
            data.pop("t", None)
            base.update(data)
        return base

    # --------------- Kernel lifecycle -----------------------------

    def run_start(self, *, until, max_events, qsize):
        self._emit("DEBUG", "run_start", until=until, max_events=max_events, qsize=qsize)

    def run_end(self, *, processed: int, **extra):
        self._emit("DEBUG", "run_end", processed=processed, **extra)

    def schedule(self, ev, *, now: float, qsize: int):
        if self.debug and (qsize % self.sample_every) == 0:
            self._emit(
                "DEBUG", "schedule", event=type(ev).__name__, t=ev.t, now=now, qsize=qsize
            )

    def dispatch_start(self, ev, *, seq: int, qsize: int, handlers: int):
        self._dispatched += 1

    def dispatch_end(self, ev, *, out_events: int, ms: float):
        if self.debug and (self._dispatched % self.sample_every) == 0:
            self._emit(
                "DEBUG", "dispatch_done", event=type(ev).__name__, out_events=out_events, ms=ms
            )

    def error(self, ev, *, reason: str, **extra):
        self._emit("ERROR", "kernel_error", event=type(ev).__name__, reason=reason, **extra)

    # --------------- Search -----------------------------

    def search_start(self, *, strategy, source, target, nodes):
        self._emit(
            "INFO", "search_start", strategy=strategy, source=source, target=target, nodes=nodes
        )

    def search_end(self, *, strategy, visited, path_len, cost, skipped_edges, ms):
        level = "WARNING" if skipped_edges else "INFO"
        self._emit(
            level,
            "search_end",
            strategy=strategy,
            visited=visited,
            path_len=path_len,
            found=path_len > 0,
            cost=_jsonable_cost(cost),
            skipped_edges=skipped_edges,
            ms=round(ms, 3),
        )

    # ------------- Playback (business) events --------------------------

    def biz(self, ev):
        name = type(ev).__name__
        if isinstance(ev, RevealAdvanced):
            self._reveals += 1
            if self.debug and (self._reveals % self.sample_every) == 0:
                self._emit("DEBUG", name, **self._shape_event(ev))
        else:
            self._emit("INFO", name, **self._shape_event(ev))
        if self.recorder:
            self.recorder.emit(ev)
