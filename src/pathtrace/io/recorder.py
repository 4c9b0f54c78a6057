# io/recorder.py
import json
import logging
import queue
import sys
import threading
from dataclasses import asdict
from typing import Protocol

log = logging.getLogger("pathtrace.recorder")


def _record(ev) -> dict:
    return {"event": type(ev).__name__, **asdict(ev)}


class Sink(Protocol):
    def write(self, ev) -> None: ...


class JsonlSink:
    def __init__(self, fp=sys.stdout):
        self.fp = fp

    def write(self, ev) -> None:
        self.fp.write(json.dumps(_record(ev), default=str) + "\n")


class MemorySink:
    def __init__(self):
        self.events: list = []

    def write(self, ev) -> None:
        self.events.append(ev)

    def of_type(self, etype) -> list:
        return [e for e in self.events if isinstance(e, etype)]


# Async sink (non-blocking, drops on overflow)
class AsyncSink:
    def __init__(self, sink: Sink, maxsize: int = 10000):
        self.sink, self.q = sink, queue.Queue(maxsize=maxsize)
        self.dropped = 0
        self._t = threading.Thread(target=self._run, daemon=True)
        self._t.start()

    def write(self, ev) -> None:
        try:
            self.q.put_nowait(ev)
        except queue.Full:
            self.dropped += 1  # never block playback

    def _run(self):
        while True:
            ev = self.q.get()
            if ev is None:
                return
            try:
                self.sink.write(ev)
            except Exception:
                log.exception("async sink write failed")

    def stop(self):
        self.q.put(None)
        self._t.join(timeout=1.0)


class Recorder:
    def __init__(self, *sinks: Sink):
        self.sinks = sinks or (JsonlSink(),)

    def emit(self, ev):
        for s in self.sinks:
            try:
                s.write(ev)
            except Exception:
                log.exception("recorder sink %s failed", type(s).__name__)
