# main.py
import asyncio
import json
import sys

from pathtrace.app.build import App, build
from pathtrace.config.models import ScenarioModel
from pathtrace.io.recorder import JsonlSink
from pathtrace.io.structured_logging import _default_json_logger


def _endpoints(app: App) -> None:
    ids = list(app.graph)
    if app.route.source is None:
        app.route.source = ids[0]
    if app.route.target is None:
        app.route.target = ids[-1]


def _replay_on_kernel(app: App) -> None:
    trace = app.route.calculate()
    if trace is not None and trace.found:
        if not app.model.playback.autoplay:
            app.playback.play()
        app.kernel.run()


async def _replay_on_loop(app: App) -> None:
    done = asyncio.Event()
    app.playback.subscribe(lambda state: done.set() if state.is_finished else None)
    trace = app.route.calculate()
    if trace is None or not trace.found:
        return
    if not app.model.playback.autoplay:
        app.playback.play()
    await done.wait()


def run(scenario_path: str) -> int:
    with open(scenario_path, encoding="utf-8") as f:
        model = ScenarioModel.model_validate(json.load(f))
    # stdout carries only the summary; logs and playback records go to stderr
    log = _default_json_logger("pathtrace.cli", level=model.log.level, stream=sys.stderr)
    app = build(model, sinks=[JsonlSink(sys.stderr)], logger=log)
    if len(app.graph) == 0:
        print("empty graph", file=sys.stderr)
        return 1
    _endpoints(app)

    if app.model.scheduler.kind == "asyncio":
        asyncio.run(_replay_on_loop(app))
    else:
        _replay_on_kernel(app)

    s = app.route.last
    out = {
        "strategy": app.route.strategy,
        "expanded": s.expanded,
        "hops": s.hops,
        "distance": s.distance,
        "duration": s.duration,
    }
    print(json.dumps(out))
    return 0 if s.found else 2


if __name__ == "__main__":
    sys.exit(run(sys.argv[1] if len(sys.argv) > 1 else "scenarios/demo.json"))
