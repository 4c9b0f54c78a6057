# pathtrace/app/build.py
import logging
from collections.abc import Mapping
from dataclasses import dataclass

from pathtrace.app.controllers.playback import PlaybackController
from pathtrace.app.controllers.route import RouteHandler
from pathtrace.app.protocols import Scheduler
from pathtrace.config.models import ScenarioModel
from pathtrace.domain.entities.geography import Graph
from pathtrace.domain.search.engine import PathfindingEngine
from pathtrace.io.recorder import JsonlSink, Recorder, Sink
from pathtrace.io.structured_logging import StructuredLogging
from pathtrace.runtime.registries import make_heuristic, make_scheduler, resolve_graph
from pathtrace.services.route_summary import RouteSummaryService
from pathtrace.sim.hooks import NoopHooks
from pathtrace.sim.kernel import Kernel
from pathtrace.sim.rng import RNGRegistry


@dataclass
class App:
    model: ScenarioModel
    kernel: Kernel
    scheduler: Scheduler
    graph: Graph
    engine: PathfindingEngine
    playback: PlaybackController
    route: RouteHandler


def build(
    cfg: ScenarioModel | Mapping,
    *,
    graph: Graph | None = None,
    use_logging: bool = True,
    sinks: list[Sink] | None = None,
    logger: logging.Logger | None = None,
    loop=None,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)

    # 1) Hooks (logs + recorder for playback events)
    hooks = (
        StructuredLogging(
            run_id=model.run_id,
            recorder=Recorder(*(sinks if sinks is not None else [JsonlSink()])),
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
            logger=logger,
        )
        if use_logging
        else NoopHooks()
    )

    # 2) Kernel & scheduler
    kernel = Kernel(hooks=hooks)
    scheduler = make_scheduler(model.scheduler, deps={"kernel": kernel, "loop": loop})

    # 3) Graph
    if graph is None:
        rng = RNGRegistry(getattr(model.graph, "seed", 0), scenario=model.name)
        graph = resolve_graph(model.graph, deps={"rng": rng})

    # 4) Engine, playback, route handler (inject deps explicitly)
    engine = PathfindingEngine(heuristic=make_heuristic(model.search.heuristic), hooks=hooks)
    playback = PlaybackController(
        scheduler, speed_ms=model.playback.speed_ms, batch=model.playback.batch, hooks=hooks
    )
    route = RouteHandler(
        graph,
        engine,
        playback,
        RouteSummaryService(model.summary.cruise_mps),
        strategy=model.search.strategy,
        autoplay=model.playback.autoplay,
    )
    route.source, route.target = model.source, model.target

    return App(model, kernel, scheduler, graph, engine, playback, route)
