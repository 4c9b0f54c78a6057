# pathtrace/app/controllers/route.py
import logging

from pathtrace.app.controllers.playback import PlaybackController
from pathtrace.domain.entities.geography import Graph, NodeId
from pathtrace.domain.entities.trace import SearchTrace
from pathtrace.domain.search.engine import PathfindingEngine
from pathtrace.domain.search.search_geospace import nearest_node, within_region
from pathtrace.services.route_summary import RouteSummary, RouteSummaryService

log = logging.getLogger("pathtrace.route")


class RouteHandler:
    """Endpoint picking, search, and hand-off of the trace to playback."""

    def __init__(
        self,
        graph: Graph,
        engine: PathfindingEngine,
        playback: PlaybackController,
        summary: RouteSummaryService,
        *,
        strategy: str = "dijkstra",
        autoplay: bool = True,
    ):
        self.graph = graph
        self.engine = engine
        self.playback = playback
        self.summary = summary
        self.strategy = strategy
        self.autoplay = autoplay
        self.source: NodeId | None = None
        self.target: NodeId | None = None
        self.last: RouteSummary | None = None

    def pick(self, lat: float, lng: float) -> NodeId | None:
        """Snap a point to the graph: first pick sets the source, second the target.

        Points outside the loaded region, and picks once both ends are set, are ignored.
        """
        if self.source is not None and self.target is not None:
            return None
        if not within_region(self.graph, lat, lng):
            log.info("pick outside region", extra={"extra": {"lat": lat, "lng": lng}})
            return None
        nid, _ = nearest_node(self.graph, lat, lng)
        if nid is None:
            return None
        if self.source is None:
            self.source = nid
        else:
            self.target = nid
        return nid

    def calculate(
        self,
        source: NodeId | None = None,
        target: NodeId | None = None,
        strategy: str | None = None,
    ) -> SearchTrace | None:
        source = self.source if source is None else source
        target = self.target if target is None else target
        if source is None or target is None:
            return None
        self.playback.reset()
        trace = self.engine.run(self.graph, source, target, strategy or self.strategy)
        self.last = self.summary.summarize(trace)
        if not trace.found:
            log.info("no route", extra={"extra": {"source": source, "target": target}})
            return trace
        self.playback.load(trace, autoplay=self.autoplay)
        return trace

    def clear(self) -> None:
        self.source = self.target = None
        self.last = None
        self.playback.reset()
