# runtime/registries.py
from collections.abc import Callable
from typing import Any

from pathtrace.app.protocols import Heuristic, Scheduler
from pathtrace.config.models import (
    GraphByPath,
    GraphInline,
    GraphRef,
    GraphSynthetic,
    HeuristicHaversineModel,
    HeuristicStraightLineModel,
    HeuristicUnion,
    HeuristicZeroModel,
    SchedulerAsyncioModel,
    SchedulerKernelModel,
    SchedulerUnion,
)
from pathtrace.domain.entities.geography import Graph
from pathtrace.domain.search.search_core import Strategy
from pathtrace.domain.search.search_heuristics import (
    HaversineHeuristic,
    StraightLineHeuristic,
    ZeroHeuristic,
)
from pathtrace.domain.search.search_strategies import astar, breadth_first, dijkstra
from pathtrace.io.synthetic import random_geo_graph
from pathtrace.runtime.resources import load_graph_from_path
from pathtrace.sim.rng import RNGRegistry
from pathtrace.sim.scheduler import AsyncioScheduler, KernelScheduler

StrategyFactory = Callable[[Heuristic | None], Strategy]
HeuristicFactory = Callable[[HeuristicUnion], Heuristic]
SchedulerFactory = Callable[[SchedulerUnion, dict], Scheduler]

_strategy_registry: dict[str, StrategyFactory] = {}
_heuristic_registry: dict[str, HeuristicFactory] = {}
_scheduler_registry: dict[str, SchedulerFactory] = {}


# ------------------- Strategies ---------------------------


def register_strategy(name: str):
    def deco(fn: StrategyFactory):
        _strategy_registry[name] = fn
        return fn

    return deco


def strategy_names() -> tuple[str, ...]:
    return tuple(_strategy_registry)


def make_strategy(name: str, *, heuristic: Heuristic | None = None) -> Strategy:
    try:
        factory = _strategy_registry[name]
    except KeyError:
        raise ValueError(
            f"Unknown strategy {name!r}; expected one of {sorted(_strategy_registry)}"
        ) from None
    return factory(heuristic)


@register_strategy("bfs")
def _make_bfs(heuristic):
    return breadth_first()


@register_strategy("dijkstra")
def _make_dijkstra(heuristic):
    return dijkstra()


@register_strategy("astar")
def _make_astar(heuristic):
    return astar(heuristic)


# ------------------- Heuristics ---------------------------


def register_heuristic(kind: str):
    def deco(fn: HeuristicFactory):
        _heuristic_registry[kind] = fn
        return fn

    return deco


def make_heuristic(cfg: HeuristicUnion) -> Heuristic:
    try:
        return _heuristic_registry[cfg.kind](cfg)
    except KeyError:
        raise ValueError(f"Unknown heuristic kind {cfg.kind!r}") from None


@register_heuristic("straight_line")
def _make_straight_line(cfg: HeuristicStraightLineModel):
    return StraightLineHeuristic(cfg.scale_m_per_deg)


@register_heuristic("haversine")
def _make_haversine(cfg: HeuristicHaversineModel):
    return HaversineHeuristic()


@register_heuristic("zero")
def _make_zero(cfg: HeuristicZeroModel):
    return ZeroHeuristic()


# ------------------- Schedulers ---------------------------


def register_scheduler(kind: str):
    def deco(fn: SchedulerFactory):
        _scheduler_registry[kind] = fn
        return fn

    return deco


def make_scheduler(cfg: SchedulerUnion, *, deps: dict) -> Scheduler:
    try:
        factory = _scheduler_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown scheduler kind {cfg.kind!r}") from None
    return factory(cfg, deps)


@register_scheduler("kernel")
def _make_kernel_scheduler(cfg: SchedulerKernelModel, deps):
    return KernelScheduler(deps["kernel"])


@register_scheduler("asyncio")
def _make_asyncio_scheduler(cfg: SchedulerAsyncioModel, deps):
    return AsyncioScheduler(deps.get("loop"))


# ------------------- Graphs ---------------------------


def resolve_graph(ref: GraphRef | None, *, deps: dict[str, Any]) -> Graph:
    """
    deps can include:
      - 'graph': Graph          # a prebuilt graph used when ref is None
      - 'rng': RNGRegistry      # seeds synthetic graphs (else ref.seed is used)
    """
    if ref is None:
        if "graph" in deps:
            return deps["graph"]
        raise ValueError("No graph provided")
    if isinstance(ref, GraphInline):
        return Graph.from_dict({nid: n.model_dump() for nid, n in ref.nodes.items()})
    if isinstance(ref, GraphSynthetic):
        reg = deps.get("rng") or RNGRegistry(ref.seed, scenario="synthetic")
        return random_geo_graph(
            reg.stream("graph"),
            n=ref.nodes,
            k=ref.k,
            center=ref.center,
            extent_deg=ref.extent_deg,
            detour=ref.detour,
        )
    if isinstance(ref, GraphByPath):
        g = load_graph_from_path(ref.file, ref.fmt)
        if g is None:
            if ref.must_exist:
                raise FileNotFoundError(ref.file)
            return Graph()
        return g
    raise TypeError(ref)
