import pytest
from pydantic import ValidationError

from pathtrace.config.models import (
    GraphInline,
    GraphSynthetic,
    HeuristicHaversineModel,
    RevealBatchModel,
    ScenarioModel,
    SchedulerAsyncioModel,
)
from pathtrace.domain.search.search_heuristics import HaversineHeuristic, StraightLineHeuristic
from pathtrace.runtime.registries import (
    make_heuristic,
    make_scheduler,
    make_strategy,
    resolve_graph,
    strategy_names,
)
from pathtrace.sim.scheduler import AsyncioScheduler


def minimal(**over):
    cfg = {"name": "t", "graph": {"by": "synthetic", "nodes": 10}}
    cfg.update(over)
    return cfg


def inline_a(neighbors):
    return {"by": "inline", "nodes": {"a": {"lat": 0, "lng": 0, "neighbors": neighbors}}}


def test_defaults():
    m = ScenarioModel.model_validate(minimal())
    assert m.search.strategy == "dijkstra"
    assert m.search.heuristic.kind == "straight_line"
    assert m.playback.speed_ms == 50 and m.playback.autoplay is True
    assert m.scheduler.kind == "kernel"
    assert m.summary.cruise_mps == 10.0
    assert isinstance(m.graph, GraphSynthetic)


def test_discriminated_unions():
    m = ScenarioModel.model_validate(
        minimal(
            graph={"by": "inline", "nodes": {"a": {"lat": 1, "lng": 2}}},
            search={"strategy": "astar", "heuristic": {"kind": "haversine"}},
            scheduler={"kind": "asyncio"},
        )
    )
    assert isinstance(m.graph, GraphInline)
    assert isinstance(m.search.heuristic, HeuristicHaversineModel)
    assert isinstance(m.scheduler, SchedulerAsyncioModel)


@pytest.mark.parametrize(
    "over",
    [
        {"search": {"strategy": "dfs"}},
        {"playback": {"speed_ms": -1}},
        {"graph": {"by": "synthetic", "detour": [0.5, 1.0]}},
        {"graph": {"by": "synthetic", "detour": [1.5, 1.2]}},
        {"graph": inline_a({"b": -1})},
        {"graph": inline_a({"b": "inf"})},
        {"graph": {"by": "ftp"}},
        {"summary": {"cruise_mps": 0}},
        {"surprise": True},
    ],
)
def test_invalid_configs_are_rejected(over):
    with pytest.raises(ValidationError):
        ScenarioModel.model_validate(minimal(**over))


def test_batch_policy():
    b = RevealBatchModel()
    assert [b.size_for(s) for s in (0, 1, 5, 5.5, 50)] == [100, 10, 10, 1, 1]
    with pytest.raises(ValidationError):
        RevealBatchModel(fast=0)


def test_path_is_user_expanded(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    m = ScenarioModel.model_validate(minimal(graph={"by": "path", "file": "~/area.json"}))
    assert m.graph.file == str(tmp_path / "area.json")


# ------------------ registries ------------------


def test_registries_resolve_models():
    assert set(strategy_names()) == {"bfs", "dijkstra", "astar"}
    assert make_strategy("astar").name == "astar"
    with pytest.raises(ValueError, match="Unknown strategy"):
        make_strategy("greedy")

    m = ScenarioModel.model_validate(minimal())
    assert isinstance(make_heuristic(m.search.heuristic), StraightLineHeuristic)
    assert isinstance(make_heuristic(HeuristicHaversineModel()), HaversineHeuristic)
    assert isinstance(make_scheduler(SchedulerAsyncioModel(), deps={}), AsyncioScheduler)


def test_resolve_graph_variants(tmp_path):
    inline = ScenarioModel.model_validate(minimal(graph=inline_a({"b": 3})))
    g = resolve_graph(inline.graph, deps={})
    assert g.weight("a", "b") == 3.0 and "b" not in g

    synth = ScenarioModel.model_validate(minimal()).graph
    assert resolve_graph(synth, deps={}).to_dict() == resolve_graph(synth, deps={}).to_dict()

    missing = str(tmp_path / "nope.json")
    strict = ScenarioModel.model_validate(minimal(graph={"by": "path", "file": missing}))
    with pytest.raises(FileNotFoundError):
        resolve_graph(strict.graph, deps={})
    lenient = ScenarioModel.model_validate(
        minimal(graph={"by": "path", "file": missing, "must_exist": False})
    )
    assert len(resolve_graph(lenient.graph, deps={})) == 0
