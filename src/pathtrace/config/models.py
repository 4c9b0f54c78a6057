import os
from math import isfinite
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = Field(default=1, ge=1)


# ----------------- GRAPHS ---------------------


class NodeModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    lat: float
    lng: float
    neighbors: dict[str, float] = Field(default_factory=dict)

    @field_validator("neighbors")
    @classmethod
    def _weights_nonneg(cls, v: dict[str, float]) -> dict[str, float]:
        for nid, w in v.items():
            if not isfinite(w) or w < 0:
                raise ValueError(f"edge weight to {nid!r} must be finite and >= 0, got {w}")
        return v


class GraphByPath(BaseModel):
    model_config = ConfigDict(extra="forbid")
    by: Literal["path"] = "path"
    file: str
    fmt: Literal["osm_json", "adjacency_json"] = "osm_json"
    must_exist: bool = True

    @field_validator("file")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


class GraphInline(BaseModel):
    model_config = ConfigDict(extra="forbid")
    by: Literal["inline"] = "inline"
    nodes: dict[str, NodeModel]


class GraphSynthetic(BaseModel):
    model_config = ConfigDict(extra="forbid")
    by: Literal["synthetic"] = "synthetic"
    nodes: int = Field(default=200, ge=1)
    k: int = Field(default=4, ge=1)  # nearest neighbors linked per node
    seed: int = 0
    center: tuple[float, float] = (17.385, 78.4867)  # lat, lng
    extent_deg: float = Field(default=0.02, gt=0)
    detour: tuple[float, float] = (1.0, 1.4)

    @model_validator(mode="after")
    def _check_detour(self):
        lo, hi = self.detour
        if lo < 1.0 or hi < lo:
            raise ValueError(f"detour must satisfy 1.0 <= lo <= hi, got {self.detour}")
        return self


GraphRef = Annotated[GraphByPath | GraphInline | GraphSynthetic, Field(discriminator="by")]


# ----------------- SEARCH ---------------------


class HeuristicStraightLineModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["straight_line"] = "straight_line"
    scale_m_per_deg: float = Field(default=111_000.0, gt=0)


class HeuristicHaversineModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["haversine"] = "haversine"


class HeuristicZeroModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["zero"] = "zero"


HeuristicUnion = Annotated[
    HeuristicStraightLineModel | HeuristicHaversineModel | HeuristicZeroModel,
    Field(discriminator="kind"),
]


class SearchModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    strategy: Literal["bfs", "dijkstra", "astar"] = "dijkstra"
    heuristic: HeuristicUnion = Field(default_factory=HeuristicStraightLineModel)


# ----------------- PLAYBACK ---------------------


class RevealBatchModel(BaseModel):
    """Entries revealed per tick, by inter-step delay."""

    model_config = ConfigDict(extra="forbid")
    at_zero: int = 100
    fast: int = 10
    fast_max_ms: float = 5.0
    default: int = 1

    @field_validator("at_zero", "fast", "default")
    @classmethod
    def _at_least_one(cls, v: int, info: ValidationInfo) -> int:
        if v < 1:
            raise ValueError(f"{info.field_name} must be >= 1")
        return v

    def size_for(self, speed_ms: float) -> int:
        if speed_ms <= 0:
            return self.at_zero
        if speed_ms <= self.fast_max_ms:
            return self.fast
        return self.default


class PlaybackModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    speed_ms: int = Field(default=50, ge=0)
    autoplay: bool = True
    batch: RevealBatchModel = Field(default_factory=RevealBatchModel)


class SchedulerKernelModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["kernel"] = "kernel"


class SchedulerAsyncioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["asyncio"] = "asyncio"


SchedulerUnion = Annotated[
    SchedulerKernelModel | SchedulerAsyncioModel, Field(discriminator="kind")
]


class SummaryModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    cruise_mps: float = Field(default=10.0, gt=0)


# ------------------------------------------------------------------


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    run_id: str = "local"
    graph: GraphRef
    source: str | None = None
    target: str | None = None
    search: SearchModel = Field(default_factory=SearchModel)
    playback: PlaybackModel = Field(default_factory=PlaybackModel)
    scheduler: SchedulerUnion = Field(default_factory=SchedulerKernelModel)
    log: LogModel = LogModel()
    summary: SummaryModel = SummaryModel()
