# pathtrace/runtime/resources.py
import json
from functools import lru_cache
from pathlib import Path

from pathtrace.domain.entities.geography import Graph
from pathtrace.io.osm import build_graph_from_osm


@lru_cache(maxsize=8)
def load_graph_from_path(file: str, fmt: str) -> Graph | None:
    p = Path(file)
    if not p.exists():
        return None
    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if fmt == "osm_json":
        return build_graph_from_osm(data)
    if fmt == "adjacency_json":
        return Graph.from_dict(data)
    raise ValueError(f"Unsupported graph fmt {fmt!r}")
