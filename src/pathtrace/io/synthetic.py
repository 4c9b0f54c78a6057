# src/pathtrace/io/synthetic.py
import numpy as np

from pathtrace.domain.entities.geography import Graph, Node
from pathtrace.domain.search.search_heuristics import haversine_m


def random_geo_graph(
    rng: np.random.Generator,
    *,
    n: int,
    k: int = 4,
    center: tuple[float, float] = (0.0, 0.0),
    extent_deg: float = 0.02,
    detour: tuple[float, float] = (1.0, 1.4),
    directed: bool = False,
) -> Graph:
    """
    Scatter `n` nodes uniformly in a square of side `extent_deg` around `center` and
    link each to its `k` nearest neighbors.
    Edge weight = haversine length x a detour factor drawn from `detour`, so the
    great-circle heuristic never overestimates. With `directed`, each direction
    draws its own factor (and only the k-nearest direction is added).
    Node ids are "n0".."n{n-1}".
    """
    lat0, lng0 = center
    half = extent_deg / 2
    lat = rng.uniform(lat0 - half, lat0 + half, size=n)
    lng = rng.uniform(lng0 - half, lng0 + half, size=n)

    # pairwise squared degree distances; self excluded
    d2 = (lat[:, None] - lat[None, :]) ** 2 + (lng[:, None] - lng[None, :]) ** 2
    np.fill_diagonal(d2, np.inf)
    kk = min(k, n - 1)
    nearest = np.argsort(d2, axis=1, kind="stable")[:, :kk] if kk > 0 else np.empty((n, 0), int)

    ids = [f"n{i}" for i in range(n)]
    nodes = {ids[i]: Node(ids[i], float(lat[i]), float(lng[i])) for i in range(n)}
    adj: dict[str, dict[str, float]] = {nid: {} for nid in ids}
    lo, hi = detour
    for i in range(n):
        for j in nearest[i]:
            j = int(j)
            if ids[j] in adj[ids[i]]:
                continue  # already linked from j's side
            base = haversine_m(lat[i], lng[i], lat[j], lng[j])
            w = base * float(rng.uniform(lo, hi))
            adj[ids[i]][ids[j]] = w
            if not directed:
                adj[ids[j]][ids[i]] = w
    return Graph(nodes, adj)
