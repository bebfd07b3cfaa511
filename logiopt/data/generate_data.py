import numpy as np

from ..config.config import DEFAULTS
from ..engine.allocation import Item
from ..engine.stage_graph import stage_layout


def generate_stage_graph(num_stages, nodes_per_stage, *, low=1, high=10, density=1.0, seed=0):
    """Random stage graph with integer costs in ``[low, high]``.

    Edges only join consecutive stages.  With ``density < 1`` edges are
    dropped at random, but every vertex keeps at least one outgoing edge so
    the sink stays reachable.
    """
    rng = np.random.default_rng(seed)
    layout = stage_layout(num_stages, nodes_per_stage)
    n = layout[-1][0] + 1
    cost = np.full((n, n), np.inf, dtype=np.float64)

    for here, there in zip(layout[:-1], layout[1:]):
        for a in here:
            keep = rng.random(len(there)) < density
            if not keep.any():
                keep[rng.integers(len(there))] = True
            for b, k in zip(there, keep):
                if k:
                    cost[a, b] = float(rng.integers(low, high + 1))
    return cost, layout


def generate_city_positions(
    num_cities,
    width=DEFAULTS["canvas_width"],
    height=DEFAULTS["canvas_height"],
    margin=DEFAULTS["canvas_margin"],
    seed=0,
):
    rng = np.random.default_rng(seed)
    coords = np.zeros((int(num_cities), 2), dtype=np.float64)
    coords[:, 0] = rng.uniform(margin, width - margin, size=int(num_cities))
    coords[:, 1] = rng.uniform(margin, height - margin, size=int(num_cities))
    return coords


def generate_items(count, *, seed=0, max_weight=30, max_value=150):
    rng = np.random.default_rng(seed)
    weights = rng.integers(1, max_weight + 1, size=int(count))
    values = rng.integers(0, max_value + 1, size=int(count))
    return [
        Item(id=i, weight=float(w), value=float(v), name=f"Box {i}")
        for i, (w, v) in enumerate(zip(weights, values))
    ]
