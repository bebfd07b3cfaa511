"""Minimum-cost source-to-sink paths through a stage-ordered DAG.

Vertex ``0`` is the source and vertex ``n-1`` the sink.  Only entries
``cost[i, j]`` with ``j > i`` are edges; everything on or below the diagonal
is ignored.  The backward recurrence

    bcost[n-1] = 0
    bcost[j]   = min_{r > j} cost[j, r] + bcost[r]

is evaluated once per call and the forward path is read off the decision
array.  An unreachable sink is reported through the result
(``minimum_cost is None``), not raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..config.enums import NO_VERTEX
from ._numba_kernels import backward_pass
from .validation import as_matrix, as_vertex


def _finite_or_none(value: float) -> Optional[float]:
    return float(value) if np.isfinite(value) else None


@dataclass(frozen=True, eq=False)
class StageGraphResult:
    minimum_cost: Optional[float]
    path: Tuple[int, ...]
    backward_cost: np.ndarray
    decision: np.ndarray

    @property
    def n(self) -> int:
        return int(self.backward_cost.shape[0])

    @property
    def reachable(self) -> bool:
        return self.minimum_cost is not None and self.path[-1] == self.n - 1

    def to_dict(self):
        return {
            "minimum_cost": self.minimum_cost,
            "path": list(self.path),
            "reachable": self.reachable,
            "backward_cost": [_finite_or_none(v) for v in self.backward_cost],
            "decision": [None if d == NO_VERTEX else int(d) for d in self.decision],
        }


def solve(cost_matrix) -> StageGraphResult:
    """Run the backward pass over ``cost_matrix`` and rebuild the best path.

    ``None`` or ``inf`` entries mean "no edge".  Raises ``ShapeError`` for a
    non-square matrix or fewer than two vertices and ``ValueError`` for
    non-numeric entries.
    """

    cost = as_matrix(cost_matrix, name="cost_matrix", min_size=2)
    n = cost.shape[0]

    bcost = np.full(n, np.inf, dtype=np.float64)
    bcost[n - 1] = 0.0
    decision = np.full(n, NO_VERTEX, dtype=np.int64)
    backward_pass(cost, bcost, decision)

    path = [0]
    current = 0
    while current != n - 1:
        nxt = int(decision[current])
        if nxt == NO_VERTEX:
            break
        path.append(nxt)
        current = nxt

    bcost.setflags(write=False)
    decision.setflags(write=False)
    return StageGraphResult(
        minimum_cost=_finite_or_none(bcost[0]),
        path=tuple(path),
        backward_cost=bcost,
        decision=decision,
    )


def path_cost(cost_matrix, path: Sequence[int]) -> Optional[float]:
    """Sum of edge costs along ``path``; ``None`` if a step is not an edge."""

    cost = as_matrix(cost_matrix, name="cost_matrix", min_size=1)
    n = cost.shape[0]
    total = 0.0
    for a, b in zip(path[:-1], path[1:]):
        a, b = as_vertex(a, n, "path vertex"), as_vertex(b, n, "path vertex")
        if b <= a or not np.isfinite(cost[a, b]):
            return None
        total += float(cost[a, b])
    return total


def stage_vertex_count(num_stages: int, nodes_per_stage: int) -> int:
    """Number of vertices for a source, ``num_stages - 2`` inner stages and a sink."""

    num_stages = int(num_stages)
    nodes_per_stage = int(nodes_per_stage)
    if num_stages < 2:
        raise ValueError("num_stages must be >= 2")
    if num_stages > 2 and nodes_per_stage < 1:
        raise ValueError("nodes_per_stage must be >= 1")
    return 2 + (num_stages - 2) * max(nodes_per_stage, 0)


def stage_layout(num_stages: int, nodes_per_stage: int) -> List[List[int]]:
    """Vertex indices grouped by stage: ``[[0], [1..k], ..., [n-1]]``."""

    n = stage_vertex_count(num_stages, nodes_per_stage)
    layout = [[0]]
    vertex = 1
    for _ in range(int(num_stages) - 2):
        layout.append(list(range(vertex, vertex + int(nodes_per_stage))))
        vertex += int(nodes_per_stage)
    layout.append([n - 1])
    return layout
