"""Nearest-neighbour tour construction over a complete distance graph."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from ..config.config import DEFAULTS
from ._numba_kernels import nearest_neighbor
from .validation import as_matrix, as_vertex


@dataclass(frozen=True)
class TourSegment:
    source: int
    target: int
    distance: Optional[float]


@dataclass(frozen=True)
class TourResult:
    tour: Tuple[int, ...]
    total_distance: Optional[float]
    all_visited: bool
    num_visited: int
    segments: Tuple[TourSegment, ...]

    @property
    def average_segment_distance(self) -> Optional[float]:
        if self.total_distance is None or not self.segments:
            return None
        return self.total_distance / len(self.segments)

    def to_dict(self):
        return {
            "tour": list(self.tour),
            "total_distance": self.total_distance,
            "all_visited": self.all_visited,
            "num_visited": self.num_visited,
            "segments": [
                {"from": s.source, "to": s.target, "distance": s.distance}
                for s in self.segments
            ],
            "average_segment_distance": self.average_segment_distance,
        }


def _validate_distances(dist: np.ndarray, symmetry_tol: float) -> None:
    if np.any(dist < 0):
        raise ValueError("distances must be non-negative")
    if np.any(np.diag(dist) != 0):
        raise ValueError("distances must have a zero diagonal")
    finite = np.isfinite(dist)
    if not np.array_equal(finite, finite.T):
        raise ValueError("distances must be symmetric")
    if finite.any() and np.max(np.abs(dist[finite] - dist.T[finite])) > symmetry_tol:
        raise ValueError("distances must be symmetric")


def construct(distances, start: int = 0, *, symmetry_tol: float = DEFAULTS["symmetry_tol"]) -> TourResult:
    """Build a closed tour greedily, always moving to the nearest unvisited vertex.

    Ties go to the lowest index.  ``inf`` (or ``None``) marks a missing link;
    if some vertex can never be reached the tour closes early and
    ``all_visited`` is ``False``.  The result is deterministic for a given
    matrix and start vertex, but not optimal in general.
    """

    dist = as_matrix(distances, name="distances", min_size=1)
    _validate_distances(dist, float(symmetry_tol))
    n = dist.shape[0]
    start = as_vertex(start, n, "start")

    buf = np.zeros(n + 1, dtype=np.int64)
    visited = np.zeros(n, dtype=np.bool_)
    length, total = nearest_neighbor(dist, start, buf, visited)

    tour = tuple(int(v) for v in buf[:length])
    segments = tuple(
        TourSegment(a, b, float(dist[a, b]) if np.isfinite(dist[a, b]) else None)
        for a, b in zip(tour[:-1], tour[1:])
    )
    num_visited = int(visited.sum())
    return TourResult(
        tour=tour,
        total_distance=float(total) if np.isfinite(total) else None,
        all_visited=num_visited == n,
        num_visited=num_visited,
        segments=segments,
    )


def tour_length(distances, tour: Sequence[int]) -> Optional[float]:
    """Sum of consecutive legs along ``tour``; ``None`` if any leg is missing."""

    dist = as_matrix(distances, name="distances", min_size=1)
    n = dist.shape[0]
    total = 0.0
    for a, b in zip(tour[:-1], tour[1:]):
        leg = dist[as_vertex(a, n, "tour vertex"), as_vertex(b, n, "tour vertex")]
        if not np.isfinite(leg):
            return None
        total += float(leg)
    return total
