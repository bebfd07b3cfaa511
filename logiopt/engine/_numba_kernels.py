"""Numba-accelerated inner loops for the stage-graph and tour solvers."""

from __future__ import annotations

import numpy as np
from numba import njit


@njit(cache=True)
def backward_pass(cost, bcost, decision):
    """Fill ``bcost``/``decision`` right-to-left for a stage-ordered DAG.

    Parameters
    ----------
    cost : ndarray
        ``(n, n)`` float64 edge costs, ``inf`` where there is no edge.  Only
        the strict upper triangle is read.
    bcost : ndarray
        Output buffer ``(n,)``; ``bcost[n-1]`` must already hold ``0``.
    decision : ndarray
        Output buffer ``(n,)`` of successor indices, ``-1`` for none.
    """

    n = cost.shape[0]
    for j in range(n - 2, -1, -1):
        best = np.inf
        nxt = -1
        for r in range(j + 1, n):
            c = cost[j, r]
            if c == np.inf:
                continue
            total = c + bcost[r]
            # strict '<' keeps the first r on ties
            if total < best:
                best = total
                nxt = r
        bcost[j] = best
        decision[j] = nxt


@njit(cache=True)
def nearest_neighbor(dist, start, tour, visited):
    """Greedy nearest-neighbour walk from ``start``.

    ``tour`` must hold ``n + 1`` slots and ``visited`` must be all ``False``.
    Returns ``(length, total)`` where ``length`` is the number of populated
    tour entries including the closing return to ``start``.
    """

    n = dist.shape[0]
    visited[start] = True
    tour[0] = start
    length = 1
    total = 0.0
    current = start
    for _ in range(n - 1):
        nearest = -1
        best = np.inf
        for city in range(n):
            if not visited[city] and dist[current, city] < best:
                best = dist[current, city]
                nearest = city
        if nearest == -1:
            break
        tour[length] = nearest
        length += 1
        visited[nearest] = True
        total += best
        current = nearest
    total += dist[current, start]
    tour[length] = start
    length += 1
    return length, total
