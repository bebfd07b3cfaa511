"""Optimisation routines: stage-graph shortest path, tour construction, allocation."""

from .allocation import Allocation, AllocationResult, Item, allocate, compare_orderings
from .errors import ShapeError
from .stage_graph import StageGraphResult, path_cost, solve, stage_layout, stage_vertex_count
from .tour import TourResult, TourSegment, construct, tour_length

__all__ = [
    "Allocation",
    "AllocationResult",
    "Item",
    "ShapeError",
    "StageGraphResult",
    "TourResult",
    "TourSegment",
    "allocate",
    "compare_orderings",
    "construct",
    "path_cost",
    "solve",
    "stage_layout",
    "stage_vertex_count",
    "tour_length",
]
