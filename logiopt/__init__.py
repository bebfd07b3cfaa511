"""Small logistics optimisers: stage-graph paths, nearest-neighbour tours, fractional loading."""

__version__ = "0.1.0"
