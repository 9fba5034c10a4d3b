"""Least-time routing on the road graph.

This subpackage contains the cost model, the open/closed set
bookkeeping, the weighted A* search and route reconstruction.
"""

from .astar import SearchOutcome, WeightedAStar
from .cost_model import CostModel
from .open_set import ClosedSet, OpenSet
from .path import reconstruct_path

__all__ = [
    "CostModel",
    "OpenSet",
    "ClosedSet",
    "WeightedAStar",
    "SearchOutcome",
    "reconstruct_path",
]
