"""Graph adapters - Implementations of graph-related ports.

Available implementations:
- InMemoryGraph: Adjacency-list road graph (GraphAccessPort)
- CSVGraphRepository: Loads the graph from CSV files
- AStarRouteSolver: Least-time routes using weighted A* with reopening
"""

from .astar_solver import AStarRouteSolver
from .csv_repository import CSVGraphRepository
from .memory_graph import GraphEdge, GraphNode, InMemoryGraph

__all__ = [
    "AStarRouteSolver",
    "CSVGraphRepository",
    "GraphEdge",
    "GraphNode",
    "InMemoryGraph",
]
