"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the routing core and external
adapters. They enable dependency injection and make the system testable.

This module follows the Hexagonal Architecture pattern:
- Input ports: How the application is driven (services)
- Output ports: How the application drives external systems (adapters)
"""

from .graph import (
    CancelCheck,
    EdgeRef,
    GraphAccessPort,
    GraphRepositoryPort,
    NodeRef,
    RouteSolverPort,
)
from .rendering import MapRendererPort

__all__ = [
    # Graph
    "NodeRef",
    "EdgeRef",
    "CancelCheck",
    "GraphAccessPort",
    "GraphRepositoryPort",
    "RouteSolverPort",
    # Rendering
    "MapRendererPort",
]
