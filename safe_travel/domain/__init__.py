"""Domain layer - Core routing models and errors.

This module contains the domain models and typed errors used
throughout the application. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    GraphError,
    InvalidRouteRequestError,
    NodeNotFoundError,
    NoRouteFoundError,
    RenderingError,
    SafeTravelError,
    SearchCancelledError,
    SearchInvariantError,
)
from .models import (
    CONNECTS,
    CROSS_TIME_BICYCLE,
    CROSS_TIME_FOOT,
    CROSS_TIME_MOTOR_VEHICLE,
    DEFAULT_DISRUPTION_FACTORS,
    DEFAULT_ROAD_CLASS_FACTORS,
    IS_DISRUPTED,
    MPH_TO_MS,
    POINT_LABEL,
    Coordinate,
    Cost,
    HopRecord,
    RoadClass,
    RouteResult,
    SearchNode,
    SearchStats,
    Severity,
)

__all__ = [
    # Constants
    "MPH_TO_MS",
    "POINT_LABEL",
    "CONNECTS",
    "IS_DISRUPTED",
    "CROSS_TIME_FOOT",
    "CROSS_TIME_BICYCLE",
    "CROSS_TIME_MOTOR_VEHICLE",
    "DEFAULT_ROAD_CLASS_FACTORS",
    "DEFAULT_DISRUPTION_FACTORS",
    # Models
    "RoadClass",
    "Severity",
    "Coordinate",
    "Cost",
    "SearchNode",
    "HopRecord",
    "SearchStats",
    "RouteResult",
    # Errors
    "SafeTravelError",
    "InvalidRouteRequestError",
    "NodeNotFoundError",
    "NoRouteFoundError",
    "SearchCancelledError",
    "SearchInvariantError",
    "GraphError",
    "ConfigurationError",
    "RenderingError",
]
