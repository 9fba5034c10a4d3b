"""Services layer - Application orchestration.

This module contains the application services that orchestrate the
flow of data through adapters to fulfill use cases.

Available services:
- RoutingService: Id-based routing with configured defaults
"""

from .routing_service import RoutingService, deadline_check

__all__ = ["RoutingService", "deadline_check"]
