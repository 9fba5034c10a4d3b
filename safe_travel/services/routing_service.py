"""Routing service - Main orchestrator.

Front end of the routing core for callers that know node ids rather
than graph handles: it loads the graph, resolves the ids, applies
configured defaults and an optional search deadline, and delegates to
the route solver.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..config import RoutingConfig, get_config
from ..domain.errors import (
    InvalidRouteRequestError,
    NodeNotFoundError,
    NoRouteFoundError,
    RenderingError,
    SafeTravelError,
    SearchCancelledError,
)
from ..domain.models import RouteResult
from ..ports.graph import CancelCheck, GraphRepositoryPort, NodeRef, RouteSolverPort
from ..ports.rendering import MapRendererPort


def deadline_check(timeout_seconds: float) -> CancelCheck:
    """Build a cancellation check that fires once ``timeout_seconds`` elapsed."""
    deadline = time.monotonic() + timeout_seconds

    def expired() -> bool:
        return time.monotonic() >= deadline

    return expired


@dataclass
class RoutingService:
    """Id-based routing service.

    Attributes:
        graph_repository: Loads the road graph
        route_solver: Computes least-time routes
        map_renderer: Optional map rendering
        config: Routing defaults (mode field, speed cap, timeout)
    """

    graph_repository: GraphRepositoryPort
    route_solver: RouteSolverPort
    map_renderer: Optional[MapRendererPort] = None
    config: RoutingConfig = field(default_factory=lambda: get_config().routing)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def route_between(
        self,
        start_id: int,
        end_id: int,
        mode_field: Optional[str] = None,
        consider_disruptions: bool = False,
        max_speed: Optional[float] = None,
        weight: float = 1.0,
        generate_map: bool = False,
        map_output_path: Optional[Path] = None,
    ) -> RouteResult:
        """Compute the route between two nodes given by id.

        Args:
            start_id: Application id of the start node.
            end_id: Application id of the end node.
            mode_field: Traversal time field (defaults to config).
            consider_disruptions: Whether disruptions penalise edges.
            max_speed: Speed cap in mph (defaults to config).
            weight: Heuristic inflation weight.
            generate_map: Whether to render the route to a map.
            map_output_path: Path for the map file (required if generate_map=True).

        Returns:
            RouteResult, empty when the end is unreachable.

        Raises:
            NodeNotFoundError: If either id is not in the graph.
            InvalidRouteRequestError: If a precondition is violated.
            SearchCancelledError: If the configured timeout expired.
        """
        graph = self.graph_repository.load()
        start = self._find(graph, start_id)
        end = self._find(graph, end_id)

        cancel_check: Optional[CancelCheck] = None
        if self.config.search_timeout_seconds is not None:
            cancel_check = deadline_check(self.config.search_timeout_seconds)

        result = self.route_solver.route(
            graph,
            start,
            end,
            mode_field or self.config.default_mode_field,
            consider_disruptions,
            max_speed if max_speed is not None else self.config.default_max_speed_mph,
            weight,
            cancel_check,
        )
        self._logger.info(
            "Route computed",
            extra={
                "start": start_id,
                "end": end_id,
                "found": result.found,
                "hops": result.num_hops,
            },
        )

        if generate_map and map_output_path and self.map_renderer and not result.is_empty:
            try:
                self.map_renderer.render(graph, result, map_output_path)
                self._logger.info("Map generated", extra={"path": str(map_output_path)})
            except RenderingError as e:
                # Log but don't fail the entire request
                self._logger.warning(
                    "Map generation failed",
                    extra={"error": str(e)},
                )

        return result

    def route_or_raise(
        self,
        start_id: int,
        end_id: int,
        mode_field: Optional[str] = None,
        consider_disruptions: bool = False,
        max_speed: Optional[float] = None,
        weight: float = 1.0,
    ) -> RouteResult:
        """Like route_between(), but an unreachable end is an error.

        Raises:
            NoRouteFoundError: If the open set was exhausted.
        """
        result = self.route_between(
            start_id, end_id, mode_field, consider_disruptions, max_speed, weight
        )
        if not result.found:
            raise NoRouteFoundError(
                f"No path from {start_id} to {end_id}",
                start_id=start_id,
                end_id=end_id,
            )
        return result

    def route_safe(
        self,
        start_id: int,
        end_id: int,
        mode_field: Optional[str] = None,
        consider_disruptions: bool = False,
        max_speed: Optional[float] = None,
        weight: float = 1.0,
    ) -> tuple[Optional[RouteResult], Optional[str]]:
        """Compute a route, returning an error message instead of raising.

        Returns:
            Tuple of (RouteResult or None, error message or None).
        """
        try:
            result = self.route_or_raise(
                start_id, end_id, mode_field, consider_disruptions, max_speed, weight
            )
            return result, None
        except NodeNotFoundError as e:
            return None, f"Unknown node: {e.node_id}"
        except InvalidRouteRequestError as e:
            return None, f"Invalid request: {e.message}"
        except NoRouteFoundError as e:
            return None, f"No path found between {e.start_id} and {e.end_id}"
        except SearchCancelledError as e:
            return None, f"Search cancelled after {e.expanded} expansions"
        except SafeTravelError as e:
            self._logger.exception("Routing failed")
            return None, f"Error: {e.message}"

    @staticmethod
    def _find(graph, node_id: int) -> NodeRef:
        node = graph.find_node(node_id)
        if node is None:
            raise NodeNotFoundError(f"Node not found: {node_id}", node_id=node_id)
        return node
