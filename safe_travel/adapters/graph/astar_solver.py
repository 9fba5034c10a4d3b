"""A* Route Solver adapter.

This adapter is the routing entry point. It adds to the search engine:
- Fail-fast validation of the request
- Domain model output (RouteResult)
- Logging
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

from ...domain.errors import InvalidRouteRequestError
from ...domain.models import POINT_LABEL, RouteResult
from ...graph.astar import WeightedAStar
from ...graph.cost_model import CostModel
from ...graph.path import reconstruct_path
from ...ports.graph import CancelCheck, GraphAccessPort, NodeRef


@dataclass
class AStarRouteSolver:
    """Route solver using weighted A* with reopening.

    This adapter implements RouteSolverPort. It holds no per-search
    state, so one instance can serve concurrent requests.

    Attributes:
        cost_model: Cost functions and factor tables used by the search
    """

    cost_model: CostModel = field(default_factory=CostModel)
    _engine: WeightedAStar = field(init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._engine = WeightedAStar(cost_model=self.cost_model)
        self._logger = logging.getLogger(__name__)

    def route(
        self,
        graph: GraphAccessPort,
        start: NodeRef,
        end: NodeRef,
        mode_field: str,
        consider_disruptions: bool,
        max_speed: float,
        weight: float = 1.0,
        cancel_check: Optional[CancelCheck] = None,
    ) -> RouteResult:
        """Find the least-time route between two Point nodes.

        Args:
            graph: The road graph.
            start: Start node handle.
            end: End node handle.
            mode_field: Edge property holding the traversal time
                (e.g. ``crossTimeFoot``).
            consider_disruptions: Whether disruptions penalise edges.
            max_speed: Speed cap in miles per hour.
            weight: Heuristic inflation weight, in [1, +inf).
            cancel_check: Optional check consulted once per iteration.

        Returns:
            RouteResult with hops ordered goal first. An unreachable
            goal yields an empty, not-found result.

        Raises:
            InvalidRouteRequestError: If a precondition is violated.
            SearchCancelledError: If ``cancel_check`` fired.
        """
        self._validate(graph, start, end, mode_field, max_speed, weight)

        outcome = self._engine.search(
            graph,
            start,
            end,
            mode_field,
            consider_disruptions,
            max_speed,
            weight,
            cancel_check,
        )
        end_id = graph.get_id(end)

        if not outcome.found:
            self._logger.warning(
                "No route found",
                extra={"start": outcome.start_id, "end": end_id},
            )
            return RouteResult(
                found=False,
                start_id=outcome.start_id,
                end_id=end_id,
                stats=outcome.stats,
            )

        hops = tuple(reconstruct_path(outcome))
        result = RouteResult(
            hops=hops,
            found=True,
            start_id=outcome.start_id,
            end_id=end_id,
            stats=outcome.stats,
        )
        self._logger.info(
            "Route found",
            extra={
                "start": outcome.start_id,
                "end": end_id,
                "hops": result.num_hops,
                "time_s": result.total_time,
            },
        )
        return result

    def route_anytime(
        self,
        graph: GraphAccessPort,
        start: NodeRef,
        end: NodeRef,
        mode_field: str,
        consider_disruptions: bool,
        max_speed: float,
        weight: float,
        cancel_check: Optional[CancelCheck] = None,
    ) -> RouteResult:
        """Find a possibly sub-optimal route faster by inflating the heuristic.

        Same as :meth:`route` with a mandatory ``weight``.
        """
        return self.route(
            graph,
            start,
            end,
            mode_field,
            consider_disruptions,
            max_speed,
            weight,
            cancel_check,
        )

    @staticmethod
    def _validate(
        graph: GraphAccessPort,
        start: NodeRef,
        end: NodeRef,
        mode_field: str,
        max_speed: float,
        weight: float,
    ) -> None:
        if not graph.has_label(start, POINT_LABEL):
            raise InvalidRouteRequestError(
                f"`start' does not have `{POINT_LABEL}' as a label",
                parameter="start",
                value=repr(start),
            )
        if not graph.has_label(end, POINT_LABEL):
            raise InvalidRouteRequestError(
                f"`end' does not have `{POINT_LABEL}' as a label",
                parameter="end",
                value=repr(end),
            )
        if math.isnan(weight) or weight < 1.0 or weight == math.inf:
            raise InvalidRouteRequestError(
                "`weight' must be in [1, +Infinity)",
                parameter="weight",
                value=str(weight),
            )
        if not math.isfinite(max_speed) or max_speed <= 0:
            raise InvalidRouteRequestError(
                "`maxSpeed' must be a positive, finite speed",
                parameter="max_speed",
                value=str(max_speed),
            )
        if not mode_field:
            raise InvalidRouteRequestError(
                "`crossTimeField' must name an edge property",
                parameter="mode_field",
                value=repr(mode_field),
            )
