"""Weighted A* with reopening over the road graph.

The open set is ordered by ``g + w * h``. A node already in the closed
set is moved back to the open set when a strictly cheaper path to it is
found, which keeps the search correct when the heuristic is inflated
(``w > 1``) or inconsistent.

With ``w == 1`` and the admissible heuristic of the cost model, the
first time the goal is popped its cost is optimal. With ``w > 1`` the
result is usually within a factor ``w`` of the optimum, but this is a
caveat rather than a guarantee: disruption factors make edge costs
depend on the successor's state.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Optional

from ..domain.errors import SearchCancelledError
from ..domain.models import CONNECTS, Cost, SearchNode, SearchStats
from ..ports.graph import CancelCheck, GraphAccessPort, NodeRef
from .cost_model import CostModel
from .open_set import ClosedSet, OpenSet


@dataclass
class SearchOutcome:
    """Final state of one search.

    Attributes:
        goal: SearchNode of the goal, None if the goal was not reached
        start_id: Application id of the start node
        closed: Closed set when the search stopped
        stats: Search counters
    """

    goal: Optional[SearchNode]
    start_id: int
    closed: ClosedSet
    stats: SearchStats

    @property
    def found(self) -> bool:
        return self.goal is not None


@dataclass
class WeightedAStar:
    """Single-pair, single-direction weighted A* with late reopening.

    The engine keeps no state between searches; all bookkeeping is
    allocated per call to :meth:`search`.
    """

    cost_model: CostModel = field(default_factory=CostModel)
    # Inspect the whole heap on every iteration; O(heap) per step
    full_consistency_checks: bool = False
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def search(
        self,
        graph: GraphAccessPort,
        start: NodeRef,
        end: NodeRef,
        mode_field: str,
        consider_disruptions: bool,
        max_speed: float,
        weight: float = 1.0,
        cancel_check: Optional[CancelCheck] = None,
    ) -> SearchOutcome:
        """Expand nodes until the goal is popped or the open set is empty.

        Arguments are assumed valid; the solver adapter checks them.

        Raises:
            SearchCancelledError: If ``cancel_check`` returns True.
            SearchInvariantError: If the open set loses consistency.
        """
        started = time.perf_counter()
        cost_model = self.cost_model
        start_id = graph.get_id(start)
        end_id = graph.get_id(end)

        open_set = OpenSet()
        closed_set = ClosedSet()
        open_set.upsert(
            SearchNode(
                node_id=start_id,
                node=start,
                cost=Cost(0.0, cost_model.heuristic(graph, start, end, max_speed, weight)),
            )
        )

        self._logger.info(
            "Starting route",
            extra={"start": start_id, "end": end_id, "mode": mode_field, "weight": weight},
        )

        expanded = 0
        reopened = 0
        goal: Optional[SearchNode] = None

        while open_set:
            if cancel_check is not None and cancel_check():
                raise SearchCancelledError(
                    f"Search from {start_id} to {end_id} cancelled",
                    expanded=expanded,
                )
            open_set.check_consistency(full=self.full_consistency_checks)

            current = open_set.pop()
            closed_set.add(current)
            expanded += 1

            if current.node_id == end_id:
                goal = current
                break

            for way in graph.outgoing_edges(current.node, CONNECTS):
                cross_time = graph.edge_property(way, mode_field)
                if cross_time is None:
                    self._logger.warning(
                        "Edge without traversal time, treating it as passable",
                        extra={"field": mode_field, "from": current.node_id},
                    )
                elif cross_time == math.inf:
                    continue

                successor = graph.end_node(way)
                successor_id = graph.get_id(successor)

                travel_time = current.cost.g + cost_model.adjusted_edge_cost(
                    graph,
                    way,
                    current.node,
                    successor,
                    mode_field,
                    consider_disruptions,
                    max_speed,
                )

                hop = open_set.get(successor_id)
                if hop is not None:
                    if hop.cost.g <= travel_time:
                        continue
                else:
                    hop = closed_set.get(successor_id)
                    if hop is not None:
                        if hop.cost.g <= travel_time:
                            continue
                        closed_set.reopen(successor_id)
                        reopened += 1
                    else:
                        hop = SearchNode(node_id=successor_id, node=successor)

                # Better path, or first visit
                hop.cost.g = travel_time
                hop.cost.h = weight * cost_model.heuristic(graph, successor, end, max_speed)
                hop.parent = current
                open_set.upsert(hop)

        stats = SearchStats(
            expanded=expanded,
            reopened=reopened,
            open_size=len(open_set),
            closed_size=len(closed_set),
            elapsed_ms=(time.perf_counter() - started) * 1000.0,
        )
        self._logger.info(
            "A* terminated",
            extra={
                "found": goal is not None,
                "expanded": stats.expanded,
                "reopened": stats.reopened,
                "open_size": stats.open_size,
                "closed_size": stats.closed_size,
            },
        )

        return SearchOutcome(goal=goal, start_id=start_id, closed=closed_set, stats=stats)
