"""Route reconstruction from the parent links of a finished search."""

from __future__ import annotations

from typing import List

from ..domain.errors import SearchInvariantError
from ..domain.models import HopRecord
from .astar import SearchOutcome


def reconstruct_path(outcome: SearchOutcome) -> List[HopRecord]:
    """Walk parent links from the goal back to the start.

    Args:
        outcome: Result of :meth:`WeightedAStar.search`.

    Returns:
        One record per hop, goal first with index 0. The start node is
        not emitted, so the list is empty when the goal is the start or
        when no route was found.

    Raises:
        SearchInvariantError: If the parent chain ends, or loops, before
            reaching the start.
    """
    if outcome.goal is None:
        return []

    # A chain longer than every node the search touched must be a cycle
    max_steps = outcome.stats.closed_size + outcome.stats.open_size

    hops: List[HopRecord] = []
    step = outcome.goal
    while step.node_id != outcome.start_id:
        if len(hops) > max_steps:
            raise SearchInvariantError(
                f"Parent chain from {outcome.goal.node_id} does not reach "
                f"{outcome.start_id} within {max_steps} steps"
            )

        hops.append(HopRecord(index=len(hops), node=step.node, time=step.cost.g))

        if step.parent is None:
            raise SearchInvariantError(
                f"Parent chain broken at {step.node_id} before reaching {outcome.start_id}"
            )
        step = step.parent

    return hops
