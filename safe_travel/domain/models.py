"""Domain models for the SafeTravel routing core.

Result types (HopRecord, SearchStats, RouteResult) are frozen dataclasses
with slots. Cost and SearchNode are the mutable per-search bookkeeping of
the A* engine: one SearchNode exists per graph node per search and is
updated in place whenever a cheaper path to it is found.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

# Conversion factor from miles per hour to metres per second
MPH_TO_MS = 0.44704

# Label carried by every routable node
POINT_LABEL = "Point"

# Relation types of the road graph
CONNECTS = "CONNECTS"
IS_DISRUPTED = "IS_DISRUPTED"

# Traversal-time fields stored on CONNECTS edges, one per travel mode
CROSS_TIME_FOOT = "crossTimeFoot"
CROSS_TIME_BICYCLE = "crossTimeBicycle"
CROSS_TIME_MOTOR_VEHICLE = "crossTimeMotorVehicle"


class RoadClass(str, Enum):
    """Road classification stored in the ``class`` edge property."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    TERTIARY = "tertiary"
    UNCLASSIFIED = "unclassified"
    ROAD = "road"
    RESIDENTIAL = "residential"
    LIVING_STREET = "living_street"
    SERVICE = "service"
    OTHER = "other"


class Severity(str, Enum):
    """Severity of a disruption attached to a road node."""

    MINIMAL = "Minimal"
    MODERATE = "Moderate"
    SERIOUS = "Serious"
    SEVERE = "Severe"


DEFAULT_ROAD_CLASS_FACTORS: dict[str, float] = {
    RoadClass.PRIMARY.value: 1.2,
    RoadClass.SECONDARY.value: 1.4,
    RoadClass.TERTIARY.value: 1.6,
    RoadClass.UNCLASSIFIED.value: 1.8,
    RoadClass.ROAD.value: 1.8,
    RoadClass.RESIDENTIAL.value: 2.0,
    RoadClass.LIVING_STREET.value: 2.4,
    RoadClass.SERVICE.value: 2.4,
}

DEFAULT_DISRUPTION_FACTORS: dict[str, float] = {
    Severity.MINIMAL.value: 1.1,
    Severity.MODERATE.value: 2.0,
    Severity.SERIOUS.value: 3.333,
    Severity.SEVERE.value: 6.0,
}


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A planar or geographic position.

    For WGS-84 graphs ``x`` is the longitude and ``y`` the latitude, both
    in degrees. For cartesian graphs both are metres.
    """

    x: float
    y: float

    @property
    def longitude(self) -> float:
        return self.x

    @property
    def latitude(self) -> float:
        return self.y


@dataclass(slots=True)
class Cost:
    """Accumulated cost ``g`` and heuristic estimate ``h`` of a node."""

    g: float = 0.0
    h: float = 0.0

    @property
    def f(self) -> float:
        """Ordering key of the open set."""
        return self.g + self.h


@dataclass(slots=True, eq=False)
class SearchNode:
    """Search bookkeeping for one graph node.

    Attributes:
        node_id: Stable application id of the node
        node: Graph handle, as returned by the graph access layer
        cost: Best known cost, mutated in place on improvement
        parent: SearchNode this node was reached from (None for the start)
    """

    node_id: int
    node: Any
    cost: Cost = field(default_factory=Cost)
    parent: Optional[SearchNode] = None


@dataclass(frozen=True, slots=True)
class HopRecord:
    """One step of a reconstructed route.

    Attributes:
        index: Position counted from the goal backward (0 is the goal)
        node: Graph handle of the hop
        time: Accumulated travel time from the start to this hop
    """

    index: int
    node: Any
    time: float


@dataclass(frozen=True, slots=True)
class SearchStats:
    """Counters collected during one search.

    Attributes:
        expanded: Nodes popped from the open set
        reopened: Closed nodes moved back to the open set
        open_size: Open set size when the search stopped
        closed_size: Closed set size when the search stopped
        elapsed_ms: Wall-clock duration of the search
    """

    expanded: int = 0
    reopened: int = 0
    open_size: int = 0
    closed_size: int = 0
    elapsed_ms: float = 0.0


@dataclass(frozen=True, slots=True)
class RouteResult:
    """Result of a route computation.

    Hops are ordered goal first. The start node itself is never part of
    the hop sequence, so a search whose start is its goal succeeds with
    no hops.

    Attributes:
        hops: HopRecords from the goal back to the hop adjacent to the start
        found: Whether the goal was reached
        start_id: Application id of the start node
        end_id: Application id of the end node
        stats: Search counters
    """

    hops: tuple[HopRecord, ...] = field(default_factory=tuple)
    found: bool = False
    start_id: Optional[int] = None
    end_id: Optional[int] = None
    stats: SearchStats = field(default_factory=SearchStats)

    @property
    def is_empty(self) -> bool:
        """Check if the result carries no hops."""
        return len(self.hops) == 0

    @property
    def num_hops(self) -> int:
        """Return the number of hops in the route."""
        return len(self.hops)

    @property
    def total_time(self) -> float:
        """Travel time from start to goal, ``inf`` when no route was found."""
        if not self.found:
            return math.inf
        if not self.hops:
            return 0.0
        return self.hops[0].time
