"""Graph ports - Abstractions for graph access and routing.

These protocols define the contracts between the A* core and the graph
storage it reads from. The search never mutates the graph.

Node and edge handles are opaque to the core: whatever the graph layer
returns from ``outgoing_edges``/``end_node`` is handed back to it
unchanged.
"""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Iterable,
    Optional,
    Protocol,
)

if TYPE_CHECKING:
    from ..domain.models import Coordinate, RouteResult

# Opaque graph handles
NodeRef = Any
EdgeRef = Any

# Consulted once per search iteration; returning True cancels the search
CancelCheck = Callable[[], bool]


class GraphAccessPort(Protocol):
    """Read-only access to the road graph.

    Implementation: adapters/graph/memory_graph.py
    """

    def has_label(self, node: NodeRef, label: str) -> bool:
        """Check whether a node carries a label (e.g. ``Point``)."""
        ...

    def get_id(self, node: NodeRef) -> int:
        """Return the stable application id of a node.

        This id is distinct from any storage-internal identifier.
        """
        ...

    def get_coordinate(self, node: NodeRef) -> Coordinate:
        """Return the position of a node."""
        ...

    def distance(self, a: Coordinate, b: Coordinate) -> float:
        """Distance in metres between two coordinates.

        Must satisfy the triangle inequality for the heuristic to stay
        admissible.
        """
        ...

    def outgoing_edges(self, node: NodeRef, relation: str) -> Iterable[EdgeRef]:
        """Edges of the given relation type leaving a node."""
        ...

    def incoming_degree(self, node: NodeRef, relation: str) -> int:
        """Number of edges of the given relation type entering a node."""
        ...

    def edge_property(
        self, edge: EdgeRef, name: str, default: Any = None
    ) -> Any:
        """Read a property of an edge, or ``default`` when it is absent."""
        ...

    def end_node(self, edge: EdgeRef) -> NodeRef:
        """Return the node an edge points to."""
        ...

    def disruption_edges(self, node: NodeRef) -> Iterable[EdgeRef]:
        """IS_DISRUPTED relations leaving a road node."""
        ...

    def disruption_severity(self, disruption: NodeRef) -> Optional[str]:
        """Severity of a disruption node, None when missing."""
        ...

    def disruption_closed(self, disruption: NodeRef) -> bool:
        """Whether a disruption closes the road (default False)."""
        ...

    def find_node(self, node_id: int) -> Optional[NodeRef]:
        """Look up a node by application id."""
        ...


class GraphRepositoryPort(Protocol):
    """Port for loading graph data.

    Implementation: adapters/graph/csv_repository.py

    The repository is responsible for loading and caching the road
    network from persistent storage.
    """

    def load(self) -> GraphAccessPort:
        """Load the road graph.

        Returns:
            A graph access object ready to be searched.
        """
        ...


class RouteSolverPort(Protocol):
    """Port for route computation.

    Implementation: adapters/graph/astar_solver.py
    """

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
        """Find the least-time route between two nodes.

        Args:
            graph: The road graph.
            start: Start node handle.
            end: End node handle.
            mode_field: Edge property holding the traversal time.
            consider_disruptions: Whether disruptions penalise edges.
            max_speed: Speed cap in miles per hour.
            weight: Heuristic inflation weight, in [1, +inf).
            cancel_check: Optional cancellation check.

        Returns:
            RouteResult with hops ordered goal first (empty if no route).
        """
        ...

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
        """Same as route() with a mandatory inflation weight."""
        ...
