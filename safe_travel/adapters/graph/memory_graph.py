"""In-memory road graph implementing GraphAccessPort.

Nodes are addressed by their application id. Each node also gets an
internal storage index, kept separate from the id the way a graph
database keeps element ids apart from user properties. Disruptions are
nodes of their own, linked from road nodes by IS_DISRUPTED relations.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Literal, Mapping, Optional, Tuple

from geopy.distance import great_circle

from ...domain.errors import GraphError
from ...domain.models import CONNECTS, IS_DISRUPTED, POINT_LABEL, Coordinate

DISRUPTION_LABEL = "Disruption"

Crs = Literal["wgs-84", "cartesian"]


@dataclass(frozen=True, eq=False)
class GraphNode:
    """A vertex of the graph.

    Attributes:
        element_id: Storage-internal index
        node_id: Stable application id
        coordinate: Position of the node
        labels: Labels carried by the node
        properties: Any other node property
    """

    element_id: int
    node_id: Any
    coordinate: Optional[Coordinate]
    labels: frozenset[str]
    properties: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, eq=False)
class GraphEdge:
    """A directed relation between two nodes."""

    start: GraphNode
    end: GraphNode
    relation: str
    properties: Mapping[str, Any] = field(default_factory=dict)


@dataclass
class InMemoryGraph:
    """Adjacency-list graph held in memory.

    Attributes:
        crs: ``"wgs-84"`` for lon/lat degrees (great-circle metres) or
            ``"cartesian"`` for projected metres
    """

    crs: Crs = "wgs-84"

    _nodes: Dict[int, GraphNode] = field(default_factory=dict, repr=False)
    _disruptions: Dict[str, GraphNode] = field(default_factory=dict, repr=False)
    _outgoing: Dict[Tuple[int, str], List[GraphEdge]] = field(
        default_factory=dict, repr=False
    )
    _in_degree: Dict[Tuple[int, str], int] = field(default_factory=dict, repr=False)
    _next_element_id: int = field(default=0, repr=False)

    def __post_init__(self) -> None:
        if self.crs not in ("wgs-84", "cartesian"):
            raise GraphError(f"Unsupported coordinate reference system: {self.crs}")

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: int) -> bool:
        return node_id in self._nodes

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def _new_element_id(self) -> int:
        element_id = self._next_element_id
        self._next_element_id += 1
        return element_id

    def add_node(
        self,
        node_id: int,
        x: float,
        y: float,
        labels: Iterable[str] = (POINT_LABEL,),
    ) -> GraphNode:
        """Add a road node.

        Args:
            node_id: Stable application id.
            x: Longitude (wgs-84) or easting in metres (cartesian).
            y: Latitude (wgs-84) or northing in metres (cartesian).
            labels: Node labels; routable nodes carry ``Point``.

        Raises:
            GraphError: If the id already exists or a wgs-84 coordinate
                is out of range.
        """
        if node_id in self._nodes:
            raise GraphError(f"Duplicate node id: {node_id}")
        if self.crs == "wgs-84" and not (-180 <= x <= 180 and -90 <= y <= 90):
            raise GraphError(f"Coordinate out of range for node {node_id}: ({x}, {y})")

        node = GraphNode(
            element_id=self._new_element_id(),
            node_id=node_id,
            coordinate=Coordinate(float(x), float(y)),
            labels=frozenset(labels),
        )
        self._nodes[node_id] = node
        return node

    def add_way(
        self,
        from_id: int,
        to_id: int,
        properties: Optional[Mapping[str, Any]] = None,
        **extra: Any,
    ) -> GraphEdge:
        """Add a directed CONNECTS edge between two existing nodes.

        Properties may be passed as a mapping, as keyword arguments, or
        both (keywords win).

        Raises:
            GraphError: If either endpoint is unknown.
        """
        start = self._require(from_id)
        end = self._require(to_id)
        props = dict(properties or {})
        props.update(extra)
        return self._link(start, end, CONNECTS, props)

    def add_disruption(
        self,
        disruption_id: str,
        node_id: int,
        severity: Optional[str],
        closed: bool = False,
    ) -> GraphNode:
        """Attach a disruption to a road node.

        A disruption id seen before is reused, so one disruption can
        affect several road nodes.

        Raises:
            GraphError: If the road node is unknown.
        """
        road_node = self._require(node_id)
        disruption = self._disruptions.get(disruption_id)
        if disruption is None:
            properties: Dict[str, Any] = {"closed": bool(closed)}
            if severity is not None:
                properties["severity"] = severity
            disruption = GraphNode(
                element_id=self._new_element_id(),
                node_id=disruption_id,
                coordinate=None,
                labels=frozenset({DISRUPTION_LABEL}),
                properties=properties,
            )
            self._disruptions[disruption_id] = disruption
        self._link(road_node, disruption, IS_DISRUPTED, {})
        return disruption

    def _require(self, node_id: int) -> GraphNode:
        node = self._nodes.get(node_id)
        if node is None:
            raise GraphError(f"Unknown node id: {node_id}")
        return node

    def _link(
        self, start: GraphNode, end: GraphNode, relation: str, properties: Dict[str, Any]
    ) -> GraphEdge:
        edge = GraphEdge(start=start, end=end, relation=relation, properties=properties)
        self._outgoing.setdefault((start.element_id, relation), []).append(edge)
        key = (end.element_id, relation)
        self._in_degree[key] = self._in_degree.get(key, 0) + 1
        return edge

    # ------------------------------------------------------------------
    # GraphAccessPort
    # ------------------------------------------------------------------

    def has_label(self, node: GraphNode, label: str) -> bool:
        return label in node.labels

    def get_id(self, node: GraphNode) -> Any:
        return node.node_id

    def get_coordinate(self, node: GraphNode) -> Coordinate:
        if node.coordinate is None:
            raise GraphError(f"Node {node.node_id} has no coordinate")
        return node.coordinate

    def distance(self, a: Coordinate, b: Coordinate) -> float:
        if self.crs == "cartesian":
            return math.hypot(b.x - a.x, b.y - a.y)
        return great_circle((a.latitude, a.longitude), (b.latitude, b.longitude)).meters

    def outgoing_edges(self, node: GraphNode, relation: str) -> List[GraphEdge]:
        return self._outgoing.get((node.element_id, relation), [])

    def incoming_degree(self, node: GraphNode, relation: str) -> int:
        return self._in_degree.get((node.element_id, relation), 0)

    def edge_property(self, edge: GraphEdge, name: str, default: Any = None) -> Any:
        return edge.properties.get(name, default)

    def end_node(self, edge: GraphEdge) -> GraphNode:
        return edge.end

    def disruption_edges(self, node: GraphNode) -> List[GraphEdge]:
        return self.outgoing_edges(node, IS_DISRUPTED)

    def disruption_severity(self, disruption: GraphNode) -> Optional[str]:
        return disruption.properties.get("severity")

    def disruption_closed(self, disruption: GraphNode) -> bool:
        return bool(disruption.properties.get("closed", False))

    def find_node(self, node_id: int) -> Optional[GraphNode]:
        return self._nodes.get(node_id)

    def nodes(self) -> List[GraphNode]:
        """All road nodes, in insertion order."""
        return list(self._nodes.values())
