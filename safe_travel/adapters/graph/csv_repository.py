"""CSV Graph Repository adapter.

Loads the road network from three CSV files:

- nodes.csv: ``id,lon,lat[,labels]`` (labels ``;``-separated, default Point)
- ways.csv: ``from_id,to_id,maxspeed,class,<traversal time columns...>``
- disruptions.csv (optional): ``id,node_id,severity,closed``

Every ways.csv column other than the endpoints and ``class`` is parsed
as a float, so ``inf`` marks an edge impassable for that mode. Empty
cells are left out of the edge properties.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from ...config import GraphConfig, get_config
from ...domain.errors import GraphError
from ...domain.models import POINT_LABEL
from .memory_graph import InMemoryGraph

_ENDPOINT_COLUMNS = ("from_id", "to_id")
_TEXT_COLUMNS = ("class",)
_TRUE_VALUES = {"true", "1", "yes", "y"}


@dataclass
class CSVGraphRepository:
    """Graph repository that loads from CSV files.

    This adapter implements GraphRepositoryPort. The graph is loaded
    once and cached until clear_cache() is called.

    Attributes:
        config: Graph configuration (paths, file names, CRS)
    """

    config: GraphConfig = field(default_factory=lambda: get_config().graph)
    _logger: logging.Logger = field(init=False, repr=False)

    # Cached data
    _graph: Optional[InMemoryGraph] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def load(self) -> InMemoryGraph:
        """Load the road graph from CSV files.

        Returns:
            The graph, ready to be searched.

        Raises:
            GraphError: If the graph cannot be loaded.
        """
        if self._graph is not None:
            return self._graph

        self._logger.debug(
            "Loading graph",
            extra={
                "nodes_path": str(self.config.nodes_path),
                "ways_path": str(self.config.ways_path),
            },
        )

        graph = InMemoryGraph(crs=self.config.crs)
        self._load_nodes(graph, self.config.nodes_path)
        ways = self._load_ways(graph, self.config.ways_path)
        disruptions = 0
        if self.config.disruptions_path.exists():
            disruptions = self._load_disruptions(graph, self.config.disruptions_path)

        self._graph = graph
        self._logger.info(
            "Graph loaded",
            extra={"nodes": len(graph), "ways": ways, "disruptions": disruptions},
        )
        return graph

    def _load_nodes(self, graph: InMemoryGraph, path: Path) -> None:
        try:
            with path.open(newline="", encoding="utf-8") as f:
                for row in csv.DictReader(f):
                    node_id = (row.get("id") or "").strip()
                    if not node_id:
                        continue

                    labels_str = (row.get("labels") or "").strip()
                    labels = (
                        [label.strip() for label in labels_str.split(";") if label.strip()]
                        if labels_str
                        else [POINT_LABEL]
                    )
                    graph.add_node(
                        int(node_id),
                        float(row["lon"]),
                        float(row["lat"]),
                        labels=labels,
                    )
        except GraphError as e:
            raise GraphError(e.message, file_path=str(path), cause=e.cause)
        except (OSError, KeyError, TypeError, ValueError) as e:
            raise GraphError(
                f"Failed to load nodes: {e}",
                file_path=str(path),
                cause=e,
            )

    def _load_ways(self, graph: InMemoryGraph, path: Path) -> int:
        count = 0
        try:
            with path.open(newline="", encoding="utf-8") as f:
                for row in csv.DictReader(f):
                    from_id = (row.get("from_id") or "").strip()
                    to_id = (row.get("to_id") or "").strip()
                    if not from_id or not to_id:
                        continue

                    graph.add_way(int(from_id), int(to_id), self._way_properties(row))
                    count += 1
        except GraphError as e:
            raise GraphError(e.message, file_path=str(path), cause=e.cause)
        except (OSError, TypeError, ValueError) as e:
            raise GraphError(
                f"Failed to load ways: {e}",
                file_path=str(path),
                cause=e,
            )
        return count

    @staticmethod
    def _way_properties(row: Dict[str, Optional[str]]) -> Dict[str, Any]:
        properties: Dict[str, Any] = {}
        for column, raw in row.items():
            if column is None or column in _ENDPOINT_COLUMNS:
                continue
            value = (raw or "").strip()
            if not value:
                continue
            if column in _TEXT_COLUMNS:
                properties[column] = value
            else:
                # float() accepts "inf" and "Infinity"
                properties[column] = float(value)
        return properties

    def _load_disruptions(self, graph: InMemoryGraph, path: Path) -> int:
        count = 0
        try:
            with path.open(newline="", encoding="utf-8") as f:
                for row in csv.DictReader(f):
                    disruption_id = (row.get("id") or "").strip()
                    node_id = (row.get("node_id") or "").strip()
                    if not disruption_id or not node_id:
                        continue

                    if int(node_id) not in graph:
                        self._logger.warning(
                            "Disruption on unknown node",
                            extra={"disruption": disruption_id, "node_id": node_id},
                        )
                        continue

                    severity = (row.get("severity") or "").strip() or None
                    closed = (row.get("closed") or "").strip().lower() in _TRUE_VALUES
                    graph.add_disruption(disruption_id, int(node_id), severity, closed)
                    count += 1
        except (OSError, ValueError) as e:
            raise GraphError(
                f"Failed to load disruptions: {e}",
                file_path=str(path),
                cause=e,
            )
        return count

    def clear_cache(self) -> None:
        """Clear the cached graph."""
        self._graph = None
        self._logger.debug("Graph cache cleared")
