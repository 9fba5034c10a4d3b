"""Folium map renderer adapter.

Draws a computed route, start to goal, as markers and a polyline on an
interactive HTML map. Only geographic (WGS-84) graphs can be drawn.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

from ...domain.errors import RenderingError
from ...domain.models import RouteResult
from ...ports.graph import GraphAccessPort


@dataclass
class FoliumMapRenderer:
    """Folium-based interactive map renderer.

    This adapter implements MapRendererPort using Folium for
    generating interactive HTML maps.

    Attributes:
        zoom_start: Initial zoom level of the map
    """

    zoom_start: int = 15
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def render(
        self,
        graph: GraphAccessPort,
        result: RouteResult,
        output_path: Path,
    ) -> Path:
        """Render a route on a map and save to file.

        The start node is not part of the hop sequence; it is looked up
        by id so the line begins where the route does.

        Args:
            graph: Graph the route was computed on.
            result: The route to draw.
            output_path: Where to save the rendered map.

        Returns:
            Path to the generated map file.

        Raises:
            RenderingError: If the route is empty or rendering fails.
        """
        if not result.found or result.is_empty:
            raise RenderingError(
                "Cannot render empty route",
                output_path=str(output_path),
                renderer_type="folium",
            )
        if getattr(graph, "crs", "wgs-84") != "wgs-84":
            raise RenderingError(
                "Only WGS-84 graphs can be drawn on a map",
                output_path=str(output_path),
                renderer_type="folium",
            )

        self._logger.info(
            "Rendering route map",
            extra={"hops": result.num_hops, "output_path": str(output_path)},
        )

        try:
            import folium

            # Hops are goal first; draw start to goal
            stops: List[Tuple[int, Tuple[float, float], float]] = []
            start = graph.find_node(result.start_id) if result.start_id is not None else None
            if start is not None:
                coordinate = graph.get_coordinate(start)
                stops.append((result.start_id, (coordinate.latitude, coordinate.longitude), 0.0))
            for hop in reversed(result.hops):
                coordinate = graph.get_coordinate(hop.node)
                stops.append(
                    (graph.get_id(hop.node), (coordinate.latitude, coordinate.longitude), hop.time)
                )

            m = folium.Map(location=stops[0][1], zoom_start=self.zoom_start, control_scale=True)

            for i, (node_id, location, time_s) in enumerate(stops):
                icon_color = "green" if i == 0 else "red" if i == len(stops) - 1 else "blue"
                folium.Marker(
                    location=location,
                    popup=f"{node_id} ({time_s:.0f} s)",
                    tooltip=str(node_id),
                    icon=folium.Icon(color=icon_color),
                ).add_to(m)

            if len(stops) >= 2:
                folium.PolyLine(
                    [location for _, location, _ in stops],
                    weight=5,
                    color="blue",
                    opacity=0.8,
                ).add_to(m)

            output_path.parent.mkdir(parents=True, exist_ok=True)
            m.save(str(output_path))

            self._logger.info(
                "Map rendered successfully",
                extra={"output_path": str(output_path)},
            )

            return output_path

        except ImportError as e:
            raise RenderingError(
                "Folium not installed",
                output_path=str(output_path),
                renderer_type="folium",
                cause=e,
            )
        except Exception as e:
            self._logger.error(
                "Map rendering failed",
                extra={"error": str(e), "output_path": str(output_path)},
            )
            raise RenderingError(
                f"Map rendering failed: {e}",
                output_path=str(output_path),
                renderer_type="folium",
                cause=e,
            )
