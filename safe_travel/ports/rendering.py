"""Rendering port - Abstraction for route visualization.

This protocol defines the contract for map rendering, allowing
different implementations (Folium, Plotly, etc.) to be used.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import RouteResult
    from .graph import GraphAccessPort


class MapRendererPort(Protocol):
    """Port for map rendering.

    Implementation: adapters/rendering/folium_adapter.py

    Map renderers visualize computed routes on interactive maps.
    """

    def render(
        self,
        graph: GraphAccessPort,
        result: RouteResult,
        output_path: Path,
    ) -> Path:
        """Render a route on a map and save to file.

        Args:
            graph: Graph the route was computed on.
            result: The route to draw.
            output_path: Where to save the rendered map.

        Returns:
            Path to the generated map file.
        """
        ...
