"""Shared fixtures for the routing tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from safe_travel.adapters.graph import AStarRouteSolver, InMemoryGraph
from safe_travel.config import reset_config
from safe_travel.domain.models import MPH_TO_MS

DATA_DIR = Path(__file__).resolve().parent / "data" / "london"

# A speed cap of this many mph is exactly 1 m/s, so on fast roads the
# raw cost of an edge equals its length in metres
ONE_MS_IN_MPH = 1.0 / MPH_TO_MS


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def solver() -> AStarRouteSolver:
    return AStarRouteSolver()


@pytest.fixture
def line_graph() -> InMemoryGraph:
    """A -> B -> C on a 100 m spaced line, plus an isolated node D."""
    graph = InMemoryGraph(crs="cartesian")
    graph.add_node(1, 0.0, 0.0)
    graph.add_node(2, 100.0, 0.0)
    graph.add_node(3, 200.0, 0.0)
    graph.add_node(4, 500.0, 500.0)
    graph.add_way(1, 2, maxspeed=1000.0, crossTimeFoot=1.0)
    graph.add_way(2, 3, maxspeed=1000.0, crossTimeFoot=1.0)
    return graph
