"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for all configuration:
cost-model tables and constants, graph data locations and logging.

Configuration can be overridden via environment variables:
- SST_ROUTING_SPEED_MARGIN_MPH=15
- SST_ROUTING_ROAD_CLASS_FACTORS='{"primary": 1.0}'
- SST_GRAPH_DATA_DIR=/path/to/data
- SST_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Dict, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.models import (
    CROSS_TIME_FOOT,
    CROSS_TIME_MOTOR_VEHICLE,
    DEFAULT_DISRUPTION_FACTORS,
    DEFAULT_ROAD_CLASS_FACTORS,
)


class RoutingConfig(BaseSettings):
    """Cost-model and search configuration.

    Environment variables prefixed with SST_ROUTING_.
    """

    model_config = SettingsConfigDict(env_prefix="SST_ROUTING_")

    # Assumed best-case speed bonus over the requested cap, in mph
    speed_margin_mph: float = Field(default=5.0, ge=0.0)
    intersection_penalty_seconds: float = Field(default=2.0, ge=0.0)
    intersection_degree_threshold: int = Field(default=3, ge=0)
    closure_factor: float = Field(default=25.0, ge=1.0)
    motor_vehicle_field: str = CROSS_TIME_MOTOR_VEHICLE
    road_class_factors: Dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_ROAD_CLASS_FACTORS)
    )
    disruption_factors: Dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_DISRUPTION_FACTORS)
    )

    default_mode_field: str = CROSS_TIME_FOOT
    default_max_speed_mph: float = Field(default=70.0, gt=0.0)
    search_timeout_seconds: Optional[float] = Field(default=None, gt=0.0)


class GraphConfig(BaseSettings):
    """Graph data configuration.

    Environment variables prefixed with SST_GRAPH_.
    """

    model_config = SettingsConfigDict(env_prefix="SST_GRAPH_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent / "data"
    )
    nodes_file: str = "nodes.csv"
    ways_file: str = "ways.csv"
    disruptions_file: str = "disruptions.csv"
    crs: Literal["wgs-84", "cartesian"] = "wgs-84"

    @property
    def nodes_path(self) -> Path:
        """Full path to nodes CSV file."""
        return self.data_dir / self.nodes_file

    @property
    def ways_path(self) -> Path:
        """Full path to ways CSV file."""
        return self.data_dir / self.ways_file

    @property
    def disruptions_path(self) -> Path:
        """Full path to disruptions CSV file."""
        return self.data_dir / self.disruptions_file


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with SST_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="SST_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.routing.speed_margin_mph)
        print(config.graph.nodes_path)

    Environment variables prefixed with SST_.
    """

    model_config = SettingsConfigDict(env_prefix="SST_")

    routing: RoutingConfig = Field(default_factory=RoutingConfig)
    graph: GraphConfig = Field(default_factory=GraphConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    output_dir: Path = Field(default_factory=Path.cwd)

    @property
    def project_root(self) -> Path:
        """Return the project root directory."""
        return Path(__file__).resolve().parent.parent


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
