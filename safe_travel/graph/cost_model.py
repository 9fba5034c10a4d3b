"""Edge cost and heuristic evaluation for least-time routing.

The cost of moving along a CONNECTS edge is built in a fixed order:

1. raw traversal time, at the slower of the road's limit and the cap
2. road-class factor (motor vehicles only)
3. intersection penalty (busy successor junction)
4. disruption factor (when disruptions are considered)

The disruption step scales the already penalised value, so the order is
part of the result.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Mapping

from ..config import RoutingConfig
from ..domain.errors import ConfigurationError
from ..domain.models import (
    CONNECTS,
    CROSS_TIME_MOTOR_VEHICLE,
    DEFAULT_DISRUPTION_FACTORS,
    DEFAULT_ROAD_CLASS_FACTORS,
    MPH_TO_MS,
)
from ..ports.graph import EdgeRef, GraphAccessPort, NodeRef


# A factor below 1 could make an edge cheaper than the heuristic bound
def _check_factor(name: str, value: float) -> None:
    if not math.isfinite(value) or value < 1.0:
        raise ConfigurationError(
            f"{name} must be finite and at least 1, got {value}",
            setting_name=name,
            expected_type="float >= 1",
        )


def _check_factors(name: str, table: Mapping[str, float]) -> None:
    for key, value in table.items():
        _check_factor(f"{name}[{key!r}]", value)


@dataclass
class CostModel:
    """Pure cost functions with injected factor tables.

    Attributes:
        road_class_factors: Multiplier per road class (motor vehicles)
        disruption_factors: Multiplier per disruption severity
        speed_margin_mph: Speed bonus assumed by the heuristic
        intersection_penalty: Seconds added at busy junctions
        intersection_degree_threshold: Incoming degree above which a
            junction counts as busy
        closure_factor: Multiplier for a closed road
        motor_vehicle_field: Mode field that enables road-class factors
    """

    road_class_factors: Mapping[str, float] = field(
        default_factory=lambda: dict(DEFAULT_ROAD_CLASS_FACTORS)
    )
    disruption_factors: Mapping[str, float] = field(
        default_factory=lambda: dict(DEFAULT_DISRUPTION_FACTORS)
    )
    speed_margin_mph: float = 5.0
    intersection_penalty: float = 2.0
    intersection_degree_threshold: int = 3
    closure_factor: float = 25.0
    motor_vehicle_field: str = CROSS_TIME_MOTOR_VEHICLE

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        _check_factors("road_class_factors", self.road_class_factors)
        _check_factors("disruption_factors", self.disruption_factors)
        _check_factor("closure_factor", self.closure_factor)
        if not math.isfinite(self.intersection_penalty) or self.intersection_penalty < 0:
            raise ConfigurationError(
                "intersection_penalty must be finite and not negative",
                setting_name="intersection_penalty",
            )
        if self.speed_margin_mph < 0:
            raise ConfigurationError(
                "speed_margin_mph must not be negative",
                setting_name="speed_margin_mph",
            )

    @classmethod
    def from_config(cls, config: RoutingConfig) -> CostModel:
        """Build a cost model from routing settings."""
        return cls(
            road_class_factors=dict(config.road_class_factors),
            disruption_factors=dict(config.disruption_factors),
            speed_margin_mph=config.speed_margin_mph,
            intersection_penalty=config.intersection_penalty_seconds,
            intersection_degree_threshold=config.intersection_degree_threshold,
            closure_factor=config.closure_factor,
            motor_vehicle_field=config.motor_vehicle_field,
        )

    def heuristic(
        self,
        graph: GraphAccessPort,
        a: NodeRef,
        b: NodeRef,
        max_speed_mph: float,
        weight: float = 1.0,
    ) -> float:
        """Estimated travel time from ``a`` to ``b``, inflated by ``weight``.

        The distance is covered at ``max_speed_mph + speed_margin_mph``,
        which no edge can beat, so the estimate never overestimates when
        ``weight`` is 1.
        """
        distance = graph.distance(graph.get_coordinate(a), graph.get_coordinate(b))
        best_speed = (max_speed_mph + self.speed_margin_mph) * MPH_TO_MS
        return distance / best_speed * weight

    def edge_cost(
        self,
        graph: GraphAccessPort,
        edge: EdgeRef,
        from_node: NodeRef,
        to_node: NodeRef,
        max_speed_mph: float,
    ) -> float:
        """Raw traversal time of an edge at the slower of its limit and the cap."""
        distance = graph.distance(
            graph.get_coordinate(from_node), graph.get_coordinate(to_node)
        )
        capped = distance / (max_speed_mph * MPH_TO_MS)

        edge_speed = graph.edge_property(edge, "maxspeed")
        if edge_speed is None or not edge_speed > 0:
            self._logger.debug(
                "Edge without usable maxspeed, using requested cap",
                extra={"maxspeed": edge_speed},
            )
            return capped

        return max(distance / edge_speed, capped)

    def apply_road_class_factor(
        self,
        graph: GraphAccessPort,
        edge: EdgeRef,
        mode_field: str,
        cost: float,
    ) -> float:
        """Slow down minor roads for motor vehicles."""
        if mode_field != self.motor_vehicle_field:
            return cost

        factor = self.road_class_factors.get(graph.edge_property(edge, "class"))
        if factor is None:
            return cost
        return cost * factor

    def intersection_penalty_for(self, graph: GraphAccessPort, successor: NodeRef) -> float:
        """Extra seconds needed to cross a busy junction."""
        if graph.incoming_degree(successor, CONNECTS) > self.intersection_degree_threshold:
            return self.intersection_penalty
        return 0.0

    def apply_disruption_factor(
        self,
        graph: GraphAccessPort,
        successor: NodeRef,
        cost: float,
    ) -> float:
        """Scale the cost of reaching ``successor`` by its disruptions.

        A closed road dominates: the unscaled cost times the closure
        factor is returned and no severity factor is combined with it.
        Disruptions with a missing or unknown severity are ignored.
        """
        scaled = cost
        for relation in graph.disruption_edges(successor):
            disruption = graph.end_node(relation)

            severity = graph.disruption_severity(disruption)
            if severity is None:
                self._logger.warning(
                    "Disruption has no severity",
                    extra={"disruption": repr(disruption)},
                )
                continue

            factor = self.disruption_factors.get(severity)
            if factor is None:
                self._logger.warning(
                    "Unknown disruption severity",
                    extra={"severity": severity, "disruption": repr(disruption)},
                )
                continue

            if graph.disruption_closed(disruption):
                self._logger.debug(
                    "Closed road",
                    extra={
                        "disruption": repr(disruption),
                        "point": graph.get_id(successor),
                    },
                )
                return cost * self.closure_factor

            scaled *= factor

        return scaled

    def adjusted_edge_cost(
        self,
        graph: GraphAccessPort,
        edge: EdgeRef,
        from_node: NodeRef,
        to_node: NodeRef,
        mode_field: str,
        consider_disruptions: bool,
        max_speed_mph: float,
    ) -> float:
        """Cost of expanding ``edge``, with every adjustment applied in order."""
        cost = self.edge_cost(graph, edge, from_node, to_node, max_speed_mph)
        cost = self.apply_road_class_factor(graph, edge, mode_field, cost)
        cost += self.intersection_penalty_for(graph, to_node)
        if consider_disruptions:
            cost = self.apply_disruption_factor(graph, to_node, cost)
        return cost
