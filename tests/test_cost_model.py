import logging
import math

import pytest

from safe_travel.adapters.graph import InMemoryGraph
from safe_travel.config import RoutingConfig
from safe_travel.domain.errors import ConfigurationError
from safe_travel.domain.models import (
    CROSS_TIME_FOOT,
    CROSS_TIME_MOTOR_VEHICLE,
    MPH_TO_MS,
)
from safe_travel.graph.cost_model import CostModel


@pytest.fixture
def graph():
    # A(0,0) -> B(100,0), a 100 m residential street limited to 10 m/s
    g = InMemoryGraph(crs="cartesian")
    g.add_node(1, 0.0, 0.0)
    g.add_node(2, 100.0, 0.0)
    g.add_way(1, 2, maxspeed=10.0, crossTimeFoot=1.0, crossTimeMotorVehicle=1.0, **{"class": "residential"})
    return g


def _edge(g):
    return g.outgoing_edges(g.find_node(1), "CONNECTS")[0]


def test_heuristic_uses_speed_margin_over_cap(graph):
    model = CostModel()
    a, b = graph.find_node(1), graph.find_node(2)

    h = model.heuristic(graph, a, b, 70.0)

    assert h == pytest.approx(100.0 / (75.0 * MPH_TO_MS))


def test_heuristic_is_symmetric_and_scaled_by_weight(graph):
    model = CostModel()
    a, b = graph.find_node(1), graph.find_node(2)

    assert model.heuristic(graph, a, b, 70.0) == model.heuristic(graph, b, a, 70.0)
    assert model.heuristic(graph, a, b, 70.0, 2.5) == pytest.approx(
        2.5 * model.heuristic(graph, a, b, 70.0)
    )


def test_heuristic_never_exceeds_raw_edge_cost(graph):
    model = CostModel()
    a, b = graph.find_node(1), graph.find_node(2)

    assert model.heuristic(graph, a, b, 70.0) < model.edge_cost(graph, _edge(graph), a, b, 70.0)


def test_edge_cost_takes_slower_of_road_limit_and_cap(graph):
    model = CostModel()
    a, b = graph.find_node(1), graph.find_node(2)

    # Road limit 10 m/s is slower than 70 mph
    assert model.edge_cost(graph, _edge(graph), a, b, 70.0) == pytest.approx(10.0)
    # A 10 mph cap (4.47 m/s) is slower than the road
    assert model.edge_cost(graph, _edge(graph), a, b, 10.0) == pytest.approx(
        100.0 / (10.0 * MPH_TO_MS)
    )


def test_edge_cost_without_maxspeed_uses_cap():
    g = InMemoryGraph(crs="cartesian")
    g.add_node(1, 0.0, 0.0)
    g.add_node(2, 0.0, 50.0)
    edge = g.add_way(1, 2, crossTimeFoot=1.0)

    cost = CostModel().edge_cost(g, edge, g.find_node(1), g.find_node(2), 20.0)

    assert cost == pytest.approx(50.0 / (20.0 * MPH_TO_MS))


def test_road_class_factor_only_for_motor_vehicles(graph):
    model = CostModel()
    edge = _edge(graph)

    assert model.apply_road_class_factor(graph, edge, CROSS_TIME_MOTOR_VEHICLE, 10.0) == pytest.approx(20.0)
    assert model.apply_road_class_factor(graph, edge, CROSS_TIME_FOOT, 10.0) == 10.0


@pytest.mark.parametrize(
    "road_class, expected",
    [
        ("primary", 12.0),
        ("secondary", 14.0),
        ("tertiary", 16.0),
        ("unclassified", 18.0),
        ("road", 18.0),
        ("living_street", 24.0),
        ("service", 24.0),
        ("other", 10.0),
        ("motorway", 10.0),
    ],
)
def test_road_class_factor_table(road_class, expected):
    g = InMemoryGraph(crs="cartesian")
    g.add_node(1, 0.0, 0.0)
    g.add_node(2, 1.0, 0.0)
    edge = g.add_way(1, 2, **{"class": road_class})

    cost = CostModel().apply_road_class_factor(g, edge, CROSS_TIME_MOTOR_VEHICLE, 10.0)

    assert cost == pytest.approx(expected)


def test_road_class_factor_missing_class_leaves_cost():
    g = InMemoryGraph(crs="cartesian")
    g.add_node(1, 0.0, 0.0)
    g.add_node(2, 1.0, 0.0)
    edge = g.add_way(1, 2)

    assert CostModel().apply_road_class_factor(g, edge, CROSS_TIME_MOTOR_VEHICLE, 10.0) == 10.0


def test_injected_road_class_table_replaces_defaults(graph):
    model = CostModel(road_class_factors={"residential": 3.0})

    assert model.apply_road_class_factor(graph, _edge(graph), CROSS_TIME_MOTOR_VEHICLE, 10.0) == pytest.approx(30.0)


def test_intersection_penalty_above_three_incoming_edges():
    g = InMemoryGraph(crs="cartesian")
    g.add_node(0, 0.0, 0.0)
    for i in range(1, 5):
        g.add_node(i, float(i), 1.0)
    g.add_way(1, 0)
    g.add_way(2, 0)
    g.add_way(3, 0)
    model = CostModel()

    assert model.intersection_penalty_for(g, g.find_node(0)) == 0.0

    g.add_way(4, 0)
    assert model.intersection_penalty_for(g, g.find_node(0)) == 2.0


def test_disruption_severities_multiply(graph):
    model = CostModel()
    graph.add_disruption("d1", 2, "Moderate")
    graph.add_disruption("d2", 2, "Serious")

    cost = model.apply_disruption_factor(graph, graph.find_node(2), 10.0)

    assert cost == pytest.approx(10.0 * 2.0 * 3.333)


def test_closed_disruption_dominates_other_disruptions(graph):
    model = CostModel()
    graph.add_disruption("d1", 2, "Severe")
    graph.add_disruption("d2", 2, "Minimal", closed=True)
    graph.add_disruption("d3", 2, "Serious")

    cost = model.apply_disruption_factor(graph, graph.find_node(2), 10.0)

    assert cost == pytest.approx(250.0)


def test_disruption_without_or_with_unknown_severity_is_skipped(graph, caplog):
    model = CostModel()
    graph.add_disruption("d1", 2, None, closed=True)
    graph.add_disruption("d2", 2, "Apocalyptic")
    graph.add_disruption("d3", 2, "Minimal")

    with caplog.at_level(logging.WARNING, logger="safe_travel.graph.cost_model"):
        cost = model.apply_disruption_factor(graph, graph.find_node(2), 10.0)

    assert cost == pytest.approx(11.0)
    messages = [record.getMessage() for record in caplog.records]
    assert "Disruption has no severity" in messages
    assert "Unknown disruption severity" in messages


def test_node_without_disruptions_keeps_cost(graph):
    assert CostModel().apply_disruption_factor(graph, graph.find_node(2), 7.5) == 7.5


def test_adjusted_cost_applies_steps_in_order():
    g = InMemoryGraph(crs="cartesian")
    g.add_node(1, 0.0, 0.0)
    g.add_node(2, 100.0, 0.0)
    for i in range(3, 6):
        g.add_node(i, 100.0, float(i))
        g.add_way(i, 2)
    edge = g.add_way(1, 2, maxspeed=10.0, crossTimeMotorVehicle=1.0, **{"class": "residential"})
    g.add_disruption("d1", 2, "Moderate")
    model = CostModel()
    a, b = g.find_node(1), g.find_node(2)

    with_disruptions = model.adjusted_edge_cost(g, edge, a, b, CROSS_TIME_MOTOR_VEHICLE, True, 70.0)
    without = model.adjusted_edge_cost(g, edge, a, b, CROSS_TIME_MOTOR_VEHICLE, False, 70.0)

    # (10 s * residential 2.0 + busy junction 2.0) * Moderate 2.0
    assert with_disruptions == pytest.approx(44.0)
    assert without == pytest.approx(22.0)


def test_closure_is_25_times_the_adjusted_cost():
    g = InMemoryGraph(crs="cartesian")
    g.add_node(1, 0.0, 0.0)
    g.add_node(2, 100.0, 0.0)
    edge = g.add_way(1, 2, maxspeed=10.0, crossTimeFoot=1.0)
    g.add_disruption("closure", 2, "Moderate", closed=True)
    g.add_disruption("other", 2, "Severe")
    model = CostModel()
    a, b = g.find_node(1), g.find_node(2)

    before = model.adjusted_edge_cost(g, edge, a, b, CROSS_TIME_FOOT, False, 70.0)
    after = model.adjusted_edge_cost(g, edge, a, b, CROSS_TIME_FOOT, True, 70.0)

    assert after == pytest.approx(25.0 * before)


def test_from_config_uses_routing_settings():
    config = RoutingConfig(
        speed_margin_mph=15.0,
        intersection_penalty_seconds=4.0,
        closure_factor=10.0,
        road_class_factors={"primary": 1.0},
    )

    model = CostModel.from_config(config)

    assert model.speed_margin_mph == 15.0
    assert model.intersection_penalty == 4.0
    assert model.closure_factor == 10.0
    assert dict(model.road_class_factors) == {"primary": 1.0}


@pytest.mark.parametrize("bad", [0.0, -1.0, 0.5, 0.999, math.inf, math.nan])
def test_invalid_factor_tables_are_rejected(bad):
    with pytest.raises(ConfigurationError):
        CostModel(disruption_factors={"Minimal": bad})
    with pytest.raises(ConfigurationError):
        CostModel(road_class_factors={"primary": bad})


@pytest.mark.parametrize(
    "overrides",
    [
        {"closure_factor": 0.9},
        {"closure_factor": math.inf},
        {"intersection_penalty": -1.0},
        {"intersection_penalty": math.nan},
        {"speed_margin_mph": -0.1},
    ],
)
def test_invalid_constants_are_rejected(overrides):
    with pytest.raises(ConfigurationError):
        CostModel(**overrides)


def test_discounting_road_class_from_config_is_rejected():
    config = RoutingConfig(road_class_factors={"primary": 0.5})

    with pytest.raises(ConfigurationError) as exc:
        CostModel.from_config(config)

    assert "primary" in exc.value.setting_name


def test_factor_of_exactly_one_is_accepted():
    model = CostModel(road_class_factors={"primary": 1.0}, closure_factor=1.0, intersection_penalty=0.0)

    assert model.closure_factor == 1.0
