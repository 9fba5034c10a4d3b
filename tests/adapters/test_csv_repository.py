import logging
import math

import pytest

from safe_travel.adapters.graph import CSVGraphRepository
from safe_travel.config import GraphConfig
from safe_travel.domain.errors import GraphError
from safe_travel.domain.models import CONNECTS, CROSS_TIME_FOOT, CROSS_TIME_MOTOR_VEHICLE


@pytest.fixture
def repository(data_dir):
    return CSVGraphRepository(GraphConfig(data_dir=data_dir))


def _write(directory, nodes, ways, disruptions=None):
    (directory / "nodes.csv").write_text(nodes, encoding="utf-8")
    (directory / "ways.csv").write_text(ways, encoding="utf-8")
    if disruptions is not None:
        (directory / "disruptions.csv").write_text(disruptions, encoding="utf-8")
    return CSVGraphRepository(GraphConfig(data_dir=directory))


class TestLoad:
    def test_loads_nodes_with_labels(self, repository):
        graph = repository.load()

        assert len(graph) == 8
        assert graph.has_label(graph.find_node(99912), "Point")
        assert not graph.has_label(graph.find_node(5001), "Point")
        assert graph.has_label(graph.find_node(5001), "Landmark")

    def test_coordinates_are_lon_lat(self, repository):
        graph = repository.load()

        coordinate = graph.get_coordinate(graph.find_node(2001))

        assert coordinate.longitude == pytest.approx(-0.1290)
        assert coordinate.latitude == pytest.approx(51.5005)

    def test_way_properties_are_typed(self, repository):
        graph = repository.load()

        (way,) = [
            w
            for w in graph.outgoing_edges(graph.find_node(99912), CONNECTS)
            if graph.get_id(graph.end_node(w)) == 2004
        ]

        assert graph.edge_property(way, "maxspeed") == pytest.approx(31.3)
        assert graph.edge_property(way, "class") == "primary"
        assert graph.edge_property(way, CROSS_TIME_FOOT) == math.inf
        assert graph.edge_property(way, CROSS_TIME_MOTOR_VEHICLE) == 6.0

    def test_empty_cells_are_left_out(self, repository):
        graph = repository.load()

        (way,) = graph.outgoing_edges(graph.find_node(5001), CONNECTS)

        assert graph.edge_property(way, CROSS_TIME_MOTOR_VEHICLE) is None
        assert graph.edge_property(way, CROSS_TIME_FOOT) == 30.0

    def test_disruptions_are_attached(self, repository):
        graph = repository.load()

        (moderate,) = graph.disruption_edges(graph.find_node(2002))
        (severe,) = graph.disruption_edges(graph.find_node(2003))

        assert graph.disruption_severity(graph.end_node(moderate)) == "Moderate"
        assert not graph.disruption_closed(graph.end_node(moderate))
        assert graph.disruption_severity(graph.end_node(severe)) == "Severe"
        assert graph.disruption_closed(graph.end_node(severe))

    def test_disruption_on_unknown_node_is_skipped(self, data_dir, caplog):
        repository = CSVGraphRepository(GraphConfig(data_dir=data_dir))

        with caplog.at_level(logging.WARNING):
            repository.load()

        assert "Disruption on unknown node" in [r.getMessage() for r in caplog.records]

    def test_graph_is_cached(self, repository):
        first = repository.load()

        assert repository.load() is first

        repository.clear_cache()
        assert repository.load() is not first

    def test_disruptions_file_is_optional(self, tmp_path):
        repository = _write(
            tmp_path,
            "id,lon,lat\n1,0.0,0.0\n2,0.001,0.0\n",
            "from_id,to_id,maxspeed,class,crossTimeFoot\n1,2,10,primary,5\n",
        )

        graph = repository.load()

        assert len(graph) == 2
        assert graph.disruption_edges(graph.find_node(2)) == []
        assert graph.has_label(graph.find_node(1), "Point")

    def test_cartesian_crs(self, tmp_path):
        (tmp_path / "nodes.csv").write_text("id,lon,lat\n1,0,0\n2,300,400\n", encoding="utf-8")
        (tmp_path / "ways.csv").write_text("from_id,to_id\n1,2\n", encoding="utf-8")
        repository = CSVGraphRepository(GraphConfig(data_dir=tmp_path, crs="cartesian"))

        graph = repository.load()
        a = graph.get_coordinate(graph.find_node(1))
        b = graph.get_coordinate(graph.find_node(2))

        assert graph.distance(a, b) == pytest.approx(500.0)


class TestLoadErrors:
    def test_missing_nodes_file(self, tmp_path):
        repository = CSVGraphRepository(GraphConfig(data_dir=tmp_path))

        with pytest.raises(GraphError) as exc:
            repository.load()

        assert exc.value.file_path == str(tmp_path / "nodes.csv")
        assert exc.value.cause is not None

    def test_unparseable_way_value(self, tmp_path):
        repository = _write(
            tmp_path,
            "id,lon,lat\n1,0.0,0.0\n2,0.001,0.0\n",
            "from_id,to_id,maxspeed\n1,2,fast\n",
        )

        with pytest.raises(GraphError) as exc:
            repository.load()

        assert exc.value.file_path == str(tmp_path / "ways.csv")

    def test_way_to_unknown_node(self, tmp_path):
        repository = _write(
            tmp_path,
            "id,lon,lat\n1,0.0,0.0\n",
            "from_id,to_id\n1,2\n",
        )

        with pytest.raises(GraphError, match="Unknown node id: 2"):
            repository.load()

    def test_duplicate_node(self, tmp_path):
        repository = _write(
            tmp_path,
            "id,lon,lat\n1,0.0,0.0\n1,0.5,0.5\n",
            "from_id,to_id\n",
        )

        with pytest.raises(GraphError) as exc:
            repository.load()

        assert exc.value.file_path == str(tmp_path / "nodes.csv")
