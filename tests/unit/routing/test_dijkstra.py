"""Unit tests for Dijkstra shortest path."""

import pytest

from src.metro_bc.edge.domain.entities import Edge
from src.metro_bc.routing.dijkstra import reconstruct_path, shortest_path
from src.metro_bc.routing.network import build_network


def network_of(*edges):
    return build_network([], [Edge(a, b, w) for a, b, w in edges])


class TestShortestPath:
    """Tests for shortest_path over a NetworkModel."""

    def test_prefers_lower_total_weight_over_fewer_hops(self):
        """A-B-C-D (3) beats the direct A-D edge (10)."""
        network = network_of(("a", "b", 1), ("b", "c", 1), ("c", "d", 1), ("a", "d", 10))

        result = shortest_path(network, "a", "d")

        assert result.station_ids == ["a", "b", "c", "d"]
        assert result.distance == 3

    def test_symmetric_distance(self):
        """Undirected edges give the same distance in both directions."""
        network = network_of(("a", "b", 2), ("b", "c", 3), ("a", "c", 7))

        forward = shortest_path(network, "a", "c")
        backward = shortest_path(network, "c", "a")

        assert forward.distance == backward.distance == 5
        assert backward.station_ids == list(reversed(forward.station_ids))

    def test_same_origin_and_destination(self):
        network = network_of(("a", "b", 1))

        result = shortest_path(network, "a", "a")

        assert result.station_ids == ["a"]
        assert result.distance == 0

    def test_unreachable_destination(self):
        """Disconnected components return None."""
        network = network_of(("a", "b", 1), ("c", "d", 1))
        assert shortest_path(network, "a", "d") is None

    def test_unknown_station(self):
        network = network_of(("a", "b", 1))
        assert shortest_path(network, "a", "zzz") is None

    def test_tie_break_lowest_station_id(self):
        """Equal-cost paths resolve through the lowest station id."""
        network = network_of(("a", "m", 1), ("a", "c", 1), ("m", "z", 1), ("c", "z", 1))

        result = shortest_path(network, "a", "z")

        assert result.station_ids == ["a", "c", "z"]
        assert result.distance == 2

    def test_zero_weight_edges(self):
        network = network_of(("a", "b", 0), ("b", "c", 0))
        result = shortest_path(network, "a", "c")
        assert result.station_ids == ["a", "b", "c"]
        assert result.distance == 0

    def test_path_weight_matches_distance(self):
        """Sum of edge weights along the path equals the reported distance."""
        weights = {("a", "b"): 1.5, ("b", "c"): 2.25, ("a", "c"): 5.0, ("c", "d"): 0.5}
        network = network_of(*((a, b, w) for (a, b), w in weights.items()))

        result = shortest_path(network, "a", "d")

        total = 0.0
        for u, v in zip(result.station_ids, result.station_ids[1:]):
            total += weights.get((u, v), weights.get((v, u)))
        assert total == pytest.approx(result.distance)


class TestReconstructPath:
    """Tests for predecessor-map reconstruction."""

    def test_reconstructs_in_origin_order(self):
        previous = {"b": "a", "c": "b"}
        assert reconstruct_path(previous, "a", "c", max_steps=3) == ["a", "b", "c"]

    def test_cyclic_predecessor_map_returns_none(self):
        """A corrupted map never loops forever."""
        previous = {"c": "b", "b": "c"}
        assert reconstruct_path(previous, "a", "c", max_steps=3) is None

    def test_missing_predecessor_returns_none(self):
        assert reconstruct_path({"c": "b"}, "a", "c", max_steps=5) is None
