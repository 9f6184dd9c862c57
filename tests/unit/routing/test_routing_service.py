"""Unit tests for RoutingService name resolution and errors."""

import pytest

from src.metro_bc.edge.domain.entities import Edge
from src.metro_bc.routing.network_source import NetworkDataSource, NetworkDataset
from src.metro_bc.routing.routing_service import RoutingService, find_station_by_name
from src.metro_bc.shared.domain.exceptions import (
    NetworkIntegrityError,
    NoRouteError,
    StationNotFoundError,
)
from src.metro_bc.station.domain.entities import Station


class StaticDataSource(NetworkDataSource):
    """In-memory dataset."""

    def __init__(self, stations, edges):
        self.dataset = NetworkDataset(stations=stations, edges=edges)

    def load(self):
        return self.dataset


STATIONS = [
    Station("rajiv-chowk", "Rajiv Chowk", 77.2196, 28.6328, ("yellow", "blue")),
    Station("new-delhi", "New Delhi", 77.2219, 28.6430, ("yellow",)),
    Station("kashmere-gate", "Kashmere Gate", 77.2285, 28.6675, ("yellow", "violet")),
    Station("airport-t3", "Airport T3", 77.0868, 28.5562, ("airport-express",)),
]

EDGES = [
    Edge("rajiv-chowk", "new-delhi", 1.1),
    Edge("new-delhi", "kashmere-gate", 2.9),
    Edge("kashmere-gate", "unnamed-depot", 0.4),
]


@pytest.fixture
def service():
    return RoutingService(StaticDataSource(STATIONS, EDGES))


class TestFindStationByName:
    """Tests for case-insensitive station name matching."""

    def test_case_insensitive_match(self):
        assert find_station_by_name(STATIONS, "rajiv CHOWK").station_id == "rajiv-chowk"

    def test_surrounding_whitespace_ignored(self):
        assert find_station_by_name(STATIONS, "  New Delhi ").station_id == "new-delhi"

    def test_partial_name_does_not_match(self):
        assert find_station_by_name(STATIONS, "Rajiv") is None


class TestRoutingService:
    """Tests for RoutingService.find_route."""

    def test_route_maps_ids_to_names(self, service):
        result = service.find_route("rajiv chowk", "KASHMERE GATE")

        assert result.origin_name == "Rajiv Chowk"
        assert result.destination_name == "Kashmere Gate"
        assert result.path == ["Rajiv Chowk", "New Delhi", "Kashmere Gate"]
        assert result.station_ids == ["rajiv-chowk", "new-delhi", "kashmere-gate"]
        assert result.distance == pytest.approx(4.0)

    def test_unknown_station_lists_missing_names(self, service):
        with pytest.raises(StationNotFoundError) as exc_info:
            service.find_route("Rajiv Chowk", "Atlantis")
        assert exc_info.value.names == ["Atlantis"]

    def test_both_unknown(self, service):
        with pytest.raises(StationNotFoundError) as exc_info:
            service.find_route("Nowhere", "Atlantis")
        assert exc_info.value.names == ["Nowhere", "Atlantis"]

    def test_unreachable_station(self, service):
        with pytest.raises(NoRouteError):
            service.find_route("Rajiv Chowk", "Airport T3")

    def test_same_station(self, service):
        result = service.find_route("New Delhi", "new delhi")
        assert result.path == ["New Delhi"]
        assert result.distance == 0

    def test_invalid_dataset(self):
        service = RoutingService(StaticDataSource(STATIONS, [Edge("rajiv-chowk", "new-delhi", -1)]))
        with pytest.raises(NetworkIntegrityError):
            service.find_route("Rajiv Chowk", "New Delhi")

    def test_unknown_station_reported_before_network_is_built(self):
        """Name resolution fails first, so a broken edge list is never reached."""
        service = RoutingService(StaticDataSource(STATIONS, [Edge("rajiv-chowk", "new-delhi", -1)]))
        with pytest.raises(StationNotFoundError) as exc_info:
            service.find_route("Rajiv Chowk", "Atlantis")
        assert exc_info.value.names == ["Atlantis"]
