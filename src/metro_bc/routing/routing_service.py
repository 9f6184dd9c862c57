"""Shortest route between two stations given by display name.

Names are resolved case-insensitively against the station dataset, the
network is built from the same dataset, and the identifier path returned by
Dijkstra is mapped back to display names.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from src.metro_bc.routing.dijkstra import shortest_path
from src.metro_bc.routing.network import build_network
from src.metro_bc.routing.network_source import NetworkDataSource
from src.metro_bc.station.domain.entities import Station
from src.metro_bc.shared.domain.exceptions import NoRouteError, StationNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteResult:
    origin_name: str
    destination_name: str
    path: List[str]  # Display names
    station_ids: List[str]
    distance: float


def find_station_by_name(stations: List[Station], name: str) -> Optional[Station]:
    """Case-insensitive exact match on the display name."""
    wanted = name.strip().lower()
    for station in stations:
        if station.name.lower() == wanted:
            return station
    return None


class RoutingService:
    """Service for shortest-path queries over the metro network."""

    def __init__(self, data_source: NetworkDataSource):
        self.data_source = data_source

    def find_route(self, origin_name: str, destination_name: str) -> RouteResult:
        """Find the minimum-weight route between two station names.

        Raises:
            StationNotFoundError: either name does not match a station
            NoRouteError: the stations are not connected
            NetworkIntegrityError: the dataset is invalid
        """
        dataset = self.data_source.load()

        origin = find_station_by_name(dataset.stations, origin_name)
        destination = find_station_by_name(dataset.stations, destination_name)

        missing = [
            name for name, station in ((origin_name, origin), (destination_name, destination))
            if station is None
        ]
        if missing:
            logger.info(f"Route request with unknown station(s): {missing}")
            raise StationNotFoundError(missing)

        network = build_network(dataset.stations, dataset.edges)
        logger.debug(f"Network built with {network.node_count} nodes")

        result = shortest_path(network, origin.station_id, destination.station_id)
        if result is None:
            logger.info(f"No route between {origin.station_id} and {destination.station_id}")
            raise NoRouteError(origin.name, destination.name)

        names_by_id: Dict[str, str] = {s.station_id: s.name for s in dataset.stations}
        path_names = [names_by_id.get(station_id, station_id) for station_id in result.station_ids]

        logger.info(
            f"Route {origin.station_id} -> {destination.station_id}: "
            f"{len(path_names)} stations, distance {result.distance}"
        )
        return RouteResult(
            origin_name=origin.name,
            destination_name=destination.name,
            path=path_names,
            station_ids=result.station_ids,
            distance=result.distance,
        )
