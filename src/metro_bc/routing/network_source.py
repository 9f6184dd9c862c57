"""Station/edge dataset providers for the router."""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List

from src.metro_bc.edge.domain.entities import Edge
from src.metro_bc.edge.infrastructure.repositories import EdgeRepository
from src.metro_bc.station.domain.entities import Station
from src.metro_bc.station.infrastructure.repositories import StationRepository
from src.metro_bc.shared.domain.exceptions import NetworkIntegrityError

logger = logging.getLogger(__name__)

STATIONS_FILE = "stations.json"
EDGES_FILE = "edges.json"


@dataclass(frozen=True)
class NetworkDataset:
    stations: List[Station]
    edges: List[Edge]


class NetworkDataSource(ABC):
    """Supplies the whole station and edge dataset."""

    @abstractmethod
    def load(self) -> NetworkDataset:
        pass


def read_json_dataset(data_dir: Path) -> NetworkDataset:
    """Parse stations.json and edges.json from a directory.

    Raises:
        NetworkIntegrityError: if a file is missing or a record is malformed
    """
    stations_path = data_dir / STATIONS_FILE
    edges_path = data_dir / EDGES_FILE

    try:
        with open(stations_path, encoding="utf-8") as f:
            station_rows = json.load(f)
        with open(edges_path, encoding="utf-8") as f:
            edge_rows = json.load(f)
    except FileNotFoundError as e:
        raise NetworkIntegrityError(f"Network data file missing: {e.filename}") from e
    except json.JSONDecodeError as e:
        raise NetworkIntegrityError(f"Invalid JSON in network data: {e}") from e

    try:
        stations = [Station.from_json(row) for row in station_rows]
        edges = [Edge.from_json(row) for row in edge_rows]
    except (KeyError, TypeError, ValueError) as e:
        raise NetworkIntegrityError(f"Malformed network record: {e}") from e

    return NetworkDataset(stations=stations, edges=edges)


class JsonNetworkDataSource(NetworkDataSource):
    """Reads stations.json / edges.json on every load."""

    def __init__(self, data_dir: str):
        self.data_dir = Path(data_dir)

    def load(self) -> NetworkDataset:
        dataset = read_json_dataset(self.data_dir)
        logger.debug(
            f"Loaded {len(dataset.stations)} stations and {len(dataset.edges)} edges from {self.data_dir}"
        )
        return dataset


class DatabaseNetworkDataSource(NetworkDataSource):
    """Reads the metro_stations / metro_edges tables."""

    def __init__(self, station_repository: StationRepository, edge_repository: EdgeRepository):
        self.station_repository = station_repository
        self.edge_repository = edge_repository

    def load(self) -> NetworkDataset:
        return NetworkDataset(
            stations=self.station_repository.list_stations(),
            edges=self.edge_repository.list_edges(),
        )
