"""Routing module for metro pathfinding.

- build_network / NetworkModel: adjacency mapping with integrity checks
- shortest_path: Dijkstra over station identifiers
- RoutingService: name resolution + route result for the API

Data sources:
- JsonNetworkDataSource: stations.json / edges.json
- DatabaseNetworkDataSource: metro_stations / metro_edges tables
"""

from .network import NetworkModel, build_network
from .dijkstra import ShortestPath, shortest_path
from .network_source import (
    NetworkDataset,
    NetworkDataSource,
    JsonNetworkDataSource,
    DatabaseNetworkDataSource,
)
from .routing_service import RoutingService, RouteResult

__all__ = [
    "NetworkModel",
    "build_network",
    "ShortestPath",
    "shortest_path",
    "NetworkDataset",
    "NetworkDataSource",
    "JsonNetworkDataSource",
    "DatabaseNetworkDataSource",
    "RoutingService",
    "RouteResult",
]
