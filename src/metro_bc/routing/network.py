"""Network Model: immutable adjacency mapping over station identifiers.

Built fresh for each routing request from the station/edge dataset.
Edges are undirected and folded in both directions. Weights are validated
here so Dijkstra never sees a negative or non-numeric cost.
"""

import math
import numbers
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple

from src.metro_bc.edge.domain.entities import Edge
from src.metro_bc.station.domain.entities import Station
from src.metro_bc.shared.domain.exceptions import NetworkIntegrityError


Neighbor = Tuple[str, float]


class NetworkModel:
    """Read-only adjacency mapping {station_id: ((neighbor_id, weight), ...)}."""

    def __init__(self, adjacency: Dict[str, List[Neighbor]]):
        self._adjacency: Mapping[str, Tuple[Neighbor, ...]] = MappingProxyType(
            {node: tuple(neighbors) for node, neighbors in adjacency.items()}
        )

    @property
    def adjacency(self) -> Mapping[str, Tuple[Neighbor, ...]]:
        return self._adjacency

    @property
    def node_count(self) -> int:
        return len(self._adjacency)

    def neighbors(self, station_id: str) -> Tuple[Neighbor, ...]:
        return self._adjacency.get(station_id, ())

    def __contains__(self, station_id: object) -> bool:
        return station_id in self._adjacency

    def __len__(self) -> int:
        return len(self._adjacency)


def _validate_weight(edge: Edge) -> float:
    weight = edge.weight
    if isinstance(weight, bool) or not isinstance(weight, numbers.Real):
        raise NetworkIntegrityError(
            f"Edge {edge.from_station_id}-{edge.to_station_id} has non-numeric weight {weight!r}"
        )
    weight = float(weight)
    if math.isnan(weight) or math.isinf(weight):
        raise NetworkIntegrityError(
            f"Edge {edge.from_station_id}-{edge.to_station_id} has non-finite weight {weight}"
        )
    if weight < 0:
        raise NetworkIntegrityError(
            f"Edge {edge.from_station_id}-{edge.to_station_id} has negative weight {weight}"
        )
    return weight


def build_network(stations: Iterable[Station], edges: Iterable[Edge]) -> NetworkModel:
    """Fold stations and edges into a NetworkModel.

    Every station and every edge endpoint becomes a node, even when the
    endpoint has no Station record. A repeated edge with the same weight is
    kept once.

    Raises:
        NetworkIntegrityError: negative/non-numeric weight, self-loop, or the
            same station pair listed with conflicting weights
    """
    adjacency: Dict[str, List[Neighbor]] = {}
    pair_weights: Dict[frozenset, float] = {}

    for station in stations:
        adjacency.setdefault(station.station_id, [])

    for edge in edges:
        if edge.from_station_id == edge.to_station_id:
            raise NetworkIntegrityError(f"Self-loop on station {edge.from_station_id}")

        weight = _validate_weight(edge)
        pair = edge.endpoints

        if pair in pair_weights:
            if pair_weights[pair] != weight:
                raise NetworkIntegrityError(
                    f"Conflicting weights for {edge.from_station_id}-{edge.to_station_id}: "
                    f"{pair_weights[pair]} vs {weight}"
                )
            continue
        pair_weights[pair] = weight

        adjacency.setdefault(edge.from_station_id, []).append((edge.to_station_id, weight))
        adjacency.setdefault(edge.to_station_id, []).append((edge.from_station_id, weight))

    return NetworkModel(adjacency)
