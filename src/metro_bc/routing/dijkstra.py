"""Single-source shortest path over a NetworkModel.

Heap entries are (distance, station_id), so among equal tentative
distances the lowest station id is settled first.
"""

import heapq
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Set

from src.metro_bc.routing.network import NetworkModel

logger = logging.getLogger(__name__)

INFINITY = float('inf')


@dataclass(frozen=True)
class ShortestPath:
    """Identifier path from origin to destination and its total weight."""
    station_ids: List[str]
    distance: float


def reconstruct_path(
    previous: Dict[str, str],
    origin_id: str,
    destination_id: str,
    max_steps: int,
) -> Optional[List[str]]:
    """Walk the predecessor map back from the destination.

    Returns None when the chain does not reach the origin within
    max_steps (corrupted or cyclic predecessor map).
    """
    path = [destination_id]
    node = destination_id
    steps = 0

    while node != origin_id:
        if steps >= max_steps or node not in previous:
            logger.error(
                f"Broken predecessor chain from {destination_id} after {steps} steps"
            )
            return None
        node = previous[node]
        path.append(node)
        steps += 1

    path.reverse()
    return path


def shortest_path(
    network: NetworkModel,
    origin_id: str,
    destination_id: str,
) -> Optional[ShortestPath]:
    """Find the minimum-weight path between two station ids.

    Returns:
        ShortestPath, or None if the destination is unreachable
    """
    if origin_id == destination_id:
        return ShortestPath(station_ids=[origin_id], distance=0.0)

    if origin_id not in network or destination_id not in network:
        return None

    distances: Dict[str, float] = {origin_id: 0.0}
    previous: Dict[str, str] = {}
    visited: Set[str] = set()
    queue = [(0.0, origin_id)]

    while queue:
        current_distance, current = heapq.heappop(queue)

        # Stale heap entry
        if current in visited:
            continue
        visited.add(current)

        if current == destination_id:
            break

        for neighbor, weight in network.neighbors(current):
            if neighbor in visited:
                continue
            new_distance = current_distance + weight
            if new_distance < distances.get(neighbor, INFINITY):
                distances[neighbor] = new_distance
                previous[neighbor] = current
                heapq.heappush(queue, (new_distance, neighbor))

    if destination_id not in visited:
        return None

    path = reconstruct_path(previous, origin_id, destination_id, max_steps=network.node_count)
    if path is None:
        return None

    return ShortestPath(station_ids=path, distance=distances[destination_id])
