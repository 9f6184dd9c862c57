from dataclasses import dataclass
from typing import Optional

# Keys accepted for the edge weight in edges.json, in priority order
WEIGHT_KEYS = ("distance", "travelTime", "weight")


@dataclass(frozen=True)
class Edge:
    """Undirected weighted connection between two stations."""

    from_station_id: str
    to_station_id: str
    weight: float
    line: Optional[str] = None

    @property
    def endpoints(self) -> frozenset:
        return frozenset((self.from_station_id, self.to_station_id))

    @classmethod
    def from_json(cls, row: dict) -> "Edge":
        """Create Edge from an edges.json record.

        The weight is kept as given; range checks happen when the
        network is built.
        """
        weight = None
        for key in WEIGHT_KEYS:
            if row.get(key) is not None:
                weight = row[key]
                break

        return cls(
            from_station_id=row["from"],
            to_station_id=row["to"],
            weight=weight,
            line=row.get("line"),
        )
