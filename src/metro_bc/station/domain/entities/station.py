from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Station:
    """A metro station (node of the network)."""

    station_id: str  # Stable slug, e.g. "rajiv-chowk"
    name: str
    longitude: float
    latitude: float
    lines: Tuple[str, ...] = field(default_factory=tuple)
    entry_count: Optional[int] = None

    @property
    def is_interchange(self) -> bool:
        return len(self.lines) > 1

    @property
    def coordinates(self) -> List[float]:
        """GeoJSON order: [longitude, latitude]."""
        return [self.longitude, self.latitude]

    @classmethod
    def from_json(cls, row: dict) -> "Station":
        """Create Station from a stations.json record.

        Coordinates come either as a GeoJSON point under "coords" or as
        flat "longitude"/"latitude" keys.
        """
        coords = row.get("coords") or {}
        coordinates = coords.get("coordinates") if isinstance(coords, dict) else None
        if coordinates and len(coordinates) >= 2:
            longitude, latitude = float(coordinates[0]), float(coordinates[1])
        else:
            longitude = float(row.get("longitude", 0) or 0)
            latitude = float(row.get("latitude", 0) or 0)

        meta = row.get("meta") or {}
        return cls(
            station_id=row["stationId"] if "stationId" in row else row["station_id"],
            name=row.get("name", ""),
            longitude=longitude,
            latitude=latitude,
            lines=tuple(row.get("lines") or ()),
            entry_count=meta.get("entryCount"),
        )
