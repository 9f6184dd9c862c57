from dataclasses import dataclass
from math import radians, cos, sin, asin, sqrt


@dataclass(frozen=True)
class GeoPoint:
    """Geographic point with longitude and latitude."""
    longitude: float
    latitude: float

    def distance_to(self, other: "GeoPoint") -> float:
        """Distance to another point in meters."""
        return haversine_distance(
            self.latitude, self.longitude,
            other.latitude, other.longitude
        )


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate the great-circle distance between two points in meters.

    Args:
        lat1, lon1: First point coordinates (degrees)
        lat2, lon2: Second point coordinates (degrees)

    Returns:
        Distance in meters
    """
    R = 6_371_000  # Earth radius in meters

    lat1_rad = radians(lat1)
    lat2_rad = radians(lat2)
    delta_lat = radians(lat2 - lat1)
    delta_lon = radians(lon2 - lon1)

    a = sin(delta_lat / 2) ** 2 + cos(lat1_rad) * cos(lat2_rad) * sin(delta_lon / 2) ** 2
    c = 2 * asin(sqrt(a))

    return R * c
