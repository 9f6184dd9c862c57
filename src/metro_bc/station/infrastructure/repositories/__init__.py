from .station_repository import StationRepository

__all__ = ["StationRepository"]
