from .station_model import StationModel

__all__ = ["StationModel"]
