from .station import Station

__all__ = ["Station"]
