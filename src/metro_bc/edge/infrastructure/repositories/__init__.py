from .edge_repository import EdgeRepository

__all__ = ["EdgeRepository"]
