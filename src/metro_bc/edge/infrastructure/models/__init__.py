from .edge_model import EdgeModel

__all__ = ["EdgeModel"]
