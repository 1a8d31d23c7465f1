from .networkx import to_nx, from_nx

__all__ = ["to_nx", "from_nx"]
