from .graphml import to_graphml, from_graphml
from .mtx import write_mtx, read_mtx

__all__ = ["to_graphml", "from_graphml", "write_mtx", "read_mtx"]
