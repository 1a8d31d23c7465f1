"""Traversal and structural metrics on :class:`complexnet.Network`.

This package provides:
- breadth-first search with an array-backed FIFO,
- connected components and average path lengths,
- local and mean clustering coefficients,
- degree distribution and degree-degree correlation.
"""

from .traversal import (
    bfs,
    connected_components,
    largest_component_size,
    component_nodes,
    average_pathlength,
    average_pathlength_component,
)
from .metrics import (
    mean_degree,
    clustering_coef,
    mean_clustering_coef,
    degree_distribution,
    degree_correlation,
)

__all__ = [
    "bfs",
    "connected_components",
    "largest_component_size",
    "component_nodes",
    "average_pathlength",
    "average_pathlength_component",
    "mean_degree",
    "clustering_coef",
    "mean_clustering_coef",
    "degree_distribution",
    "degree_correlation",
]
