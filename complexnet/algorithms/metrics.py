from __future__ import annotations

from typing import Tuple

import numpy as np

from ..core.exceptions import IndexOutOfRange


def mean_degree(net) -> float:
    return net.mean_degree()


def clustering_coef(net, node: int) -> float:
    """Local clustering coefficient of ``node``.

    Counts neighbour pairs (i < j in adjacency order) where the j-th neighbour
    is in the i-th neighbour's adjacency list; coefficient is
    2 * count / (deg * (deg - 1)). Nodes with degree <= 1 give 0.0.
    """
    n = net.current_size
    if not 0 <= node < n:
        raise IndexOutOfRange("node", node, n)
    neighs = net.adjacency_lists()
    nbrs = neighs[node]
    deg = len(nbrs)
    if deg <= 1:
        return 0.0

    triangles = 0
    for i in range(deg):
        check = set(neighs[nbrs[i]])
        for j in range(i + 1, deg):
            if nbrs[j] in check:
                triangles += 1
    return 2.0 * triangles / (deg * (deg - 1))


def mean_clustering_coef(net) -> float:
    """Average of the local coefficients over every node (0.0 on an empty network).

    Not the same quantity as the global (transitivity) coefficient.
    """
    n = net.current_size
    if n == 0:
        return 0.0
    return sum(clustering_coef(net, i) for i in range(n)) / n


def degree_distribution(net, normalized: bool = False) -> np.ndarray:
    """Histogram of node degrees.

    Parameters
    ----------
    normalized:
        divide every bin by the link count. The result does NOT sum to one;
        divide the raw counts by the node count for a probability distribution.

    Returns
    -------
    np.ndarray
        index k holds the number of degree-k nodes (float when normalized).
        Length is max degree + 1; empty for an empty network.
    """
    counts = np.bincount(net.degrees()) if net.current_size else np.zeros(0, dtype=np.int64)
    if normalized:
        links = net.link_count
        counts = counts.astype(np.float64)
        if links:
            counts /= links
    return counts


def degree_correlation(net, normalized: bool = False) -> Tuple[np.ndarray, np.ndarray]:
    """Average nearest-neighbour degree as a function of degree.

    Returns
    -------
    distribution:
        degree histogram as from :func:`degree_distribution`.
    correlation:
        index k holds the mean, over degree-k nodes, of the average degree of
        their neighbours (0.0 where no node has degree k, and for k = 0).
    """
    deg = net.degrees()
    counts = np.bincount(deg) if deg.size else np.zeros(0, dtype=np.int64)
    correlation = np.zeros(counts.shape[0], dtype=np.float64)

    for node, nbrs in enumerate(net.adjacency_lists()):
        if nbrs:
            correlation[deg[node]] += deg[nbrs].mean()

    present = counts > 0
    correlation[present] /= counts[present]

    distribution = counts
    if normalized:
        distribution = counts.astype(np.float64)
        if net.link_count:
            distribution /= net.link_count
    return distribution, correlation
