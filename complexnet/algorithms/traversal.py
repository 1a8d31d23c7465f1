from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from ..core.exceptions import IndexOutOfRange


def _bfs_into(neighs, source: int, dist: np.ndarray, queue: np.ndarray) -> int:
    """Fill ``dist`` from ``source`` (entries must be -1 beforehand).

    ``queue`` receives the discovery order; returns the number of nodes reached.
    """
    dist[source] = 0
    queue[0] = source
    head, tail = 0, 1
    while head < tail:
        u = int(queue[head])
        head += 1
        du = dist[u] + 1
        for v in neighs[u]:
            if dist[v] == -1:
                dist[v] = du
                queue[tail] = v
                tail += 1
    return tail


def _check_source(net, source: int) -> int:
    n = net.current_size
    if not 0 <= source < n:
        raise IndexOutOfRange("node", source, n)
    return int(source)


def bfs(net, source: int) -> Tuple[np.ndarray, List[int]]:
    """Breadth-first search from ``source``.

    Parameters
    ----------
    net:
        Network to traverse.
    source:
        Start node index.

    Returns
    -------
    dist:
        np.ndarray of length n; hop count from ``source``, -1 if unreached.
    order:
        list of reached nodes in discovery order (``source`` first).
    """
    source = _check_source(net, source)
    n = net.current_size
    dist = np.full(n, -1, dtype=np.int64)
    queue = np.empty(n, dtype=np.int64)
    reached = _bfs_into(net.adjacency_lists(), source, dist, queue)
    return dist, queue[:reached].tolist()


def connected_components(net) -> Tuple[List[int], List[int]]:
    """Connected components, each discovered from its lowest-indexed node.

    Returns
    -------
    representatives:
        lowest node index of each component, ascending.
    sizes:
        number of nodes in each component (same order).
    """
    n = net.current_size
    neighs = net.adjacency_lists()
    dist = np.full(n, -1, dtype=np.int64)
    queue = np.empty(n, dtype=np.int64)
    reps: List[int] = []
    sizes: List[int] = []

    for start in range(n):
        if dist[start] != -1:
            continue
        reps.append(start)
        sizes.append(_bfs_into(neighs, start, dist, queue))

    return reps, sizes


def largest_component_size(net) -> int:
    _, sizes = connected_components(net)
    return max(sizes) if sizes else 0


def component_nodes(net, node: int) -> List[int]:
    """Nodes of the component containing ``node``, in BFS discovery order."""
    _, order = bfs(net, node)
    return order


def _mean_hops(neighs, n: int, sources) -> float:
    dist = np.full(n, -1, dtype=np.int64)
    queue = np.empty(n, dtype=np.int64)
    total = 0
    pairs = 0
    for s in sources:
        reached = _bfs_into(neighs, s, dist, queue)
        visited = queue[:reached]
        total += int(dist[visited].sum())
        pairs += reached - 1
        dist[visited] = -1
    return total / pairs if pairs else -1.0


def average_pathlength(net) -> float:
    """Mean shortest-path length over all ordered reachable pairs.

    Self-pairs and unreachable pairs are excluded. Returns -1.0 when no
    reachable pair exists.
    """
    n = net.current_size
    return _mean_hops(net.adjacency_lists(), n, range(n))


def average_pathlength_component(net, node: int, size: Optional[int] = None) -> float:
    """Mean shortest-path length inside the component of ``node``.

    Parameters
    ----------
    node:
        any node of the component.
    size:
        known component size; only used to preallocate.

    Returns
    -------
    float
        mean over ordered pairs of the component, -1.0 for a single node.
    """
    node = _check_source(net, node)
    n = net.current_size
    neighs = net.adjacency_lists()
    dist = np.full(n, -1, dtype=np.int64)
    queue = np.empty(n, dtype=np.int64)
    reached = _bfs_into(neighs, node, dist, queue)

    members = np.empty(size if size and size >= reached else reached, dtype=np.int64)
    members[:reached] = queue[:reached]
    return _mean_hops(neighs, n, members[:reached].tolist())
