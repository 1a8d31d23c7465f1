"""
Random network models.

Every generator takes an explicit integer ``seed`` and draws from its own
:func:`numpy.random.default_rng` stream, so identical parameters and seed give
the same links in the same insertion order. Generators return a new
:class:`~complexnet.core.network.Network` unless an empty one is passed as
``network=``.

Rejection loops (Watts-Strogatz rewiring, Barabasi-Albert duplicate targets)
are capped by ``max_retries``; a link whose retries run out is skipped,
counted in ``network.graph_attributes["skipped_links"]`` and reported with a
``RuntimeWarning``.
"""

import math
import warnings
from contextlib import contextmanager

import numpy as np

from ..core.network import Network

MAX_RETRIES = 1000


def _target_network(n, network, weighted):
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    if network is None:
        return Network(n, weighted=weighted)
    if network.current_size or network.link_count:
        raise ValueError("network must be empty")
    if network.max_size < n:
        raise ValueError(f"network max_size {network.max_size} is smaller than n={n}")
    return network


@contextmanager
def _bulk(net, model, **params):
    """Build with history paused, then record the model as graph attributes and one mark."""
    stats = {"skipped_links": 0}
    was_enabled = net.history_enabled()
    net.enable_history(False)
    try:
        yield stats
    finally:
        net.enable_history(was_enabled)
    net.graph_attributes.update(model=model, skipped_links=stats["skipped_links"], **params)
    net.mark(model, skipped_links=stats["skipped_links"], **params)
    if stats["skipped_links"]:
        warnings.warn(
            f"{model}: {stats['skipped_links']} link(s) skipped after exhausting retries",
            RuntimeWarning,
            stacklevel=3,
        )


def erdos_renyi(n, mean_k, seed, *, weighted=False, network=None):
    """
    G(n, p) random graph with ``p = mean_k / (n - 1)``.

    Parameters
    ----------
    n : int
        Number of nodes.
    mean_k : float
        Expected mean degree. ``p`` is clamped to ``[0, 1]``.
    seed : int
        Seed of the local random stream.

    Returns
    -------
    Network

    Notes
    -----
    - Pairs ``(i, j)`` with ``i < j`` are visited row by row; each is linked
      independently with probability ``p``. O(n^2) time, O(n) extra memory.
    """
    if mean_k < 0:
        raise ValueError(f"mean_k must be non-negative, got {mean_k}")
    net = _target_network(n, network, weighted)
    rng = np.random.default_rng(seed)
    p = min(1.0, mean_k / (n - 1)) if n > 1 else 0.0

    with _bulk(net, "erdos_renyi", n=n, mean_k=mean_k, seed=seed):
        net.add_nodes(n)
        # draws are taken one row at a time
        for i in range(n - 1):
            hits = np.flatnonzero(rng.random(n - 1 - i) < p) + i + 1
            for j in hits.tolist():
                net.add_link(i, j)
    return net


def power_law_degrees(n, k_min, gamma, rng):
    """
    Draw ``n`` degrees from a discrete power law ``P(k) ~ k^-gamma``.

    Inverse-CDF sampling between ``k_min`` and ``k_max = floor(sqrt(n))``.
    """
    if int(k_min) != k_min:
        raise ValueError(f"k_min must be an integer, got {k_min}")
    k_min = int(k_min)
    if gamma == 1:
        raise ValueError("gamma must differ from 1")
    k_max = math.isqrt(n)
    if not 1 <= k_min <= k_max:
        raise ValueError(f"k_min must lie in [1, floor(sqrt(n))] = [1, {k_max}], got {k_min}")
    e = 1.0 - gamma
    lo = k_min ** e
    hi = k_max ** e
    u = rng.random(n)
    deg = np.floor((u * (hi - lo) + lo) ** (1.0 / e)).astype(np.int64)
    # round-off may push a draw just below k_min or above k_max
    return np.clip(deg, k_min, k_max)


def configurational(n, k_min, gamma, seed, *, weighted=False, network=None):
    """
    Configuration model with power-law degree sequence.

    Parameters
    ----------
    n : int
        Number of nodes.
    k_min : int
        Lower degree cutoff (upper cutoff is ``floor(sqrt(n))``).
    gamma : float
        Power-law exponent (must not be 1).
    seed : int
        Seed of the local random stream.

    Returns
    -------
    Network

    Notes
    -----
    - An odd degree sum is fixed by giving node 0 one extra stub.
    - Stubs are shuffled and paired consecutively. Pairs that would form a
      self-loop are dropped; parallel links are kept, so this is an
      approximation of the uniform simple-graph configuration model.
    """
    net = _target_network(n, network, weighted)
    rng = np.random.default_rng(seed)
    deg = power_law_degrees(n, k_min, gamma, rng)
    if deg.sum() % 2:
        deg[0] += 1
    stubs = np.repeat(np.arange(n, dtype=np.int64), deg)
    rng.shuffle(stubs)

    with _bulk(net, "configurational", n=n, k_min=k_min, gamma=gamma, seed=seed):
        net.add_nodes(n)
        pairs = stubs[: stubs.size - stubs.size % 2].reshape(-1, 2).tolist()
        for a, b in pairs:
            if a != b:
                net.add_link(a, b)
    return net


def watts_strogatz(n, k, p, seed, *, weighted=False, network=None, max_retries=MAX_RETRIES):
    """
    Small-world ring with random rewiring.

    Parameters
    ----------
    n : int
        Number of nodes on the ring.
    k : int
        Forward neighbours per node; the lattice has ``n * k`` links.
        Requires ``2 * k < n``.
    p : float
        Rewiring probability in ``[0, 1]``.
    seed : int
        Seed of the local random stream.
    max_retries : int
        Draws allowed to find a rewired target before the link is skipped.

    Returns
    -------
    Network

    Notes
    -----
    - For node ``i`` and offset ``j`` in ``1..k``: with probability ``1 - p``
      link ``(i, (i + j) mod n)``; otherwise link ``i`` to a uniform node that
      is neither ``i`` nor already a neighbour of ``i``.
    """
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"p must be in [0, 1], got {p}")
    if k < 0 or 2 * k >= n > 0:
        raise ValueError(f"k must satisfy 0 <= 2k < n, got k={k}, n={n}")
    net = _target_network(n, network, weighted)
    rng = np.random.default_rng(seed)
    neighs = net.adjacency_lists()

    with _bulk(net, "watts_strogatz", n=n, k=k, p=p, seed=seed) as stats:
        net.add_nodes(n)
        for i in range(n):
            for j in range(1, k + 1):
                if rng.random() >= p:
                    net.add_link(i, (i + j) % n)
                    continue
                for _ in range(max_retries):
                    t = int(rng.integers(n))
                    if t != i and t not in neighs[i]:
                        net.add_link(i, t)
                        break
                else:
                    stats["skipped_links"] += 1
    return net


def barabasi_albert(n, m0, m, seed, *, weighted=False, network=None, max_retries=MAX_RETRIES):
    """
    Preferential attachment grown from a complete core.

    Parameters
    ----------
    n : int
        Final number of nodes.
    m0 : int
        Size of the initial complete graph.
    m : int
        Links attempted by each new node.
    seed : int
        Seed of the local random stream.
    max_retries : int
        Draws allowed per attachment to find a target not yet chosen.

    Returns
    -------
    Network

    Notes
    -----
    - Each draw picks, with probability 1/2, a random endpoint of a uniform
      random link (degree-proportional), otherwise a uniform existing node.
    - A node ends with fewer than ``m`` links when retries run out, e.g. when
      ``m`` exceeds the number of existing nodes.
    """
    if m0 < 1 or m < 1:
        raise ValueError(f"m0 and m must be positive, got m0={m0}, m={m}")
    if n < m0:
        raise ValueError(f"n must be at least m0, got n={n}, m0={m0}")
    net = _target_network(n, network, weighted)
    rng = np.random.default_rng(seed)

    with _bulk(net, "barabasi_albert", n=n, m0=m0, m=m, seed=seed) as stats:
        net.add_nodes(m0)
        for i in range(m0):
            for j in range(i + 1, m0):
                net.add_link(i, j)

        for i in range(m0, n):
            net.add_nodes(1)
            chosen = []
            for _ in range(m):
                for _ in range(max_retries):
                    links = net.link_count
                    if rng.random() < 0.5 and links:
                        ends = net.link(int(rng.integers(links)))
                        target = ends[int(rng.integers(2))]
                    else:
                        target = int(rng.integers(i))
                    if target not in chosen:
                        chosen.append(target)
                        break
                else:
                    stats["skipped_links"] += 1
            for target in chosen:
                net.add_link(i, target)
    return net
