import warnings

import numpy as np
import polars as pl

from ..utils.digest import structure_digest
from .exceptions import CapacityExceeded, CapacityWarning, IndexOutOfRange
from .history import MutationHistory
from .properties import PropertyTable
from .structure import Scope
from .triplets import TripletStore


class Network(MutationHistory):
    """
    Mutable undirected network with bounded capacity, parallel links and
    per-node values.

    Nodes and links are identified by dense integer indices. Each node owns an
    insertion-ordered adjacency list; links are stored as ``(a, b, weight)``
    triplets in a :class:`TripletStore`. Removing a node or a link re-indexes
    everything above it down by one, so indices are always ``[0, count)``.

    Parameters
    ----------
    max_size : int
        Maximum number of nodes. Fixed for the lifetime of the network.
    weighted : bool, optional
        Whether links carry user weights. Unweighted networks store ``1.0``
        for every link and reject explicit weights.
    value_type : type, optional
        Callable producing the default node value (e.g. ``bool``, ``int``,
        ``float``). ``None`` gives ``None`` values.
    history : bool, optional
        Record every mutation in the in-memory history log.

    Notes
    -----
    - Links are appended without an existence check: calling ``add_link(a, b)``
      twice creates two parallel links.
    - Self-loops are accepted; ``a`` then appears twice in its own adjacency list.
    - Node and link properties (``define_property``) follow structural changes.

    See Also
    --------
    add_nodes, add_link, remove_node, remove_link, history
    """

    EIGEN_TOL = 1e-8
    EIGEN_MAX_ITER = 1000

    _LOGGED = (
        "add_nodes", "add_link", "remove_link", "remove_node", "clear",
        "set_value", "set_weight", "define_property", "set_property",
        "set_graph_attribute",
    )

    # Construction

    def __init__(self, max_size, *, weighted=False, value_type=None, history=True):
        max_size = int(max_size)
        if max_size < 0:
            raise ValueError(f"max_size must be non-negative, got {max_size}")
        self._max_size = max_size
        self._weighted = bool(weighted)
        self._value_type = value_type

        self._neighs = []       # node -> [neighbour indices]
        self._values = []       # node -> user value
        self._links = TripletStore()
        self.properties = PropertyTable()
        self.graph_attributes = {}

        self._init_history(history)

    def __repr__(self):
        kind = "weighted" if self._weighted else "unweighted"
        return (f"Network({kind}, nodes={self.current_size}/{self._max_size}, "
                f"links={self.link_count})")

    def __len__(self):
        return len(self._neighs)

    @property
    def max_size(self):
        return self._max_size

    @property
    def weighted(self):
        return self._weighted

    @property
    def current_size(self):
        return len(self._neighs)

    @property
    def link_count(self):
        return len(self._links)

    def number_of_nodes(self):
        return len(self._neighs)

    def number_of_links(self):
        return len(self._links)

    def _default_value(self):
        return self._value_type() if self._value_type is not None else None

    def _check_node(self, index):
        if not 0 <= index < len(self._neighs):
            raise IndexOutOfRange("node", index, len(self._neighs))
        return int(index)

    # Build network

    def add_nodes(self, n, *, strict=False):
        """
        Append up to ``n`` nodes with default values and empty adjacency.

        Parameters
        ----------
        n : int
            Number of nodes requested.
        strict : bool, optional
            If True, raise instead of clamping when ``n`` exceeds free capacity.

        Returns
        -------
        int
            Number of nodes actually added.

        Raises
        ------
        CapacityExceeded
            Only with ``strict=True``.

        Notes
        -----
        - Without ``strict`` the request is clamped to ``max_size`` and a
          :class:`CapacityWarning` is emitted.
        """
        n = int(n)
        if n < 0:
            raise ValueError(f"Cannot add a negative number of nodes ({n})")
        free = self._max_size - len(self._neighs)
        if n > free:
            if strict:
                raise CapacityExceeded(n, free, self._max_size)
            warnings.warn(
                f"add_nodes({n}) clamped to {free} (max_size={self._max_size})",
                CapacityWarning,
                stacklevel=2,
            )
            n = free
        for _ in range(n):
            self._neighs.append([])
            self._values.append(self._default_value())
        self.properties.append_rows(Scope.NODE, n)
        return n

    def add_link(self, a, b, weight=None):
        """
        Append a link between ``a`` and ``b``.

        Parameters
        ----------
        a, b : int
            Endpoint node indices (``a == b`` makes a self-loop).
        weight : float, optional
            Link weight; weighted networks default to ``1.0``.

        Returns
        -------
        int
            Index of the new link.

        Raises
        ------
        IndexOutOfRange
            If an endpoint is not a valid node index.
        ValueError
            If a weight is given to an unweighted network.
        """
        a = self._check_node(a)
        b = self._check_node(b)
        if weight is None:
            weight = 1.0
        elif not self._weighted:
            raise ValueError("Unweighted network: add_link does not take a weight")
        idx = self._links.append(a, b, float(weight))
        self._neighs[a].append(b)
        self._neighs[b].append(a)
        self.properties.append_rows(Scope.LINK, 1)
        return idx

    def remove_link(self, a, b):
        """
        Remove one link between ``a`` and ``b``.

        Returns
        -------
        bool
            False (and nothing changes) if ``b`` is not a neighbour of ``a``.
        """
        a = self._check_node(a)
        b = self._check_node(b)
        if b not in self._neighs[a]:
            return False
        idx = self._links.find(a, b)
        self._links.erase(idx)
        self.properties.remove_row(Scope.LINK, idx)
        self._neighs[a].remove(b)
        self._neighs[b].remove(a)
        return True

    def remove_node(self, index):
        """
        Remove a node and every link touching it.

        All node indices above ``index`` shift down by one, in adjacency lists,
        link endpoints and property rows alike.

        Returns
        -------
        bool
            False if ``index`` is not a valid node index.
        """
        if not 0 <= index < len(self._neighs):
            return False

        del self._neighs[index]
        del self._values[index]

        for nbrs in self._neighs:
            nbrs[:] = [k - 1 if k > index else k for k in nbrs if k != index]

        removed = self._links.remove_node(index)
        self.properties.remove_rows(Scope.LINK, removed.tolist())
        self.properties.remove_row(Scope.NODE, index)
        return True

    def clear(self):
        """Remove all nodes, links, values and properties; keep capacity and weighting."""
        self._neighs = []
        self._values = []
        self._links.clear()
        self.properties.clear()

    # Values and weights

    def get_value(self, index):
        return self._values[self._check_node(index)]

    def set_value(self, index, value):
        self._values[self._check_node(index)] = value

    def values(self):
        return list(self._values)

    def weight(self, link_index):
        return self._links.weight(link_index)

    def set_weight(self, link_index, weight):
        if not self._weighted:
            raise ValueError("Unweighted network: link weights are fixed to 1.0")
        self._links.set_weight(link_index, float(weight))

    # Properties

    def define_property(self, name, kind="double", scope="node"):
        """Define a typed node/link property, sized to the current node/link count."""
        self.properties.define(name, kind, scope)

    def set_property(self, name, index, value):
        self.properties.set(name, index, value)

    def get_property(self, name, index):
        return self.properties.get(name, index)

    def set_graph_attribute(self, key, value):
        self.graph_attributes[key] = value

    def get_graph_attribute(self, key, default=None):
        return self.graph_attributes.get(key, default)

    # Queries

    def neighbors(self, index):
        """Return a copy of the adjacency list of ``index`` (insertion order)."""
        return list(self._neighs[self._check_node(index)])

    def neighbor_at(self, index, k):
        nbrs = self._neighs[self._check_node(index)]
        if not 0 <= k < len(nbrs):
            raise IndexOutOfRange("neighbour", k, len(nbrs))
        return nbrs[k]

    def adjacency_lists(self):
        """
        INTERNAL: Direct (uncopied) access to all adjacency lists.

        Callers must not mutate the returned lists.
        """
        return self._neighs

    def degree(self, index):
        return len(self._neighs[self._check_node(index)])

    def degrees(self):
        return np.fromiter((len(n) for n in self._neighs), dtype=np.int64, count=len(self._neighs))

    def mean_degree(self):
        """Average degree ``2 * link_count / current_size`` (0.0 if empty)."""
        n = len(self._neighs)
        return 2.0 * len(self._links) / n if n else 0.0

    def get_link_index(self, a, b):
        """Index of a link joining ``a`` and ``b`` in either order, or -1."""
        self._check_node(a)
        self._check_node(b)
        return self._links.find(a, b)

    def has_link(self, a, b):
        a = self._check_node(a)
        return self._check_node(b) in self._neighs[a]

    def link(self, link_index):
        """Endpoints ``(a, b)`` of a link, in insertion order."""
        return self._links.endpoints(link_index)

    def links(self):
        """Iterate ``(a, b, weight)`` triplets in link-index order."""
        return iter(self._links)

    def links_view(self):
        """
        Build a Polars DF [DataFrame] of links.

        Returns
        -------
        polars.DataFrame
            Columns ``link``, ``a``, ``b``, ``weight`` then one column per link property.
        """
        a, b, w = self._links.arrays()
        base = pl.DataFrame({"a": a, "b": b, "weight": w})
        props = self.properties.frame(Scope.LINK)
        return pl.concat([props.select("link"), base, props.drop("link")], how="horizontal")

    def nodes_view(self):
        """
        Build a Polars DF [DataFrame] of nodes.

        Returns
        -------
        polars.DataFrame
            Columns ``node``, ``degree``, ``value`` (only for scalar value types)
            then one column per node property.
        """
        props = self.properties.frame(Scope.NODE)
        cols = [pl.Series("degree", self.degrees(), dtype=pl.Int64)]
        if self._value_type in (bool, int, float, str):
            cols.append(pl.Series("value", self._values, strict=False))
        base = pl.DataFrame(cols)
        return pl.concat([props.select("node"), base, props.drop("node")], how="horizontal")

    def fingerprint(self):
        """SHA-256 of the structure: node count, link triplets and adjacency order."""
        return structure_digest(len(self._neighs), self._weighted, list(self._links), self._neighs)

    def copy(self):
        """Deep copy of structure, values, properties and graph attributes (history excluded)."""
        other = Network(self._max_size, weighted=self._weighted,
                        value_type=self._value_type, history=self._history_enabled)
        other._neighs = [list(n) for n in self._neighs]
        other._values = list(self._values)
        other._links = self._links.copy()
        other.properties = self.properties.copy()
        other.graph_attributes = dict(self.graph_attributes)
        return other

    # Spectral

    def dominant_eigenpair(self, tol=None, max_iter=None):
        """
        Dominant eigenvector and eigenvalue of the (weighted) adjacency matrix.

        Power iteration; the best estimate is returned even when ``tol`` was
        not met within ``max_iter`` iterations.

        Returns
        -------
        (numpy.ndarray, float)
            Eigenvector of length ``current_size`` (unit L2 norm) and eigenvalue.
        """
        tol = self.EIGEN_TOL if tol is None else tol
        max_iter = self.EIGEN_MAX_ITER if max_iter is None else max_iter
        return self._links.dominant_eigenpair(len(self._neighs), tol=tol, max_iter=max_iter)

    def adjacency_matrix(self):
        """Symmetric SciPy CSR adjacency matrix (parallel link weights add up)."""
        return self._links.to_sparse(len(self._neighs))

    # Algorithms

    def bfs(self, source):
        from ..algorithms.traversal import bfs
        return bfs(self, source)

    def connected_components(self):
        from ..algorithms.traversal import connected_components
        return connected_components(self)

    def largest_component_size(self):
        from ..algorithms.traversal import largest_component_size
        return largest_component_size(self)

    def average_pathlength(self):
        from ..algorithms.traversal import average_pathlength
        return average_pathlength(self)

    def average_pathlength_component(self, node, size=None):
        from ..algorithms.traversal import average_pathlength_component
        return average_pathlength_component(self, node, size=size)

    def clustering_coef(self, index):
        from ..algorithms.metrics import clustering_coef
        return clustering_coef(self, index)

    def mean_clustering_coef(self):
        from ..algorithms.metrics import mean_clustering_coef
        return mean_clustering_coef(self)

    def degree_distribution(self, normalized=False):
        from ..algorithms.metrics import degree_distribution
        return degree_distribution(self, normalized=normalized)

    def degree_correlation(self, normalized=False):
        from ..algorithms.metrics import degree_correlation
        return degree_correlation(self, normalized=normalized)
