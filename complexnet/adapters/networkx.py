try:
    import networkx as nx
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "Dependency 'networkx' is not installed. "
        "Install with: pip install complexnet"
    ) from e

from enum import Enum
from typing import Any

import numpy as np

from ..core.network import Network
from ..core.structure import PropertyKind, Scope

# attribute names with a structural meaning on export
_NODE_RESERVED = {"value"}
_LINK_RESERVED = {"weight", "link", "source"}


def _serialize_value(v: Any) -> Any:
    if isinstance(v, Enum):
        return v.value
    if isinstance(v, np.generic):
        return v.item()
    return v


def _kind_for_value(v: Any) -> PropertyKind:
    if isinstance(v, bool):
        return PropertyKind.BOOL
    if isinstance(v, int):
        return PropertyKind.INT
    if isinstance(v, float):
        return PropertyKind.DOUBLE
    return PropertyKind.TEXT


def to_nx(net: Network, *, labels=None) -> "nx.MultiGraph":
    """
    Export a Network to a NetworkX MultiGraph.

    Parameters
    ----------
    net : Network
        Source network.
    labels : Sequence[str] | Mapping[int, str], optional
        Node labels stored under the ``label`` node attribute.

    Returns
    -------
    networkx.MultiGraph
        Nodes are ``0..n-1`` carrying node properties (and ``value`` for scalar
        value types). Edge keys and the ``link`` attribute are the link
        indices and ``source`` is the first endpoint of each link; weighted
        networks add ``weight``. Scalar graph attributes and a ``weighted``
        flag go to ``G.graph``.
    """
    G = nx.MultiGraph()
    G.graph["weighted"] = net.weighted
    for k, v in net.graph_attributes.items():
        v = _serialize_value(v)
        if isinstance(v, (bool, int, float, str)):
            G.graph[k] = v

    node_df = net.nodes_view()
    node_cols = [c for c in node_df.columns if c not in ("node", "degree")]
    for i, row in enumerate(node_df.select(node_cols).iter_rows(named=True)):
        attrs = {k: _serialize_value(v) for k, v in row.items() if v is not None}
        if labels is not None:
            attrs["label"] = str(labels[i])
        G.add_node(i, **attrs)

    link_df = net.links_view()
    prop_cols = [c for c in link_df.columns if c not in ("link", "a", "b", "weight")]
    for row in link_df.iter_rows(named=True):
        attrs = {c: _serialize_value(row[c]) for c in prop_cols}
        attrs["link"] = row["link"]
        attrs["source"] = row["a"]
        if net.weighted:
            attrs["weight"] = row["weight"]
        G.add_edge(row["a"], row["b"], key=row["link"], **attrs)

    return G


def from_nx(G, *, weighted=None, max_size=None) -> Network:
    """
    Build a Network from a NetworkX (Multi)Graph.

    Parameters
    ----------
    G : networkx.Graph | networkx.MultiGraph
        Undirected source graph. Nodes are mapped to dense indices in
        ``G.nodes`` order (sorted first when they are all integers).
    weighted : bool, optional
        Force the weighted flag; by default taken from ``G.graph["weighted"]``
        or from the presence of any ``weight`` edge attribute.
    max_size : int, optional
        Capacity of the new network (defaults to the node count).

    Returns
    -------
    Network

    Notes
    -----
    - Edges carrying a ``link`` attribute are inserted in that order, so a
      graph exported with :func:`to_nx` comes back with the same link indices.
      An edge ``source`` attribute naming one endpoint puts that endpoint first.
    - Remaining node/edge attributes become typed properties, the type being
      inferred from the first non-missing value.
    - A ``value`` node attribute restores the node values; the type of the
      first one becomes the network's ``value_type``.
    """
    if G.is_directed():
        raise ValueError("Directed graphs are not supported")

    nodes = list(G.nodes)
    if all(isinstance(u, (int, np.integer)) for u in nodes):
        nodes.sort()
    index = {u: i for i, u in enumerate(nodes)}

    if G.is_multigraph():
        edges = [(u, v, d) for u, v, _k, d in G.edges(keys=True, data=True)]
    else:
        edges = list(G.edges(data=True))
    if edges and all("link" in d for _, _, d in edges):
        edges.sort(key=lambda e: int(e[2]["link"]))

    if weighted is None:
        weighted = bool(G.graph.get("weighted", any("weight" in d for _, _, d in edges)))

    values = [G.nodes[u].get("value") for u in nodes]
    first = next((v for v in values if v is not None), None)
    value_type = None if first is None else type(_serialize_value(first))

    n = len(nodes)
    net = Network(n if max_size is None else max_size, weighted=weighted, value_type=value_type)
    net.add_nodes(n, strict=True)
    if value_type is not None:
        for i, v in enumerate(values):
            if v is not None:
                net.set_value(i, value_type(v))
    for k, v in G.graph.items():
        if k != "weighted":
            net.graph_attributes[k] = v

    for u, v, d in edges:
        if u != v and d.get("source") == v:
            u, v = v, u
        w = d.get("weight") if weighted else None
        net.add_link(index[u], index[v], None if w is None else float(w))

    _import_properties(net, Scope.NODE, [G.nodes[u] for u in nodes], _NODE_RESERVED)
    _import_properties(net, Scope.LINK, [d for _, _, d in edges], _LINK_RESERVED | {"id"})
    return net


def _import_properties(net, scope, records, reserved):
    names = []
    for rec in records:
        for k in rec:
            if k not in reserved and k not in names:
                names.append(k)
    for name in names:
        first = next(rec[name] for rec in records if rec.get(name) is not None)
        kind = _kind_for_value(_serialize_value(first))
        net.define_property(name, kind, scope)
        for i, rec in enumerate(records):
            v = rec.get(name)
            if v is not None and v != kind.default:
                net.set_property(name, i, v)
