import networkx as nx

from ..adapters.networkx import from_nx, to_nx


def to_graphml(net, path, *, labels=None):
    """
    Write a network to GraphML.

    Nodes carry their properties (and ``label`` when ``labels`` is given),
    edges carry ``link``, ``weight`` (weighted networks) and link properties.
    """
    G = to_nx(net, labels=labels)
    nx.write_graphml(G, path)


def from_graphml(path, *, weighted=None, max_size=None):
    """Read a GraphML file written by :func:`to_graphml` (undirected, integer node ids)."""
    G = nx.read_graphml(path, node_type=int, force_multigraph=True)
    return from_nx(G, weighted=weighted, max_size=max_size)
