"""Stable digests of network structure."""
import hashlib
import json

import numpy as np


def _plain(obj):
    """Reduce ``obj`` to JSON types; sequences keep their order, mappings and sets are sorted."""
    if isinstance(obj, np.ndarray):
        return _plain(obj.tolist())
    if isinstance(obj, np.generic):
        return obj.item()
    if isinstance(obj, dict):
        return {str(k): _plain(v) for k, v in sorted(obj.items(), key=lambda kv: str(kv[0]))}
    if isinstance(obj, (list, tuple)):
        return [_plain(v) for v in obj]
    if isinstance(obj, (set, frozenset)):
        return sorted((_plain(v) for v in obj), key=lambda v: json.dumps(v, sort_keys=True))
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    return str(obj)


def structure_digest(n_nodes, weighted, links, adjacency) -> str:
    """
    SHA-256 hex digest of a network's structure.

    Two networks share a digest when node count, weighting, the link triplets
    in index order and every adjacency list in insertion order all agree.
    """
    payload = {
        "nodes": int(n_nodes),
        "weighted": bool(weighted),
        "links": links,
        "adjacency": adjacency,
    }
    blob = json.dumps(_plain(payload), sort_keys=True, separators=(",", ":")).encode("utf-8")
    return hashlib.sha256(blob).hexdigest()
