"""
Plain-text Matrix Market (coordinate) export/import.

Layout written by :func:`write_mtx`::

    %%MatrixMarket matrix coordinate real symmetric     (``pattern`` if unweighted)
    <node_count> <node_count> <link_count>
    <a> <b> [weight]                                     (one line per link, 1-based)

:func:`read_mtx` also accepts files without a banner; weighting is then
inferred from the column count of the first record. Lines starting with
``%`` are comments.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from ..core.exceptions import CapacityExceeded, MalformedInputError
from ..core.network import Network

_WEIGHTED_FIELDS = {"real", "double", "integer"}
_FIELDS = _WEIGHTED_FIELDS | {"pattern"}
_SYMMETRIES = {"symmetric", "general"}


def write_mtx(net: Network, path, *, comment: Optional[str] = None):
    """
    Write ``net`` as a symmetric coordinate Matrix Market file.

    Parameters
    ----------
    net : Network
        Source network; weights are written only for weighted networks.
    path : str | os.PathLike
        Output file.
    comment : str, optional
        Free text written as ``%`` comment lines after the banner.
    """
    field = "real" if net.weighted else "pattern"
    n = net.current_size
    with open(path, "w", encoding="utf-8") as f:
        f.write(f"%%MatrixMarket matrix coordinate {field} symmetric\n")
        if comment:
            for line in str(comment).splitlines():
                f.write(f"% {line}\n")
        f.write(f"{n} {n} {net.link_count}\n")
        for a, b, w in net.links():
            if net.weighted:
                f.write(f"{a + 1} {b + 1} {w:.17g}\n")
            else:
                f.write(f"{a + 1} {b + 1}\n")


def _parse_banner(line: str, line_no: int) -> bool:
    toks = line.split()
    if len(toks) != 5:
        raise MalformedInputError(f"malformed banner {line.strip()!r}", line_no)
    _, obj, fmt, field, symmetry = (t.lower() for t in toks)
    if obj != "matrix" or fmt != "coordinate":
        raise MalformedInputError(f"expected 'matrix coordinate', got {obj!r} {fmt!r}", line_no)
    if field not in _FIELDS:
        raise MalformedInputError(f"unsupported value field {field!r}", line_no)
    if symmetry not in _SYMMETRIES:
        raise MalformedInputError(f"unsupported symmetry {symmetry!r}", line_no)
    return field in _WEIGHTED_FIELDS


def _parse_index(tok: str, n: int, line_no: int) -> int:
    try:
        i = int(tok)
    except ValueError:
        raise MalformedInputError(f"node index {tok!r} is not an integer", line_no) from None
    if not 1 <= i <= n:
        raise MalformedInputError(f"node index {i} outside [1, {n}]", line_no)
    return i - 1


def _parse(path, encoding: str):
    weighted: Optional[bool] = None
    header: Optional[Tuple[int, int]] = None
    records: List[Tuple[int, int, Optional[float]]] = []

    with open(path, "r", encoding=encoding) as f:
        for line_no, raw in enumerate(f, start=1):
            s = raw.strip()
            if not s:
                continue
            if s.startswith("%%MatrixMarket"):
                if line_no != 1:
                    raise MalformedInputError("banner must be the first line", line_no)
                weighted = _parse_banner(s, line_no)
                continue
            if s.startswith("%"):
                continue

            toks = s.split()
            if header is None:
                try:
                    rows, cols, nnz = (int(t) for t in toks)
                except ValueError:
                    raise MalformedInputError(f"bad size header {s!r}", line_no) from None
                if rows != cols:
                    raise MalformedInputError(f"adjacency must be square, got {rows}x{cols}", line_no)
                if rows < 0 or nnz < 0:
                    raise MalformedInputError(f"negative size in header {s!r}", line_no)
                header = (rows, nnz)
                continue

            if weighted is None:
                weighted = len(toks) == 3
            expected = 3 if weighted else 2
            if len(toks) != expected:
                raise MalformedInputError(f"expected {expected} fields, got {len(toks)}", line_no)
            n = header[0]
            a = _parse_index(toks[0], n, line_no)
            b = _parse_index(toks[1], n, line_no)
            w = None
            if weighted:
                try:
                    w = float(toks[2])
                except ValueError:
                    raise MalformedInputError(f"weight {toks[2]!r} is not a number", line_no) from None
            records.append((a, b, w))

    if header is None:
        raise MalformedInputError("missing size header")
    if len(records) != header[1]:
        raise MalformedInputError(f"header declares {header[1]} links, found {len(records)}")
    return bool(weighted), header[0], records


def read_mtx(path, *, network: Optional[Network] = None, max_size: Optional[int] = None,
             encoding: str = "utf-8") -> Network:
    """
    Load a Matrix Market coordinate file.

    Parameters
    ----------
    path : str | os.PathLike
    network : Network, optional
        Network to fill. It is cleared first; on a parse failure it is left
        empty. Its ``weighted`` flag must match the file.
    max_size : int, optional
        Capacity of a newly created network (defaults to the node count).
    encoding : str

    Returns
    -------
    Network

    Raises
    ------
    MalformedInputError
        If any record cannot be parsed. Nothing is inserted in that case.
    """
    try:
        weighted, n, records = _parse(path, encoding)
    except MalformedInputError:
        if network is not None:
            network.clear()
        raise

    if network is None:
        network = Network(n if max_size is None else max_size, weighted=weighted)
    else:
        if network.weighted != weighted:
            kind = "weighted" if weighted else "unweighted"
            raise ValueError(f"File holds a {kind} network; target network differs")
        if network.max_size < n:
            raise CapacityExceeded(n, network.max_size, network.max_size)
        network.clear()

    network.add_nodes(n, strict=True)
    for a, b, w in records:
        network.add_link(a, b, w)
    return network
