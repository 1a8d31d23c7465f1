from __future__ import annotations

from typing import Any, Dict, List, Tuple

import polars as pl

from .exceptions import IndexOutOfRange
from .structure import PropertyKind, Scope


class PropertyTable:
    """
    Named, typed per-node and per-link attribute columns.

    Each scope is one Polars DF [DataFrame] with a canonical ``Int64`` key
    column (``node`` or ``link``) followed by one column per property. Row ``i``
    always holds key ``i``: the owning network calls ``append_rows`` and
    ``remove_rows`` whenever its structure changes, so rows stay parallel to
    the dense node/link indices.

    Appended rows are materialized lazily (filled with each kind's default on
    the next read or write), so bulk link insertion does not rebuild the frame
    once per link.

    Parameters
    ----------
    n_nodes : int, optional
        Initial number of node rows.
    n_links : int, optional
        Initial number of link rows.
    """

    _KEYS = {Scope.NODE: "node", Scope.LINK: "link"}

    def __init__(self, n_nodes: int = 0, n_links: int = 0):
        self._frames: Dict[Scope, pl.DataFrame] = {}
        self._pending: Dict[Scope, int] = {}
        self._defs: Dict[str, Tuple[PropertyKind, Scope]] = {}
        self.clear()
        self.append_rows(Scope.NODE, n_nodes)
        self.append_rows(Scope.LINK, n_links)

    def _empty_frame(self, scope: Scope) -> pl.DataFrame:
        return pl.DataFrame({self._KEYS[scope]: pl.Series([], dtype=pl.Int64)})

    def _frame(self, scope: Scope) -> pl.DataFrame:
        """INTERNAL: Return the scope's frame with pending rows materialized."""
        n = self._pending[scope]
        if n:
            df = self._frames[scope]
            key = self._KEYS[scope]
            start = df.height
            data = [pl.Series(key, range(start, start + n), dtype=pl.Int64)]
            for name in df.columns[1:]:
                kind = self._defs[name][0]
                data.append(pl.Series(name, [kind.default] * n, dtype=kind.dtype))
            self._frames[scope] = pl.concat([df, pl.DataFrame(data)], how="vertical")
            self._pending[scope] = 0
        return self._frames[scope]

    # Definitions

    def define(self, name: str, kind="double", scope="node"):
        """
        Create a new property column filled with the kind's default value.

        Parameters
        ----------
        name : str
            Property name, unique across both scopes.
        kind : str | PropertyKind
            One of ``"double"``, ``"int"``, ``"bool"``, ``"text"``.
        scope : str | Scope
            ``"node"`` or ``"link"``.

        Raises
        ------
        ValueError
            If the name is taken, reserved, or kind/scope are unknown.
        """
        kind = PropertyKind(kind)
        scope = Scope(scope)
        if name in self._defs:
            raise ValueError(f"Property {name!r} already defined")
        if name in self._KEYS.values():
            raise ValueError(f"Property name {name!r} is reserved")
        df = self._frame(scope)
        col = pl.Series(name, [kind.default] * df.height, dtype=kind.dtype)
        self._frames[scope] = df.with_columns(col)
        self._defs[name] = (kind, scope)

    def undefine(self, name: str):
        _, scope = self._lookup(name)
        self._frames[scope] = self._frames[scope].drop(name)
        del self._defs[name]

    def has(self, name: str) -> bool:
        return name in self._defs

    def kind(self, name: str) -> PropertyKind:
        return self._lookup(name)[0]

    def scope(self, name: str) -> Scope:
        return self._lookup(name)[1]

    def names(self, scope=None) -> List[str]:
        if scope is None:
            return list(self._defs)
        scope = Scope(scope)
        return [n for n, (_, s) in self._defs.items() if s == scope]

    def _lookup(self, name: str) -> Tuple[PropertyKind, Scope]:
        try:
            return self._defs[name]
        except KeyError:
            raise KeyError(f"Property {name!r} not defined") from None

    # Values

    def size(self, scope) -> int:
        scope = Scope(scope)
        return self._frames[scope].height + self._pending[scope]

    def _check_row(self, scope: Scope, index: int) -> int:
        height = self.size(scope)
        if not 0 <= index < height:
            raise IndexOutOfRange(scope.value, index, height)
        return int(index)

    def set(self, name: str, index: int, value: Any):
        """Set ``name`` at row ``index``, coercing ``value`` to the column kind."""
        kind, scope = self._lookup(name)
        index = self._check_row(scope, index)
        key = self._KEYS[scope]
        value = kind.coerce(value)
        df = self._frame(scope)
        self._frames[scope] = df.with_columns(
            pl.when(pl.col(key) == index)
            .then(pl.lit(value, dtype=kind.dtype))
            .otherwise(pl.col(name))
            .alias(name)
        )

    def get(self, name: str, index: int) -> Any:
        _, scope = self._lookup(name)
        index = self._check_row(scope, index)
        return self._frame(scope).get_column(name)[index]

    def column(self, name: str) -> list:
        _, scope = self._lookup(name)
        return self._frame(scope).get_column(name).to_list()

    def frame(self, scope="node") -> pl.DataFrame:
        """Return a copy of the scope's table (key column first)."""
        return self._frame(Scope(scope)).clone()

    # Structural hooks (called by the owning network)

    def append_rows(self, scope, n: int):
        if n > 0:
            self._pending[Scope(scope)] += int(n)

    def remove_row(self, scope, index: int):
        """Delete row ``index`` and shift the keys of all later rows down by one."""
        self.remove_rows(scope, [index])

    def remove_rows(self, scope, indices):
        scope = Scope(scope)
        drop = sorted({int(i) for i in indices})
        if not drop:
            return
        for i in (drop[0], drop[-1]):
            self._check_row(scope, i)
        key = self._KEYS[scope]
        df = self._frame(scope).filter(~pl.col(key).is_in(drop))
        self._frames[scope] = df.with_columns(pl.Series(key, range(df.height), dtype=pl.Int64))

    def clear(self):
        """Drop every row and every definition."""
        self._frames = {scope: self._empty_frame(scope) for scope in self._KEYS}
        self._pending = {scope: 0 for scope in self._KEYS}
        self._defs.clear()

    def copy(self) -> "PropertyTable":
        other = PropertyTable()
        other._frames = {s: df.clone() for s, df in self._frames.items()}
        other._pending = dict(self._pending)
        other._defs = dict(self._defs)
        return other
