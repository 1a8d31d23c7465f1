from __future__ import annotations

from typing import Iterator, Tuple

import numpy as np
import scipy.sparse as sp

from .exceptions import IndexOutOfRange


class TripletStore:
    """
    Ordered store of ``(a, b, weight)`` link triplets.

    Endpoints and weights live in three parallel NumPy arrays that grow by
    doubling, so ``append`` is amortized O(1). Erasing a triplet compacts the
    arrays: every later triplet index shifts down by one.

    Parameters
    ----------
    capacity : int, optional
        Initial number of preallocated slots.

    Notes
    -----
    - Triplets are undirected: ``find(a, b)`` matches ``(a, b)`` and ``(b, a)``.
    - All renumbering caused by node removal is done here, in ``remove_node``.
    """

    def __init__(self, capacity: int = 16):
        capacity = max(int(capacity), 1)
        self._a = np.empty(capacity, dtype=np.int64)
        self._b = np.empty(capacity, dtype=np.int64)
        self._w = np.empty(capacity, dtype=np.float64)
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Tuple[int, int, float]]:
        for i in range(self._count):
            yield int(self._a[i]), int(self._b[i]), float(self._w[i])

    def _check(self, index: int) -> int:
        if not 0 <= index < self._count:
            raise IndexOutOfRange("link", index, self._count)
        return int(index)

    def _grow(self):
        new_cap = 2 * len(self._a)
        for name in ("_a", "_b", "_w"):
            old = getattr(self, name)
            arr = np.empty(new_cap, dtype=old.dtype)
            arr[: self._count] = old[: self._count]
            setattr(self, name, arr)

    # Mutation

    def append(self, a: int, b: int, weight: float = 1.0) -> int:
        """Append a triplet and return its index."""
        if self._count == len(self._a):
            self._grow()
        i = self._count
        self._a[i] = a
        self._b[i] = b
        self._w[i] = weight
        self._count += 1
        return i

    def set_endpoints(self, index: int, a: int, b: int):
        i = self._check(index)
        self._a[i] = a
        self._b[i] = b

    def set_weight(self, index: int, weight: float):
        i = self._check(index)
        self._w[i] = weight

    def erase(self, index: int):
        """
        Remove the triplet at ``index``.

        Every triplet stored after ``index`` moves down by one position.
        """
        i = self._check(index)
        n = self._count
        for arr in (self._a, self._b, self._w):
            arr[i : n - 1] = arr[i + 1 : n]
        self._count -= 1

    def erase_many(self, indices) -> int:
        """
        Remove several triplets at once.

        Parameters
        ----------
        indices : Iterable[int]
            Indices as seen *before* any removal (duplicates ignored).

        Returns
        -------
        int
            Number of triplets removed.
        """
        idx = np.unique(np.asarray(list(indices), dtype=np.int64))
        if idx.size == 0:
            return 0
        if idx[0] < 0 or idx[-1] >= self._count:
            bad = int(idx[0] if idx[0] < 0 else idx[-1])
            raise IndexOutOfRange("link", bad, self._count)
        keep = np.ones(self._count, dtype=bool)
        keep[idx] = False
        self._compact(keep)
        return int(idx.size)

    def remove_node(self, node: int) -> np.ndarray:
        """
        Drop every triplet touching ``node`` and shift higher endpoints down.

        Returns
        -------
        numpy.ndarray
            Indices (pre-removal) of the erased triplets, ascending.
        """
        n = self._count
        a = self._a[:n]
        b = self._b[:n]
        touching = (a == node) | (b == node)
        a[a > node] -= 1
        b[b > node] -= 1
        removed = np.flatnonzero(touching)
        if removed.size:
            self._compact(~touching)
        return removed

    def _compact(self, keep: np.ndarray):
        n = self._count
        kept = int(keep.sum())
        for arr in (self._a, self._b, self._w):
            arr[:kept] = arr[:n][keep]
        self._count = kept

    def clear(self):
        self._count = 0

    # Queries

    def endpoints(self, index: int) -> Tuple[int, int]:
        i = self._check(index)
        return int(self._a[i]), int(self._b[i])

    def weight(self, index: int) -> float:
        i = self._check(index)
        return float(self._w[i])

    def find(self, a: int, b: int) -> int:
        """Return the lowest index of a triplet joining ``a`` and ``b``, or -1."""
        n = self._count
        A = self._a[:n]
        B = self._b[:n]
        hits = np.flatnonzero(((A == a) & (B == b)) | ((A == b) & (B == a)))
        return int(hits[0]) if hits.size else -1

    def arrays(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Return copies of the endpoint and weight columns."""
        n = self._count
        return self._a[:n].copy(), self._b[:n].copy(), self._w[:n].copy()

    def copy(self) -> "TripletStore":
        other = TripletStore(capacity=len(self._a))
        n = self._count
        other._a[:n] = self._a[:n]
        other._b[:n] = self._b[:n]
        other._w[:n] = self._w[:n]
        other._count = n
        return other

    # Linear algebra

    def to_sparse(self, n_nodes: int) -> sp.csr_matrix:
        """
        Build the symmetric ``n_nodes x n_nodes`` adjacency matrix.

        Parallel links add up; a self-loop contributes its weight once on the
        diagonal.
        """
        n = self._count
        a = self._a[:n]
        b = self._b[:n]
        w = self._w[:n]
        off = a != b
        rows = np.concatenate([a, b[off]])
        cols = np.concatenate([b, a[off]])
        vals = np.concatenate([w, w[off]])
        return sp.coo_matrix((vals, (rows, cols)), shape=(n_nodes, n_nodes)).tocsr()

    def dominant_eigenpair(self, n_nodes: int, tol: float = 1e-8, max_iter: int = 1000):
        """
        Dominant eigenpair of the adjacency matrix via power iteration.

        Parameters
        ----------
        n_nodes : int
            Matrix order (current node count).
        tol : float
            L1 change between successive normalized iterates to stop at.
        max_iter : int
            Maximum number of iterations.

        Returns
        -------
        (numpy.ndarray, float)
            Unit-norm eigenvector estimate and eigenvalue estimate. The last
            iterate is returned even if ``tol`` was not reached.
        """
        if n_nodes == 0:
            return np.array([], dtype=np.float64), 0.0

        A = self.to_sparse(n_nodes)
        x = np.full(n_nodes, 1.0 / np.sqrt(n_nodes), dtype=np.float64)
        value = 0.0

        for _ in range(int(max_iter)):
            y = A @ x
            value = float(np.linalg.norm(y))
            if value == 0.0:
                return x, 0.0
            y /= value
            if float(np.linalg.norm(y - x, ord=1)) <= float(tol):
                return y, value
            x = y

        return x, value
