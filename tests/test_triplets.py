import numpy as np
import pytest

from complexnet.core.exceptions import IndexOutOfRange
from complexnet.core.triplets import TripletStore


def _store(pairs, capacity=2):
    s = TripletStore(capacity=capacity)
    for a, b in pairs:
        s.append(a, b)
    return s


def test_append_grows_past_capacity():
    s = _store([(0, 1), (1, 2), (2, 3), (3, 4), (4, 0)], capacity=1)
    assert len(s) == 5
    assert list(s)[-1] == (4, 0, 1.0)


def test_erase_shifts_later_indices():
    s = _store([(0, 1), (1, 2), (2, 3)])
    s.erase(0)
    assert [t[:2] for t in s] == [(1, 2), (2, 3)]
    assert s.endpoints(0) == (1, 2)
    with pytest.raises(IndexOutOfRange):
        s.erase(2)


def test_find_is_undirected():
    s = _store([(0, 1), (2, 1), (1, 2)])
    assert s.find(1, 2) == 1
    assert s.find(2, 1) == 1
    assert s.find(0, 2) == -1


def test_remove_node_renumbers_and_compacts():
    s = _store([(0, 1), (1, 2), (2, 3), (0, 3)])
    removed = s.remove_node(1)
    assert removed.tolist() == [0, 1]
    assert [t[:2] for t in s] == [(1, 2), (0, 2)]


def test_remove_node_without_links_only_renumbers():
    s = _store([(2, 3)])
    assert s.remove_node(0).size == 0
    assert list(s) == [(1, 2, 1.0)]


def test_erase_many_ignores_duplicates():
    s = _store([(0, 1), (1, 2), (2, 3), (3, 4)])
    assert s.erase_many([3, 1, 1]) == 2
    assert [t[:2] for t in s] == [(0, 1), (2, 3)]
    with pytest.raises(IndexOutOfRange):
        s.erase_many([5])


def test_weights_and_copy_are_independent():
    s = TripletStore()
    s.append(0, 1, 0.5)
    c = s.copy()
    s.set_weight(0, 2.0)
    assert c.weight(0) == 0.5
    assert s.weight(0) == 2.0


def test_to_sparse_counts_self_loop_once():
    s = TripletStore()
    s.append(0, 1, 2.0)
    s.append(0, 1, 1.0)
    s.append(2, 2, 5.0)
    A = s.to_sparse(3).toarray()
    np.testing.assert_array_equal(A, [[0, 3, 0], [3, 0, 0], [0, 0, 5]])


def test_dominant_eigenpair_respects_iteration_cap():
    s = _store([(0, 1), (1, 2), (2, 0), (2, 3)])
    vec, val = s.dominant_eigenpair(4, tol=0.0, max_iter=3)
    assert vec.shape == (4,)
    assert val > 0
    np.testing.assert_allclose(np.linalg.norm(vec), 1.0)


def test_clear():
    s = _store([(0, 1)])
    s.clear()
    assert len(s) == 0
    assert s.find(0, 1) == -1
