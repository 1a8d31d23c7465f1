import networkx as nx
import numpy as np
import pytest

from complexnet import IndexOutOfRange, Network
from complexnet.adapters.networkx import from_nx
from complexnet.algorithms import (
    average_pathlength,
    average_pathlength_component,
    bfs,
    clustering_coef,
    component_nodes,
    connected_components,
    degree_correlation,
    degree_distribution,
    largest_component_size,
    mean_clustering_coef,
)


class TestTraversal:
    def test_bfs_on_path(self, path_graph):
        dist, order = bfs(path_graph, 0)
        assert dist.tolist() == [0, 1, 2, 3, 4, 5]
        assert order == [0, 1, 2, 3, 4, 5]

    def test_bfs_marks_unreached(self, two_components):
        dist, order = bfs(two_components, 3)
        assert dist.tolist() == [-1, -1, -1, 0, 1, -1]
        assert order == [3, 4]
        assert component_nodes(two_components, 4) == [4, 3]

    def test_bfs_invalid_source(self, path_graph):
        with pytest.raises(IndexOutOfRange):
            bfs(path_graph, 6)

    def test_components(self, two_components):
        reps, sizes = connected_components(two_components)
        assert reps == [0, 3, 5]
        assert sizes == [3, 2, 1]
        assert largest_component_size(two_components) == 3
        assert sum(sizes) == two_components.current_size

    def test_components_of_empty_network(self):
        assert connected_components(Network(3)) == ([], [])
        assert largest_component_size(Network(3)) == 0

    def test_average_pathlength(self, two_components):
        assert average_pathlength(two_components) == pytest.approx(1.25)
        assert average_pathlength_component(two_components, 3) == pytest.approx(1.0)
        assert average_pathlength_component(two_components, 1, size=3) == pytest.approx(8 / 6)
        assert average_pathlength_component(two_components, 5) == -1.0

    def test_average_pathlength_without_links(self):
        net = Network(4)
        net.add_nodes(4)
        assert average_pathlength(net) == -1.0
        assert net.average_pathlength() == -1.0


class TestMetrics:
    def test_local_clustering(self, paw):
        assert clustering_coef(paw, 0) == pytest.approx(1 / 3)
        assert clustering_coef(paw, 1) == 1.0
        assert clustering_coef(paw, 3) == 0.0
        assert mean_clustering_coef(paw) == pytest.approx(7 / 12)

    def test_clustering_of_triangle(self, triangle):
        assert [triangle.clustering_coef(i) for i in range(3)] == [1.0, 1.0, 1.0]

    def test_clustering_invalid_node(self, paw):
        with pytest.raises(IndexOutOfRange):
            clustering_coef(paw, 4)

    def test_degree_distribution(self, paw):
        assert degree_distribution(paw).tolist() == [0, 1, 2, 1]
        np.testing.assert_allclose(degree_distribution(paw, normalized=True), [0, 0.25, 0.5, 0.25])

    def test_degree_correlation(self, paw):
        dist, corr = degree_correlation(paw)
        assert dist.tolist() == [0, 1, 2, 1]
        np.testing.assert_allclose(corr, [0.0, 3.0, 2.5, 5 / 3])

    def test_empty_network_metrics(self):
        net = Network(2)
        assert mean_clustering_coef(net) == 0.0
        assert degree_distribution(net).size == 0
        dist, corr = degree_correlation(net, normalized=True)
        assert dist.size == 0
        assert corr.size == 0

    def test_normalized_without_links_is_not_divided(self):
        net = Network(3)
        net.add_nodes(3)
        np.testing.assert_array_equal(degree_distribution(net, normalized=True), [3.0])


class TestAgainstNetworkX:
    @pytest.fixture
    def karate(self):
        G = nx.karate_club_graph()
        return G, from_nx(G, weighted=False)

    def test_path_length_and_clustering(self, karate):
        G, net = karate
        assert net.average_pathlength() == pytest.approx(nx.average_shortest_path_length(G))
        assert net.mean_clustering_coef() == pytest.approx(nx.average_clustering(G))

    def test_degree_histogram(self, karate):
        G, net = karate
        assert net.degree_distribution().tolist() == nx.degree_histogram(G)

    def test_dominant_eigenvalue(self, karate):
        _, net = karate
        vec, val = net.dominant_eigenpair(tol=1e-12, max_iter=10000)
        A = net.adjacency_matrix().toarray()
        assert val == pytest.approx(np.linalg.eigvalsh(A).max(), rel=1e-6)
        np.testing.assert_allclose(A @ vec, val * vec, atol=1e-5)
