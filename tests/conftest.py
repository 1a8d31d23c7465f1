import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]  # project root
sys.path.insert(0, str(ROOT))

from complexnet import Network


def build_path(n):
    net = Network(n)
    net.add_nodes(n)
    for i in range(n - 1):
        net.add_link(i, i + 1)
    return net


def build_triangle_with_pendant():
    """Triangle 0-1-2 plus pendant node 3 hanging from 0."""
    net = Network(4)
    net.add_nodes(4)
    net.add_link(0, 1)
    net.add_link(1, 2)
    net.add_link(2, 0)
    net.add_link(0, 3)
    return net


@pytest.fixture
def path_graph():
    return build_path(6)


@pytest.fixture
def triangle():
    net = Network(3)
    net.add_nodes(3)
    net.add_link(0, 1)
    net.add_link(1, 2)
    net.add_link(0, 2)
    return net


@pytest.fixture
def paw():
    return build_triangle_with_pendant()


@pytest.fixture
def two_components():
    """Path 0-1-2, link 3-4 and isolated node 5."""
    net = Network(6)
    net.add_nodes(6)
    net.add_link(0, 1)
    net.add_link(1, 2)
    net.add_link(3, 4)
    return net
