"""Sample graphs shared by the algorithm tests."""

import pytest

from sccdag.graph.indexed_multidigraph import IndexedMultiDiGraph


@pytest.fixture
def chain3():
    # Weights:
    #      [2]      [3]
    #   0──────►1──────►2
    #   │               ▲
    #   └───────────────┘
    #         [10]
    return IndexedMultiDiGraph.from_edges(3, [(0, 1, 2), (1, 2, 3), (0, 2, 10)])


@pytest.fixture
def two_cycle():
    #   0 ◄──► 1   (weights 1)
    return IndexedMultiDiGraph.from_edges(2, [(0, 1, 1), (1, 0, 1)])


@pytest.fixture
def mixed():
    # Components (ids assigned by the analyzer):
    #   c0 = {6}        isolated
    #   c1 = {0, 1, 2}  cycle 0->1->2->0, parallel 0->1
    #   c2 = {3, 4}     cycle 3<->4
    #   c3 = {5}
    #   c4 = {7}        self-loop
    #
    # Condensation (min weights):
    #   c1 -[4]-> c2 -[1]-> c3 -[2]-> c4
    #   c1 -[3]-> c3
    g = IndexedMultiDiGraph(8)
    g.add_edge(0, 1, weight=1)
    g.add_edge(1, 2, weight=1)
    g.add_edge(2, 0, weight=1)
    g.add_edge(2, 3, weight=4)
    g.add_edge(3, 4, weight=1)
    g.add_edge(4, 3, weight=1)
    g.add_edge(4, 5, weight=1)
    g.add_edge(1, 5, weight=7)
    g.add_edge(5, 7, weight=2)
    g.add_edge(7, 7, weight=1)
    g.add_edge(0, 1, weight=5)
    g.add_edge(2, 5, weight=3)
    g.add_edge(1, 3, weight=10)
    return g


@pytest.fixture
def long_chain():
    # 0 -> 1 -> ... -> 4999, deep enough to exceed the default recursion limit
    n = 5000
    return IndexedMultiDiGraph.from_edges(n, [(i, i + 1, 1) for i in range(n - 1)])


@pytest.fixture
def long_cycle():
    # 0 -> 1 -> ... -> 2999 -> 0
    n = 3000
    return IndexedMultiDiGraph.from_edges(
        n, [(i, (i + 1) % n, 1) for i in range(n)]
    )


@pytest.fixture
def random_graph():
    """Factory for reproducible random multigraphs with self-loops allowed."""
    import random

    def build(seed: int, num_nodes: int = 30, num_edges: int = 60):
        rng = random.Random(seed)
        g = IndexedMultiDiGraph(num_nodes)
        for _ in range(num_edges):
            u = rng.randrange(num_nodes)
            v = rng.randrange(num_nodes)
            g.add_edge(u, v, weight=rng.randint(0, 9))
        return g

    return build
