import networkx as nx
import pytest

from sccdag.graph.indexed_multidigraph import Edge, IndexedMultiDiGraph


def test_init_creates_contiguous_nodes():
    g = IndexedMultiDiGraph(3)
    assert g.num_nodes == 3
    assert list(g.nodes) == [0, 1, 2]
    assert g.edge_list() == []
    assert isinstance(g, nx.MultiDiGraph)


def test_init_empty_graph():
    g = IndexedMultiDiGraph()
    assert g.num_nodes == 0
    assert g.edge_list() == []
    assert g.successor_lists() == []


def test_init_negative_size():
    with pytest.raises(ValueError, match="non-negative"):
        IndexedMultiDiGraph(-1)


def test_add_node_only_next_id():
    g = IndexedMultiDiGraph(2)
    g.add_node(2)
    assert g.num_nodes == 3

    with pytest.raises(ValueError, match="already exists"):
        g.add_node(1)
    with pytest.raises(ValueError, match="contiguous"):
        g.add_node(7)


def test_add_edge_assigns_increasing_keys_and_default_weight():
    g = IndexedMultiDiGraph(2)
    k0 = g.add_edge(0, 1)
    k1 = g.add_edge(0, 1, weight=2.5)

    assert (k0, k1) == (0, 1)
    assert g.edge_list() == [Edge(0, 1, 1.0), Edge(0, 1, 2.5)]
    # networkx view carries the weight attribute
    assert g[0][1][1]["weight"] == 2.5
    assert g.number_of_edges() == 2


def test_add_edge_out_of_range():
    g = IndexedMultiDiGraph(2)
    with pytest.raises(ValueError, match="Source node '5'"):
        g.add_edge(5, 0)
    with pytest.raises(ValueError, match="Target node '2'"):
        g.add_edge(0, 2)


@pytest.mark.parametrize("weight", [-1.0, float("nan"), float("inf")])
def test_add_edge_rejects_bad_weight(weight):
    g = IndexedMultiDiGraph(2)
    with pytest.raises(ValueError, match="invalid weight"):
        g.add_edge(0, 1, weight=weight)


def test_add_edge_explicit_keys():
    g = IndexedMultiDiGraph(2)
    assert g.add_edge(0, 1, key=5) == 5
    assert g.add_edge(1, 0) == 6
    with pytest.raises(ValueError, match="already exists"):
        g.add_edge(0, 1, key=5)
    with pytest.raises(ValueError, match="lower than the next free id"):
        g.add_edge(0, 1, key=2)


def test_adjacency_preserves_insertion_order():
    g = IndexedMultiDiGraph(3)
    g.add_edge(0, 2, weight=1)
    g.add_edge(1, 0, weight=2)
    g.add_edge(0, 1, weight=3)
    g.add_edge(0, 2, weight=4)

    assert g.successor_lists() == [[2, 1, 2], [0], []]
    assert g.edge_list() == [
        Edge(0, 2, 1.0),
        Edge(1, 0, 2.0),
        Edge(0, 1, 3.0),
        Edge(0, 2, 4.0),
    ]


def test_from_edges_directed():
    g = IndexedMultiDiGraph.from_edges(3, [(0, 1, 2.0), (1, 2, 3.0)])
    assert g.edge_list() == [Edge(0, 1, 2.0), Edge(1, 2, 3.0)]


def test_from_edges_undirected_inserts_both_directions():
    g = IndexedMultiDiGraph.from_edges(2, [(0, 1, 5.0)], directed=False)
    assert g.edge_list() == [Edge(0, 1, 5.0), Edge(1, 0, 5.0)]
    assert g.successor_lists() == [[1], [0]]
