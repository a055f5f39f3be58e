import networkx as nx
import pytest

from sccdag.algorithms.condensation import build_condensation, condense
from sccdag.algorithms.scc import SccAnalyzer
from sccdag.graph.indexed_multidigraph import Edge


def test_chain_condensation_keeps_all_edges(chain3):
    cond = condense(chain3, SccAnalyzer().run(chain3))

    assert cond.num_components == 3
    assert set(cond.edges()) == {Edge(0, 1, 2.0), Edge(1, 2, 3.0), Edge(0, 2, 10.0)}
    # per-source order follows the scan of the original edges
    assert cond.adjacency[0] == (Edge(0, 1, 2.0), Edge(0, 2, 10.0))
    assert cond.in_degrees() == [0, 1, 2]


def test_mixed_condensation_min_weights_and_order(mixed):
    cond = condense(mixed, SccAnalyzer().run(mixed))

    assert cond.adjacency == (
        (),
        (Edge(1, 2, 4.0), Edge(1, 3, 3.0)),
        (Edge(2, 3, 1.0),),
        (Edge(3, 4, 2.0),),
        (),
    )
    assert cond.num_edges == 4
    assert cond.metrics["edges_scanned"] == 13
    assert cond.metrics["edges_kept"] == 4
    assert cond.metrics["deduplicated_edges"] == 2


def test_intra_component_edges_dropped(two_cycle):
    cond = condense(two_cycle, SccAnalyzer().run(two_cycle))

    assert cond.num_components == 1
    assert cond.edges() == []


def test_build_condensation_from_raw_mapping():
    edges = [Edge(0, 1, 5.0), Edge(2, 1, 1.0), Edge(0, 2, 2.0), Edge(0, 1, 4.0)]
    # nodes 0 and 2 share component 0, node 1 is component 1
    cond = build_condensation(edges, component_of=[0, 1, 0], num_components=2)

    assert cond.adjacency == ((Edge(0, 1, 1.0),), ())
    assert cond.metrics["deduplicated_edges"] == 2


def test_empty_input():
    cond = build_condensation([], component_of=[], num_components=0)

    assert cond.adjacency == ()
    assert cond.num_edges == 0
    assert cond.in_degrees() == []


@pytest.mark.parametrize("seed", range(8))
def test_condensation_is_simple_dag(random_graph, seed):
    g = random_graph(seed, num_nodes=25, num_edges=70)
    scc = SccAnalyzer().run(g)
    cond = condense(g, scc)

    pairs = [(e.source, e.target) for e in cond.edges()]
    assert all(a != b for a, b in pairs)
    assert len(pairs) == len(set(pairs))

    dag = nx.DiGraph()
    dag.add_nodes_from(range(cond.num_components))
    dag.add_edges_from(pairs)
    assert nx.is_directed_acyclic_graph(dag)

    # each kept weight is the minimum over the original edges for that pair
    for e in cond.edges():
        candidates = [
            w
            for u, v, w in g.edge_list()
            if scc.component_of[u] == e.source and scc.component_of[v] == e.target
        ]
        assert e.weight == min(candidates)
