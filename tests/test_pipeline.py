"""End-to-end scenarios over the full analysis pipeline."""

import json
import logging

import pytest

from sccdag import pipeline
from sccdag.algorithms.topo import CyclicCondensationError
from sccdag.algorithms.types import Condensation
from sccdag.config import AnalysisConfig
from sccdag.graph.indexed_multidigraph import Edge, IndexedMultiDiGraph
from sccdag.metrics import StageMetrics
from sccdag.pipeline import analyze_graph


def test_weighted_dag_scenario():
    g = IndexedMultiDiGraph.from_edges(3, [(0, 1, 2), (1, 2, 3), (0, 2, 10)])
    a = analyze_graph(g, source=0)

    assert a.scc.components == ((0,), (1,), (2,))
    assert set(a.condensation.edges()) == {
        Edge(0, 1, 2.0),
        Edge(1, 2, 3.0),
        Edge(0, 2, 10.0),
    }
    assert a.topo.order == (0, 1, 2)
    assert a.shortest.distances == {0: 0.0, 1: 2.0, 2: 5.0}
    assert a.shortest.path == (0, 1, 2)
    assert a.critical.length == 10.0
    assert a.critical.path == (0, 2)


def test_cyclic_scenario():
    g = IndexedMultiDiGraph.from_edges(2, [(0, 1, 1), (1, 0, 1)])
    a = analyze_graph(g, source=0)

    assert a.scc.components == ((0, 1),)
    comp = a.scc.component_of[0]
    assert a.condensation.edges() == []
    assert a.topo.order == (comp,)
    assert a.shortest.distances == {comp: 0.0}
    assert a.critical.length == 0.0


def test_undirected_scenario():
    g = IndexedMultiDiGraph.from_edges(2, [(0, 1, 5)], directed=False)
    a = analyze_graph(g, source=0)

    assert a.scc.components == ((0, 1),)
    assert a.scc.metrics["edges_processed"] == 2


def test_empty_graph_scenario():
    a = analyze_graph(IndexedMultiDiGraph(0))

    assert a.num_components == 0
    assert a.topo.order == ()
    assert a.shortest.distances == {}
    assert a.shortest.path == ()
    assert a.critical.distances == {}
    assert a.critical.length is None

    row = a.metrics_row()
    assert row["shortest_path_length"] == 0.0
    assert row["critical_path_length"] == 0.0


def test_source_is_mapped_to_its_component():
    # 0 -> {1, 2} cycle -> 3
    g = IndexedMultiDiGraph.from_edges(
        4, [(0, 1, 1), (1, 2, 1), (2, 1, 1), (2, 3, 4)]
    )
    a = analyze_graph(g, source=2)

    source_comp = a.scc.component_of[2]
    assert a.shortest.source == source_comp
    assert a.shortest.distances == {source_comp: 0.0, a.scc.component_of[3]: 4.0}


def test_default_source_from_config():
    g = IndexedMultiDiGraph.from_edges(3, [(0, 1, 1), (1, 2, 1)])
    a = analyze_graph(g, config=AnalysisConfig(default_source=1))

    assert a.source == 1
    assert a.shortest.distances == {1: 0.0, 2: 1.0}


def test_source_out_of_range():
    g = IndexedMultiDiGraph(2)
    with pytest.raises(ValueError, match="outside"):
        analyze_graph(g, source=2)


def test_metrics_sanity(mixed_graph):
    a = analyze_graph(mixed_graph, source=0)

    assert a.topo.metrics["pushes"] == a.topo.metrics["pops"] == a.num_components
    assert a.scc.metrics["edges_processed"] == mixed_graph.number_of_edges()
    assert a.scc.metrics["dfs_visits"] == mixed_graph.num_nodes


def test_to_dict_is_json_safe_and_keyed_by_strings():
    g = IndexedMultiDiGraph.from_edges(3, [(0, 1, 2), (1, 2, 3), (0, 2, 10)])
    doc = analyze_graph(g, source=0, name="tri").to_dict()

    decoded = json.loads(json.dumps(doc))
    assert decoded["SCC"] == [[0], [1], [2]]
    assert decoded["ComponentMap"] == {"0": 0, "1": 1, "2": 2}
    assert decoded["CondensationGraph"] == [
        {"from": 0, "to": 1, "w": 2.0},
        {"from": 0, "to": 2, "w": 10.0},
        {"from": 1, "to": 2, "w": 3.0},
    ]
    assert decoded["TopologicalOrder"] == [0, 1, 2]
    assert decoded["ShortestPaths"] == {
        "distances": {"0": 0.0, "1": 2.0, "2": 5.0},
        "path": [0, 1, 2],
    }
    assert decoded["CriticalPath"]["length"] == 10.0
    assert decoded["CriticalPath"]["path"] == [0, 2]
    assert set(decoded["metrics"]) == {
        "scc",
        "condensation",
        "topo",
        "shortest",
        "critical",
    }
    assert decoded["metrics"]["topo"]["counters"] == {"pushes": 3, "pops": 3}


def test_metrics_row_columns():
    g = IndexedMultiDiGraph.from_edges(3, [(0, 1, 2), (1, 2, 3), (0, 2, 10)])
    row = analyze_graph(g, source=0, name="tri.json").metrics_row()

    assert row["dataset"] == "tri.json"
    assert row["n_components"] == 3
    assert row["n_nodes"] == 3
    assert row["dfs_visits"] == 3
    assert row["scc_edges"] == 3
    assert row["topo_pushes"] == row["topo_pops"] == 3
    # shortest relaxes 3 edges, critical relaxes 2
    assert row["dags_relaxations"] == 5
    assert row["shortest_path_length"] == 5.0
    assert row["critical_path_length"] == 10.0
    assert row["scc_time_ms"] >= 0.0
    assert row["dags_time_ms"] >= 0.0


def test_each_analysis_is_independent():
    g1 = IndexedMultiDiGraph.from_edges(3, [(0, 1, 1), (1, 2, 1)])
    g2 = IndexedMultiDiGraph.from_edges(2, [(0, 1, 1)])
    first = analyze_graph(g1)
    second = analyze_graph(g2)

    assert first.scc.metrics["dfs_visits"] == 3
    assert second.scc.metrics["dfs_visits"] == 2
    assert second.topo.metrics["pushes"] == 2


def test_strict_acyclic_error_type_is_runtime_error():
    assert issubclass(CyclicCondensationError, RuntimeError)


def _cyclic_condensation(graph, scc):
    return Condensation(
        adjacency=((Edge(0, 1, 1.0),), (Edge(1, 0, 1.0),)),
        metrics=StageMetrics("condensation"),
    )


def test_partial_order_is_reported_when_not_strict(monkeypatch, caplog):
    monkeypatch.setattr(pipeline, "condense", _cyclic_condensation)
    g = IndexedMultiDiGraph(2)

    with caplog.at_level(logging.WARNING, logger="sccdag"):
        a = analyze_graph(
            g, name="broken", config=AnalysisConfig(strict_acyclic=False)
        )

    assert not a.topo.is_complete
    assert a.topo.unordered == (0, 1)
    assert a.critical.length is None
    assert "'broken': 2 component(s) left out of the topological order" in caplog.text


def test_partial_order_raises_when_strict(monkeypatch):
    monkeypatch.setattr(pipeline, "condense", _cyclic_condensation)

    with pytest.raises(CyclicCondensationError):
        analyze_graph(IndexedMultiDiGraph(2))
