"""sccdag: layered analysis of directed graphs.

For each input graph sccdag computes the strongly connected components, the
condensation DAG, a topological order of that DAG, and the shortest and
longest (critical) paths through it. Every stage records operation counters
and elapsed time alongside its result.

Primary API:
    analyze_graph() - Run all stages over one graph
    IndexedMultiDiGraph - Integer-indexed weighted multigraph
    SccAnalyzer, TopoSorter, DagPathSolver - Individual stages
    build_condensation() - Collapse components into a DAG
    load_dataset(), run_batch() - File-based entry points

Example:
    from sccdag import IndexedMultiDiGraph, analyze_graph

    graph = IndexedMultiDiGraph.from_edges(3, [(0, 1, 2.0), (1, 2, 3.0), (0, 2, 10.0)])
    analysis = analyze_graph(graph, source=0)
    analysis.critical.length   # 10.0
    analysis.shortest.path     # (0, 1, 2)
"""

from __future__ import annotations

from sccdag import cli, logging
from sccdag._version import __version__
from sccdag.algorithms import (
    Condensation,
    CriticalPathResult,
    CyclicCondensationError,
    DagPathSolver,
    SccAnalyzer,
    SccResult,
    ShortestPathResult,
    TopoResult,
    TopoSorter,
    build_condensation,
    condense,
)
from sccdag.batch import BatchResult, analyze_file, run_batch
from sccdag.config import DEFAULT_CONFIG, AnalysisConfig
from sccdag.graph import Edge, IndexedMultiDiGraph
from sccdag.io import Dataset, discover_datasets, load_dataset, parse_dataset
from sccdag.metrics import MetricsRecorder, StageMetrics
from sccdag.pipeline import DatasetAnalysis, analyze_graph
from sccdag.report import MetricsSummary

__all__ = [
    # Version
    "__version__",
    # Model
    "Edge",
    "IndexedMultiDiGraph",
    # Stages
    "SccAnalyzer",
    "build_condensation",
    "condense",
    "TopoSorter",
    "DagPathSolver",
    "CyclicCondensationError",
    # Results
    "SccResult",
    "Condensation",
    "TopoResult",
    "ShortestPathResult",
    "CriticalPathResult",
    "DatasetAnalysis",
    "StageMetrics",
    "MetricsRecorder",
    # Pipeline and batch
    "analyze_graph",
    "analyze_file",
    "run_batch",
    "BatchResult",
    "MetricsSummary",
    # I/O
    "Dataset",
    "load_dataset",
    "parse_dataset",
    "discover_datasets",
    # Configuration
    "AnalysisConfig",
    "DEFAULT_CONFIG",
    # Utilities
    "cli",
    "logging",
]
