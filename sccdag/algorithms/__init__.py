"""Analysis stages: SCC, condensation, topological order and DAG paths."""

from sccdag.algorithms.condensation import build_condensation, condense
from sccdag.algorithms.dag_paths import DagPathSolver
from sccdag.algorithms.scc import SccAnalyzer
from sccdag.algorithms.topo import CyclicCondensationError, TopoSorter
from sccdag.algorithms.types import (
    ComponentID,
    Condensation,
    CriticalPathResult,
    Distance,
    SccResult,
    ShortestPathResult,
    TopoResult,
)

__all__ = [
    "ComponentID",
    "Condensation",
    "CriticalPathResult",
    "CyclicCondensationError",
    "DagPathSolver",
    "Distance",
    "SccAnalyzer",
    "SccResult",
    "ShortestPathResult",
    "TopoResult",
    "TopoSorter",
    "build_condensation",
    "condense",
]
