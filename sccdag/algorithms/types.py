"""Result containers produced by the analysis stages.

All containers are frozen; sequences are stored as tuples and mappings are
plain dicts that callers must treat as read-only. Each carries the
:class:`~sccdag.metrics.StageMetrics` of the call that produced it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from sccdag.graph.indexed_multidigraph import Edge, NodeID
from sccdag.metrics import StageMetrics

#: Identifier of a strongly connected component, in ``[0, k)``.
ComponentID = int

#: Accumulated path weight.
Distance = float


@dataclass(frozen=True)
class SccResult:
    """Strongly connected components of a graph.

    Attributes:
        components: Member node ids per component id, each ascending.
        component_of: Component id per node id.
        metrics: Counters ``dfs_visits`` and ``edges_processed``.
    """

    components: Tuple[Tuple[NodeID, ...], ...]
    component_of: Tuple[ComponentID, ...]
    metrics: StageMetrics

    @property
    def num_components(self) -> int:
        return len(self.components)

    def component_map(self) -> Dict[NodeID, ComponentID]:
        """Return the node -> component mapping as a dict."""
        return dict(enumerate(self.component_of))


@dataclass(frozen=True)
class Condensation:
    """DAG over component ids with one minimum-weight edge per ordered pair.

    Attributes:
        adjacency: Outgoing edges per component id, in first-discovery order.
        metrics: Counters ``edges_scanned``, ``edges_kept`` and
            ``deduplicated_edges``.
    """

    adjacency: Tuple[Tuple[Edge, ...], ...]
    metrics: StageMetrics

    @property
    def num_components(self) -> int:
        return len(self.adjacency)

    @property
    def num_edges(self) -> int:
        return sum(len(out) for out in self.adjacency)

    def edges(self) -> List[Edge]:
        """Return all edges grouped by source component, in adjacency order."""
        return [edge for out in self.adjacency for edge in out]

    def in_degrees(self) -> List[int]:
        """Return the in-degree of every component."""
        degrees = [0] * self.num_components
        for out in self.adjacency:
            for edge in out:
                degrees[edge.target] += 1
        return degrees


@dataclass(frozen=True)
class TopoResult:
    """Topological order of a condensation.

    Attributes:
        order: Component ids, each before all of its successors.
        metrics: Counters ``pushes`` and ``pops``.
        unordered: Component ids left out because they sit on or behind a
            cycle; empty for any acyclic input.
    """

    order: Tuple[ComponentID, ...]
    metrics: StageMetrics
    unordered: Tuple[ComponentID, ...] = ()

    @property
    def is_complete(self) -> bool:
        return not self.unordered


@dataclass(frozen=True)
class ShortestPathResult:
    """Single-source shortest distances over a condensation.

    Attributes:
        source: Source component id, ``None`` for an empty condensation.
        distances: Reachable component id -> distance, ids ascending.
        path: Component ids from ``source`` to the last reachable component in
            topological order.
        metrics: Counter ``relaxations``.
    """

    source: Optional[ComponentID]
    distances: Dict[ComponentID, Distance]
    path: Tuple[ComponentID, ...]
    metrics: StageMetrics

    @property
    def target(self) -> Optional[ComponentID]:
        """Endpoint of :attr:`path`, or ``None`` when the path is empty."""
        return self.path[-1] if self.path else None

    @property
    def length(self) -> Optional[Distance]:
        """Distance of :attr:`target`, or ``None`` when the path is empty."""
        if not self.path:
            return None
        return self.distances[self.path[-1]]


@dataclass(frozen=True)
class CriticalPathResult:
    """Longest distances from all zero-indegree components.

    Attributes:
        distances: Component id -> longest distance for every component with a
            finite distance, ids ascending.
        length: Maximum distance, ``None`` for an empty condensation.
        path: Component ids along the longest path ending at the first
            component that attains ``length``.
        metrics: Counter ``relaxations``.
    """

    distances: Dict[ComponentID, Distance]
    length: Optional[Distance]
    path: Tuple[ComponentID, ...]
    metrics: StageMetrics
