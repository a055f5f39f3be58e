"""Shortest and longest (critical) paths over a condensation DAG.

Both computations relax edges in a supplied topological order, which makes a
single pass sufficient (O(V + E)). The order is taken as input rather than
recomputed so that the topological sort's own counters are not disturbed.

Notes:
    The two results pick their path endpoint differently. The shortest path
    ends at the last component in topological order that is reachable from
    the source, which is not necessarily the farthest one. The critical path
    ends at the component with the greatest distance, the lowest id winning
    ties.
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Sequence, Tuple

from sccdag.algorithms.types import (
    ComponentID,
    Condensation,
    CriticalPathResult,
    Distance,
    ShortestPathResult,
)
from sccdag.logging import get_logger
from sccdag.metrics import MetricsRecorder

logger = get_logger(__name__)


def _walk_back(
    pred: Sequence[Optional[ComponentID]], end: ComponentID
) -> Tuple[ComponentID, ...]:
    """Follow predecessor links from ``end`` and return the path start-first."""
    path: List[ComponentID] = []
    cur: Optional[ComponentID] = end
    while cur is not None:
        path.append(cur)
        cur = pred[cur]
    path.reverse()
    return tuple(path)


def _finite(dist: Sequence[float]) -> Dict[ComponentID, Distance]:
    return {comp: d for comp, d in enumerate(dist) if math.isfinite(d)}


class DagPathSolver:
    """Single-source shortest and all-source longest paths on a DAG.

    Every call records its own ``relaxations`` counter and elapsed time.
    """

    def shortest(
        self,
        condensation: Condensation,
        source: ComponentID,
        order: Sequence[ComponentID],
    ) -> ShortestPathResult:
        """Compute shortest distances from ``source``.

        Components with infinite distance are skipped when their turn comes in
        ``order``. An edge is relaxed when it strictly improves the target's
        distance.

        Args:
            condensation: Component DAG.
            source: Source component id.
            order: Topological order of ``condensation``.

        Returns:
            ShortestPathResult. Empty when the condensation has no components.

        Raises:
            ValueError: If ``source`` is not a component id of a non-empty
                condensation.
        """
        recorder = MetricsRecorder("shortest", ("relaxations",))
        num_components = condensation.num_components

        if num_components == 0:
            recorder.start()
            recorder.stop()
            return ShortestPathResult(
                source=None, distances={}, path=(), metrics=recorder.snapshot()
            )
        if not 0 <= source < num_components:
            raise ValueError(
                f"Source component {source} is outside [0, {num_components})."
            )

        adjacency = condensation.adjacency
        with recorder.timed():
            dist: List[float] = [math.inf] * num_components
            pred: List[Optional[ComponentID]] = [None] * num_components
            dist[source] = 0.0
            relaxations = 0

            for u in order:
                d_u = dist[u]
                if d_u == math.inf:
                    continue
                for edge in adjacency[u]:
                    alt = d_u + edge.weight
                    if dist[edge.target] > alt:
                        dist[edge.target] = alt
                        pred[edge.target] = u
                        relaxations += 1

        recorder.add("relaxations", relaxations)

        distances = _finite(dist)
        path: Tuple[ComponentID, ...] = ()
        for comp in reversed(order):
            if comp in distances:
                path = _walk_back(pred, comp)
                break

        return ShortestPathResult(
            source=source,
            distances=distances,
            path=path,
            metrics=recorder.snapshot(),
        )

    def longest(
        self,
        condensation: Condensation,
        order: Sequence[ComponentID],
    ) -> CriticalPathResult:
        """Compute the critical path from all zero-indegree components.

        Every zero-indegree component starts at distance 0 and every other
        component at minus infinity. An edge is relaxed when it strictly
        increases the target's distance.

        Args:
            condensation: Component DAG.
            order: Topological order of ``condensation``.

        Returns:
            CriticalPathResult; ``length`` is ``None`` and ``path`` empty when
            the condensation has no components.
        """
        recorder = MetricsRecorder("critical", ("relaxations",))
        num_components = condensation.num_components
        adjacency = condensation.adjacency

        with recorder.timed():
            dist: List[float] = [-math.inf] * num_components
            pred: List[Optional[ComponentID]] = [None] * num_components
            for comp, degree in enumerate(condensation.in_degrees()):
                if degree == 0:
                    dist[comp] = 0.0
            relaxations = 0

            for u in order:
                d_u = dist[u]
                if d_u == -math.inf:
                    continue
                for edge in adjacency[u]:
                    alt = d_u + edge.weight
                    if dist[edge.target] < alt:
                        dist[edge.target] = alt
                        pred[edge.target] = u
                        relaxations += 1

        recorder.add("relaxations", relaxations)

        best = -math.inf
        end: Optional[ComponentID] = None
        for comp, d in enumerate(dist):
            if d > best:
                best = d
                end = comp

        if end is None:
            length: Optional[Distance] = None
            path: Tuple[ComponentID, ...] = ()
        else:
            length = best
            path = _walk_back(pred, end)

        return CriticalPathResult(
            distances=_finite(dist),
            length=length,
            path=path,
            metrics=recorder.snapshot(),
        )
