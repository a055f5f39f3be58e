"""Topological ordering of a condensation (Kahn).

Zero-indegree components are seeded in ascending id order and served from a
FIFO queue, so the order is reproducible for a fixed adjacency.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Sequence

from sccdag.algorithms.types import ComponentID, Condensation, TopoResult
from sccdag.logging import get_logger
from sccdag.metrics import MetricsRecorder

logger = get_logger(__name__)


class CyclicCondensationError(RuntimeError):
    """Raised when a condensation cannot be fully ordered.

    A correctly computed condensation is acyclic, so this signals an upstream
    consistency violation rather than bad user input.

    Attributes:
        unordered: Component ids that Kahn's algorithm never released.
    """

    def __init__(self, unordered: Sequence[ComponentID]) -> None:
        self.unordered = tuple(unordered)
        preview = ", ".join(str(c) for c in self.unordered[:10])
        if len(self.unordered) > 10:
            preview += ", ..."
        super().__init__(
            f"Condensation is not acyclic: {len(self.unordered)} component(s) "
            f"could not be ordered ({preview})."
        )


class TopoSorter:
    """Kahn's algorithm with push/pop counters.

    Args:
        strict: When True (default), raise :class:`CyclicCondensationError`
            if the order does not cover every component. When False, return
            the partial order and list the remainder in ``unordered``.
    """

    stage = "topo"

    def __init__(self, strict: bool = True) -> None:
        self.strict = strict

    def sort(self, condensation: Condensation) -> TopoResult:
        """Order all component ids consistently with edge direction.

        Counters:
          - ``pushes``: components enqueued.
          - ``pops``: components dequeued (equals ``pushes``).

        Args:
            condensation: Component DAG.

        Returns:
            TopoResult with the order and metrics.

        Raises:
            CyclicCondensationError: If ``strict`` and some components were
                never released.
        """
        recorder = MetricsRecorder(self.stage, ("pushes", "pops"))
        adjacency = condensation.adjacency
        num_components = condensation.num_components

        with recorder.timed():
            in_degree = condensation.in_degrees()
            queue: Deque[ComponentID] = deque()
            order: List[ComponentID] = []
            pushes = 0
            pops = 0

            for comp in range(num_components):
                if in_degree[comp] == 0:
                    queue.append(comp)
                    pushes += 1

            while queue:
                comp = queue.popleft()
                pops += 1
                order.append(comp)
                for edge in adjacency[comp]:
                    in_degree[edge.target] -= 1
                    if in_degree[edge.target] == 0:
                        queue.append(edge.target)
                        pushes += 1

        recorder.add("pushes", pushes)
        recorder.add("pops", pops)
        metrics = recorder.snapshot()

        unordered: List[ComponentID] = []
        if len(order) < num_components:
            unordered = [comp for comp in range(num_components) if in_degree[comp] > 0]
            if self.strict:
                raise CyclicCondensationError(unordered)
            logger.warning(
                f"Topological order covers {len(order)} of {num_components} "
                f"components; {len(unordered)} left unordered"
            )

        return TopoResult(order=tuple(order), metrics=metrics, unordered=tuple(unordered))
