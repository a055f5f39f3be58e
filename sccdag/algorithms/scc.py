"""Strongly connected components (Tarjan).

The traversal is iterative: an explicit stack of ``[node, cursor]`` frames
stands in for the call stack of the textbook recursive formulation, so long
chains cannot exhaust the interpreter's recursion limit. Discovery indices,
low-link updates and component emission happen in exactly the order the
recursive version would produce them.

Notes:
    Tarjan's algorithm completes components in reverse topological order of
    the condensation. Component ids are assigned in the reverse of completion
    order, so for every condensation edge ``a -> b`` we have ``a < b``. Roots
    are tried in ascending node id and successors in edge insertion order.
"""

from __future__ import annotations

from typing import List

from sccdag.algorithms.types import ComponentID, SccResult
from sccdag.graph.indexed_multidigraph import IndexedMultiDiGraph, NodeID
from sccdag.logging import get_logger
from sccdag.metrics import MetricsRecorder

logger = get_logger(__name__)

_UNVISITED = -1


class SccAnalyzer:
    """Tarjan's strongly connected components with visit/edge counters.

    Each :meth:`run` starts from fresh state; one analyzer may be reused for
    any number of graphs.
    """

    stage = "scc"

    def run(self, graph: IndexedMultiDiGraph) -> SccResult:
        """Partition ``graph`` into strongly connected components.

        Counters:
          - ``dfs_visits``: nodes discovered (equals ``n``).
          - ``edges_processed``: outgoing edges examined, self-loops and
            parallel edges included (equals the edge count).

        Args:
            graph: Graph with nodes ``0..n-1``.

        Returns:
            SccResult with components, node -> component mapping and metrics.
        """
        recorder = MetricsRecorder(self.stage, ("dfs_visits", "edges_processed"))
        num_nodes = graph.num_nodes
        successors = graph.successor_lists()

        with recorder.timed():
            index: List[int] = [_UNVISITED] * num_nodes
            low: List[int] = [0] * num_nodes
            on_stack: List[bool] = [False] * num_nodes
            pending: List[NodeID] = []
            completed: List[List[NodeID]] = []
            next_index = 0
            dfs_visits = 0
            edges_processed = 0

            for root in range(num_nodes):
                if index[root] != _UNVISITED:
                    continue

                index[root] = low[root] = next_index
                next_index += 1
                dfs_visits += 1
                pending.append(root)
                on_stack[root] = True
                frames: List[List[int]] = [[root, 0]]

                while frames:
                    frame = frames[-1]
                    node, cursor = frame
                    node_successors = successors[node]

                    if cursor < len(node_successors):
                        frame[1] = cursor + 1
                        nxt = node_successors[cursor]
                        edges_processed += 1
                        if index[nxt] == _UNVISITED:
                            index[nxt] = low[nxt] = next_index
                            next_index += 1
                            dfs_visits += 1
                            pending.append(nxt)
                            on_stack[nxt] = True
                            frames.append([nxt, 0])
                        elif on_stack[nxt] and index[nxt] < low[node]:
                            low[node] = index[nxt]
                        continue

                    # All successors examined: node is finished
                    frames.pop()
                    if low[node] == index[node]:
                        component: List[NodeID] = []
                        while True:
                            member = pending.pop()
                            on_stack[member] = False
                            component.append(member)
                            if member == node:
                                break
                        completed.append(component)
                    if frames:
                        parent = frames[-1][0]
                        if low[node] < low[parent]:
                            low[parent] = low[node]

        recorder.add("dfs_visits", dfs_visits)
        recorder.add("edges_processed", edges_processed)

        num_components = len(completed)
        component_of: List[ComponentID] = [0] * num_nodes
        components = []
        for comp_id, members in enumerate(reversed(completed)):
            for member in members:
                component_of[member] = comp_id
            components.append(tuple(sorted(members)))

        logger.debug(
            f"SCC found {num_components} components over {num_nodes} nodes"
        )
        return SccResult(
            components=tuple(components),
            component_of=tuple(component_of),
            metrics=recorder.snapshot(),
        )
