"""Directed multigraph over contiguous integer node ids.

`IndexedMultiDiGraph` extends `networkx.MultiDiGraph` so that the node set is
exactly ``range(num_nodes)``, fixed at construction, and every edge carries a
non-negative ``weight``. Edges receive monotonically increasing integer keys,
which preserves global insertion order; :meth:`edge_list` and
:meth:`successor_lists` expose edges in that order, which is the order the
analysis algorithms traverse them in.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Tuple

import networkx as nx

NodeID = int
EdgeID = int


class Edge(NamedTuple):
    """A weighted directed edge ``source -> target``."""

    source: NodeID
    target: NodeID
    weight: float = 1.0


class IndexedMultiDiGraph(nx.MultiDiGraph):
    """Multi-directed graph with nodes ``0..num_nodes-1`` and weighted edges.

    This class enforces:
      - Nodes are created by the constructor only; ``add_node`` rejects ids
        that already exist or that would leave a gap in the id range.
      - Edge endpoints must be existing node ids.
      - Edge weights must be finite and non-negative.
      - Each edge gets a unique integer key in insertion order.

    Parallel edges and self-loops are allowed.

    Inherits from:
        networkx.MultiDiGraph
    """

    def __init__(self, num_nodes: int = 0, **attr: Any) -> None:
        """Initialize a graph with ``num_nodes`` isolated nodes.

        Args:
            num_nodes: Number of nodes; must be non-negative.
            **attr: Graph attributes forwarded to ``MultiDiGraph``.

        Raises:
            ValueError: If ``num_nodes`` is negative.
        """
        if num_nodes < 0:
            raise ValueError(f"num_nodes must be non-negative, got {num_nodes}.")
        super().__init__(**attr)
        self._edges: Dict[EdgeID, Edge] = {}
        self._next_edge_id: int = 0
        self.add_nodes_from(range(num_nodes))

    @classmethod
    def from_edges(
        cls,
        num_nodes: int,
        edges: Iterable[Tuple[NodeID, NodeID, float]],
        directed: bool = True,
    ) -> IndexedMultiDiGraph:
        """Build a graph from ``(u, v, weight)`` triples.

        For undirected input each triple is inserted as ``(u, v)`` followed by
        ``(v, u)``, so a self-loop is inserted twice.

        Args:
            num_nodes: Number of nodes.
            edges: Edge triples in insertion order.
            directed: Whether the triples describe directed edges.

        Returns:
            The populated graph.
        """
        graph = cls(num_nodes)
        for u, v, weight in edges:
            graph.add_edge(u, v, weight=weight)
            if not directed:
                graph.add_edge(v, u, weight=weight)
        return graph

    @property
    def num_nodes(self) -> int:
        """Number of nodes ``n``; node ids are ``0..n-1``."""
        return len(self._node)

    def add_node(self, node_for_adding: NodeID, **attr: Any) -> None:
        """Append the next node id.

        Args:
            node_for_adding: Must equal the current ``num_nodes``.
            **attr: Node attributes.

        Raises:
            ValueError: If the node exists or is not the next contiguous id.
        """
        if node_for_adding in self:
            raise ValueError(f"Node '{node_for_adding}' already exists in this graph.")
        if node_for_adding != self.num_nodes:
            raise ValueError(
                f"Node ids must be contiguous: expected {self.num_nodes}, "
                f"got '{node_for_adding}'."
            )
        super().add_node(node_for_adding, **attr)

    def new_edge_key(self, u: NodeID, v: NodeID, key: Optional[int] = None) -> int:  # type: ignore[override]
        """Return the next unique integer edge key.

        Signature matches NetworkX's ``new_edge_key(self, u, v, key=None)``.
        """
        next_edge_id = self._next_edge_id
        self._next_edge_id += 1
        return next_edge_id

    def add_edge(  # pyright: ignore[reportIncompatibleMethodOverride]
        self,
        u_for_edge: NodeID,
        v_for_edge: NodeID,
        key: Optional[EdgeID] = None,
        weight: float = 1.0,
        **attr: Any,
    ) -> EdgeID:
        """Add a directed edge ``u_for_edge -> v_for_edge``.

        Args:
            u_for_edge: Source node id in ``[0, num_nodes)``.
            v_for_edge: Target node id in ``[0, num_nodes)``.
            key: Ignored unless it is an unused integer not below the next
                auto-assigned key; ``None`` auto-assigns.
            weight: Non-negative finite edge weight.
            **attr: Additional edge attributes.

        Returns:
            EdgeID: The key of the new edge.

        Raises:
            ValueError: If an endpoint is out of range, the weight is negative
                or not finite, or the key is already used or out of order.
        """
        if u_for_edge not in self:
            raise ValueError(
                f"Source node '{u_for_edge}' is outside [0, {self.num_nodes})."
            )
        if v_for_edge not in self:
            raise ValueError(
                f"Target node '{v_for_edge}' is outside [0, {self.num_nodes})."
            )
        weight = float(weight)
        if not math.isfinite(weight) or weight < 0:
            raise ValueError(
                f"Edge {u_for_edge}->{v_for_edge} has invalid weight {weight!r}; "
                "weights must be finite and non-negative."
            )

        if key is None:
            key = self.new_edge_key(u_for_edge, v_for_edge)
        else:
            if key in self._edges:
                raise ValueError(f"Edge with id '{key}' already exists.")
            # Keys must keep increasing so that key order equals insertion order
            if key < self._next_edge_id:
                raise ValueError(
                    f"Edge id '{key}' is lower than the next free id "
                    f"{self._next_edge_id}."
                )
            self._next_edge_id = key + 1

        super().add_edge(u_for_edge, v_for_edge, key=key, weight=weight, **attr)
        self._edges[key] = Edge(u_for_edge, v_for_edge, weight)
        return key

    #
    # Read access in insertion order
    #
    def edge_list(self) -> List[Edge]:
        """Return all edges in insertion order."""
        return list(self._edges.values())

    def successor_lists(self) -> List[List[NodeID]]:
        """Return, per node id, the edge targets in insertion order.

        A target appears once per parallel edge.
        """
        successors: List[List[NodeID]] = [[] for _ in range(self.num_nodes)]
        for edge in self._edges.values():
            successors[edge.source].append(edge.target)
        return successors
