"""Graph primitives.

This package provides the integer-indexed multigraph `IndexedMultiDiGraph`
and the `Edge` tuple shared by the analysis stages.
"""

from sccdag.graph.indexed_multidigraph import Edge, EdgeID, IndexedMultiDiGraph, NodeID

__all__ = ["Edge", "EdgeID", "IndexedMultiDiGraph", "NodeID"]
