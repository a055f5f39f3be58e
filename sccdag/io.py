"""Dataset discovery, parsing and result serialisation.

A dataset document (JSON or YAML) has the shape::

    {
        "n": 4,               # optional, inferred from the edges
        "directed": true,     # optional, default false
        "source": 0,          # optional, default 0
        "edges": [
            {"u": 0, "v": 1, "w": 2.5},   # "w" optional, default 1.0
            ...
        ]
    }

The node count is ``max(n, max(u, v) + 1)``. Undirected datasets expand every
edge into both directions when converted to a graph.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

import yaml

from sccdag.config import DEFAULT_CONFIG, AnalysisConfig
from sccdag.graph.indexed_multidigraph import Edge, IndexedMultiDiGraph, NodeID
from sccdag.logging import get_logger
from sccdag.utils.output_paths import ensure_parent_dir

logger = get_logger(__name__)

_YAML_SUFFIXES = {".yaml", ".yml"}


@dataclass
class Dataset:
    """Parsed dataset ready for analysis.

    Attributes:
        name: Label, usually the file name.
        num_nodes: Node count ``n``.
        directed: Whether ``edges`` are directed.
        source: Source node of the shortest-path query.
        edges: Edges as listed in the document.
    """

    name: str
    num_nodes: int
    directed: bool
    source: NodeID
    edges: List[Edge] = field(default_factory=list)

    def to_graph(self) -> IndexedMultiDiGraph:
        """Build the analysis graph, expanding undirected edges."""
        return IndexedMultiDiGraph.from_edges(
            self.num_nodes, self.edges, directed=self.directed
        )


def _as_node_id(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{what} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{what} must be non-negative, got {value}")
    return value


def _as_weight(value: Any, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{what} must be a number, got {value!r}")
    weight = float(value)
    if not math.isfinite(weight) or weight < 0:
        raise ValueError(f"{what} must be finite and non-negative, got {value!r}")
    return weight


def parse_dataset(
    data: Optional[Mapping[str, Any]],
    name: str = "dataset",
    config: Optional[AnalysisConfig] = None,
) -> Dataset:
    """Validate a decoded dataset document and apply defaults.

    Args:
        data: Decoded document; ``None`` is treated as an empty mapping.
        name: Dataset label.
        config: Supplies ``default_weight`` and ``default_source``.

    Returns:
        The parsed dataset.

    Raises:
        ValueError: If the document shape or any value is invalid.
    """
    cfg = config or DEFAULT_CONFIG
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ValueError(f"Dataset '{name}' must map to a dictionary at top-level.")

    raw_edges = data.get("edges", [])
    if raw_edges is None:
        raw_edges = []
    if not isinstance(raw_edges, list):
        raise ValueError(f"Dataset '{name}': 'edges' must be a list")

    num_nodes = 0
    if data.get("n") is not None:
        num_nodes = _as_node_id(data["n"], f"Dataset '{name}': 'n'")

    directed = data.get("directed", False)
    if not isinstance(directed, bool):
        raise ValueError(f"Dataset '{name}': 'directed' must be a boolean")

    edges: List[Edge] = []
    for pos, entry in enumerate(raw_edges):
        label = f"Dataset '{name}': edge #{pos}"
        if not isinstance(entry, Mapping):
            raise ValueError(f"{label} must be a mapping with 'u' and 'v'")
        if "u" not in entry or "v" not in entry:
            raise ValueError(f"{label} must include 'u' and 'v'")
        u = _as_node_id(entry["u"], f"{label} 'u'")
        v = _as_node_id(entry["v"], f"{label} 'v'")
        w = cfg.default_weight
        if entry.get("w") is not None:
            w = _as_weight(entry["w"], f"{label} 'w'")
        edges.append(Edge(u, v, w))
        num_nodes = max(num_nodes, u + 1, v + 1)

    source = cfg.default_source
    if data.get("source") is not None:
        source = _as_node_id(data["source"], f"Dataset '{name}': 'source'")
    if num_nodes and source >= num_nodes:
        raise ValueError(
            f"Dataset '{name}': source {source} is outside [0, {num_nodes})"
        )

    return Dataset(
        name=name,
        num_nodes=num_nodes,
        directed=directed,
        source=source,
        edges=edges,
    )


def load_dataset(path: Path, config: Optional[AnalysisConfig] = None) -> Dataset:
    """Read and parse a JSON or YAML dataset file.

    Files ending in ``.yaml``/``.yml`` are read with ``yaml.safe_load``;
    everything else is decoded as JSON.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file cannot be decoded or fails validation.
    """
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in _YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text) if text.strip() else None
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValueError(f"Invalid dataset file {path.name}: {e}") from e

    dataset = parse_dataset(data, name=path.name, config=config)
    logger.debug(
        f"Loaded {path.name}: n={dataset.num_nodes}, edges={len(dataset.edges)}, "
        f"directed={dataset.directed}, source={dataset.source}"
    )
    return dataset


def discover_datasets(
    directory: Path, patterns: Iterable[str] = DEFAULT_CONFIG.dataset_patterns
) -> List[Path]:
    """Return dataset files in ``directory`` matching ``patterns``, sorted.

    Raises:
        FileNotFoundError: If ``directory`` is not an existing directory.
    """
    if not directory.is_dir():
        raise FileNotFoundError(f"Data directory not found: {directory}")
    found = {p for pattern in patterns for p in directory.glob(pattern) if p.is_file()}
    return sorted(found)


def dumps_result(result: Dict[str, Any]) -> str:
    """Serialise a result document as indented JSON."""
    return json.dumps(result, indent=2)


def write_result(path: Path, result: Dict[str, Any]) -> Path:
    """Write a result document to ``path``, creating parent directories."""
    ensure_parent_dir(path)
    path.write_text(dumps_result(result) + "\n", encoding="utf-8")
    return path
