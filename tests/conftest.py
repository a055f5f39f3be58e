"""Global pytest configuration and shared fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

from sccdag.graph.indexed_multidigraph import IndexedMultiDiGraph


@pytest.fixture
def mixed_graph() -> IndexedMultiDiGraph:
    """Graph with two cycles, an isolated node, a self-loop and parallel edges."""
    return IndexedMultiDiGraph.from_edges(
        8,
        [
            (0, 1, 1),
            (1, 2, 1),
            (2, 0, 1),
            (2, 3, 4),
            (3, 4, 1),
            (4, 3, 1),
            (4, 5, 1),
            (1, 5, 7),
            (5, 7, 2),
            (7, 7, 1),
            (0, 1, 5),
        ],
    )


@pytest.fixture
def write_dataset(tmp_path: Path) -> Callable[..., Path]:
    """Write a dataset document into ``tmp_path/data`` and return its path."""
    data_dir = tmp_path / "data"
    data_dir.mkdir(exist_ok=True)

    def write(name: str, doc: Dict[str, Any]) -> Path:
        path = data_dir / name
        path.write_text(json.dumps(doc))
        return path

    return write
