"""Aggregate per-dataset metrics into a summary table.

`MetricsSummary` collects one row per analysed dataset, exposes the rows as a
pandas DataFrame with a fixed column order, writes them as CSV and renders a
plain ASCII table for console output.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from sccdag.logging import get_logger
from sccdag.pipeline import DatasetAnalysis
from sccdag.utils.output_paths import ensure_parent_dir

logger = get_logger(__name__)

SUMMARY_COLUMNS: List[str] = [
    "dataset",
    "n_components",
    "n_nodes",
    "scc_time_ms",
    "dfs_visits",
    "scc_edges",
    "topo_pushes",
    "topo_pops",
    "dags_relaxations",
    "dags_time_ms",
    "shortest_path_length",
    "critical_path_length",
]

# Columns shown in the console table
_CONSOLE_COLUMNS: List[str] = [
    "dataset",
    "n_nodes",
    "n_components",
    "scc_time_ms",
    "topo_pushes",
    "dags_relaxations",
    "shortest_path_length",
    "critical_path_length",
]


def format_table(
    headers: List[str],
    rows: List[List[str]],
    min_width: int = 6,
    max_col_width: Optional[int] = None,
) -> str:
    """Format rows as a simple ASCII table.

    Args:
        headers: Column headers.
        rows: Data rows, already converted to strings.
        min_width: Minimum column width.
        max_col_width: Optional cap; longer cells are clipped with ``...``.

    Returns:
        The table, or an empty string when there are no rows.
    """
    if not rows:
        return ""

    def clip(val: Any) -> str:
        s = str(val)
        if max_col_width is not None and len(s) > max_col_width:
            return s[: max_col_width - 3] + "..."
        return s

    clipped_headers = [clip(h) for h in headers]
    clipped_rows = [[clip(item) for item in row] for row in rows]

    all_data = [clipped_headers] + clipped_rows
    col_widths = [
        max(max(len(row[i]) for row in all_data), min_width)
        for i in range(len(clipped_headers))
    ]

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{item:<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(clipped_headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    lines.extend(format_row(row) for row in clipped_rows)
    return "\n".join(lines)


def _format_number(value: Any) -> str:
    """Integers as-is, floats with three decimals."""
    if isinstance(value, float):
        return f"{value:.3f}"
    return str(value)


class MetricsSummary:
    """Row collector for the batch metrics table."""

    def __init__(self) -> None:
        self._rows: List[Dict[str, Any]] = []

    def __len__(self) -> int:
        return len(self._rows)

    def add(self, analysis: DatasetAnalysis) -> Dict[str, Any]:
        """Append the summary row of ``analysis`` and return it."""
        row = analysis.metrics_row()
        self._rows.append(row)
        return row

    @property
    def rows(self) -> List[Dict[str, Any]]:
        return list(self._rows)

    def to_dataframe(self) -> pd.DataFrame:
        """Return the rows as a DataFrame with :data:`SUMMARY_COLUMNS`."""
        return pd.DataFrame(self._rows, columns=SUMMARY_COLUMNS)

    def write_csv(self, path: Path) -> Path:
        """Write the table to ``path`` with floats at three decimals."""
        ensure_parent_dir(path)
        self.to_dataframe().to_csv(path, index=False, float_format="%.3f")
        logger.info(f"Metrics summary written to: {path}")
        return path

    def format_console(self) -> str:
        """Render a compact ASCII table of the key columns."""
        rows = [
            [_format_number(row[col]) for col in _CONSOLE_COLUMNS] for row in self._rows
        ]
        return format_table(_CONSOLE_COLUMNS, rows, max_col_width=32)
