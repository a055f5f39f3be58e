"""Paths of the artifacts written by a batch run.

A run writes one result document per dataset plus one metrics table. All
artifacts land under an output directory, which defaults to ``results`` in
the current working directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

DEFAULT_OUTPUT_DIR = Path("results")


def dataset_prefix_from_path(dataset_path: Path) -> str:
    """Return the dataset filename stem used as artifact prefix."""
    return dataset_path.stem


def ensure_parent_dir(path: Path) -> None:
    """Ensure the parent directory exists for a file path."""
    path.parent.mkdir(parents=True, exist_ok=True)


def resolve_output_dir(output_dir: Optional[Path]) -> Path:
    """Return ``output_dir`` or the default ``results`` directory."""
    return output_dir if output_dir is not None else DEFAULT_OUTPUT_DIR


def result_path_for_dataset(
    dataset_path: Path,
    output_dir: Optional[Path],
    suffix: str = "_result.json",
    keep_extension: bool = False,
) -> Path:
    """Compose ``<output_dir>/<dataset stem><suffix>``.

    With ``keep_extension`` the source extension joins the stem, so
    ``g.yaml`` maps to ``g_yaml<suffix>``.

    Args:
        dataset_path: Input dataset file.
        output_dir: Base directory; ``None`` selects the default.
        suffix: Artifact suffix including the extension.
        keep_extension: Include the source extension in the name.

    Returns:
        The per-dataset result path.
    """
    base = resolve_output_dir(output_dir)
    prefix = dataset_prefix_from_path(dataset_path)
    if keep_extension and dataset_path.suffix:
        prefix = f"{prefix}_{dataset_path.suffix.lstrip('.')}"
    return base / f"{prefix}{suffix}"


def summary_path_for_run(
    output_dir: Optional[Path], filename: str = "metrics_summary.csv"
) -> Path:
    """Return the path of the aggregate metrics table."""
    return resolve_output_dir(output_dir) / filename
