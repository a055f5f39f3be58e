"""Configuration for dataset loading and batch analysis."""

from dataclasses import dataclass, replace
from typing import Tuple


@dataclass(frozen=True)
class AnalysisConfig:
    """Defaults applied by the loader, the pipeline and the batch runner."""

    # Weight assigned to edges that do not carry one
    default_weight: float = 1.0

    # Source node used when a dataset does not name one
    default_source: int = 0

    # Raise on a condensation that Kahn's algorithm cannot fully order
    strict_acyclic: bool = True

    # Glob patterns used to discover datasets in a directory
    dataset_patterns: Tuple[str, ...] = ("*.json", "*.yaml", "*.yml")

    # Suffix appended to the dataset stem for per-dataset result files
    result_suffix: str = "_result.json"

    # File name of the aggregate metrics table
    summary_filename: str = "metrics_summary.csv"

    def with_overrides(self, **changes: object) -> "AnalysisConfig":
        """Return a copy with ``None``-valued overrides ignored."""
        effective = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **effective)


# Global configuration instance
DEFAULT_CONFIG = AnalysisConfig()
