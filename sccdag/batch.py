"""Sequential batch analysis of a directory of datasets.

Datasets are processed one at a time in sorted file-name order. Each dataset
gets its own result document; one metrics table summarises the whole run. A
dataset that fails to load or analyse is logged and recorded as failed, and
the batch moves on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from time import perf_counter
from typing import Dict, List, Optional

from sccdag.config import DEFAULT_CONFIG, AnalysisConfig
from sccdag.graph.indexed_multidigraph import NodeID
from sccdag.io import discover_datasets, load_dataset, write_result
from sccdag.logging import get_logger
from sccdag.pipeline import DatasetAnalysis, analyze_graph
from sccdag.report import MetricsSummary
from sccdag.utils.output_paths import result_path_for_dataset, summary_path_for_run

logger = get_logger(__name__)


@dataclass
class BatchResult:
    """Outcome of a batch run.

    Attributes:
        analyses: Successful analyses in processing order.
        result_paths: Result document path per dataset name.
        failures: Error message per failed dataset name.
        summary: Collected metrics rows.
        summary_path: Location of the metrics table, once written.
        elapsed: Wall-clock seconds for the whole batch.
    """

    analyses: List[DatasetAnalysis] = field(default_factory=list)
    result_paths: Dict[str, Path] = field(default_factory=dict)
    failures: Dict[str, str] = field(default_factory=dict)
    summary: MetricsSummary = field(default_factory=MetricsSummary)
    summary_path: Optional[Path] = None
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        return not self.failures


def analyze_file(
    path: Path,
    config: Optional[AnalysisConfig] = None,
    source: Optional[NodeID] = None,
) -> DatasetAnalysis:
    """Load one dataset file and run the full analysis on it.

    ``source`` replaces the dataset's own source node when given.
    """
    cfg = config or DEFAULT_CONFIG
    dataset = load_dataset(path, config=cfg)
    return analyze_graph(
        dataset.to_graph(),
        source=dataset.source if source is None else source,
        name=dataset.name,
        config=cfg,
    )


def _claim_result_path(
    path: Path, output_dir: Optional[Path], suffix: str, batch: BatchResult
) -> Optional[Path]:
    """Pick a result path no earlier dataset of this run has written.

    Datasets sharing a stem (``g.json`` and ``g.yaml``) fall back to a name
    that keeps the source extension. If that is taken as well the dataset is
    recorded as failed and ``None`` is returned.
    """
    claimed = set(batch.result_paths.values())
    out_path = result_path_for_dataset(path, output_dir, suffix)
    if out_path not in claimed:
        return out_path

    alt_path = result_path_for_dataset(path, output_dir, suffix, keep_extension=True)
    if alt_path not in claimed:
        logger.warning(
            f"{path.name}: {out_path.name} already written in this run; "
            f"using {alt_path.name}"
        )
        return alt_path

    message = f"Result path {out_path.name} and {alt_path.name} already written in this run"
    logger.error(f"Failed to write result for {path.name}: {message}")
    batch.failures[path.name] = f"ValueError: {message}"
    return None


def run_batch(
    data_dir: Path,
    output_dir: Optional[Path] = None,
    config: Optional[AnalysisConfig] = None,
) -> BatchResult:
    """Analyse every dataset in ``data_dir`` and write the artifacts.

    Args:
        data_dir: Directory scanned with ``config.dataset_patterns``.
        output_dir: Artifact directory; ``None`` selects ``results``.
        config: Analysis settings; defaults to ``DEFAULT_CONFIG``.

    Returns:
        BatchResult describing written files and failures.

    Raises:
        FileNotFoundError: If ``data_dir`` does not exist.
    """
    cfg = config or DEFAULT_CONFIG
    start = perf_counter()
    paths = discover_datasets(data_dir, cfg.dataset_patterns)
    logger.info(f"Found {len(paths)} dataset(s) in {data_dir}")

    batch = BatchResult()
    for path in paths:
        logger.info(f"Processing: {path.name}")
        try:
            analysis = analyze_file(path, config=cfg)
        except Exception as e:
            logger.error(f"Failed to analyse {path.name}: {type(e).__name__}: {e}")
            batch.failures[path.name] = f"{type(e).__name__}: {e}"
            continue

        out_path = _claim_result_path(path, output_dir, cfg.result_suffix, batch)
        if out_path is None:
            continue
        write_result(out_path, analysis.to_dict())
        batch.analyses.append(analysis)
        batch.result_paths[analysis.name] = out_path
        batch.summary.add(analysis)
        logger.info(
            f"{analysis.name}: {analysis.scc.metrics.report()}, "
            f"{analysis.topo.metrics.report()}, "
            f"{analysis.shortest.metrics.report()}, "
            f"{analysis.critical.metrics.report()}"
        )

    batch.summary_path = batch.summary.write_csv(
        summary_path_for_run(output_dir, cfg.summary_filename)
    )
    batch.elapsed = perf_counter() - start
    logger.info(
        f"Batch finished: {len(batch.analyses)} analysed, "
        f"{len(batch.failures)} failed in {batch.elapsed:.3f}s"
    )
    return batch
