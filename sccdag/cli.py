"""Command-line interface for sccdag."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from sccdag.batch import analyze_file, run_batch
from sccdag.config import DEFAULT_CONFIG, AnalysisConfig
from sccdag.io import dumps_result
from sccdag.logging import configure_verbosity, get_logger

logger = get_logger(__name__)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s"; 75.2 -> "1m 15.2s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    if seconds < 60.0:
        return f"{seconds:.2f} s"
    minutes = int(seconds // 60)
    rem = seconds - minutes * 60
    return f"{minutes}m {rem:.1f}s"


def _plural(n: int, singular: str, plural: Optional[str] = None) -> str:
    if n == 1:
        return singular
    return plural or (singular + "s")


def _run(
    data_dir: Path,
    output_dir: Optional[Path],
    stdout: bool,
    config: AnalysisConfig,
) -> None:
    """Analyse a directory of datasets and write result files.

    Exits with status 1 when the directory is missing or any dataset fails.
    """
    logger.info(f"Loading datasets from: {data_dir}")
    try:
        batch = run_batch(data_dir, output_dir=output_dir, config=config)
    except FileNotFoundError as e:
        logger.error(str(e))
        print(f"❌ ERROR: {e}")
        sys.exit(1)

    table = batch.summary.format_console()
    if table:
        print(table)
    if stdout:
        for analysis in batch.analyses:
            print(dumps_result(analysis.to_dict()))

    n_ok = len(batch.analyses)
    print(
        f"✅ Analysed {n_ok} {_plural(n_ok, 'dataset')} in "
        f"{_format_duration(batch.elapsed)}"
    )
    print(f"✅ Metrics summary written to: {batch.summary_path}")

    if not batch.ok:
        for name, message in batch.failures.items():
            print(f"❌ {name}: {message}")
        sys.exit(1)


def _inspect(dataset: Path, source: Optional[int], config: AnalysisConfig) -> None:
    """Analyse a single dataset and print its result document."""
    try:
        analysis = analyze_file(dataset, config=config, source=source)
    except FileNotFoundError:
        logger.error(f"Dataset file not found: {dataset}")
        print(f"❌ ERROR: Dataset file not found: {dataset}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to analyse dataset: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Failed to analyse dataset: {type(e).__name__}: {e}")
        sys.exit(1)

    print(dumps_result(analysis.to_dict()))


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``sccdag`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="sccdag",
        description="Analyse graphs: SCCs, condensation, topological order and DAG paths.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{run,inspect}",
        help="Available commands",
    )

    run_parser = subparsers.add_parser("run", help="Analyse every dataset in a directory")
    run_parser.add_argument(
        "data_dir",
        type=Path,
        nargs="?",
        default=Path("data"),
        help="Directory with JSON/YAML datasets (default: ./data)",
    )
    run_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Directory for result files and metrics_summary.csv (default: ./results)",
    )
    run_parser.add_argument(
        "--stdout",
        action="store_true",
        help="Also print every result document to stdout",
    )
    run_parser.add_argument(
        "--no-strict",
        action="store_true",
        help="Return a partial topological order instead of failing on a cyclic condensation",
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Analyse one dataset and print its result"
    )
    inspect_parser.add_argument("dataset", type=Path, help="Path to a JSON/YAML dataset")
    inspect_parser.add_argument(
        "--source",
        "-s",
        type=int,
        default=None,
        help="Override the dataset's source node",
    )

    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    configure_verbosity(verbose=args.verbose, quiet=args.quiet)
    if args.verbose:
        logger.debug("Debug logging enabled")

    if args.command == "run":
        config = DEFAULT_CONFIG.with_overrides(
            strict_acyclic=False if args.no_strict else None
        )
        _run(args.data_dir, args.output, args.stdout, config)
    elif args.command == "inspect":
        _inspect(args.dataset, args.source, DEFAULT_CONFIG)


if __name__ == "__main__":
    main()
