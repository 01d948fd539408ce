"""tiletempo/reports/cli — CLI entry point for timing a level file.

Usage::

    python -m tiletempo.reports.cli "My Level.adofai"
    python -m tiletempo.reports.cli level.adofai --preview 50
    python -m tiletempo.reports.cli level.adofai -o results/level.json
    python -m tiletempo.reports.cli level.adofai --compare results/level.json
"""

from __future__ import annotations

import argparse
import logging
import sys

from tiletempo.level import LevelLoadError
from tiletempo.logging_config import setup_logging
from tiletempo.reports.compare import compare_timings
from tiletempo.reports.config import ReportConfig, load_config
from tiletempo.reports.output import (
    print_auto_offset,
    print_level_info,
    print_timings,
    save_results,
)
from tiletempo.reports.runner import run_level


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tiletempo", description="Compute per-tile timings of a level file",
    )
    parser.add_argument(
        "level", nargs="?", help="Level file (.adofai)",
    )
    parser.add_argument(
        "--config", help="YAML file with report options",
    )
    parser.add_argument(
        "--preview", type=int, help="Number of tile timings to print",
    )
    parser.add_argument(
        "--output", "-o", help="Output file path for results JSON",
    )
    parser.add_argument(
        "--no-timings", action="store_true",
        help="Leave the per-tile timing list out of the JSON output",
    )
    parser.add_argument(
        "--compare", help="Compare against baseline results JSON",
    )
    parser.add_argument(
        "--tolerance", type=float, help="Allowed per-tile drift in ms for --compare",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging",
    )
    parser.add_argument(
        "--log-file", help="Also write log records to this file",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Time a level from the command line."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.level:
        parser.print_usage()
        sys.exit(2)

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        log_file=args.log_file,
    )

    try:
        config = load_config(args.config) if args.config else ReportConfig()
    except (OSError, ValueError) as exc:
        parser.error(f"invalid config: {exc}")

    # Flags override config values
    if args.preview is not None:
        if args.preview < 0:
            parser.error("--preview must be >= 0")
        config.preview_tiles = args.preview
    if args.output:
        config.output = args.output
    if args.no_timings:
        config.include_timings = False
    if args.tolerance is not None:
        config.compare_tolerance_ms = args.tolerance

    try:
        result = run_level(args.level, metrics=config.metrics)
    except LevelLoadError as exc:
        print(f"Error loading level: {exc}", file=sys.stderr)
        sys.exit(1)
    except ValueError as exc:
        parser.error(str(exc))

    print_level_info(result.info)
    print_timings(result.timings, config.preview_tiles)
    print_auto_offset(result.info.auto_offset)

    if config.output:
        save_results(result, config.output, include_timings=config.include_timings)

    if args.compare:
        exit_code = compare_timings(
            result, args.compare, tolerance_ms=config.compare_tolerance_ms,
        )
        sys.exit(exit_code)

    sys.exit(0)


if __name__ == "__main__":
    main()
