#!/usr/bin/env python3
"""
SMC Analysis - Entry Point.

Reads OHLCV candles from a CSV file, runs the structure analyzer and prints
a summary (or the full result as JSON).

    python -m smc_analyzer.apps.analyze_smc candles.csv
    python -m smc_analyzer.apps.analyze_smc candles.csv --json
"""

import argparse
import json
import sys
from dataclasses import replace
from typing import List, Optional

import pandas as pd

from smc_analyzer.display.colors import Colors
from smc_analyzer.display.smc_display import describe, print_smc_summary
from smc_analyzer.engines.candles import CandleSeries
from smc_analyzer.engines.smc_config import SMCConfig
from smc_analyzer.engines.structure_analyzer import StructureAnalyzer
from smc_analyzer.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Smart Money Concepts structure analysis")
    parser.add_argument("csv", help="CSV with time/timestamp, open, high, low, close[, volume]")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    parser.add_argument("--plain", action="store_true", help="Plain text summary (no colors)")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
    parser.add_argument("--lookback", type=int, default=None, help="Swing lookback (default: 5)")
    parser.add_argument(
        "--min-candles", type=int, default=None, help="Minimum candles to analyze (default: 50)"
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")
    return parser


def build_config(args: argparse.Namespace) -> SMCConfig:
    config = SMCConfig.from_env()
    if args.lookback is not None:
        config = replace(config, swing=replace(config.swing, lookback=args.lookback))
    if args.min_candles is not None:
        config = replace(config, min_candles=args.min_candles)
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logger = setup_logging(level=args.log_level)

    colors_were_enabled = Colors.enabled()
    if args.no_color or not sys.stdout.isatty():
        Colors.disable()

    try:
        return _run(args, logger)
    finally:
        # Color mode is process-wide; leave it as we found it
        if colors_were_enabled:
            Colors.enable()


def _run(args: argparse.Namespace, logger) -> int:
    try:
        config = build_config(args)
        series = CandleSeries.from_dataframe(pd.read_csv(args.csv))
    except (OSError, ValueError, pd.errors.ParserError) as e:
        print(f"{Colors.RED}Error: {e}{Colors.RESET}", file=sys.stderr)
        return 1

    if series.dropped:
        logger.warning(f"Dropped {series.dropped} malformed candles from {args.csv}")
    logger.info(f"Analyzing {len(series)} candles from {args.csv}")

    result = StructureAnalyzer(config).analyze(series)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    elif args.plain:
        print(describe(result))
    else:
        print_smc_summary(result)

    return 0


if __name__ == "__main__":
    sys.exit(main())
