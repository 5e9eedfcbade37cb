#!/usr/bin/env python3
"""
WASI-NN Benchmark Harness - Main Entry Point

Repeatedly runs the inference binary, averages the per-phase metrics it reports,
and writes per-iteration CSV files plus a summary.
"""

import sys

from loguru import logger

from .benchmark_results import EXIT_CONFIG_ERROR
from .benchmark_run import RunConfig
from .benchmark_runner import run_benchmarks
from .cli_parser import create_parser
from .exceptions import BenchmarkConfigError

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}"


def configure_logging(level: str = "INFO") -> None:
    """Send diagnostics to stderr at the given level."""
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the benchmark harness."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = RunConfig.from_args(args)
        return run_benchmarks(config)
    except BenchmarkConfigError as e:
        logger.error(str(e))
        return EXIT_CONFIG_ERROR


if __name__ == "__main__":
    sys.exit(main())
