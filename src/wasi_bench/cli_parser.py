#!/usr/bin/env python3
"""
Command-line interface parser for the benchmark harness.

Defines and parses all command-line arguments for benchmark configuration.
"""

import argparse
import sys
from pathlib import Path

from .benchmark_run import DEFAULT_COMMAND
from .benchmark_results import EXIT_CONFIG_ERROR
from .phases import PHASES


class BenchArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_CONFIG_ERROR, f"{self.prog}: error: {message}\n")


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not an integer") from None
    if number <= 0:
        raise argparse.ArgumentTypeError("Number of iterations must be a positive integer")
    return number


def positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not a number") from None
    if number <= 0:
        raise argparse.ArgumentTypeError("must be a positive number of seconds")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    phase_files = "\n".join(f"  - {phase.csv_name:<22}: {phase.name}" for phase in PHASES)
    parser = BenchArgumentParser(
        prog="wasi-bench",
        description="WASI-NN Inference Benchmark Harness",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  # Run 20 iterations from the binaries folder
  wasi-bench 20 0 --workdir ./binaries

  # Run 5 iterations with Rust backtraces enabled and a 2 minute limit per run
  wasi-bench 5 1 --timeout 120

Output (under <output-root>/<YYYY_MM_DD>/<HH_MM_SS>/):
{phase_files}
  - stats_summary.txt     : Average of every phase
""",
    )

    # Positional arguments
    parser.add_argument("num_iterations", type=positive_int, help="Number of times to run the command")
    parser.add_argument(
        "enable_stack_trace", type=int, help="Nonzero sets RUST_BACKTRACE=1 for the command, 0 disables it"
    )

    # Command configuration
    parser.add_argument(
        "--command", default=DEFAULT_COMMAND, help=f"Inference command to benchmark (default: '{DEFAULT_COMMAND}')"
    )
    parser.add_argument("--workdir", type=Path, default=None, help="Directory to run the command in (default: cwd)")
    parser.add_argument(
        "--timeout", type=positive_float, default=None, help="Seconds before a run is killed (default: no limit)"
    )

    # Output configuration
    parser.add_argument(
        "--output-root", type=Path, default=Path(), help="Directory that receives the dated results (default: cwd)"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR"],
        help="Diagnostic log level on stderr (default: INFO)",
    )

    return parser
