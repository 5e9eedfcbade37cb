#!/usr/bin/env python3
"""
Benchmark run configuration and output layout.

Defines the RunConfig class that encapsulates all benchmark execution parameters
and the per-run directory the results are written to.
"""

import shlex
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from .exceptions import BenchmarkConfigError

DEFAULT_COMMAND = "./wasmtime-test wasi-nn-module.wasm"
SUMMARY_FILENAME = "stats_summary.txt"


@dataclass
class RunConfig:
    """
    Configuration and output layout for a benchmark run.

    The run directory is <output_root>/<YYYY_MM_DD>/<HH_MM_SS>, taken from started_at.
    """

    iterations: int
    enable_stack_trace: bool = False

    # External command
    command: list[str] = field(default_factory=lambda: shlex.split(DEFAULT_COMMAND))
    workdir: Path | None = None  # None: current directory
    timeout: float | None = None  # seconds; None waits forever

    # Output
    output_root: Path = field(default_factory=Path)
    started_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if self.iterations <= 0:
            raise BenchmarkConfigError("Number of iterations must be a positive integer")
        if not self.command:
            raise BenchmarkConfigError("Command must not be empty")
        if self.timeout is not None and self.timeout <= 0:
            raise BenchmarkConfigError("Timeout must be a positive number of seconds")

    @classmethod
    def from_args(cls, args) -> "RunConfig":
        """Build a configuration from parsed command-line arguments."""
        try:
            command = shlex.split(args.command)
        except ValueError as e:
            raise BenchmarkConfigError(f"Invalid --command: {e}") from e
        return cls(
            iterations=args.num_iterations,
            enable_stack_trace=args.enable_stack_trace != 0,
            command=command,
            workdir=args.workdir,
            timeout=args.timeout,
            output_root=args.output_root,
        )

    @property
    def date_dir(self) -> Path:
        return self.output_root / self.started_at.strftime("%Y_%m_%d")

    @property
    def run_dir(self) -> Path:
        return self.date_dir / self.started_at.strftime("%H_%M_%S")

    @property
    def summary_path(self) -> Path:
        """Scratch file for each iteration's raw output, and the final aggregate report."""
        return self.run_dir / SUMMARY_FILENAME

    def create_run_directory(self) -> Path:
        """Create the date and time directories; existing ones are reused."""
        try:
            self.date_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BenchmarkConfigError(f"Failed to create date directory {self.date_dir}: {e}") from e
        try:
            self.run_dir.mkdir(exist_ok=True)
        except OSError as e:
            raise BenchmarkConfigError(f"Failed to create time directory inside date folder {self.run_dir}: {e}") from e
        return self.run_dir

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "iterations": self.iterations,
            "enable_stack_trace": self.enable_stack_trace,
            "command": self.command,
            "workdir": str(self.workdir) if self.workdir else None,
            "timeout": self.timeout,
            "output_root": str(self.output_root),
            "started_at": self.started_at.isoformat(),
            "run_dir": str(self.run_dir),
        }
