#!/usr/bin/env python3
"""
Benchmark results storage.

Contains the outcome of a completed (or interrupted) benchmark run.
"""

from dataclasses import dataclass, field
from pathlib import Path

from .metric_sample import PhaseAverage

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_INTERRUPTED = 130


@dataclass
class RunReport:
    """
    Contains the results of a whole benchmark run.
    """

    run_dir: Path
    averages: dict[str, PhaseAverage]

    # Iteration bookkeeping
    completed_iterations: list[int] = field(default_factory=list)
    skipped_iterations: list[int] = field(default_factory=list)
    rows_written: dict[str, int] = field(default_factory=dict)

    interrupted: bool = False

    @property
    def exit_code(self) -> int:
        return EXIT_INTERRUPTED if self.interrupted else EXIT_OK

    @property
    def total_rows(self) -> int:
        return sum(self.rows_written.values())
