#!/usr/bin/env python3
"""
Per-phase CSV output.
"""

import csv
from pathlib import Path

from .exceptions import BenchmarkConfigError
from .metric_sample import MetricSample

CSV_HEADER = ["user_time", "system_time", "cpu_percent", "wallclock_time", "max_rss"]


def format_row(sample: MetricSample) -> list[str]:
    """Format a sample as CSV cells: three decimals for times, a '%' suffix on CPU."""
    return [
        f"{sample.user_time:.3f}",
        f"{sample.system_time:.3f}",
        f"{sample.cpu_usage:.2f}%",
        f"{sample.wall_clock:.3f}",
        f"{sample.max_rss:d}",
    ]


class CsvSink:
    """
    Append-mode CSV file that receives one row per well-formed sample of a phase.

    The file stays open for the lifetime of the run. Rows are flushed as written.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.rows_written = 0
        try:
            self._handle = self.path.open("a", encoding="utf-8", newline="")
        except OSError as e:
            raise BenchmarkConfigError(f"Failed to open CSV file {self.path}: {e}") from e
        self._writer = csv.writer(self._handle, lineterminator="\n")

    def write_header(self) -> None:
        try:
            self._writer.writerow(CSV_HEADER)
            self._handle.flush()
        except OSError as e:
            raise BenchmarkConfigError(f"Failed to write CSV header to {self.path}: {e}") from e

    def write_sample(self, sample: MetricSample) -> None:
        self._writer.writerow(format_row(sample))
        self._handle.flush()
        self.rows_written += 1

    def close(self) -> None:
        if not self._handle.closed:
            self._handle.close()

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def __enter__(self) -> "CsvSink":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
