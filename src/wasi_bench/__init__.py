#!/usr/bin/env python3
"""
Benchmark harness for WASI-NN inference binaries.

Runs an external inference command repeatedly, parses the per-phase metric blocks
it prints, and keeps running averages and per-iteration CSV records.
"""

from .aggregation_context import AggregationContext
from .benchmark_results import RunReport
from .benchmark_run import RunConfig
from .benchmark_runner import execute_run, run_benchmarks
from .cli_parser import create_parser
from .csv_sink import CSV_HEADER, CsvSink
from .exceptions import BenchmarkConfigError, BenchmarkError, IterationFailedError
from .metric_sample import MetricSample, PhaseAverage
from .metrics_parser import parse_metrics_block, parse_report_text, scan_report
from .phases import PHASES, Phase, get_phase, get_phase_names
from .running_average import RunningAverageAccumulator
from .summary_reporter import format_phase_average, print_summary, save_summary

__all__ = [
    "CSV_HEADER",
    "PHASES",
    "AggregationContext",
    "BenchmarkConfigError",
    "BenchmarkError",
    "CsvSink",
    "IterationFailedError",
    "MetricSample",
    "Phase",
    "PhaseAverage",
    "RunConfig",
    "RunReport",
    "RunningAverageAccumulator",
    "create_parser",
    "execute_run",
    "format_phase_average",
    "get_phase",
    "get_phase_names",
    "parse_metrics_block",
    "parse_report_text",
    "print_summary",
    "run_benchmarks",
    "save_summary",
    "scan_report",
]
