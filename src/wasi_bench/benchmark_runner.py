#!/usr/bin/env python3
"""
Benchmark runner and iteration loop.

Runs the external command once per iteration, feeds each report through the
parser, accumulators and CSV sinks, then reports the final averages.
"""

from pathlib import Path

from loguru import logger

from .aggregation_context import AggregationContext
from .benchmark_results import RunReport
from .benchmark_run import RunConfig
from .command_runner import describe_command, run_inference_command
from .exceptions import IterationFailedError
from .metric_sample import MetricSample
from .metrics_parser import scan_report
from .phases import PHASES, Phase
from .summary_reporter import print_summary, save_summary


def read_report(iteration: int, path: Path, phases: tuple[Phase, ...] = PHASES) -> list[tuple[Phase, MetricSample]]:
    """Parse the whole scratch file so an iteration's samples can be merged together."""
    try:
        with Path(path).open("r", encoding="utf-8", errors="replace") as handle:
            return list(scan_report(handle, phases))
    except OSError as e:
        raise IterationFailedError(iteration, f"no stats summary file found at {path}") from e


def run_iteration(config: RunConfig, context: AggregationContext, iteration: int) -> int:
    """
    Execute one iteration and record its samples.

    Returns the number of samples recorded. Raises IterationFailedError when the
    iteration has to be skipped.
    """
    print(f"Running iteration {iteration}")
    print(f"Running command, {describe_command(config.command, config.summary_path, config.enable_stack_trace)}")

    run_inference_command(
        iteration,
        config.command,
        config.summary_path,
        workdir=config.workdir,
        enable_stack_trace=config.enable_stack_trace,
        timeout=config.timeout,
    )
    samples = read_report(iteration, config.summary_path, context.phases)
    recorded = context.record_all(samples)
    logger.debug(f"Iteration {iteration}: recorded {recorded} phase samples")
    return recorded


def execute_run(config: RunConfig, phases: tuple[Phase, ...] = PHASES) -> RunReport:
    """
    Run every iteration and write the CSV files and summary.

    Raises BenchmarkConfigError before the first iteration if the output
    directory or a CSV file cannot be created.
    """
    run_dir = config.create_run_directory()
    logger.info(f"Writing results to {run_dir}")
    logger.debug(f"Run configuration: {config.to_dict()}")

    with AggregationContext.open(run_dir, phases) as context:
        report = RunReport(run_dir=run_dir, averages=context.averages)
        try:
            for iteration in range(1, config.iterations + 1):
                try:
                    run_iteration(config, context, iteration)
                except IterationFailedError as e:
                    logger.warning(f"{e}; skipping")
                    report.skipped_iterations.append(iteration)
                    continue
                report.completed_iterations.append(iteration)
        except KeyboardInterrupt:
            logger.warning("Benchmark interrupted by user")
            report.interrupted = True
        report.rows_written = context.rows_written()

    if report.interrupted:
        return report

    print("Benchmarking completed. CSV files generated")
    print_summary(report.averages, phases)

    try:
        save_summary(config.summary_path, report.averages, phases)
    except OSError as e:
        logger.error(f"Failed to open stats file for writing: {e}")

    if report.skipped_iterations:
        logger.info(
            f"{len(report.completed_iterations)} of {config.iterations} iterations recorded, "
            f"skipped: {', '.join(map(str, report.skipped_iterations))}"
        )
    return report


def run_benchmarks(config: RunConfig) -> int:
    """Execute the benchmark described by config and return the process exit code."""
    return execute_run(config).exit_code
