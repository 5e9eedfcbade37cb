#!/usr/bin/env python3
"""
Aggregation context shared by all iterations of a run.

Maps each phase to its running average and its CSV sink, and owns their lifetime.
"""

from collections.abc import Iterable
from contextlib import ExitStack
from pathlib import Path

from .csv_sink import CsvSink
from .metric_sample import MetricSample, PhaseAverage
from .phases import PHASES, Phase
from .running_average import RunningAverageAccumulator


class AggregationContext:
    """
    Owns the per-phase accumulators and CSV sinks for a single benchmark run.
    """

    def __init__(self, sinks: dict[str, CsvSink], phases: tuple[Phase, ...] = PHASES):
        self.phases = phases
        self.sinks = sinks
        self.accumulator = RunningAverageAccumulator(phase.name for phase in phases)
        self._exit_stack = ExitStack()
        for sink in sinks.values():
            self._exit_stack.callback(sink.close)

    @classmethod
    def open(cls, run_dir: Path, phases: tuple[Phase, ...] = PHASES) -> "AggregationContext":
        """
        Open one CSV sink per phase in run_dir and write every header.

        If any file fails to open, the ones already opened are closed before the
        error propagates.
        """
        with ExitStack() as stack:
            sinks = {}
            for phase in phases:
                sinks[phase.name] = stack.enter_context(CsvSink(Path(run_dir) / phase.csv_name))
            for sink in sinks.values():
                sink.write_header()
            stack.pop_all()
        return cls(sinks, phases)

    def record(self, phase: Phase, sample: MetricSample) -> PhaseAverage:
        """Append the sample to the phase's CSV and merge it into its running average."""
        self.sinks[phase.name].write_sample(sample)
        return self.accumulator.record(phase.name, sample)

    def record_all(self, samples: Iterable[tuple[Phase, MetricSample]]) -> int:
        """Record every (phase, sample) pair of one iteration. Returns how many were recorded."""
        recorded = 0
        for phase, sample in samples:
            self.record(phase, sample)
            recorded += 1
        return recorded

    @property
    def averages(self) -> dict[str, PhaseAverage]:
        return self.accumulator.averages

    def rows_written(self) -> dict[str, int]:
        return {name: sink.rows_written for name, sink in self.sinks.items()}

    def close(self) -> None:
        self._exit_stack.close()

    def __enter__(self) -> "AggregationContext":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
