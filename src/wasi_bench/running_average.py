#!/usr/bin/env python3
"""
Running average accumulation.

Maintains one PhaseAverage per phase, updated incrementally as samples arrive.
History is never stored or replayed.
"""

from collections.abc import Iterable

from .metric_sample import MetricSample, PhaseAverage

FLOAT_FIELDS = ("user_time", "system_time", "cpu_usage", "wall_clock")


def running_mean(average: float, current_count: int, value: float) -> float:
    """Online mean where value is the current_count-th observation (1-based)."""
    if current_count == 1:
        return value
    return ((current_count - 1) * average + value) / current_count


def running_mean_int(average: int, current_count: int, value: int) -> int:
    """
    Integer online mean used for max RSS.

    The division truncates toward zero, so the result can trail the exact mean.
    """
    if current_count == 1:
        return value
    total = (current_count - 1) * average + value
    quotient = abs(total) // current_count
    return quotient if total >= 0 else -quotient


class RunningAverageAccumulator:
    """
    Holds the running average of every phase for the whole benchmark run.
    """

    def __init__(self, phase_names: Iterable[str]):
        self.averages: dict[str, PhaseAverage] = {name: PhaseAverage(name=name) for name in phase_names}

    def update(self, phase: str, current_count: int, new_sample: MetricSample) -> PhaseAverage:
        """Merge the current_count-th sample of a phase and return its updated average."""
        if current_count < 1:
            raise ValueError(f"current_count must be >= 1, got {current_count}")

        average = self.averages[phase]
        for field_name in FLOAT_FIELDS:
            updated = running_mean(getattr(average, field_name), current_count, getattr(new_sample, field_name))
            setattr(average, field_name, updated)
        average.max_rss = running_mean_int(average.max_rss, current_count, new_sample.max_rss)
        average.count = current_count
        return average

    def record(self, phase: str, new_sample: MetricSample) -> PhaseAverage:
        """Merge the next sample of a phase, numbering it from the phase's own count."""
        return self.update(phase, self.count(phase) + 1, new_sample)

    def count(self, phase: str) -> int:
        return self.averages[phase].count
