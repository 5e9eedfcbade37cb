#!/usr/bin/env python3
"""
Metric data model.

MetricSample is one parsed observation; PhaseAverage is the running mean kept per phase.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class MetricSample:
    """
    One observation for one phase in one iteration.

    Times are in milliseconds, cpu_usage in percent, max_rss in the tool's native units.
    """

    user_time: float
    system_time: float
    cpu_usage: float
    wall_clock: float
    max_rss: int


@dataclass
class PhaseAverage:
    """
    Running mean of every sample merged for one phase.

    count is the number of samples merged so far.
    """

    name: str
    user_time: float = 0.0
    system_time: float = 0.0
    cpu_usage: float = 0.0
    wall_clock: float = 0.0
    max_rss: int = 0
    count: int = 0
