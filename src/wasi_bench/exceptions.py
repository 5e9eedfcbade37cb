#!/usr/bin/env python3
"""
Exception types raised by the benchmark harness.
"""


class BenchmarkError(Exception):
    """Base class for all harness errors."""


class BenchmarkConfigError(BenchmarkError):
    """Fatal setup problem: bad arguments, unwritable output directory or CSV file."""


class IterationFailedError(BenchmarkError):
    """A single iteration produced no usable report. The run continues."""

    def __init__(self, iteration: int, reason: str):
        super().__init__(f"Iteration {iteration} failed: {reason}")
        self.iteration = iteration
        self.reason = reason
