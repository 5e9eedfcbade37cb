#!/usr/bin/env python3
"""
Parser for the inference tool's textual performance report.

The report is a sequence of blocks. Each block opens with a header line naming a phase,
carries five labeled metric lines in any order, and closes with a row of '=' characters:

    ============= Inference Metrics =============
    Wall Clock Time: 12.5ms
    User time: 10ms
    System time: 2ms
    Max RSS: 40960 bytes
    CPU Usage: 96%
    =======================================

This module is the only place that knows the text format. Everything downstream
works on MetricSample instances.
"""

import re
from collections.abc import Iterable, Iterator

from loguru import logger

from .metric_sample import MetricSample
from .phases import PHASES, Phase, match_header

WALL_CLOCK_LABEL = "Wall Clock Time:"
USER_TIME_LABEL = "User time:"
SYSTEM_TIME_LABEL = "System time:"
CPU_USAGE_LABEL = "CPU Usage:"
MAX_RSS_LABEL = "Max RSS:"

REQUIRED_FIELDS = frozenset({"wall_clock", "user_time", "system_time", "cpu_usage", "max_rss"})

_NUMBER = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
_TIME_PATTERN = re.compile(rf"\s*({_NUMBER})\s*([A-Za-zµμ]+)?")
_PERCENT_PATTERN = re.compile(rf"\s*({_NUMBER})")
_INTEGER_PATTERN = re.compile(r"\s*([-+]?\d+)")
_TERMINATOR_PATTERN = re.compile(r"^\s*={3,}\s*$")

# Multipliers that normalize a time value to milliseconds
_TIME_UNIT_SCALE = {
    "ms": 1.0,
    "s": 1000.0,
    "sec": 1000.0,
    "secs": 1000.0,
    "seconds": 1000.0,
    "µs": 1e-3,
    "μs": 1e-3,
    "us": 1e-3,
    "microseconds": 1e-3,
    "ns": 1e-6,
    "nanoseconds": 1e-6,
}


def _value_after(line: str, label: str) -> str:
    return line[line.index(label) + len(label):]


def parse_time_value(text: str) -> float | None:
    """
    Parse a number with an optional time unit and normalize it to milliseconds.

    Unknown units and a missing unit leave the value unscaled.
    """
    match = _TIME_PATTERN.match(text)
    if match is None:
        return None
    value = float(match.group(1))
    unit = match.group(2)
    if unit is None:
        return value
    return value * _TIME_UNIT_SCALE.get(unit.lower(), 1.0)


def parse_percent_value(text: str) -> float | None:
    """Parse a bare percentage; a trailing '%' or any other text is ignored."""
    match = _PERCENT_PATTERN.match(text)
    return float(match.group(1)) if match else None


def parse_integer_value(text: str) -> int | None:
    """Parse a leading integer; trailing units such as 'bytes' are ignored."""
    match = _INTEGER_PATTERN.match(text)
    return int(match.group(1)) if match else None


def is_terminator(line: str) -> bool:
    return bool(_TERMINATOR_PATTERN.match(line))


def parse_metrics_block(lines: Iterator[str]) -> MetricSample | None:
    """
    Consume one metric block from an iterator positioned just after its header line.

    Reads up to and including the terminator row, or to the end of the stream.
    Returns None when any of the five fields is missing or unparseable; such a
    block must not be recorded.
    """
    values: dict[str, float | int] = {}

    for line in lines:
        if WALL_CLOCK_LABEL in line:
            field, value = "wall_clock", parse_time_value(_value_after(line, WALL_CLOCK_LABEL))
        elif USER_TIME_LABEL in line:
            field, value = "user_time", parse_time_value(_value_after(line, USER_TIME_LABEL))
        elif SYSTEM_TIME_LABEL in line:
            field, value = "system_time", parse_time_value(_value_after(line, SYSTEM_TIME_LABEL))
        elif CPU_USAGE_LABEL in line:
            field, value = "cpu_usage", parse_percent_value(_value_after(line, CPU_USAGE_LABEL))
        elif MAX_RSS_LABEL in line:
            field, value = "max_rss", parse_integer_value(_value_after(line, MAX_RSS_LABEL))
        elif is_terminator(line):
            break
        else:
            continue

        if value is None:
            logger.debug(f"Unparseable metric line: {line.rstrip()!r}")
            continue
        values[field] = value

    missing = REQUIRED_FIELDS - values.keys()
    if missing:
        logger.debug(f"Discarding incomplete block, missing: {', '.join(sorted(missing))}")
        return None

    return MetricSample(
        user_time=float(values["user_time"]),
        system_time=float(values["system_time"]),
        cpu_usage=float(values["cpu_usage"]),
        wall_clock=float(values["wall_clock"]),
        max_rss=int(values["max_rss"]),
    )


def scan_report(lines: Iterable[str], phases: tuple[Phase, ...] = PHASES) -> Iterator[tuple[Phase, MetricSample]]:
    """
    Walk a report top to bottom and yield (phase, sample) for every well-formed block.

    A header line hands the following lines to parse_metrics_block, which shares
    the same iterator, so scanning resumes right after the block's terminator.
    """
    line_iter = iter(lines)
    for line in line_iter:
        phase = match_header(line, phases)
        if phase is None:
            continue
        logger.debug(f"Found block for phase '{phase.name}'")
        sample = parse_metrics_block(line_iter)
        if sample is not None:
            yield phase, sample


def parse_report_text(text: str, phases: tuple[Phase, ...] = PHASES) -> list[tuple[Phase, MetricSample]]:
    """Parse an in-memory report."""
    return list(scan_report(text.splitlines(), phases))
