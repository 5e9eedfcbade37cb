#!/usr/bin/env python3
"""
Final report rendering.

Prints the headline phases to the console and persists every phase average to the
summary file.
"""

from collections.abc import Mapping
from pathlib import Path

from .metric_sample import PhaseAverage
from .phases import PHASES, Phase


def format_phase_average(average: PhaseAverage, label: str | None = None) -> str:
    """Render one phase average as a block of text, titled with label or the phase name."""
    title = label or average.name
    return (
        f"===={title} Metrics====\n"
        f"Average Wall Clock Time: {average.wall_clock:.3f} ms\n"
        f"Average User Time: {average.user_time:.3f} ms\n"
        f"Average System Time: {average.system_time:.3f} ms\n"
        f"Average Cpu Usage: {average.cpu_usage:.2f} %\n"
        f"Average Max RSS: {average.max_rss:d}\n"
    )


def print_summary(averages: Mapping[str, PhaseAverage], phases: tuple[Phase, ...] = PHASES) -> None:
    """Print the phases that carry a console label."""
    for phase in phases:
        if phase.console_label is None:
            continue
        print(format_phase_average(averages[phase.name], phase.console_label), end="")


def render_summary(averages: Mapping[str, PhaseAverage], phases: tuple[Phase, ...] = PHASES) -> str:
    """Render all phases, each followed by a blank line."""
    return "".join(format_phase_average(averages[phase.name]) + "\n" for phase in phases)


def save_summary(path: Path, averages: Mapping[str, PhaseAverage], phases: tuple[Phase, ...] = PHASES) -> None:
    """Overwrite path with the aggregate report of every phase."""
    Path(path).write_text(render_summary(averages, phases), encoding="utf-8")
