#!/usr/bin/env python3
"""
Registry of the benchmarked workload phases.

Each phase knows the header substring that opens its block in the tool's report,
the CSV file its samples go to, and the label used in the console summary.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Phase:
    """A named stage of the benchmarked workload."""

    name: str  # e.g., "Inference", "Red Box"
    header: str  # substring that starts the phase's block in the report
    csv_name: str  # e.g., "inference.csv"
    console_label: str | None = None  # None: not printed on the console summary


PHASES: tuple[Phase, ...] = (
    Phase("Load Model", "loadmodel Metrics", "loadmodel.csv", "Load Model"),
    Phase("Read Image (Red Box)", "readimg Metrics", "readimg.csv", "Read Image"),
    Phase("Red Box", "RED BOX Phase Metrics", "redbox.csv"),
    Phase("Read Image (Green Box)", "Pre-processing Metrics", "readimg_greenbox.csv", "Pre Processing"),
    Phase("Inference", "Inference Metrics", "inference.csv", "Inference"),
    Phase("Postprocessing", "Post-processing Metrics", "postprocessing.csv", "Post Processing"),
    Phase("Green Box", "GREEN BOX Phase Metrics", "greenbox.csv"),
    Phase("Total", "Total Metrics", "total.csv"),
)


def get_phase_names() -> list[str]:
    """Get list of phase names in report order."""
    return [phase.name for phase in PHASES]


def get_phase(name: str) -> Phase:
    """Look up a phase by name."""
    for phase in PHASES:
        if phase.name == name:
            return phase
    raise ValueError(f"Unknown phase: {name}. Available: {', '.join(get_phase_names())}")


def match_header(line: str, phases: tuple[Phase, ...] = PHASES) -> Phase | None:
    """Return the first phase whose header substring occurs in the line."""
    for phase in phases:
        if phase.header in line:
            return phase
    return None
