"""Pytest configuration and fixtures for the benchmark harness tests."""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

import pytest
from loguru import logger

from wasi_bench.benchmark_run import RunConfig
from wasi_bench.phases import PHASES

FAKE_TOOL = Path(__file__).parent / "doubles" / "fake_inference_tool.py"

# Phase names as the inference module prints them in its block headers
REPORT_NAMES = {
    "Load Model": "loadmodel",
    "Read Image (Red Box)": "readimg",
    "Red Box": "RED BOX Phase",
    "Read Image (Green Box)": "Pre-processing",
    "Inference": "Inference",
    "Postprocessing": "Post-processing",
    "Green Box": "GREEN BOX Phase",
    "Total": "Total",
}

TERMINATOR = "=" * 39


def _make_block(
    name: str,
    wall_clock: str = "12.5ms",
    user_time: str = "10ms",
    system_time: str = "2ms",
    max_rss: str = "40960 bytes",
    cpu_usage: str = "96%",
    omit: tuple[str, ...] = (),
    terminated: bool = True,
) -> str:
    lines = [f"============= {name} Metrics ============="]
    fields = {
        "wall_clock": f"Wall Clock Time: {wall_clock}",
        "user_time": f"User time: {user_time}",
        "system_time": f"System time: {system_time}",
        "max_rss": f"Max RSS: {max_rss}",
        "cpu_usage": f"CPU Usage: {cpu_usage}",
    }
    lines.extend(line for field, line in fields.items() if field not in omit)
    if terminated:
        lines.append(TERMINATOR)
    return "\n".join(lines) + "\n"


@pytest.fixture
def make_block():
    """Return a builder for one metric block in the inference module's format."""
    return _make_block


@pytest.fixture
def full_report() -> str:
    """A report as printed by the inference module: five operations, two phases, total."""
    operations = [_make_block(REPORT_NAMES[name]) for name in ("Load Model", "Read Image (Red Box)")]
    operations.append(_make_block("envload"))
    operations.extend(
        _make_block(REPORT_NAMES[name]) for name in ("Read Image (Green Box)", "Inference", "Postprocessing")
    )
    phases = [_make_block(REPORT_NAMES[name]) for name in ("Red Box", "Green Box")]
    return (
        "Loading model...\n"
        + "".join(operations)
        + "\n=========== Phase Metrics ===========\n"
        + "".join(phases)
        + "====================================\n\n"
        + _make_block(REPORT_NAMES["Total"])
    )


@pytest.fixture
def write_report(tmp_path):
    """Write report text to a file and return its path."""
    counter = {"n": 0}

    def _write(text: str) -> Path:
        counter["n"] += 1
        path = tmp_path / f"report_{counter['n']}.txt"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def fake_tool_command(tmp_path):
    """Build a command line that runs the fake inference tool."""
    counter_file = tmp_path / "invocations.txt"

    def _command(reports=(), fail_on=(), sleep: float = 0.0, print_env=()) -> list[str]:
        command = [sys.executable, str(FAKE_TOOL), "--counter", str(counter_file)]
        for report in reports:
            command.extend(["--report", str(report)])
        for invocation in fail_on:
            command.extend(["--fail-on", str(invocation)])
        if sleep:
            command.extend(["--sleep", str(sleep)])
        for name in print_env:
            command.extend(["--print-env", name])
        return command

    return _command


@pytest.fixture
def started_at() -> datetime:
    return datetime(2026, 10, 17, 9, 30, 5)


@pytest.fixture
def make_config(tmp_path, started_at):
    """Build a RunConfig that writes under tmp_path/results."""

    def _config(command: list[str], iterations: int = 1, **kwargs) -> RunConfig:
        return RunConfig(
            iterations=iterations,
            command=command,
            output_root=tmp_path / "results",
            started_at=started_at,
            **kwargs,
        )

    return _config


@pytest.fixture
def phase_by_name():
    return {phase.name: phase for phase in PHASES}


@pytest.fixture
def log_records():
    """Capture loguru records emitted during the test."""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore a plain stderr handler after tests that reconfigure loguru."""
    yield
    logger.remove()
    logger.add(lambda message: sys.stderr.write(message), level="DEBUG")
