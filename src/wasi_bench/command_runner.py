#!/usr/bin/env python3
"""
External inference command execution.

Runs the benchmarked binary once, with its stdout and stderr redirected to the
scratch report file.
"""

import os
import shlex
import subprocess
from pathlib import Path

from .exceptions import IterationFailedError

STACK_TRACE_ENV_VAR = "RUST_BACKTRACE"


def build_environment(enable_stack_trace: bool) -> dict[str, str]:
    env = os.environ.copy()
    if enable_stack_trace:
        env[STACK_TRACE_ENV_VAR] = "1"
    return env


def describe_command(command: list[str], output_path: Path, enable_stack_trace: bool = False) -> str:
    """Render the command as the equivalent shell line, for the console."""
    prefix = f"{STACK_TRACE_ENV_VAR}=1 " if enable_stack_trace else ""
    return f"{prefix}{shlex.join(command)} > {shlex.quote(str(output_path))}"


def run_inference_command(
    iteration: int,
    command: list[str],
    output_path: Path,
    *,
    workdir: Path | None = None,
    enable_stack_trace: bool = False,
    timeout: float | None = None,
) -> None:
    """
    Run the command to completion, truncating output_path and writing its combined output there.

    Raises IterationFailedError on a non-zero exit status, a command that cannot be
    started, or a timeout. The output file is closed in every case.
    """
    try:
        with Path(output_path).open("w", encoding="utf-8") as handle:
            result = subprocess.run(
                command,
                cwd=str(workdir) if workdir else None,
                env=build_environment(enable_stack_trace),
                stdout=handle,
                stderr=subprocess.STDOUT,
                timeout=timeout,
                check=False,
            )
    except subprocess.TimeoutExpired as e:
        raise IterationFailedError(iteration, f"command timed out after {timeout}s") from e
    except OSError as e:
        raise IterationFailedError(iteration, f"could not run {command[0]}: {e}") from e

    if result.returncode != 0:
        raise IterationFailedError(iteration, f"command exited with status {result.returncode}")
