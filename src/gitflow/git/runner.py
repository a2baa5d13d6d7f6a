"""Git command adapter.

Every git primitive the flows need goes through a ``Git`` instance. The instance
carries the verbosity chosen on the command line, so tracing is decided by the
context passed around rather than by module state.
"""

import os
import subprocess
import sys
from dataclasses import dataclass
from typing import Optional

from gitflow.ui.output import trace

# Verbosity levels
QUIET = 0
SHOW = 1  # echo each command
DEBUG = 2  # echo command with call site, output and exit status


@dataclass
class GitResult:
    """Outcome of one git invocation."""

    output: str
    success: bool
    returncode: int = 0
    stderr: str = ""

    def lines(self) -> list[str]:
        return [line for line in self.output.split("\n") if line.strip()]


class Git:
    """Runs git commands in a working directory."""

    def __init__(self, verbosity: int = QUIET, cwd: Optional[str] = None):
        self.verbosity = verbosity
        self.cwd = cwd

    def run(self, *args: str) -> GitResult:
        """Run ``git <args>`` and capture stdout. Never raises on non-zero exit."""
        cmd = ["git", *args]
        if self.verbosity >= DEBUG:
            trace(f"[{_call_site()}] {' '.join(cmd)}")
        elif self.verbosity >= SHOW:
            trace(" ".join(cmd))

        result = subprocess.run(cmd, capture_output=True, text=True, cwd=self.cwd)
        output = result.stdout.strip()

        if self.verbosity >= DEBUG:
            if output:
                trace(output)
            if result.stderr.strip():
                trace(result.stderr.strip())
            trace(f"[{result.returncode}]")
        return GitResult(
            output=output,
            success=result.returncode == 0,
            returncode=result.returncode,
            stderr=result.stderr.strip(),
        )

    def output(self, *args: str) -> str:
        """Run and return stripped stdout (empty on failure output-less commands)."""
        return self.run(*args).output

    def succeeds(self, *args: str) -> bool:
        """Run and report whether the command exited 0."""
        return self.run(*args).success


def _call_site() -> str:
    """Return 'module:function:line' of the first caller outside this module."""
    frame = sys._getframe(1)
    here = os.path.abspath(__file__)
    while frame is not None and os.path.abspath(frame.f_code.co_filename) == here:
        frame = frame.f_back
    if frame is None:
        return "?"
    name = os.path.splitext(os.path.basename(frame.f_code.co_filename))[0]
    return f"{name}:{frame.f_code.co_name}:{frame.f_lineno}"
