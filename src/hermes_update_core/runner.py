"""External command execution."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Protocol, Sequence

from .errors import CommandError

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Outcome of one external command."""
    args: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = field(default="", repr=False)


class CommandRunner(Protocol):
    """Runs a command line in a working directory."""

    def run(self, args: Sequence[str], cwd: Path) -> CommandResult:
        """Run ``args`` in ``cwd`` and report its exit status and output."""
        ...


class SubprocessRunner:
    """Command runner backed by ``subprocess.run``."""

    def run(self, args: Sequence[str], cwd: Path) -> CommandResult:
        cmd = [str(a) for a in args]
        logger.debug(f"Running {cmd} in {cwd}")
        completed = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
        )
        logger.debug(f"{cmd[0]} exited with {completed.returncode}")
        return CommandResult(
            args=cmd,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )


def check_output(runner: CommandRunner, args: Sequence[str], cwd: Path) -> str:
    """Run a command and return its stdout, raising CommandError on failure."""
    result = runner.run(args, cwd)
    if result.returncode != 0:
        raise CommandError(result.args, result.returncode, result.stderr)
    return result.stdout
