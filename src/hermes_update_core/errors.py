"""Exception types raised by the Hermes updater."""

from __future__ import annotations

from typing import Optional, Sequence


class HermesUpdateError(Exception):
    """Base class for updater errors."""


class CommandError(HermesUpdateError):
    """An external command exited with a non-zero status."""

    def __init__(self, args: Sequence[str], returncode: int, stderr: Optional[str] = None):
        self.command = list(args)
        self.returncode = returncode
        self.stderr = stderr or ""
        message = f"Command {' '.join(self.command)!r} failed with exit code {returncode}"
        if self.stderr.strip():
            message = f"{message}: {self.stderr.strip()}"
        super().__init__(message)


class RevisionParseError(HermesUpdateError):
    """Log output did not contain a revision token."""


class RevisionResolutionError(HermesUpdateError):
    """The latest upstream revision could not be determined."""


class ConfigError(HermesUpdateError):
    """Settings file is unreadable or invalid."""
