"""Revision queries against the Hermes submodule."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import RevisionParseError, RevisionResolutionError
from .runner import CommandRunner, check_output

logger = logging.getLogger(__name__)

SHORT_REVISION_LENGTH = 8


def parse_log_revision(output: str) -> str:
    """Return the second whitespace token of the first line of ``git log`` output.

    ``git log -n 1`` prints ``commit <sha>`` first, so the token is the
    commit hash. The format is taken as-is; nothing checks that the token
    looks like a hash.
    """
    first_line = output.split("\n", 1)[0]
    tokens = first_line.split()
    if len(tokens) < 2:
        raise RevisionParseError(f"No revision found in log output: {first_line!r}")
    return tokens[1]


def short_revision(revision: str) -> str:
    return revision[:SHORT_REVISION_LENGTH]


def commit_subject(prefix: str, revision: str) -> str:
    """Build the commit subject, e.g. ``Update Hermes to 01234567``."""
    return f"{prefix}Update Hermes to {short_revision(revision)}"


def _log_revision(runner: CommandRunner, repo_root: Path, submodule_path: str, *ref: str) -> str:
    output = check_output(
        runner,
        ["git", "-C", submodule_path, "log", "-n", "1", *ref],
        repo_root,
    )
    return parse_log_revision(output)


def get_current_revision(runner: CommandRunner, repo_root: Path, submodule_path: str) -> str:
    """Revision currently checked out in the submodule."""
    revision = _log_revision(runner, repo_root, submodule_path)
    logger.debug(f"Current {submodule_path} revision: {revision}")
    return revision


def get_latest_revision(
    runner: CommandRunner,
    repo_root: Path,
    submodule_path: str,
    remote_ref: str,
) -> str:
    """Latest revision on the submodule's remote tracking ref.

    Any failure is reported as RevisionResolutionError.
    """
    try:
        revision = _log_revision(runner, repo_root, submodule_path, remote_ref)
    except Exception as e:
        logger.debug(f"Failed to resolve {remote_ref} in {submodule_path}: {e}")
        raise RevisionResolutionError(
            f"Could not resolve {remote_ref} in {submodule_path}"
        ) from e
    logger.debug(f"Latest {submodule_path} revision on {remote_ref}: {revision}")
    return revision
