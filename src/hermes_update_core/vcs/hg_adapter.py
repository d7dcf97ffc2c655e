"""Mercurial VCS adapter."""

import logging
from pathlib import Path

from ..config import UpdaterSettings
from ..revision import commit_subject
from ..runner import CommandRunner, check_output
from .base import VcsKind

logger = logging.getLogger(__name__)

COMMIT_PREFIX = "[RN] "


def marker_contents(revision: str) -> str:
    return f"Subproject commit {revision}\n"


class HgAdapter:
    """Mercurial VCS adapter.

    Mercurial has no submodule here, so the pin lives in a marker file at
    the repository root. ``hg commit`` picks the modified file up directly.
    """

    kind = VcsKind.MERCURIAL

    def __init__(self, settings: UpdaterSettings, runner: CommandRunner):
        self.settings = settings
        self.runner = runner

    @classmethod
    def detect(cls, repo_root: Path) -> bool:
        """Anything that is not a git checkout is treated as Mercurial."""
        return not (repo_root / ".git").is_dir()

    def write_marker(self, revision: str) -> Path:
        path = self.settings.marker_path
        # newline="\n" keeps the marker byte-identical across platforms
        with path.open("w", encoding="utf-8", newline="\n") as fh:
            fh.write(marker_contents(revision))
        logger.debug(f"Wrote {path}")
        return path

    def update_and_commit(self, revision: str) -> None:
        self.write_marker(revision)
        check_output(
            self.runner,
            [
                "hg", "commit",
                "-m", commit_subject(COMMIT_PREFIX, revision),
                "-m", self.settings.changelog_trailer,
            ],
            self.settings.repo_root,
        )
        logger.info(f"Committed {self.settings.marker_file} update to {revision} with hg")
