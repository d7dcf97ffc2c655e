"""Git VCS adapter."""

import logging
from pathlib import Path

from ..config import UpdaterSettings
from ..revision import commit_subject
from ..runner import CommandRunner, check_output
from .base import VcsKind

logger = logging.getLogger(__name__)


class GitAdapter:
    """Git VCS adapter.

    The submodule is a native git submodule. Each step is a separate
    command; a failed step leaves the earlier ones in place.
    """

    kind = VcsKind.GIT

    def __init__(self, settings: UpdaterSettings, runner: CommandRunner):
        self.settings = settings
        self.runner = runner

    @classmethod
    def detect(cls, repo_root: Path) -> bool:
        """Check if Git is present."""
        return (repo_root / ".git").is_dir()

    def update_and_commit(self, revision: str) -> None:
        submodule = self.settings.submodule_path
        commands = [
            ["git", "submodule", "update", "--remote", submodule],
            ["git", "-C", submodule, "checkout", revision],
            ["git", "add", submodule],
            [
                "git", "commit",
                "-m", commit_subject("", revision),
                "-m", self.settings.changelog_trailer,
            ],
        ]
        for command in commands:
            check_output(self.runner, command, self.settings.repo_root)
        logger.info(f"Committed {submodule} update to {revision} with git")
