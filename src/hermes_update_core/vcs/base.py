"""VCS abstraction base types."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Protocol


class VcsKind(str, Enum):
    """Version control system backing the host repository."""
    GIT = "git"
    MERCURIAL = "hg"


class SubmoduleUpdateStrategy(Protocol):
    """Moves the submodule pin to a revision and commits the change."""

    kind: VcsKind

    @classmethod
    def detect(cls, repo_root: Path) -> bool:
        """Check if this VCS backs the repository."""
        ...

    def update_and_commit(self, revision: str) -> None:
        """Pin the submodule to ``revision`` and record one commit."""
        ...
