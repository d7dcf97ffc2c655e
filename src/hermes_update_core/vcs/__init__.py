"""VCS detection and update strategies."""

from __future__ import annotations

from pathlib import Path

from ..config import UpdaterSettings
from ..runner import CommandRunner
from .base import SubmoduleUpdateStrategy, VcsKind
from .git_adapter import GitAdapter
from .hg_adapter import HgAdapter

__all__ = [
    "GitAdapter",
    "HgAdapter",
    "SubmoduleUpdateStrategy",
    "VcsKind",
    "detect_vcs_kind",
    "strategy_for",
]


def detect_vcs_kind(repo_root: Path) -> VcsKind:
    """GIT when ``repo_root/.git`` is a directory, MERCURIAL otherwise."""
    # HgAdapter.detect accepts anything GitAdapter rejects
    return next(adapter.kind for adapter in (GitAdapter, HgAdapter) if adapter.detect(repo_root))


def strategy_for(
    kind: VcsKind,
    settings: UpdaterSettings,
    runner: CommandRunner,
) -> SubmoduleUpdateStrategy:
    if kind is VcsKind.GIT:
        return GitAdapter(settings, runner)
    return HgAdapter(settings, runner)
