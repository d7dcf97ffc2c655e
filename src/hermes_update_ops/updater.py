"""
updater.py - Update the Hermes submodule pin and commit the change.

The flow is strictly sequential: resolve the target revision, compare it
with the checked-out one, detect the VCS and hand over to one strategy.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

from hermes_update_core.config import UpdaterSettings
from hermes_update_core.revision import get_current_revision, get_latest_revision
from hermes_update_core.runner import CommandRunner, SubprocessRunner
from hermes_update_core.vcs import (
    SubmoduleUpdateStrategy,
    VcsKind,
    detect_vcs_kind,
    strategy_for,
)

logger = logging.getLogger(__name__)

NO_REVISION_MESSAGE = "No revision provided, updating to latest commit on facebook/hermes."
UP_TO_DATE_MESSAGE = "Hermes submodule is already up to date. Exiting."
RESOLUTION_FAILED_MESSAGE = "Could not determine latest Hermes revision. Aborting."

StrategyFactory = Callable[[VcsKind, UpdaterSettings, CommandRunner], SubmoduleUpdateStrategy]


class UpdateOutcome(str, Enum):
    UP_TO_DATE = "up-to-date"
    UPDATED = "updated"


class SubmoduleUpdater:
    """Orchestrates one "update the pinned Hermes revision and commit" run."""

    def __init__(
        self,
        settings: UpdaterSettings,
        runner: Optional[CommandRunner] = None,
        echo: Callable[[str], None] = print,
        strategy_factory: StrategyFactory = strategy_for,
    ):
        self.settings = settings
        self.runner = runner or SubprocessRunner()
        self.echo = echo
        self.strategy_factory = strategy_factory

    def resolve_target(self, revision: Optional[str]) -> str:
        """Return ``revision`` or, when None, the latest upstream revision.

        Raises:
            RevisionResolutionError: If the latest revision cannot be queried.
        """
        if revision is not None:
            return revision
        self.echo(NO_REVISION_MESSAGE)
        return get_latest_revision(
            self.runner,
            self.settings.repo_root,
            self.settings.submodule_path,
            self.settings.remote_ref,
        )

    def run(self, revision: Optional[str] = None) -> UpdateOutcome:
        target = self.resolve_target(revision)

        current = get_current_revision(
            self.runner,
            self.settings.repo_root,
            self.settings.submodule_path,
        )
        if target == current:
            self.echo(UP_TO_DATE_MESSAGE)
            return UpdateOutcome.UP_TO_DATE

        self.echo(f"Updating Hermes submodule to {target}")

        kind = detect_vcs_kind(self.settings.repo_root)
        logger.debug(f"Detected {kind.value} repository at {self.settings.repo_root}")
        strategy = self.strategy_factory(kind, self.settings, self.runner)
        strategy.update_and_commit(target)
        return UpdateOutcome.UPDATED
