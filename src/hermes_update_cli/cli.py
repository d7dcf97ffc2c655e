from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from hermes_update_core.config import load_settings
from hermes_update_core.errors import RevisionResolutionError
from hermes_update_core.runner import CommandRunner, SubprocessRunner
from hermes_update_ops.updater import RESOLUTION_FAILED_MESSAGE, SubmoduleUpdater

app = typer.Typer(
    help="update-hermes: pin the Hermes submodule to a revision and commit it",
    add_completion=False,
)
err_console = Console(stderr=True)


def make_runner() -> CommandRunner:
    return SubprocessRunner()


def _configure_logging(verbose: bool) -> None:
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(RichHandler(console=err_console, show_path=False))


@app.command()
def update(
    revision: Optional[str] = typer.Argument(
        None,
        metavar="REVISION",
        help="Hermes revision to pin (default: latest commit on the remote)",
    ),
    repo_root: Optional[Path] = typer.Option(
        None, "--repo-root", help="Repository root (default: discovered from the working directory)"
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", help="Settings TOML file (default: <repo-root>/.hermes-update.toml)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every command that runs"),
):
    """Update the Hermes submodule to the specified Git revision.

    If no Hermes revision is provided, updates to the latest commit on
    facebook/hermes.
    """
    _configure_logging(verbose)
    settings = load_settings(repo_root=repo_root, config_path=config)
    updater = SubmoduleUpdater(settings, runner=make_runner(), echo=typer.echo)
    try:
        updater.run(revision)
    except RevisionResolutionError:
        err_console.print(RESOLUTION_FAILED_MESSAGE, style="red", highlight=False)
        raise typer.Exit(code=1)


def main():
    app()
