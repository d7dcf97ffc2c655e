"""
config.py - Settings resolution for the Hermes updater.

Settings are resolved once at startup and passed explicitly to every
component. Resolution order:

- Repository root: explicit argument, then ``HERMES_UPDATE_REPO_ROOT``, then
  the nearest ancestor of the working directory holding the ``hermes``
  submodule directory or a ``.hermes-update.toml``, else the working
  directory itself. ``.git`` and ``.hg`` are not consulted.
- Settings file: explicit argument, then ``HERMES_UPDATE_CONFIG``, then
  ``<repo_root>/.hermes-update.toml`` when present. Its ``[hermes]`` table
  overrides the defaults below.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import ConfigError

REPO_ROOT_ENV = "HERMES_UPDATE_REPO_ROOT"
CONFIG_PATH_ENV = "HERMES_UPDATE_CONFIG"
DEFAULT_CONFIG_FILENAME = ".hermes-update.toml"
CONFIG_TABLE = "hermes"
DEFAULT_SUBMODULE_PATH = "hermes"


class UpdaterSettings(BaseModel):
    """Immutable settings for one updater run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    repo_root: Path
    submodule_path: str = DEFAULT_SUBMODULE_PATH
    remote_ref: str = "origin/main"
    marker_file: str = "hermes.submodule.txt"
    changelog_trailer: str = "Changelog: [Internal]"

    @property
    def marker_path(self) -> Path:
        return self.repo_root / self.marker_file


def _is_project_root(path: Path) -> bool:
    return (path / DEFAULT_SUBMODULE_PATH).is_dir() or (path / DEFAULT_CONFIG_FILENAME).is_file()


def find_repo_root(start_path: Optional[Path] = None) -> Path:
    """
    Find the project root by searching upward for the Hermes submodule.

    Args:
        start_path: Starting directory for search. Defaults to current working directory.

    Returns:
        The nearest ancestor (or ``start_path`` itself) holding a ``hermes``
        directory or a settings file, else ``start_path``.
    """
    start = (Path(start_path) if start_path is not None else Path.cwd()).resolve()

    for candidate in [start, *start.parents]:
        if _is_project_root(candidate):
            return candidate
    return start


def resolve_repo_root(repo_root: Optional[Path] = None) -> Path:
    if repo_root is not None:
        return Path(repo_root).resolve()
    env_root = os.getenv(REPO_ROOT_ENV, "").strip()
    if env_root:
        return Path(env_root).resolve()
    return find_repo_root()


def resolve_config_path(repo_root: Path, config_path: Optional[Path] = None) -> Optional[Path]:
    """Return the settings file to read, or None when there is none."""
    if config_path is not None:
        path = Path(config_path)
    else:
        raw = os.getenv(CONFIG_PATH_ENV, "").strip()
        if not raw:
            candidate = repo_root / DEFAULT_CONFIG_FILENAME
            return candidate if candidate.is_file() else None
        path = Path(raw)
    if not path.is_absolute():
        path = (repo_root / path).resolve()
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    return path


def load_config_table(path: Path) -> Dict[str, Any]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid config TOML: {path} ({exc})") from exc
    table = data.get(CONFIG_TABLE, {})
    if not isinstance(table, dict):
        raise ConfigError(f"[{CONFIG_TABLE}] must be a table: {path}")
    return table


def load_settings(
    repo_root: Optional[Path] = None,
    config_path: Optional[Path] = None,
) -> UpdaterSettings:
    """Resolve the repository root and settings file into UpdaterSettings."""
    root = resolve_repo_root(repo_root)
    path = resolve_config_path(root, config_path)
    overrides = load_config_table(path) if path is not None else {}
    if "repo_root" in overrides:
        raise ConfigError(f"repo_root cannot be set from a config file: {path}")
    try:
        return UpdaterSettings(repo_root=root, **overrides)
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings in {path}: {exc}") from exc
