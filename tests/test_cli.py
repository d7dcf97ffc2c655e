"""Tests for the update-hermes CLI."""

import logging
import sys
from pathlib import Path
from unittest import mock

import pytest
from hypothesis import given, strategies as st
from rich.logging import RichHandler
from typer.testing import CliRunner

from hermes_update_cli import cli
from hermes_update_cli.cli import app
from hermes_update_core.errors import CommandError
from hermes_update_core.runner import SubprocessRunner

from fakes import CURRENT_QUERY, LATEST_QUERY, FakeRunner, failed, log_output

runner = CliRunner()


@pytest.fixture
def fake_runner(clean_env):
    fake = FakeRunner()
    clean_env.setattr(cli, "make_runner", lambda: fake)
    return fake


@given(
    revision=st.from_regex(r"[0-9a-f]{1,40}", fullmatch=True),
    help_first=st.booleans(),
)
def test_help_runs_nothing_and_exits_zero(revision, help_first):
    args = ["--help", revision] if help_first else [revision, "--help"]
    fake = FakeRunner()
    with mock.patch.object(cli, "make_runner", return_value=fake) as make_runner:
        result = runner.invoke(app, args)

    assert result.exit_code == 0, result.output
    assert "Update the Hermes submodule" in result.output
    assert fake.calls == []
    make_runner.assert_not_called()


def test_help_alone(fake_runner, tmp_path: Path):
    result = runner.invoke(app, ["--help", "--repo-root", str(tmp_path)])
    assert result.exit_code == 0
    assert "REVISION" in result.output
    assert fake_runner.calls == []


def test_up_to_date_exits_zero(fake_runner, tmp_path: Path):
    fake_runner.responses[CURRENT_QUERY] = log_output("aaaa1111")

    result = runner.invoke(app, ["aaaa1111", "--repo-root", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "Hermes submodule is already up to date. Exiting." in result.output
    assert fake_runner.commands == [list(CURRENT_QUERY)]


def test_resolution_failure_exits_non_zero_without_changes(fake_runner, tmp_path: Path):
    fake_runner.responses[LATEST_QUERY] = failed(LATEST_QUERY)

    result = runner.invoke(app, ["--repo-root", str(tmp_path)])

    assert result.exit_code != 0
    assert "No revision provided" in result.output
    assert "Could not determine latest Hermes revision. Aborting." in result.output
    assert fake_runner.commands == [list(LATEST_QUERY)]
    assert not (tmp_path / "hermes.submodule.txt").exists()
    assert not fake_runner.ran("hg", "commit")
    assert not fake_runner.ran("git", "commit")


def test_mercurial_update_scenario(fake_runner, tmp_path: Path):
    fake_runner.responses[CURRENT_QUERY] = log_output("aaaa1111")

    result = runner.invoke(app, ["feedface00", "--repo-root", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "Updating Hermes submodule to feedface00" in result.output
    marker = tmp_path / "hermes.submodule.txt"
    assert marker.read_bytes() == b"Subproject commit feedface00\n"
    assert fake_runner.commands[-1] == [
        "hg", "commit", "-m", "[RN] Update Hermes to feedface", "-m", "Changelog: [Internal]",
    ]
    assert all(cwd == tmp_path.resolve() for _, cwd in fake_runner.calls)


def test_git_update_to_latest(fake_runner, tmp_path: Path):
    (tmp_path / ".git").mkdir()
    fake_runner.responses[LATEST_QUERY] = log_output("0123456789abcdef")
    fake_runner.responses[CURRENT_QUERY] = log_output("aaaa1111")

    result = runner.invoke(app, ["--repo-root", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert fake_runner.commands[2:] == [
        ["git", "submodule", "update", "--remote", "hermes"],
        ["git", "-C", "hermes", "checkout", "0123456789abcdef"],
        ["git", "add", "hermes"],
        ["git", "commit", "-m", "Update Hermes to 01234567", "-m", "Changelog: [Internal]"],
    ]


def test_other_failures_propagate(fake_runner, tmp_path: Path):
    (tmp_path / ".git").mkdir()
    fake_runner.responses[CURRENT_QUERY] = log_output("aaaa1111")
    add = ("git", "add", "hermes")
    fake_runner.responses[add] = failed(add)

    result = runner.invoke(app, ["bbbb2222", "--repo-root", str(tmp_path)])

    assert result.exit_code != 0
    assert isinstance(result.exception, CommandError)
    assert not fake_runner.ran("git", "commit")


def test_config_file_is_honoured(fake_runner, tmp_path: Path):
    (tmp_path / ".hermes-update.toml").write_text(
        '[hermes]\nsubmodule_path = "sdks/hermes"\nmarker_file = "sdks/.hermes-version"\n',
        encoding="utf-8",
    )
    (tmp_path / "sdks").mkdir()
    current = ("git", "-C", "sdks/hermes", "log", "-n", "1")
    fake_runner.responses[current] = log_output("aaaa1111")

    result = runner.invoke(app, ["deadbeef", "--repo-root", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "sdks" / ".hermes-version").read_text(encoding="utf-8") == "Subproject commit deadbeef\n"


def test_runs_from_project_nested_in_mercurial_monorepo(fake_runner, clean_env, tmp_path: Path):
    (tmp_path / ".hg").mkdir()
    project = tmp_path / "xplat" / "js" / "react-native-github"
    (project / "hermes").mkdir(parents=True)
    (project / "scripts").mkdir()
    clean_env.chdir(project / "scripts")
    fake_runner.responses[CURRENT_QUERY] = log_output("aaaa1111")

    result = runner.invoke(app, ["feedface00"])

    assert result.exit_code == 0, result.output
    assert all(cwd == project.resolve() for _, cwd in fake_runner.calls)
    assert (project / "hermes.submodule.txt").read_text(encoding="utf-8") == "Subproject commit feedface00\n"
    assert fake_runner.commands[-1][:2] == ["hg", "commit"]
    assert not (tmp_path / "hermes.submodule.txt").exists()


def test_runs_from_inside_submodule_against_parent_project(fake_runner, clean_env, tmp_path: Path):
    (tmp_path / ".git").mkdir()
    (tmp_path / "hermes").mkdir()
    (tmp_path / "hermes" / ".git").write_text("gitdir: ../.git/modules/hermes\n", encoding="utf-8")
    clean_env.chdir(tmp_path / "hermes")
    fake_runner.responses[CURRENT_QUERY] = log_output("aaaa1111")

    result = runner.invoke(app, ["0123456789abcdef"])

    assert result.exit_code == 0, result.output
    assert all(cwd == tmp_path.resolve() for _, cwd in fake_runner.calls)
    assert fake_runner.commands[-1] == [
        "git", "commit", "-m", "Update Hermes to 01234567", "-m", "Changelog: [Internal]",
    ]


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield root
    root.setLevel(level)
    root.handlers[:] = handlers


def test_verbose_logs_debug_records(fake_runner, root_logger, caplog, tmp_path: Path):
    fake_runner.responses[CURRENT_QUERY] = log_output("aaaa1111")

    result = runner.invoke(app, ["-v", "aaaa1111", "--repo-root", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert root_logger.level == logging.DEBUG
    assert any(isinstance(h, RichHandler) for h in root_logger.handlers)
    assert "Current hermes revision: aaaa1111" in caplog.messages


def test_default_logging_hides_debug_records(fake_runner, root_logger, caplog, tmp_path: Path):
    fake_runner.responses[CURRENT_QUERY] = log_output("aaaa1111")

    result = runner.invoke(app, ["aaaa1111", "--repo-root", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert root_logger.level == logging.WARNING
    assert not [r for r in caplog.records if r.levelno < logging.WARNING]


def test_real_runner_logs_each_command(root_logger, caplog, tmp_path: Path):
    root_logger.setLevel(logging.DEBUG)

    result = SubprocessRunner().run([sys.executable, "-c", "pass"], tmp_path)

    assert result.returncode == 0
    assert any(m.startswith("Running [") for m in caplog.messages)
