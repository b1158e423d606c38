"""Tests for GitHub Actions host integration."""

import io
from pathlib import Path

from stale_packages.actions import GitHubActions


def test_set_env_appends_to_env_file(tmp_path: Path):
    env_file = tmp_path / "github_env"
    env_file.write_text("EXISTING=1\n", encoding="utf-8")
    actions = GitHubActions(environ={"GITHUB_ENV": str(env_file)}, stream=io.StringIO())

    actions.set_env("STALE_VERSIONS", "V1, V2")

    lines = env_file.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "EXISTING=1"
    name, delimiter = lines[1].split("<<")
    assert name == "STALE_VERSIONS"
    assert delimiter.startswith("ghadelimiter_")
    assert lines[2:] == ["V1, V2", delimiter]


def test_set_env_empty_value(tmp_path: Path):
    env_file = tmp_path / "github_env"
    actions = GitHubActions(environ={"GITHUB_ENV": str(env_file)})

    actions.set_env("STALE_VERSIONS", "")

    lines = env_file.read_text(encoding="utf-8").splitlines()
    assert lines[1] == ""
    assert len(lines) == 3


def test_set_env_without_env_file_issues_command():
    stream = io.StringIO()
    actions = GitHubActions(environ={}, stream=stream)

    actions.set_env("STALE_VERSIONS", "V1, V2")

    assert stream.getvalue() == "::set-env name=STALE_VERSIONS::V1, V2\n"


def test_error_escapes_message():
    stream = io.StringIO()
    actions = GitHubActions(environ={}, stream=stream)

    actions.error("failed: 100%\nbad")

    assert stream.getvalue() == "::error::failed: 100%25%0Abad\n"
