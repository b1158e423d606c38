"""Tests for environment settings."""

import pytest

from stale_packages.config import ConfigurationError, load_settings


def test_load_settings():
    settings = load_settings({"ROBOT_TOKEN": "secret", "GITHUB_REPOSITORY": "octo/repo"})

    assert settings.token == "secret"
    assert settings.owner == "octo"
    assert settings.name == "repo"
    assert settings.repository == "octo/repo"


@pytest.mark.parametrize(
    "environ, message",
    [
        ({"GITHUB_REPOSITORY": "octo/repo"}, "ROBOT_TOKEN is empty"),
        ({"ROBOT_TOKEN": "", "GITHUB_REPOSITORY": "octo/repo"}, "ROBOT_TOKEN is empty"),
        ({"ROBOT_TOKEN": "secret"}, "GITHUB_REPOSITORY is empty"),
        ({"ROBOT_TOKEN": "secret", "GITHUB_REPOSITORY": "octo"}, "owner/name"),
        ({"ROBOT_TOKEN": "secret", "GITHUB_REPOSITORY": "octo/"}, "owner/name"),
        ({"ROBOT_TOKEN": "secret", "GITHUB_REPOSITORY": "/repo"}, "owner/name"),
        ({"ROBOT_TOKEN": "secret", "GITHUB_REPOSITORY": "octo/repo/extra"}, "owner/name"),
    ],
)
def test_load_settings_errors(environ, message):
    with pytest.raises(ConfigurationError, match=message):
        load_settings(environ)
