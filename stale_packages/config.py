"""
Runtime settings read from the environment.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Tuple


TOKEN_VARIABLE = "ROBOT_TOKEN"
REPOSITORY_VARIABLE = "GITHUB_REPOSITORY"


class ConfigurationError(ValueError):
    """Raised when required settings are missing or malformed."""


@dataclass(frozen=True)
class Settings:
    """Credentials and target repository of a run."""

    token: str
    owner: str
    name: str

    @property
    def repository(self) -> str:
        return f"{self.owner}/{self.name}"


def parse_repository(value: str) -> Tuple[str, str]:
    """Split an ``owner/name`` repository identifier."""
    parts = value.split("/")
    if len(parts) != 2 or not all(parts):
        raise ConfigurationError(
            f"Environment variable {REPOSITORY_VARIABLE} must have the form owner/name, got {value!r}."
        )
    return parts[0], parts[1]


def load_settings(environ: Mapping[str, str]) -> Settings:
    """Build settings from environment variables.

    Args:
        environ: Environment mapping, usually ``os.environ``

    Returns:
        Validated settings
    """
    token = environ.get(TOKEN_VARIABLE, "")
    if not token:
        raise ConfigurationError(f"Environment variable {TOKEN_VARIABLE} is empty.")

    repository = environ.get(REPOSITORY_VARIABLE, "")
    if not repository:
        raise ConfigurationError(f"Environment variable {REPOSITORY_VARIABLE} is empty.")

    owner, name = parse_repository(repository)
    return Settings(token=token, owner=owner, name=name)
