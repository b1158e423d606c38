"""
GitHub Actions workflow commands and environment files.
"""

from __future__ import annotations

import os
import sys
import uuid
from typing import Mapping, Optional, TextIO

from .interfaces import EnvironmentSink


def escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


class GitHubActions(EnvironmentSink):
    """Talk to the GitHub Actions runner."""

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        stream: Optional[TextIO] = None,
    ) -> None:
        self.environ = os.environ if environ is None else environ
        self.stream = stream

    def set_env(self, name: str, value: str) -> None:
        """Export a variable to the following workflow steps."""
        env_file = self.environ.get("GITHUB_ENV")
        if not env_file:
            self.issue_command("set-env", value, name=name)
            return

        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        with open(env_file, "a", encoding="utf-8") as f:
            f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")

    def error(self, message: str) -> None:
        self.issue_command("error", message)

    def issue_command(self, command: str, message: str, **properties: str) -> None:
        line = f"::{command}"
        if properties:
            line += " " + ",".join(
                f"{key}={escape_property(value)}" for key, value in properties.items()
            )
        line += f"::{escape_data(message)}"
        print(line, file=self.stream or sys.stdout, flush=True)
