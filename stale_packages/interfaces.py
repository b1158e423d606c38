"""
Interfaces for the package query API and the host environment.
"""

from __future__ import annotations

from typing import Optional, Protocol

from .models import PackagePage


class PackageQueryClient(Protocol):
    """Fetch pages of repository packages and their versions."""

    def fetch_packages_page(
        self,
        owner: str,
        name: str,
        packages_cursor: Optional[str] = None,
        versions_cursor: Optional[str] = None,
    ) -> PackagePage:
        ...


class EnvironmentSink(Protocol):
    """Publish values and errors to the host automation environment."""

    def set_env(self, name: str, value: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...
