"""
Core data models for stale package detection.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple, Union


class GitHubQueryError(RuntimeError):
    """Raised when a packages query fails or returns an unusable response."""


@dataclass(frozen=True)
class PageInfo:
    """Continuation state of a paginated connection."""

    end_cursor: Optional[str]
    has_next_page: bool


@dataclass(frozen=True)
class PackageVersion:
    """A package version with the update time of its most recent file."""

    id: str
    version: str
    updated_at: Optional[datetime]


@dataclass(frozen=True)
class VersionPage:
    """One page of versions of a package."""

    nodes: Tuple[PackageVersion, ...]
    page_info: PageInfo


@dataclass(frozen=True)
class Package:
    """A registry package with the first page of its versions."""

    id: str
    name: str
    versions: VersionPage


@dataclass(frozen=True)
class PackagePage:
    """One page of repository packages."""

    nodes: Tuple[Package, ...]
    page_info: PageInfo


@dataclass(frozen=True)
class VersionDecision:
    """Classification outcome for a single package version."""

    package_id: str
    package_name: str
    version_id: str
    version: str
    updated_at: Optional[datetime]
    stale: bool
    reason: str


@dataclass(frozen=True)
class StaleReport:
    """Stale version IDs in visit order plus every decision taken."""

    stale_versions: Tuple[str, ...]
    decisions: Tuple[VersionDecision, ...]


@dataclass(frozen=True)
class Success:
    stale_versions: Tuple[str, ...]
    decisions: Tuple[VersionDecision, ...] = ()


@dataclass(frozen=True)
class ConfigError:
    message: str


@dataclass(frozen=True)
class QueryError:
    message: str


RunResult = Union[Success, ConfigError, QueryError]
