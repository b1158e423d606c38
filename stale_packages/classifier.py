"""
Staleness rules for package versions.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta

from .time_utils import ensure_utc


PACKAGE_TTL = timedelta(days=7)

# https://semver.org/#is-there-a-suggested-regular-expression-regex-to-check-a-semver-string
# Unlike the upstream grammar, an optional "v" prefix is accepted so release
# tags like v1.2.3 stay protected.
SEMVER_PATTERN = re.compile(
    r"v?(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+(?P<buildmetadata>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?",
    re.ASCII,
)

# "docker-base-layer" is an internal GitHub Packages tag, never user data.
PROTECTED_TAGS = ("latest", "docker-base-layer")


def is_protected_tag(tag: str) -> bool:
    """Return True if a version tag exempts the version from cleanup."""
    if tag in PROTECTED_TAGS:
        return True
    return SEMVER_PATTERN.fullmatch(tag) is not None


def is_stale(
    tag: str,
    updated_at: datetime,
    now: datetime,
    ttl: timedelta = PACKAGE_TTL,
) -> bool:
    """Decide whether a version is stale.

    Args:
        tag: Version tag as reported by the registry
        updated_at: Update time of the version's most recent file
        now: Reference time of the run
        ttl: Retention window

    Returns:
        True if the tag is not protected and the file is older than ``now - ttl``
    """
    if is_protected_tag(tag):
        return False
    return ensure_utc(updated_at) < ensure_utc(now) - ttl
