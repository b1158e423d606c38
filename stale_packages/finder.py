"""
Traversal of repository packages and classification of their versions.
"""

from __future__ import annotations

import logging
from datetime import datetime
from functools import partial
from operator import attrgetter
from typing import Dict, Iterator, List, Optional, Tuple

from .classifier import is_protected_tag, is_stale
from .interfaces import PackageQueryClient
from .models import GitHubQueryError, Package, PackagePage, PackageVersion, StaleReport, VersionDecision, VersionPage
from .pagination import paginate
from .time_utils import ensure_utc, utc_now


logger = logging.getLogger(__name__)


class StaleVersionFinder:
    """Collect versions of repository packages that are due for deletion."""

    def __init__(
        self,
        client: PackageQueryClient,
        owner: str,
        name: str,
        now: Optional[datetime] = None,
    ):
        """Initialize the finder.

        Args:
            client: Packages query client
            owner: Repository owner
            name: Repository name
            now: Reference time for the age check, defaults to the current time
        """
        self.client = client
        self.owner = owner
        self.name = name
        self.now = ensure_utc(now) if now is not None else utc_now()

    def find(self) -> StaleReport:
        """Visit every version of every package and collect the stale ones.

        Returns:
            Report with stale version IDs in visit order and all decisions
        """
        stale: Dict[str, None] = {}
        decisions: List[VersionDecision] = []
        for package, version in self.iter_versions():
            decision = self.classify(package, version)
            decisions.append(decision)
            if decision.stale:
                stale.setdefault(decision.version_id, None)
        return StaleReport(stale_versions=tuple(stale), decisions=tuple(decisions))

    def iter_versions(self) -> Iterator[Tuple[Package, PackageVersion]]:
        """Yield (package, version) pairs, one package at a time."""
        for packages_cursor, page in paginate(self._fetch_packages, attrgetter("page_info")):
            if not page.nodes:
                logger.info("No more packages in %s/%s.", self.owner, self.name)
                return

            package = page.nodes[0]
            logger.info("Inspecting package %s %s.", package.id, package.name)

            fetch_versions = partial(self._fetch_versions, packages_cursor, package)
            for _, versions in paginate(
                fetch_versions, attrgetter("page_info"), first_page=package.versions
            ):
                for version in versions.nodes:
                    yield package, version

    def classify(self, package: Package, version: PackageVersion) -> VersionDecision:
        """Classify a single version and log the outcome."""
        if version.updated_at is None:
            logger.info("No files in %s %s.", version.id, version.version)
            return self._decision(package, version, stale=False, reason="no files")

        stale = is_stale(version.version, version.updated_at, self.now)
        if stale:
            reason = "expired"
            logger.info(
                "Stale version: %s (%r, %s)",
                version.id, version.version, version.updated_at.isoformat(),
            )
        else:
            reason = "protected tag" if is_protected_tag(version.version) else "recently updated"
            logger.info(
                "Skip version : %s (%r, %s)",
                version.id, version.version, version.updated_at.isoformat(),
            )
        return self._decision(package, version, stale=stale, reason=reason)

    def _fetch_packages(self, cursor: Optional[str]) -> PackagePage:
        return self.client.fetch_packages_page(self.owner, self.name, packages_cursor=cursor)

    def _fetch_versions(
        self, packages_cursor: Optional[str], package: Package, cursor: Optional[str]
    ) -> VersionPage:
        page = self.client.fetch_packages_page(
            self.owner,
            self.name,
            packages_cursor=packages_cursor,
            versions_cursor=cursor,
        )
        if not page.nodes or page.nodes[0].id != package.id:
            raise GitHubQueryError(
                f"package {package.id} {package.name} changed while paging its versions"
            )
        return page.nodes[0].versions

    def _decision(
        self, package: Package, version: PackageVersion, stale: bool, reason: str
    ) -> VersionDecision:
        return VersionDecision(
            package_id=package.id,
            package_name=package.name,
            version_id=version.id,
            version=version.version,
            updated_at=version.updated_at,
            stale=stale,
            reason=reason,
        )
