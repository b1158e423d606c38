from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

import pytest

from stale_packages.models import GitHubQueryError, Package, PackagePage, PackageVersion, PageInfo, VersionPage


NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


class FakePackagesClient:
    """In-memory stand-in for the GraphQL client, one package per page."""

    def __init__(
        self,
        packages: Sequence[Tuple[str, str, Sequence[PackageVersion]]],
        versions_page_size: int = 100,
        fail_on_call: Optional[int] = None,
    ) -> None:
        self.packages = list(packages)
        self.versions_page_size = versions_page_size
        self.fail_on_call = fail_on_call
        self.calls: List[Tuple[Optional[str], Optional[str]]] = []

    def fetch_packages_page(self, owner, name, packages_cursor=None, versions_cursor=None):
        self.calls.append((packages_cursor, versions_cursor))
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise GitHubQueryError("boom")

        index = 0 if packages_cursor is None else int(packages_cursor.split("-")[1]) + 1
        if index >= len(self.packages):
            return PackagePage(nodes=(), page_info=PageInfo(end_cursor=None, has_next_page=False))

        package_id, package_name, versions = self.packages[index]
        start = 0 if versions_cursor is None else int(versions_cursor.split("-")[1])
        chunk = tuple(versions[start:start + self.versions_page_size])
        end = start + len(chunk)
        package = Package(
            id=package_id,
            name=package_name,
            versions=VersionPage(
                nodes=chunk,
                page_info=PageInfo(end_cursor=f"ver-{end}", has_next_page=end < len(versions)),
            ),
        )
        return PackagePage(
            nodes=(package,),
            page_info=PageInfo(
                end_cursor=f"pkg-{index}",
                has_next_page=index + 1 < len(self.packages),
            ),
        )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def fake_client_class():
    return FakePackagesClient
