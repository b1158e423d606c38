"""
GitHub GraphQL client for repository packages.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional

import requests

from .interfaces import PackageQueryClient
from .models import GitHubQueryError, Package, PackagePage, PackageVersion, PageInfo, VersionPage
from .time_utils import ensure_utc


logger = logging.getLogger(__name__)

GITHUB_GRAPHQL_URL = "https://api.github.com/graphql"
PACKAGES_PREVIEW_MEDIA_TYPE = "application/vnd.github.packages-preview+json"

PACKAGES_PAGE_SIZE = 1
VERSIONS_PAGE_SIZE = 100
FILES_PAGE_SIZE = 1

PACKAGES_QUERY = f"""
query($repositoryOwner: String!, $repositoryName: String!, $packagesCursor: String, $versionsCursor: String) {{
  repository(owner: $repositoryOwner, name: $repositoryName) {{
    packages(last: {PACKAGES_PAGE_SIZE}, after: $packagesCursor) {{
      nodes {{
        id
        name
        versions(last: {VERSIONS_PAGE_SIZE}, after: $versionsCursor) {{
          nodes {{
            id
            version
            files(last: {FILES_PAGE_SIZE}) {{
              nodes {{
                updatedAt
              }}
            }}
          }}
          pageInfo {{
            endCursor
            hasNextPage
          }}
        }}
      }}
      pageInfo {{
        endCursor
        hasNextPage
      }}
    }}
  }}
}}
"""


class GitHubPackagesClient(PackageQueryClient):
    """Query repository packages through the GitHub GraphQL API."""

    def __init__(
        self,
        token: str,
        session: Optional[requests.Session] = None,
        url: str = GITHUB_GRAPHQL_URL,
    ) -> None:
        self.url = url
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {token}",
            "Accept": PACKAGES_PREVIEW_MEDIA_TYPE,
        })

    def fetch_packages_page(
        self,
        owner: str,
        name: str,
        packages_cursor: Optional[str] = None,
        versions_cursor: Optional[str] = None,
    ) -> PackagePage:
        """Fetch one package with one page of its versions.

        Args:
            owner: Repository owner
            name: Repository name
            packages_cursor: Cursor after which the package is taken
            versions_cursor: Cursor after which the versions are taken

        Returns:
            Parsed page of packages
        """
        variables = {
            "repositoryOwner": owner,
            "repositoryName": name,
            "packagesCursor": packages_cursor,
            "versionsCursor": versions_cursor,
        }
        logger.debug(
            "Querying packages of %s/%s (packages cursor %s, versions cursor %s)",
            owner, name, packages_cursor, versions_cursor,
        )
        data = self._post({"query": PACKAGES_QUERY, "variables": variables})

        repository = data.get("repository")
        if repository is None:
            raise GitHubQueryError(f"repository {owner}/{name} not found")
        try:
            return _parse_package_page(repository["packages"])
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise GitHubQueryError(f"malformed packages response: {e!r}") from e

    def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            with self.session.post(self.url, json=payload) as response:
                response.raise_for_status()
                body = response.json()
        except requests.RequestException as e:
            raise GitHubQueryError(f"packages query failed: {e}") from e
        except ValueError as e:
            raise GitHubQueryError(f"packages query returned invalid JSON: {e}") from e

        if not isinstance(body, dict):
            raise GitHubQueryError("packages query returned an unexpected payload")
        errors = body.get("errors")
        if errors:
            if not isinstance(errors, list):
                raise GitHubQueryError(f"packages query failed: {errors!r}")
            messages = "; ".join(
                str(error.get("message", error)) if isinstance(error, dict) else str(error)
                for error in errors
            )
            raise GitHubQueryError(f"packages query failed: {messages}")
        data = body.get("data")
        if not isinstance(data, dict):
            raise GitHubQueryError("packages query returned no data")
        return data


def _parse_page_info(raw: Dict[str, Any]) -> PageInfo:
    has_next_page = bool(raw["hasNextPage"])
    if has_next_page and not raw["endCursor"]:
        raise ValueError("hasNextPage is set without an endCursor")
    return PageInfo(end_cursor=raw["endCursor"], has_next_page=has_next_page)


def _parse_version(raw: Dict[str, Any]) -> PackageVersion:
    files = raw["files"]["nodes"]
    updated_at = None
    if files:
        # GitHub DateTime, e.g. 2024-03-01T10:00:00Z
        updated_at = ensure_utc(datetime.fromisoformat(files[0]["updatedAt"].replace("Z", "+00:00")))
    return PackageVersion(id=str(raw["id"]), version=raw["version"] or "", updated_at=updated_at)


def _parse_package_page(raw: Dict[str, Any]) -> PackagePage:
    packages = []
    for node in raw["nodes"]:
        versions = node["versions"]
        packages.append(Package(
            id=str(node["id"]),
            name=node["name"],
            versions=VersionPage(
                nodes=tuple(_parse_version(v) for v in versions["nodes"]),
                page_info=_parse_page_info(versions["pageInfo"]),
            ),
        ))
    return PackagePage(nodes=tuple(packages), page_info=_parse_page_info(raw["pageInfo"]))
