"""
GitHub API read operations.

Provides the read-only operations the documentation pipeline needs:
- Repository metadata
- README content
- Directory listings and file contents (contents API)
"""

import base64
import logging
from typing import Any

import httpx

from repowiki.services.github.helpers import handle_error_response
from repowiki.services.github.types import ContentEntry, GitHubRepo, RepoFile

logger = logging.getLogger(__name__)


def _decode_content(data: dict[str, Any]) -> str | None:
    """Decode the base64 ``content`` field of a contents API payload."""
    content_b64 = data.get("content")
    if not content_b64:
        return None

    try:
        return base64.b64decode(content_b64).decode("utf-8")
    except (ValueError, UnicodeDecodeError):
        return None


class GitHubReadOperations:
    """
    Read-only operations for GitHub API.

    The HTTP client is injected so one pooled client serves every request
    and tests can hand in a mock.
    """

    BASE_URL = "https://api.github.com"
    API_VERSION = "2022-11-28"

    def __init__(self, client: httpx.AsyncClient, token: str = ""):
        self.client = client
        self.token = token
        self._headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self.API_VERSION,
        }
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    def _normalize_repo(self, data: dict[str, Any]) -> GitHubRepo:
        """Convert GitHub API response to GitHubRepo dataclass."""
        license_data = data.get("license")
        license_name = license_data.get("name") if license_data else None
        owner_data = data.get("owner") or {}

        return GitHubRepo(
            name=data["name"],
            full_name=data["full_name"],
            owner=owner_data.get("login", data["full_name"].split("/")[0]),
            description=data.get("description"),
            url=data["html_url"],
            language=data.get("language"),
            stars_count=data.get("stargazers_count", 0),
            forks_count=data.get("forks_count", 0),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            archived=data.get("archived", False),
            license_name=license_name,
            topics=list(data.get("topics") or []),
        )

    async def get_repo_details(self, owner: str, repo: str) -> GitHubRepo:
        """
        Fetch detailed information for a specific repository.

        Args:
            owner: Repository owner (username or org)
            repo: Repository name

        Returns:
            GitHubRepo with full repository details

        Raises:
            GitHubAPIError: If the repository cannot be read
        """
        response = await self.client.get(
            f"{self.BASE_URL}/repos/{owner}/{repo}",
            headers=self._headers,
        )

        handle_error_response(response, f"{owner}/{repo}")

        return self._normalize_repo(response.json())

    async def get_readme(self, owner: str, repo: str) -> RepoFile | None:
        """
        Fetch the repository README via the dedicated README endpoint.

        Returns:
            RepoFile with decoded content, or None if the repository has no README
        """
        response = await self.client.get(
            f"{self.BASE_URL}/repos/{owner}/{repo}/readme",
            headers=self._headers,
        )

        if response.status_code == 404:
            return None

        handle_error_response(response, f"{owner}/{repo}:README")

        data = response.json()
        content = _decode_content(data)
        if content is None:
            return None

        return RepoFile(
            path=data.get("path", "README.md"),
            content=content,
            size=data.get("size", 0),
            sha=data.get("sha", ""),
        )

    async def list_directory(
        self,
        owner: str,
        repo: str,
        path: str = "",
    ) -> list[ContentEntry]:
        """
        List the entries of one repository directory.

        Args:
            owner: Repository owner
            repo: Repository name
            path: Directory path ("" for the repository root)

        Returns:
            Entries in the order GitHub returns them. A path that points at a
            file yields an empty list.
        """
        response = await self.client.get(
            f"{self.BASE_URL}/repos/{owner}/{repo}/contents/{path}",
            headers=self._headers,
        )

        handle_error_response(response, f"{owner}/{repo}:{path or '/'}")

        data = response.json()
        if not isinstance(data, list):
            return []

        return [
            ContentEntry(
                path=item["path"],
                name=item.get("name", item["path"].split("/")[-1]),
                type=item.get("type", "file"),
                size=item.get("size", 0),
                sha=item.get("sha", ""),
            )
            for item in data
        ]

    async def get_file_content(
        self,
        owner: str,
        repo: str,
        path: str,
        max_size: int = 100_000,
    ) -> RepoFile | None:
        """
        Fetch the content of a specific file from a repository.

        Args:
            owner: Repository owner
            repo: Repository name
            path: File path within the repository
            max_size: Maximum file size in bytes to fetch (default: 100KB)

        Returns:
            RepoFile with decoded content, or None if the file is missing,
            too large, a directory or binary
        """
        response = await self.client.get(
            f"{self.BASE_URL}/repos/{owner}/{repo}/contents/{path}",
            headers=self._headers,
        )

        if response.status_code == 404:
            return None

        handle_error_response(response, f"{owner}/{repo}:{path}")

        data = response.json()

        if not isinstance(data, dict) or data.get("type") != "file":
            return None

        size = data.get("size", 0)
        if size > max_size:
            logger.debug(f"Skipping {path}: {size} bytes exceeds {max_size}")
            return None

        content = _decode_content(data)
        if content is None:
            return None

        return RepoFile(
            path=path,
            content=content,
            size=size,
            sha=data.get("sha", ""),
        )
