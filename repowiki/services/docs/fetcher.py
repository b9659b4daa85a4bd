"""
RepositoryFetcher - Collects the raw material for documentation generation.

Wraps GitHubReadOperations to fetch repository metadata, the README, root
manifest files, and every documentation-like file in the repository.

Only a failure to read the repository itself is fatal. A missing README,
an unreadable directory or a file that vanished between listing and fetching
is logged and treated as absent.
"""

import logging

import httpx

from repowiki.config import settings
from repowiki.services.docs.types import DocFile, DocFileType, Page, RepositorySnapshot
from repowiki.services.docs.utils import infer_doc_type, title_from_path
from repowiki.services.github import (
    MANIFEST_FILES,
    ContentEntry,
    GitHubAPIError,
    GitHubReadOperations,
    is_documentation_file,
)

logger = logging.getLogger(__name__)

# Failures that make a single README, manifest, directory or file unavailable
SKIPPABLE_ERRORS = (GitHubAPIError, httpx.RequestError, ValueError)


class RepositoryFetcher:
    """
    Fetches repository metadata, README, manifests and documentation files.

    Directory recursion is bounded by ``max_depth`` (directory nesting below
    the root) and ``max_files`` (documentation files collected), so a huge
    repository cannot fan out into an unbounded number of API calls.
    """

    def __init__(
        self,
        github: GitHubReadOperations,
        max_depth: int | None = None,
        max_files: int | None = None,
    ) -> None:
        self.github = github
        self.max_depth = settings.docs_max_depth if max_depth is None else max_depth
        self.max_files = settings.docs_max_files if max_files is None else max_files

    async def fetch(self, owner: str, repo: str) -> RepositorySnapshot:
        """
        Fetch everything the pipeline needs for one repository.

        Raises:
            GitHubAPIError: If the repository metadata cannot be read
        """
        details = await self.github.get_repo_details(owner, repo)
        logger.info(f"Fetched repository {details.full_name}")

        readme, readme_path = await self.fetch_readme(owner, repo)
        manifests = await self.fetch_manifests(owner, repo)
        doc_files = await self.fetch_documentation_files(owner, repo, skip_path=readme_path)

        return RepositorySnapshot(
            owner=owner,
            repo=repo,
            readme=readme,
            readme_path=readme_path,
            doc_files=doc_files,
            manifests=manifests,
            details=details,
        )

    async def fetch_readme(self, owner: str, repo: str) -> tuple[str, str | None]:
        """Fetch README text; ("", None) when there is none or it can't be read."""
        try:
            readme = await self.github.get_readme(owner, repo)
        except SKIPPABLE_ERRORS as e:
            logger.info(f"README for {owner}/{repo} not accessible: {e}")
            return "", None

        if readme is None:
            logger.info(f"No README found for {owner}/{repo}")
            return "", None
        return readme.content, readme.path

    async def fetch_manifests(self, owner: str, repo: str) -> dict[str, str]:
        """Fetch the root manifest files that exist. Missing files are normal."""
        manifests: dict[str, str] = {}

        for name in MANIFEST_FILES:
            try:
                file = await self.github.get_file_content(owner, repo, name)
            except SKIPPABLE_ERRORS as e:
                logger.warning(f"Could not fetch {name} from {owner}/{repo}: {e}")
                continue
            if file is not None:
                manifests[name] = file.content

        return manifests

    async def find_documentation_files(
        self,
        owner: str,
        repo: str,
        path: str = "",
        depth: int = 0,
    ) -> list[ContentEntry]:
        """
        Recursively list every documentation file below ``path``.

        Subdirectory listing errors are logged and treated as empty.
        """
        try:
            entries = await self.github.list_directory(owner, repo, path)
        except SKIPPABLE_ERRORS as e:
            logger.warning(f"Error accessing directory {path or '/'} in {owner}/{repo}: {e}")
            return []

        found: list[ContentEntry] = []

        for entry in entries:
            if len(found) >= self.max_files:
                break

            if entry.type == "file":
                if is_documentation_file(entry.path):
                    found.append(entry)
            elif entry.type == "dir":
                if depth >= self.max_depth:
                    logger.warning(
                        f"Skipping {entry.path} in {owner}/{repo}: depth limit {self.max_depth} reached"
                    )
                    continue
                sub_files = await self.find_documentation_files(owner, repo, entry.path, depth + 1)
                found.extend(sub_files[: self.max_files - len(found)])

        if depth == 0 and len(found) >= self.max_files:
            logger.warning(f"Documentation discovery for {owner}/{repo} capped at {self.max_files} files")

        return found

    async def fetch_documentation_files(
        self,
        owner: str,
        repo: str,
        skip_path: str | None = None,
    ) -> list[DocFile]:
        """
        Discover and fetch documentation files as DocFile records.

        Args:
            owner: Repository owner
            repo: Repository name
            skip_path: Path already fetched elsewhere (the README)

        Returns:
            DocFiles in discovery order; files that fail to fetch are omitted
        """
        entries = await self.find_documentation_files(owner, repo)
        doc_files: list[DocFile] = []

        for entry in entries:
            if skip_path and entry.path == skip_path:
                continue

            try:
                file = await self.github.get_file_content(owner, repo, entry.path)
            except SKIPPABLE_ERRORS as e:
                logger.warning(f"Error fetching file {entry.path}: {e}")
                continue

            if file is None:
                logger.debug(f"Skipping unreadable file {entry.path}")
                continue

            doc_files.append(
                DocFile(
                    path=entry.path,
                    content=file.content,
                    title=title_from_path(entry.path),
                    type=DocFileType(infer_doc_type(entry.path)),
                )
            )

        logger.info(f"Fetched {len(doc_files)} documentation files from {owner}/{repo}")
        return doc_files


def source_pages(snapshot: RepositorySnapshot) -> list[Page]:
    """Pages for the repository's own documentation: README first, then doc files."""
    pages: list[Page] = []

    if snapshot.readme:
        pages.append(
            Page(
                title="README",
                content=snapshot.readme,
                path=snapshot.readme_path or "README.md",
                type=DocFileType.README.value,
            )
        )

    for doc in snapshot.doc_files:
        pages.append(Page(title=doc.title, content=doc.content, path=doc.path, type=doc.type.value))

    return pages
