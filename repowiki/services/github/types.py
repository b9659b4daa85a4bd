"""Data types for GitHub API responses."""

from dataclasses import dataclass, field


@dataclass
class GitHubRepo:
    """Normalized GitHub repository data."""

    name: str
    full_name: str
    owner: str
    description: str | None
    url: str
    language: str | None
    stars_count: int
    forks_count: int
    created_at: str | None = None
    updated_at: str | None = None
    archived: bool = False
    license_name: str | None = None  # Human-readable name (e.g., "MIT License")
    topics: list[str] = field(default_factory=list)


@dataclass
class ContentEntry:
    """Single entry of a directory listing from the contents API."""

    path: str
    name: str
    type: str  # "file", "dir", "symlink" or "submodule"
    size: int = 0
    sha: str = ""


@dataclass
class RepoFile:
    """Contents of a single file from a repository."""

    path: str
    content: str  # Decoded text content
    size: int
    sha: str
