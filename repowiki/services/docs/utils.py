"""
Shared utilities for documentation services.

Contains the path, title and slug helpers used by the fetcher, the content
enhancer and the navigation assembler.
"""

import re

GITHUB_URL_PATTERN = re.compile(r"github\.com/([^/\s?#]+)/([^/\s?#]+)", re.IGNORECASE)


def parse_github_url(url: str) -> tuple[str, str] | None:
    """
    Extract (owner, repo) from a GitHub repository URL.

    Accepts anything containing ``github.com/{owner}/{repo}``; a trailing
    ``.git`` is dropped from the repository name.

    Returns:
        (owner, repo) tuple, or None if the URL does not name a repository
    """
    match = GITHUB_URL_PATTERN.search(url or "")
    if not match:
        return None

    owner, repo = match.group(1), match.group(2)
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    if not owner or not repo:
        return None
    return owner, repo


def title_from_path(path: str) -> str:
    """
    Derive a display title from a file path.

    Drops the extension, turns ``-``/``_`` into spaces and upper-cases the first
    letter of every word. The rest of each word is kept as-is, so
    ``README.md`` stays ``README``.

    Args:
        path: File path

    Returns:
        Title string
    """
    filename = path.split("/")[-1]
    name = re.sub(r"\.(md|txt|rst)$", "", filename, flags=re.IGNORECASE)
    name = re.sub(r"[-_]", " ", name)
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), name)


def infer_doc_type(path: str) -> str:
    """
    Infer documentation file type from its path.

    Priority order: readme, docs, code, other.

    Returns:
        Document type string (readme, docs, code, other)
    """
    path_lower = path.lower()

    if "readme" in path_lower:
        return "readme"
    if "docs" in path_lower or "documentation" in path_lower:
        return "docs"
    if "example" in path_lower or "demo" in path_lower:
        return "code"

    return "other"


def slugify(title: str) -> str:
    """
    Turn a title into a URL path segment.

    ``"Getting Started"`` -> ``"getting-started"``. Punctuation is removed;
    an empty result becomes ``"untitled"``.
    """
    slug = re.sub(r"[^\w\s-]", "", title.lower())
    slug = re.sub(r"[-\s]+", "-", slug).strip("-")
    return slug or "untitled"


def unique_slugs(titles: list[str]) -> list[str]:
    """
    Slugify a list of sibling titles so that no two siblings collide.

    The first occurrence keeps the plain slug; later collisions get ``-2``,
    ``-3``... in list order.

    Example:
        ["Setup", "setup!", "Usage"] -> ["setup", "setup-2", "usage"]
    """
    seen: set[str] = set()
    result: list[str] = []

    for title in titles:
        base = slugify(title)
        slug = base
        counter = 2
        while slug in seen:
            slug = f"{base}-{counter}"
            counter += 1
        seen.add(slug)
        result.append(slug)

    return result


def join_path(parent: str, slug: str) -> str:
    """Join a parent path and a child slug with ``/``."""
    return f"{parent}/{slug}" if parent else slug


def join_breadcrumb(parent: str, title: str) -> str:
    """Join a parent breadcrumb and a title with `` > ``."""
    return f"{parent} > {title}" if parent else title
