"""Constants for GitHub service."""

# Manifest and container files fetched from the repository root.
# These drive tech stack and setup command detection.
MANIFEST_FILES: list[str] = [
    "package.json",
    "requirements.txt",
    "pom.xml",
    "build.gradle",
    "Dockerfile",
    "docker-compose.yml",
]

# Documentation file detection patterns
# Used for scanning repos for documentation files

DOC_ROOT_FILES: set[str] = {"readme.md"}

DOC_PATH_PREFIXES: tuple[str, ...] = (
    "doc/",
    "docs/",
    "documentation/",
    "guide/",
    "examples/",
    "example/",
    "tutorial/",
)

DOC_FILE_EXTENSION = ".md"


def is_documentation_file(path: str) -> bool:
    """Check if a repository-relative path is a documentation file.

    Matches (case-insensitive):
    - README.md at the repository root
    - Anything under doc/, docs/, documentation/, guide/, examples/, example/, tutorial/
    - Any .md file, wherever it lives
    """
    path_lower = path.lower()

    if path_lower in DOC_ROOT_FILES:
        return True

    if path_lower.startswith(DOC_PATH_PREFIXES):
        return True

    return path_lower.endswith(DOC_FILE_EXTENSION)
