"""
GitHub service package.

Usage: `from repowiki.services.github import GitHubReadOperations, GitHubAPIError`

Module structure:
- read_operations.py: Read-only API operations (repo, README, contents)
- http_client.py: Pooled HTTP client factory
- helpers.py: Rate limit handling and error utilities
- types.py: Data types and response models
- exceptions.py: Custom exceptions
- constants.py: Documentation heuristics and manifest file names
"""

from repowiki.services.github.constants import MANIFEST_FILES, is_documentation_file
from repowiki.services.github.exceptions import GitHubAPIError
from repowiki.services.github.helpers import RateLimitInfo, handle_error_response
from repowiki.services.github.http_client import close_github_client, create_github_client
from repowiki.services.github.read_operations import GitHubReadOperations
from repowiki.services.github.types import ContentEntry, GitHubRepo, RepoFile

__all__ = [
    # Operations
    "GitHubReadOperations",
    # HTTP client lifecycle
    "create_github_client",
    "close_github_client",
    # Utilities
    "handle_error_response",
    "is_documentation_file",
    "RateLimitInfo",
    # Exceptions
    "GitHubAPIError",
    # Types
    "ContentEntry",
    "GitHubRepo",
    "RepoFile",
    # Constants
    "MANIFEST_FILES",
]
