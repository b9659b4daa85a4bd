"""Shared helpers for the generation endpoints."""

from repowiki.core.exceptions import ValidationError
from repowiki.schemas.documentation import GenerateRequest
from repowiki.services.docs.utils import parse_github_url


def require_github_repo(
    body: GenerateRequest,
    invalid_message: str = "Invalid GitHub URL",
) -> tuple[str, str]:
    """
    Extract (owner, repo) from a generation request body.

    Args:
        body: Request body carrying ``repoUrl``
        invalid_message: Error text when the URL is not a GitHub repository

    Raises:
        ValidationError: If the URL is missing or not a GitHub repository URL
    """
    if not body.repo_url or not body.repo_url.strip():
        raise ValidationError("Repository URL is required")

    parsed = parse_github_url(body.repo_url)
    if parsed is None:
        raise ValidationError(invalid_message)
    return parsed
