"""
FastAPI dependencies.

Long-lived clients are created in the application lifespan and kept on
``app.state``. These dependencies hand them to per-request service objects.
Tests replace any of them through ``app.dependency_overrides``.
"""

import httpx
from anthropic import AsyncAnthropic
from fastapi import Depends, Request

from repowiki.config import settings
from repowiki.services.analysis import AnalysisServiceClient
from repowiki.services.docs import DocumentationPipeline, WikiPipeline
from repowiki.services.github import GitHubReadOperations


def get_github_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.github_client


def get_anthropic_client(request: Request) -> AsyncAnthropic:
    return request.app.state.anthropic_client


def get_analysis_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.analysis_client


def get_github_ops(
    client: httpx.AsyncClient = Depends(get_github_http_client),
) -> GitHubReadOperations:
    return GitHubReadOperations(client, token=settings.github_token)


def get_documentation_pipeline(
    github: GitHubReadOperations = Depends(get_github_ops),
    anthropic: AsyncAnthropic = Depends(get_anthropic_client),
) -> DocumentationPipeline:
    """Build a fresh documentation pipeline for this request."""
    return DocumentationPipeline.create(github, anthropic)


def get_wiki_pipeline(
    github: GitHubReadOperations = Depends(get_github_ops),
    anthropic: AsyncAnthropic = Depends(get_anthropic_client),
) -> WikiPipeline:
    return WikiPipeline.create(github, anthropic)


def get_analysis_service(
    client: httpx.AsyncClient = Depends(get_analysis_http_client),
) -> AnalysisServiceClient:
    return AnalysisServiceClient(client)
