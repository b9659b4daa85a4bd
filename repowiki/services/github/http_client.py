"""
HTTP client factory for GitHub API operations.

The client is created once in the application lifespan and injected into
GitHubReadOperations, so connections are pooled across requests and tests
can substitute their own client.
"""

import logging

import httpx

logger = logging.getLogger(__name__)


def create_github_client() -> httpx.AsyncClient:
    """
    Create the shared HTTP client for GitHub API calls.

    Auth headers are passed per-request, not stored on the client.
    Redirects are followed so renamed or transferred repositories resolve.
    """
    client = httpx.AsyncClient(
        timeout=httpx.Timeout(30.0, connect=5.0),
        limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
        http2=True,
        follow_redirects=True,
    )
    logger.debug("Created GitHub HTTP client with connection pooling")
    return client


async def close_github_client(client: httpx.AsyncClient | None) -> None:
    """Close a GitHub HTTP client on app shutdown."""
    if client is not None and not client.is_closed:
        await client.aclose()
        logger.debug("Closed GitHub HTTP client")
