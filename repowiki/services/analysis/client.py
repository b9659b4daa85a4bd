"""
AnalysisServiceClient - Read-only client for the ADocS analysis service.

The service exposes previously generated documentation:

    GET /api/documentation?repo=&docs_type=&section=
    GET /api/repositories?docs_type=

Responses are passed through untouched. Non-2xx responses are mapped to
AnalysisServiceError (AnalysisServiceNotFound for 404), carrying the
upstream ``detail`` message when the service provides one.
"""

import logging
from typing import Any

import httpx

from repowiki.config import settings
from repowiki.services.analysis.exceptions import AnalysisServiceError, AnalysisServiceNotFound

logger = logging.getLogger(__name__)

DEFAULT_DOCS_TYPE = "docs"


def create_analysis_client() -> httpx.AsyncClient:
    """Create the shared HTTP client for the analysis service."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(30.0, connect=5.0),
        headers={"Content-Type": "application/json"},
    )


def _upstream_detail(response: httpx.Response, default: str) -> str:
    try:
        data = response.json()
    except ValueError:
        return default
    if isinstance(data, dict) and data.get("detail"):
        return str(data["detail"])
    return default


class AnalysisServiceClient:
    """
    Thin wrapper around the analysis service HTTP API.

    Args:
        client: Shared httpx client
        base_url: Service root, defaults to settings.adocs_api_base
    """

    def __init__(self, client: httpx.AsyncClient, base_url: str | None = None) -> None:
        self.client = client
        self.base_url = (base_url or settings.adocs_api_base).rstrip("/")

    async def get_documentation(
        self,
        repo: str,
        section: str | None = None,
        docs_type: str = DEFAULT_DOCS_TYPE,
    ) -> Any:
        """
        Fetch the documentation bundle for a repository, or one section of it.

        Raises:
            AnalysisServiceNotFound: If the repository or section is unknown
            AnalysisServiceError: On any other failure
        """
        params = {"repo": repo, "docs_type": docs_type}
        if section:
            params["section"] = section
        return await self._get("/api/documentation", params, "Failed to get documentation")

    async def list_repositories(self, docs_type: str = DEFAULT_DOCS_TYPE) -> Any:
        """
        List repositories with generated documentation of ``docs_type``.

        Raises:
            AnalysisServiceError: If the service fails or is unreachable
        """
        return await self._get(
            "/api/repositories", {"docs_type": docs_type}, "Failed to get repositories"
        )

    async def _get(self, path: str, params: dict[str, str], failure: str) -> Any:
        url = f"{self.base_url}{path}"

        try:
            response = await self.client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error(f"Analysis service request to {path} failed: {e}")
            raise AnalysisServiceError(f"{failure}: {e}") from e

        if response.status_code == 404:
            raise AnalysisServiceNotFound(_upstream_detail(response, "Documentation not found"))

        if not response.is_success:
            detail = _upstream_detail(response, failure)
            logger.error(f"Analysis service returned {response.status_code} for {path}: {detail}")
            raise AnalysisServiceError(detail, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise AnalysisServiceError(f"{failure}: invalid JSON response") from e
