"""
Documentation endpoints.

POST /generate-documentation runs the full pipeline for a GitHub repository.
GET /documentation proxies previously generated documentation from the
analysis service.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query

from repowiki.api.deps import get_analysis_service, get_documentation_pipeline
from repowiki.api.v1.helpers import require_github_repo
from repowiki.core.exceptions import (
    NotFoundError,
    PipelineError,
    UpstreamServiceError,
    ValidationError,
)
from repowiki.schemas.documentation import DocumentationResponse, GenerateRequest
from repowiki.services.analysis import (
    AnalysisServiceClient,
    AnalysisServiceError,
    AnalysisServiceNotFound,
)
from repowiki.services.docs import DocumentationPipeline

router = APIRouter(tags=["documentation"])
logger = logging.getLogger(__name__)

GENERATION_FAILED = "Failed to analyze repository. Please check the repository URL and try again."
FETCH_FAILED = "Failed to fetch documentation"


@router.post("/generate-documentation", response_model=DocumentationResponse)
async def generate_documentation(
    body: GenerateRequest,
    pipeline: DocumentationPipeline = Depends(get_documentation_pipeline),
) -> DocumentationResponse:
    """
    Generate documentation for a GitHub repository.

    Fetches the repository, synthesizes an outline, generates a page for
    every outline node and returns pages together with a navigation tree.
    Individual page failures produce placeholder content; only a failure to
    read the repository itself fails the request.
    """
    owner, repo = require_github_repo(body)
    logger.info(f"Generating documentation for {owner}/{repo}")

    try:
        result = await pipeline.run(owner, repo)
    except Exception:
        logger.exception(f"Documentation generation failed for {owner}/{repo}")
        raise PipelineError(GENERATION_FAILED)

    return DocumentationResponse.from_result(result)


@router.get("/documentation")
async def get_documentation(
    repo: str | None = Query(None, description="Repository identifier, e.g. owner/name"),
    section: str | None = Query(None, description="Single section to fetch"),
    docs_type: str = Query("docs", alias="type", description="docs or wiki"),
    analysis: AnalysisServiceClient = Depends(get_analysis_service),
) -> Any:
    """
    Fetch previously generated documentation from the analysis service.

    Without ``section`` the whole bundle is returned; with it, a single
    ``{content, section, repository, generated_at}`` object.
    """
    if not repo:
        raise ValidationError("Repository parameter is required")

    try:
        return await analysis.get_documentation(repo, section=section, docs_type=docs_type)
    except AnalysisServiceNotFound as e:
        raise NotFoundError(e.message)
    except AnalysisServiceError as e:
        logger.error(f"Error fetching documentation for {repo}: {e.message}")
        raise UpstreamServiceError(FETCH_FAILED)
