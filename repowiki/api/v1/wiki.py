"""Wiki generation endpoint."""

import logging

from fastapi import APIRouter, Depends

from repowiki.api.deps import get_wiki_pipeline
from repowiki.api.v1.helpers import require_github_repo
from repowiki.core.exceptions import PipelineError
from repowiki.schemas.documentation import GenerateRequest, WikiResponse
from repowiki.services.docs import WikiPipeline

router = APIRouter(tags=["wiki"])
logger = logging.getLogger(__name__)

INVALID_URL = "Invalid GitHub repository URL"


@router.post("/generate-wiki", response_model=WikiResponse)
async def generate_wiki(
    body: GenerateRequest,
    pipeline: WikiPipeline = Depends(get_wiki_pipeline),
) -> WikiResponse:
    """
    Build an enhanced wiki from the repository's own documentation.

    README first, then every discovered doc file, each with a summary, key
    points and suggested improvements.
    """
    owner, repo = require_github_repo(body, invalid_message=INVALID_URL)
    logger.info(f"Generating wiki for {owner}/{repo}")

    try:
        result = await pipeline.run(owner, repo)
    except Exception:
        logger.exception(f"Wiki generation failed for {owner}/{repo}")
        raise PipelineError("Failed to generate wiki. Please check the repository URL and try again.")

    return WikiResponse.from_result(result)
