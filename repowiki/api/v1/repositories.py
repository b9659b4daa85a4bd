"""Listing of repositories with generated documentation."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query

from repowiki.api.deps import get_analysis_service
from repowiki.core.exceptions import UpstreamServiceError
from repowiki.services.analysis import AnalysisServiceClient, AnalysisServiceError

router = APIRouter(tags=["repositories"])
logger = logging.getLogger(__name__)


@router.get("/repositories")
async def list_repositories(
    docs_type: str = Query("docs", alias="type", description="docs or wiki"),
    analysis: AnalysisServiceClient = Depends(get_analysis_service),
) -> Any:
    """List repositories the analysis service has documentation for."""
    try:
        return await analysis.list_repositories(docs_type)
    except AnalysisServiceError as e:
        logger.error(f"Error getting repositories: {e.message}")
        raise UpstreamServiceError("Failed to get repositories")
