#!/usr/bin/env python3
"""
Repository overview endpoint - GitHub metadata proxy used by the enrichment loader.
"""

import logging
from fastapi import APIRouter, Depends, Query

from core.app_context import AppContext
from core.metadata_client import GitHubApiSource, OVERVIEW_PATH
from ..dependencies import get_app_context
from ..models.responses import GitHubOverviewResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["metadata"])


def get_github_source(context: AppContext = Depends(get_app_context)) -> GitHubApiSource:
    metadata_config = context.config.metadata
    return GitHubApiSource(
        api_url=metadata_config.github_api_url,
        token=metadata_config.github_token,
        request_timeout_seconds=metadata_config.request_timeout_seconds
    )


@router.get(OVERVIEW_PATH, response_model=GitHubOverviewResponse)
def github_overview(
    repo: str = Query(..., min_length=3, max_length=200, description="Repository as owner/name"),
    source: GitHubApiSource = Depends(get_github_source)
):
    """
    Get the language, description, fork count and URL of a repository.

    Unknown repositories and upstream failures answer with an empty object.
    """
    with source:
        record = source.fetch(repo)
    return GitHubOverviewResponse(**record.to_dict())
