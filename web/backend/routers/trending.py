#!/usr/bin/env python3
"""
Trending endpoints - ranked, filterable agency table.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query

from ..dependencies import get_agency_service, require_session
from ..services.agency_service import AgencyService
from ..services.auth_service import SessionUser
from ..models.responses import TrendingResponse, TrendingFiltersResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/trending", tags=["trending"])


@router.get("", response_model=TrendingResponse)
def get_trending(
    q: Optional[str] = Query(default=None, max_length=200, description="Text filter on name, domain or services"),
    domain: Optional[str] = Query(default=None, description="Exact domain, case-insensitive"),
    popularity: Optional[str] = Query(default=None, description="legendary, famous, popular or rising"),
    page: int = Query(default=1, description="1-based page number; values below 1 are treated as 1"),
    page_size: Optional[int] = Query(default=None, ge=1, le=200, description="Rows per page"),
    service: AgencyService = Depends(get_agency_service),
    user: SessionUser = Depends(require_session)
):
    """
    Get agencies ranked by trending score.

    The whole directory is ranked first; filters only remove rows and never
    change the relative order of the remaining ones.
    """
    return service.trending(
        query=q,
        domain=domain,
        popularity=popularity,
        page=page,
        page_size=page_size
    )


@router.get("/filters", response_model=TrendingFiltersResponse)
def get_trending_filters():
    """Options for the domain and popularity filters."""
    return AgencyService.get_filter_options()
