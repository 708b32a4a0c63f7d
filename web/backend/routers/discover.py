#!/usr/bin/env python3
"""
Discover endpoints - the conversational agency matcher.
"""

import logging
from fastapi import APIRouter, Depends

from ..dependencies import get_agency_service, require_session
from ..services.agency_service import AgencyService
from ..services.auth_service import SessionUser
from ..models.requests import MatchRequest
from ..models.responses import MatchResponse, AgencyCountResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/discover", tags=["discover"])


@router.post("/match", response_model=MatchResponse)
def match_agencies_endpoint(
    body: MatchRequest,
    service: AgencyService = Depends(get_agency_service),
    user: SessionUser = Depends(require_session)
):
    """
    Match a free-text project description against the agency directory.

    Returns an assistant reply and up to three agencies, best match first.
    An empty match list is a valid answer, not an error.
    """
    return service.match(body.query)


@router.get("/agencies", response_model=AgencyCountResponse)
def get_loaded_agencies(
    service: AgencyService = Depends(get_agency_service),
    user: SessionUser = Depends(require_session)
):
    """
    Load the agency working set and report how many agencies are available.
    """
    return service.count_agencies()
