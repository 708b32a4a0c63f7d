#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

# View status values
STATUS_OK = "ok"
STATUS_UNAVAILABLE = "unavailable"


class AgencySummary(BaseModel):
    """An enriched agency as shown in both views."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Supabase",
                "domain": "Web Development",
                "services": ["Frontend Engineering", "E-commerce Solutions", "CMS Integration"],
                "rating": 4.9,
                "project_count": 8200,
                "formatted_projects": "8.2k",
                "popularity": "legendary",
                "description": "The Postgres development platform.",
                "image_url": "https://github.com/supabase.png",
                "repo_ref": "supabase/supabase",
                "website_url": "https://supabase.com",
                "canonical_url": "https://github.com/supabase/supabase",
                "destination_url": "https://supabase.com"
            }
        }
    )

    name: str
    domain: str
    services: List[str]
    rating: float
    project_count: int
    formatted_projects: str
    popularity: str
    description: str
    image_url: Optional[str] = None
    repo_ref: Optional[str] = None
    website_url: Optional[str] = None
    canonical_url: str
    destination_url: str


class AgencyMatch(BaseModel):
    """An agency with its relevance score."""
    match_score: float = Field(ge=0)
    agency: AgencySummary


class MatchResponse(BaseModel):
    """Assistant reply of the conversational matcher."""
    success: bool
    status: str
    query: str
    message: str
    count: int
    matches: List[AgencyMatch]


class AgencyCountResponse(BaseModel):
    """How many agencies the matcher has loaded."""
    success: bool
    status: str
    count: int
    message: Optional[str] = None


class TrendingEntry(BaseModel):
    """A ranked row of the trending table."""
    rank: int = Field(ge=1)
    is_hot: bool
    trending_score: float
    agency: AgencySummary


class AppliedFilters(BaseModel):
    query: str = ""
    domain: str = ""
    popularity: Optional[str] = None


class TrendingResponse(BaseModel):
    """One page of the trending table."""
    success: bool
    status: str
    message: Optional[str] = None
    filters: AppliedFilters
    page: int
    page_size: int
    total: int
    total_pages: int
    has_next: bool
    has_previous: bool
    entries: List[TrendingEntry]


class FilterOption(BaseModel):
    value: str
    label: str


class TrendingFiltersResponse(BaseModel):
    """Options for the domain and popularity selects."""
    domains: List[FilterOption]
    popularity: List[FilterOption]


class SignInResponse(BaseModel):
    """Result of a sign-in attempt."""
    success: bool
    error: Optional[str] = None
    redirect_to: Optional[str] = None


class SignOutResponse(BaseModel):
    success: bool


class SessionResponse(BaseModel):
    """Current sign-in state."""
    authenticated: bool
    email: Optional[str] = None
    display_name: Optional[str] = None
    bypass: bool = False


class AuthPageResponse(BaseModel):
    """Returned by /auth when the sign-in form should be shown."""
    authenticated: bool
    sign_in_url: str


class GitHubOverviewResponse(BaseModel):
    """Repository overview as consumed by the enrichment loader."""
    language: Optional[str] = None
    description: Optional[str] = None
    forks_count: Optional[int] = None
    html_url: Optional[str] = None
