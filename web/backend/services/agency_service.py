#!/usr/bin/env python3
"""
Agency service - assembles the agency working set and serves both views.
"""

import contextlib
import logging
import threading
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence

from core.classifiers import DOMAINS
from core.enrichment import AgencyEnricher, EnrichmentError
from core.models import Agency, Popularity, SeedRecord
from core.debounce import DEFAULT_WAIT_SECONDS
from core.scorer import TrendingFilter, compose_reply, match_agencies, rank_trending
from core.trending_board import TrendingBoard
from core.utils import format_count
from ..exceptions import InvalidFilterException
from ..models.responses import (
    AgencySummary,
    AgencyMatch,
    AgencyCountResponse,
    AppliedFilters,
    FilterOption,
    MatchResponse,
    TrendingEntry,
    TrendingFiltersResponse,
    TrendingResponse,
    STATUS_OK,
    STATUS_UNAVAILABLE,
)

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = "No agencies available right now."
NO_TRENDING_MESSAGE = "No trending agencies found matching your criteria."


@dataclass
class AgencyLoad:
    """Outcome of one view load."""
    agencies: List[Agency] = field(default_factory=list)
    available: bool = True


@contextlib.contextmanager
def view_scope() -> Iterator[threading.Event]:
    """
    Cancellation scope for one view load.

    Yields a stop event that is set when the scope exits, so lookups still
    in flight when the view is torn down are abandoned.
    """
    stop_event = threading.Event()
    try:
        yield stop_event
    finally:
        stop_event.set()


class AgencyService:
    """Service for the matcher and trending views."""

    def __init__(
        self,
        seeds: Sequence[SeedRecord],
        enricher: AgencyEnricher,
        match_limit: int = 3,
        page_size: int = 20,
        debounce_seconds: float = DEFAULT_WAIT_SECONDS
    ):
        self.seeds = tuple(seeds)
        self.enricher = enricher
        self.match_limit = match_limit
        self.page_size = page_size
        self.debounce_seconds = debounce_seconds

    def load_agencies(self, stop_event: Optional[threading.Event] = None) -> AgencyLoad:
        """
        Rebuild the agency working set.

        A batch failure is logged and reported as an unavailable, empty set
        rather than raised.
        """
        try:
            agencies = self.enricher.enrich(self.seeds, stop_event=stop_event)
        except EnrichmentError:
            logger.exception("Could not assemble agency working set")
            return AgencyLoad(agencies=[], available=False)
        return AgencyLoad(agencies=agencies, available=True)

    def count_agencies(self) -> AgencyCountResponse:
        with view_scope() as stop_event:
            load = self.load_agencies(stop_event)

        return AgencyCountResponse(
            success=load.available,
            status=STATUS_OK if load.available else STATUS_UNAVAILABLE,
            count=len(load.agencies),
            message=None if load.available else UNAVAILABLE_MESSAGE
        )

    def match(self, query: str) -> MatchResponse:
        """
        Answer a project description with the best matching agencies.

        Args:
            query: Free-text project description.

        Returns:
            Assistant reply and up to match_limit agencies.
        """
        with view_scope() as stop_event:
            load = self.load_agencies(stop_event)

        if not load.available:
            return MatchResponse(
                success=False,
                status=STATUS_UNAVAILABLE,
                query=query,
                message=UNAVAILABLE_MESSAGE,
                count=0,
                matches=[]
            )

        matches = match_agencies(query, load.agencies, limit=self.match_limit)
        logger.info(f"Matched {len(matches)} of {len(load.agencies)} agencies for query of {len(query)} chars")

        return MatchResponse(
            success=True,
            status=STATUS_OK,
            query=query,
            message=compose_reply(matches),
            count=len(matches),
            matches=[
                AgencyMatch(match_score=m.score, agency=self._to_agency_summary(m.agency))
                for m in matches
            ]
        )

    def trending(
        self,
        query: Optional[str] = None,
        domain: Optional[str] = None,
        popularity: Optional[str] = None,
        page: int = 1,
        page_size: Optional[int] = None
    ) -> TrendingResponse:
        """
        Get one page of the trending table.

        The full set is ranked right after enrichment and loaded into a
        TrendingBoard. A request carries one final set of criteria, so the
        board's pending update is flushed instead of waiting out the window.

        Raises:
            InvalidFilterException: If popularity is not a known tier.
        """
        try:
            TrendingFilter.build(query=query, domain=domain, popularity=popularity)
        except ValueError:
            raise InvalidFilterException(
                f"Invalid popularity '{popularity}'. "
                f"Valid options: {', '.join(p.value for p in Popularity)}"
            )

        with view_scope() as stop_event:
            load = self.load_agencies(stop_event)

        board = TrendingBoard(rank_trending(load.agencies), debounce_seconds=self.debounce_seconds)
        try:
            board.update_criteria(query=query, domain=domain, popularity=popularity)
            board.flush()
            criteria = board.criteria
            trending_page = board.page(page, page_size=page_size or self.page_size)
        finally:
            board.close()

        message = None
        if not load.available:
            message = UNAVAILABLE_MESSAGE
        elif trending_page.total == 0:
            message = NO_TRENDING_MESSAGE

        return TrendingResponse(
            success=load.available,
            status=STATUS_OK if load.available else STATUS_UNAVAILABLE,
            message=message,
            filters=AppliedFilters(
                query=criteria.query,
                domain=criteria.domain,
                popularity=criteria.popularity.value if criteria.popularity else None
            ),
            page=trending_page.page,
            page_size=trending_page.page_size,
            total=trending_page.total,
            total_pages=trending_page.total_pages,
            has_next=trending_page.has_next,
            has_previous=trending_page.has_previous,
            entries=[
                TrendingEntry(
                    rank=entry.rank,
                    is_hot=entry.is_hot,
                    trending_score=entry.scored.score,
                    agency=self._to_agency_summary(entry.scored.agency)
                )
                for entry in trending_page.entries
            ]
        )

    @staticmethod
    def get_filter_options() -> TrendingFiltersResponse:
        return TrendingFiltersResponse(
            domains=[FilterOption(value=d.lower(), label=d) for d in DOMAINS],
            popularity=[FilterOption(value=p.value, label=p.value.capitalize()) for p in Popularity]
        )

    # Private methods

    @staticmethod
    def _to_agency_summary(agency: Agency) -> AgencySummary:
        return AgencySummary(
            name=agency.name,
            domain=agency.domain,
            services=list(agency.services),
            rating=agency.rating,
            project_count=agency.project_count,
            formatted_projects=format_count(agency.project_count),
            popularity=agency.popularity.value,
            description=agency.description,
            image_url=agency.image_url,
            repo_ref=agency.repo_ref,
            website_url=agency.website_url,
            canonical_url=agency.canonical_url,
            destination_url=agency.destination_url
        )
