#!/usr/bin/env python3
"""
Trending board - stateful model behind the trending table.

Holds the agency set ranked once after enrichment, applies filter changes
through a latest-wins debouncer, and serves fixed-size pages.
"""

import logging
import math
import threading
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from core.debounce import Debouncer, DEFAULT_WAIT_SECONDS
from core.models import ScoredAgency
from core.scorer.trending import TrendingFilter, filter_trending

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
HOT_RANKS = 5


@dataclass(frozen=True)
class RankedEntry:
    """A ranked row: 1-based position within the current results."""
    rank: int
    scored: ScoredAgency
    is_hot: bool = False


@dataclass(frozen=True)
class TrendingPage:
    """One page of trending results."""
    page: int
    page_size: int
    total: int
    entries: List[RankedEntry] = field(default_factory=list)

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total / self.page_size))

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


def paginate(results: Sequence[ScoredAgency], page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> TrendingPage:
    """
    Slice ranked results into a page. Page numbers below 1 clamp to 1.

    Rows within the first five ranks are flagged as hot.
    """
    page = max(1, page)
    page_size = max(1, page_size)
    offset = (page - 1) * page_size
    entries = [
        RankedEntry(rank=offset + i + 1, scored=scored, is_hot=offset + i < HOT_RANKS)
        for i, scored in enumerate(results[offset:offset + page_size])
    ]
    return TrendingPage(page=page, page_size=page_size, total=len(results), entries=entries)


class TrendingBoard:
    """
    Filterable view over a ranked agency list.

    ``update_criteria`` may be called on every keystroke; recomputation runs
    once per debounce window with the latest criteria. ``results`` always
    reflects the last completed recomputation, never an intermediate one.
    """

    def __init__(self, ranked: Sequence[ScoredAgency], debounce_seconds: float = DEFAULT_WAIT_SECONDS):
        self._ranked = list(ranked)
        self._lock = threading.Lock()
        self._criteria = TrendingFilter()
        self._results: List[ScoredAgency] = list(self._ranked)
        self._debouncer = Debouncer(self._apply, wait_seconds=debounce_seconds)

    @property
    def criteria(self) -> TrendingFilter:
        with self._lock:
            return self._criteria

    @property
    def results(self) -> List[ScoredAgency]:
        with self._lock:
            return list(self._results)

    @property
    def is_pending(self) -> bool:
        return self._debouncer.is_pending

    def update_criteria(
        self,
        query: Optional[str] = None,
        domain: Optional[str] = None,
        popularity: Optional[str] = None
    ) -> None:
        """
        Schedule a recomputation with new criteria.

        Raises:
            ValueError: If popularity is not a known tier.
        """
        self._debouncer.call(TrendingFilter.build(query=query, domain=domain, popularity=popularity))

    def flush(self) -> bool:
        """Apply the pending criteria immediately. Returns False if none was pending."""
        return self._debouncer.flush()

    def close(self) -> None:
        """Drop any pending recomputation."""
        self._debouncer.cancel()

    def _apply(self, criteria: TrendingFilter) -> None:
        filtered = filter_trending(self._ranked, criteria)
        with self._lock:
            self._criteria = criteria
            self._results = filtered
        logger.debug(f"Trending filter applied: {len(filtered)}/{len(self._ranked)} agencies")

    def page(self, number: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> TrendingPage:
        return paginate(self.results, page=number, page_size=page_size)
