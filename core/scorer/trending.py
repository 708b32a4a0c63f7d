#!/usr/bin/env python3
"""
Trending scoring - composite ranking key for the trending view.

    normalized_rating   = rating / 5
    normalized_projects = log10(project_count + 1) / 5
    score = 0.6 * normalized_projects + 0.3 * normalized_rating + momentum

Momentum is a flat 0.1 for rising-tier agencies, which otherwise sit at the
bottom because of their low ratings.
"""

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Union

from core.models import Agency, Popularity, ScoredAgency

PROJECT_WEIGHT = 0.6
RATING_WEIGHT = 0.3
MOMENTUM_BONUS = 0.1
RATING_SCALE = 5.0
PROJECT_LOG_SCALE = 5.0


def trending_score(agency: Agency) -> float:
    """Composite trending score. Pure function of rating, project count and tier."""
    normalized_rating = agency.rating / RATING_SCALE
    normalized_projects = math.log10(agency.project_count + 1) / PROJECT_LOG_SCALE
    momentum = MOMENTUM_BONUS if agency.popularity == Popularity.RISING else 0.0
    return normalized_projects * PROJECT_WEIGHT + normalized_rating * RATING_WEIGHT + momentum


def _sort_by_score(scored: Iterable[ScoredAgency]) -> List[ScoredAgency]:
    # sorted() is stable: equal scores keep their prior relative order
    return sorted(scored, key=lambda s: s.score, reverse=True)


def rank_trending(agencies: Sequence[Agency]) -> List[ScoredAgency]:
    """Score every agency and sort descending by trending score."""
    return _sort_by_score(ScoredAgency(agency=a, score=trending_score(a)) for a in agencies)


@dataclass(frozen=True)
class TrendingFilter:
    """
    Filter criteria for the trending view. Empty criteria match everything.

    Attributes:
        query: Case-insensitive substring of name, domain or any service.
        domain: Case-insensitive exact domain.
        popularity: Exact popularity tier.
    """
    query: str = ""
    domain: str = ""
    popularity: Optional[Popularity] = None

    @classmethod
    def build(
        cls,
        query: Optional[str] = None,
        domain: Optional[str] = None,
        popularity: Optional[Union[str, Popularity]] = None
    ) -> 'TrendingFilter':
        """
        Normalize raw criteria.

        Raises:
            ValueError: If popularity is not a known tier.
        """
        tier = Popularity(popularity.lower() if isinstance(popularity, str) else popularity) if popularity else None
        return cls(
            query=(query or "").strip().lower(),
            domain=(domain or "").strip().lower(),
            popularity=tier,
        )

    @property
    def is_empty(self) -> bool:
        return not self.query and not self.domain and self.popularity is None

    def matches(self, agency: Agency) -> bool:
        q = self.query.strip().lower()
        match_query = not q or (
            q in agency.name.lower()
            or q in agency.domain.lower()
            or any(q in service.lower() for service in agency.services)
        )
        match_domain = not self.domain or agency.domain.lower() == self.domain.strip().lower()
        match_popularity = self.popularity is None or agency.popularity == self.popularity
        return match_query and match_domain and match_popularity


def filter_trending(ranked: Sequence[ScoredAgency], criteria: TrendingFilter) -> List[ScoredAgency]:
    """
    Filter an already-ranked list and re-apply the descending sort.

    Filtering never changes the relative order of surviving agencies.
    """
    return _sort_by_score(s for s in ranked if criteria.matches(s.agency))
