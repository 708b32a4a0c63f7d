#!/usr/bin/env python3
"""
Relevance scoring for the conversational matcher.

Additive point scoring with case-insensitive substring matching between a
free-text project description and each agency's domain, services and
description.
"""

from typing import List, Sequence

from core.models import Agency, Popularity, ScoredAgency

DEFAULT_MATCH_LIMIT = 3
MIN_KEYWORD_LENGTH = 4

# Point values
DOMAIN_IN_QUERY_POINTS = 30
SERVICE_IN_QUERY_POINTS = 20
KEYWORD_IN_DESCRIPTION_POINTS = 5
KEYWORD_IN_DOMAIN_POINTS = 10
KEYWORD_IN_SERVICE_POINTS = 8
LEGENDARY_BONUS = 5
FAMOUS_BONUS = 3
HIGH_VOLUME_BONUS = 5
HIGH_VOLUME_PROJECTS = 1000

MATCHES_FOUND_REPLY = (
    "Based on your project requirements, I've found {count} highly suitable agencies for you:"
)
NO_MATCHES_REPLY = (
    "I couldn't find any agencies that closely match your requirements. "
    "Try being more specific about the technologies or services you need."
)


def extract_keywords(query: str) -> List[str]:
    """Lowercased whitespace tokens longer than three characters."""
    return [word for word in query.lower().split() if len(word) >= MIN_KEYWORD_LENGTH]


def score_agency(query: str, agency: Agency) -> float:
    """
    Score one agency against a free-text query.

    The popularity and project-volume bonuses only apply once the query
    hit the agency's domain, services or description.

    Returns:
        Total points; zero means "no match".
    """
    lower_query = query.lower()
    keywords = extract_keywords(query)
    domain = agency.domain.lower()
    services = [service.lower() for service in agency.services]

    score = 0
    if domain in lower_query:
        score += DOMAIN_IN_QUERY_POINTS

    for service in services:
        if service in lower_query:
            score += SERVICE_IN_QUERY_POINTS

    if agency.description:
        description = agency.description.lower()
        for keyword in keywords:
            if keyword in description:
                score += KEYWORD_IN_DESCRIPTION_POINTS

    for keyword in keywords:
        if keyword in domain:
            score += KEYWORD_IN_DOMAIN_POINTS
        for service in services:
            if keyword in service:
                score += KEYWORD_IN_SERVICE_POINTS

    # An empty query matches nothing: bonuses only apply after a text hit
    if score == 0:
        return 0.0

    if agency.popularity == Popularity.LEGENDARY:
        score += LEGENDARY_BONUS
    elif agency.popularity == Popularity.FAMOUS:
        score += FAMOUS_BONUS

    if agency.project_count > HIGH_VOLUME_PROJECTS:
        score += HIGH_VOLUME_BONUS

    return float(score)


def match_agencies(
    query: str,
    agencies: Sequence[Agency],
    limit: int = DEFAULT_MATCH_LIMIT
) -> List[ScoredAgency]:
    """
    Rank agencies against a project description.

    Agencies scoring zero are dropped. The sort is stable, so equal scores
    keep their input order.

    Args:
        query: Free-text project description.
        agencies: Enriched agency working set.
        limit: Maximum number of matches to return.

    Returns:
        Up to ``limit`` scored agencies, best first.
    """
    scored = [ScoredAgency(agency=agency, score=score_agency(query, agency)) for agency in agencies]
    scored = [s for s in scored if s.score > 0]
    scored.sort(key=lambda s: s.score, reverse=True)
    return scored[:limit]


def compose_reply(matches: Sequence[ScoredAgency]) -> str:
    """Assistant reply shown above the matched agencies."""
    if matches:
        return MATCHES_FOUND_REPLY.format(count=len(matches))
    return NO_MATCHES_REPLY
