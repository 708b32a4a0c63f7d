#!/usr/bin/env python3
"""
Scoring Module - deterministic read-time ranking of the agency working set.

Public API:
- match_agencies / score_agency: relevance scoring for the conversational matcher
- trending_score / rank_trending / filter_trending: trending view ranking
- TrendingFilter: text, domain and popularity criteria

Modules:
- relevance.py: Additive keyword scoring against a project description
- trending.py: Composite trending score and filtering
"""

from core.scorer.relevance import match_agencies, score_agency, compose_reply
from core.scorer.trending import trending_score, rank_trending, filter_trending, TrendingFilter

__all__ = [
    'match_agencies',
    'score_agency',
    'compose_reply',
    'trending_score',
    'rank_trending',
    'filter_trending',
    'TrendingFilter',
]
