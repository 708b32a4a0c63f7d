#!/usr/bin/env python3
"""
Domain and popularity classifiers.

Both are total functions: every input maps to exactly one label.
"""

from typing import Dict, List, Optional, Tuple

from core.models import Popularity

UNKNOWN_DOMAIN = "Unknown"
DEFAULT_DOMAIN = "Data & Analytics"
FALLBACK_SERVICES_KEY = "Other"
MAX_SERVICES = 3

DOMAIN_SERVICES: Dict[str, Tuple[str, ...]] = {
    'Web Development': ('Frontend Engineering', 'E-commerce Solutions', 'CMS Integration', 'API Development'),
    'AI/Machine Learning': ('LLM Integration', 'Predictive Modeling', 'Computer Vision', 'Data Science'),
    'Data & Analytics': ('BI Dashboarding', 'Data Warehousing', 'ETL Pipelines', 'PostgreSQL Optimization'),
    'DevOps & Cloud': ('Cloud Migration (AWS/Azure)', 'Kubernetes Management', 'CI/CD Automation', 'Infrastructure as Code'),
    'Mobile App Development': ('iOS/Android Native', 'Cross-Platform Dev', 'App Store Optimization', 'QA & Testing'),
    'Marketing & SEO': ('SEO Optimization', 'Content Strategy', 'Performance Marketing', 'Conversion Rate Optimization'),
    'UI/UX Design': ('Figma Prototyping', 'User Research', 'Design System Dev', 'Interaction Design'),
    'Other': ('General Consulting', 'Security Audits', 'Compliance'),
}

# Selectable in the trending domain filter
DOMAINS: List[str] = [d for d in DOMAIN_SERVICES if d != FALLBACK_SERVICES_KEY]

# Checked in order, first hit wins
_LANGUAGE_DOMAINS: List[Tuple[frozenset, str]] = [
    (frozenset({'typescript', 'javascript', 'html', 'css', 'php', 'ruby'}), 'Web Development'),
    (frozenset({'python', 'r'}), 'AI/Machine Learning'),
    (frozenset({'java', 'scala', 'c++', 'go', 'c#'}), 'DevOps & Cloud'),
]

# (lower bound, tier), highest first
POPULARITY_THRESHOLDS: List[Tuple[float, Popularity]] = [
    (4.8, Popularity.LEGENDARY),
    (4.5, Popularity.FAMOUS),
    (4.0, Popularity.POPULAR),
]


def classify_domain(language: Optional[str]) -> str:
    """
    Map a repository's primary language to a coarse industry domain.

    Args:
        language: Language label as reported by the metadata source, or None.

    Returns:
        "Unknown" for a missing language, the domain of the first matching
        language set, or "Data & Analytics" when nothing matches.
    """
    if not language:
        return UNKNOWN_DOMAIN

    lang = language.lower()
    for languages, domain in _LANGUAGE_DOMAINS:
        if lang in languages:
            return domain
    return DEFAULT_DOMAIN


def services_for(domain: str) -> Tuple[str, ...]:
    """Return the first three canonical services of a domain, in table order."""
    services = DOMAIN_SERVICES.get(domain) or DOMAIN_SERVICES[FALLBACK_SERVICES_KEY]
    return services[:MAX_SERVICES]


def classify_popularity(rating: float) -> Popularity:
    """Map a rating to its popularity tier. Lower bounds are inclusive."""
    for lower_bound, tier in POPULARITY_THRESHOLDS:
        if rating >= lower_bound:
            return tier
    return Popularity.RISING
