#!/usr/bin/env python3
"""
Directory Models - Data structures for seed records, fetched metadata and agencies.
"""

import math
from enum import Enum
from typing import Any, Dict, Optional, Tuple
from dataclasses import dataclass

DEFAULT_RATING = 4.0
DEFAULT_DESCRIPTION = "Specialized engineering and design solutions."
REPO_URL_TEMPLATE = "https://github.com/{repo}"


class Popularity(str, Enum):
    """Four-tier popularity label, highest first."""
    LEGENDARY = "legendary"
    FAMOUS = "famous"
    POPULAR = "popular"
    RISING = "rising"


@dataclass(frozen=True)
class SeedRecord:
    """Hand-curated directory entry, before enrichment."""
    company: str
    repo: str
    logo: Optional[str] = None
    rating_count: Optional[float] = None
    projects_count: Optional[int] = None
    website: Optional[str] = None


@dataclass(frozen=True)
class MetadataRecord:
    """Repository attributes fetched from the metadata source."""
    language: Optional[str] = None
    description: Optional[str] = None
    forks_count: Optional[int] = None
    html_url: Optional[str] = None

    @classmethod
    def empty(cls) -> 'MetadataRecord':
        return cls()

    @property
    def is_empty(self) -> bool:
        return self == MetadataRecord()

    @classmethod
    def from_payload(cls, payload: Any) -> 'MetadataRecord':
        """
        Build a record from a decoded JSON object.

        Anything that is not a JSON object is treated as "not found".
        Fields with the wrong type, and negative fork counts, are dropped
        rather than coerced.
        """
        if not isinstance(payload, dict):
            return cls.empty()

        forks = _count_or_none(payload.get("forks_count"))

        return cls(
            language=_str_or_none(payload.get("language")),
            description=_str_or_none(payload.get("description")),
            forks_count=forks,
            html_url=_str_or_none(payload.get("html_url")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "language": self.language,
            "description": self.description,
            "forks_count": self.forks_count,
            "html_url": self.html_url,
        }


@dataclass(frozen=True)
class Agency:
    """Canonical, enriched directory entry."""
    name: str
    domain: str
    services: Tuple[str, ...]
    rating: float
    project_count: int
    description: str
    popularity: Popularity
    canonical_url: str
    image_url: Optional[str] = None
    repo_ref: Optional[str] = None
    website_url: Optional[str] = None

    @property
    def destination_url(self) -> str:
        """Where the agency name links to: its website, else the repository."""
        return self.website_url or self.canonical_url


@dataclass(frozen=True)
class ScoredAgency:
    """An agency paired with the score of one scoring pass."""
    agency: Agency
    score: float


def _str_or_none(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


def _count_or_none(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return int(value)
