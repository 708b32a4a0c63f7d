#!/usr/bin/env python3
"""
Seed dataset loading.

The seed file is a JSON array of objects:

    [{"company": "...", "repo": "owner/name", "logo": "...",
      "rating_count": 4.7, "projects_count": 1200, "website": "..."}]

Only ``company`` and ``repo`` are required.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Tuple, Union

from core.models import SeedRecord

logger = logging.getLogger(__name__)


class SeedDataError(Exception):
    """Raised when the seed dataset cannot be read or is malformed."""
    pass


def parse_seed_record(raw: Dict[str, Any], index: int = 0) -> SeedRecord:
    """
    Validate one raw seed object.

    Raises:
        SeedDataError: If required fields are missing or have the wrong type.
    """
    if not isinstance(raw, dict):
        raise SeedDataError(f"Seed #{index} is not an object")

    company = raw.get("company")
    repo = raw.get("repo")
    if not isinstance(company, str) or not company.strip():
        raise SeedDataError(f"Seed #{index} has no company name")
    if not isinstance(repo, str) or not repo.strip():
        raise SeedDataError(f"Seed #{index} ({company}) has no repo")

    rating = raw.get("rating_count")
    projects = raw.get("projects_count")
    try:
        rating = float(rating) if rating is not None else None
        projects = int(projects) if projects is not None else None
    except (TypeError, ValueError) as e:
        raise SeedDataError(f"Seed #{index} ({company}) has a non-numeric count: {e}") from e
    if (rating is not None and rating < 0) or (projects is not None and projects < 0):
        raise SeedDataError(f"Seed #{index} ({company}) has a negative count")

    return SeedRecord(
        company=company.strip(),
        repo=repo.strip(),
        logo=raw.get("logo") or None,
        rating_count=rating,
        projects_count=projects,
        website=raw.get("website") or None,
    )


def parse_seed_records(data: Any) -> Tuple[SeedRecord, ...]:
    if not isinstance(data, list):
        raise SeedDataError("Seed dataset must be a JSON array")
    return tuple(parse_seed_record(raw, i) for i, raw in enumerate(data))


def load_seed_records(path: Union[str, Path]) -> Tuple[SeedRecord, ...]:
    """
    Load the seed dataset from a JSON file.

    Args:
        path: Path to the JSON file.

    Returns:
        Seed records in file order.

    Raises:
        SeedDataError: If the file is missing, not valid JSON, or malformed.
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise SeedDataError(f"Could not read seed file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SeedDataError(f"Seed file {path} is not valid JSON: {e}") from e

    seeds = parse_seed_records(data)
    logger.info(f"Loaded {len(seeds)} seed records from {path}")
    return seeds
