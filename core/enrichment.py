#!/usr/bin/env python3
"""
Enrichment Loader - merge seed records with fetched repository metadata.

Handles:
- Concurrent metadata lookups, one per seed (fan-out / fan-in)
- Per-seed failure isolation (failed lookup -> empty metadata)
- Seed-over-fetched-over-default precedence for overridable fields
- Cancellation through a threading.Event scoped to the caller's view
"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, FIRST_COMPLETED, wait
from typing import List, Optional, Sequence

from core.classifiers import classify_domain, classify_popularity, services_for
from core.metadata_client import MetadataSource
from core.models import (
    Agency,
    MetadataRecord,
    SeedRecord,
    DEFAULT_DESCRIPTION,
    DEFAULT_RATING,
    REPO_URL_TEMPLATE,
)

logger = logging.getLogger(__name__)

# How often the fan-in wakes up to check for cancellation
_CANCEL_POLL_SECONDS = 0.1


class EnrichmentError(Exception):
    """Raised when the batch as a whole cannot be enriched."""
    pass


class EnrichmentCancelled(EnrichmentError):
    """Raised when the stop event is set before all lookups finished."""
    pass


def build_agency(seed: SeedRecord, metadata: MetadataRecord) -> Agency:
    """
    Merge one seed record with its metadata into a canonical Agency.

    Precedence: seed value, then fetched value, then hardcoded default.
    The domain comes from the fetched language only.
    """
    domain = classify_domain(metadata.language)
    rating = seed.rating_count if seed.rating_count is not None else DEFAULT_RATING

    if seed.projects_count is not None:
        project_count = seed.projects_count
    elif metadata.forks_count is not None:
        project_count = metadata.forks_count
    else:
        project_count = 0

    return Agency(
        name=seed.company,
        domain=domain,
        services=services_for(domain),
        rating=rating,
        project_count=project_count,
        description=metadata.description or DEFAULT_DESCRIPTION,
        popularity=classify_popularity(rating),
        canonical_url=metadata.html_url or REPO_URL_TEMPLATE.format(repo=seed.repo),
        image_url=seed.logo,
        repo_ref=seed.repo,
        website_url=seed.website,
    )


class AgencyEnricher:
    """
    Builds the agency working set from seed records.

    Every lookup is issued at once on a thread pool. Each lookup writes only
    its own result slot, so no locking is required; slots are combined in
    seed order after all lookups have completed or failed.
    """

    def __init__(self, source: MetadataSource, max_workers: int = 16):
        self.source = source
        self.max_workers = max(1, max_workers)

    def _fetch_one(self, seed: SeedRecord) -> MetadataRecord:
        try:
            return self.source.fetch(seed.repo)
        except Exception as e:
            logger.warning(f"Metadata lookup failed for {seed.repo}: {e}")
            return MetadataRecord.empty()

    def enrich(
        self,
        seeds: Sequence[SeedRecord],
        stop_event: Optional[threading.Event] = None
    ) -> List[Agency]:
        """
        Enrich all seeds concurrently.

        Args:
            seeds: Seed records; output keeps their order.
            stop_event: Optional cancellation token. When set before all
                lookups finish, pending lookups are cancelled and no result
                is returned.

        Returns:
            One Agency per seed, in seed order.

        Raises:
            EnrichmentCancelled: If stop_event was set during the fan-out.
            EnrichmentError: If the seed list is malformed or the batch
                fails unexpectedly.
        """
        if seeds is None:
            raise EnrichmentError("Seed list is missing")
        seeds = list(seeds)
        for i, seed in enumerate(seeds):
            if not isinstance(seed, SeedRecord):
                raise EnrichmentError(f"Seed #{i} is not a SeedRecord: {type(seed).__name__}")

        if not seeds:
            return []
        if stop_event is not None and stop_event.is_set():
            raise EnrichmentCancelled("Enrichment cancelled before start")

        start = time.time()
        slots: List[Optional[MetadataRecord]] = [None] * len(seeds)
        workers = min(self.max_workers, len(seeds))

        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="enrich")
        try:
            futures = {
                executor.submit(self._fetch_one, seed): index
                for index, seed in enumerate(seeds)
            }
            pending = set(futures)
            while pending:
                if stop_event is not None and stop_event.is_set():
                    for future in pending:
                        future.cancel()
                    logger.info(f"Enrichment cancelled with {len(pending)} lookups pending")
                    raise EnrichmentCancelled("Enrichment cancelled")

                done, pending = wait(pending, timeout=_CANCEL_POLL_SECONDS, return_when=FIRST_COMPLETED)
                for future in done:
                    slots[futures[future]] = future.result()
        except EnrichmentError:
            raise
        except Exception as e:
            raise EnrichmentError(f"Enrichment batch failed: {e}") from e
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        agencies = [build_agency(seed, metadata) for seed, metadata in zip(seeds, slots)]
        missing = sum(1 for metadata in slots if metadata is None or metadata.is_empty)

        logger.info(
            f"Enriched {len(agencies)} agencies in {time.time() - start:.2f}s "
            f"({missing} without metadata)"
        )
        return agencies
