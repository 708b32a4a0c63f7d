#!/usr/bin/env python3
"""
Test Mock Implementations - metadata sources for enrichment tests.

These mocks provide deterministic behavior without network access.
"""
import threading
from typing import Dict, List, Optional, Union

from core.metadata_client import MetadataSource
from core.models import MetadataRecord


class StaticMetadataSource(MetadataSource):
    """
    Metadata source backed by a dict.

    Values may be a MetadataRecord, or an Exception instance which is raised
    for that repo. Unknown repos return an empty record.
    """

    def __init__(self, records: Optional[Dict[str, Union[MetadataRecord, Exception]]] = None):
        self.records = records or {}
        self.calls: List[str] = []
        self._lock = threading.Lock()
        self.closed = False

    def fetch(self, repo: str) -> MetadataRecord:
        with self._lock:
            self.calls.append(repo)
        value = self.records.get(repo, MetadataRecord.empty())
        if isinstance(value, Exception):
            raise value
        return value

    def close(self):
        self.closed = True


class BlockingMetadataSource(MetadataSource):
    """
    Metadata source whose lookups block until released.

    ``started`` is set once any lookup has begun.
    """

    def __init__(self):
        self.started = threading.Event()
        self.release = threading.Event()

    def fetch(self, repo: str) -> MetadataRecord:
        self.started.set()
        self.release.wait(timeout=5)
        return MetadataRecord(language="Python")
