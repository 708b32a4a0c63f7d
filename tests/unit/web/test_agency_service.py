#!/usr/bin/env python3
"""
Unit tests for AgencyService wiring of the trending board.
"""

import unittest
from unittest.mock import patch

from core.app_context import AppContext
from core.config_loader import AppConfig, ScoringConfig
from core.enrichment import AgencyEnricher
from core.models import MetadataRecord
from core.trending_board import TrendingBoard
from web.backend.dependencies import get_agency_service
from web.backend.exceptions import InvalidFilterException
from web.backend.services.agency_service import AgencyService
from tests.fixtures.agency_fixtures import SEEDS
from tests.mocks.metadata_mocks import StaticMetadataSource


def _service(debounce_seconds=0.3):
    source = StaticMetadataSource({
        "cloudy/ops": MetadataRecord(language="Go"),
        "pixel/web": MetadataRecord(language="TypeScript"),
    })
    return AgencyService(
        seeds=SEEDS,
        enricher=AgencyEnricher(source, max_workers=4),
        debounce_seconds=debounce_seconds
    )


class TestTrendingBoardWiring(unittest.TestCase):

    def test_configured_debounce_reaches_service(self):
        source = StaticMetadataSource()
        context = AppContext(
            config=AppConfig(scoring=ScoringConfig(debounce_seconds=0.7)),
            seeds=SEEDS,
            metadata_source=source,
            enricher=AgencyEnricher(source)
        )
        self.assertEqual(get_agency_service(context).debounce_seconds, 0.7)

    def test_trending_builds_board_with_configured_window(self):
        service = _service(debounce_seconds=0.7)

        with patch("web.backend.services.agency_service.TrendingBoard", wraps=TrendingBoard) as board_cls:
            response = service.trending(domain="web development")

        self.assertEqual(board_cls.call_args.kwargs["debounce_seconds"], 0.7)
        self.assertEqual([e.agency.name for e in response.entries], ["Pixel"])
        self.assertEqual(response.filters.domain, "web development")

    def test_long_window_does_not_delay_response(self):
        response = _service(debounce_seconds=60).trending(popularity="legendary")
        self.assertEqual([e.agency.name for e in response.entries], ["Acme"])
        self.assertEqual(response.filters.popularity, "legendary")

    def test_invalid_tier_rejected_before_loading(self):
        service = _service()
        with self.assertRaises(InvalidFilterException):
            service.trending(popularity="viral")
        self.assertEqual(service.enricher.source.calls, [])


if __name__ == '__main__':
    unittest.main(verbosity=2)
