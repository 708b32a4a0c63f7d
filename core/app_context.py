from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from core.config_loader import AppConfig, MetadataConfig
from core.enrichment import AgencyEnricher
from core.metadata_client import MetadataSource, GitHubApiSource, OverviewApiSource
from core.models import SeedRecord
from core.seeds import load_seed_records

PROJECT_ROOT = Path(__file__).resolve().parent.parent


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    Seed records are loaded once here and passed on explicitly; the agency
    working set itself is rebuilt on every view load.
    """
    config: AppConfig
    seeds: Tuple[SeedRecord, ...]
    metadata_source: MetadataSource
    enricher: AgencyEnricher

    @classmethod
    def build(cls, config: AppConfig) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration

        Returns:
            Fully wired AppContext instance

        Raises:
            SeedDataError: If the seed dataset is missing or malformed.
        """
        seeds = load_seed_records(cls._resolve_path(config.seeds.path))
        metadata_source = cls._build_metadata_source(config.metadata)
        enricher = AgencyEnricher(metadata_source, max_workers=config.metadata.max_workers)

        return cls(
            config=config,
            seeds=seeds,
            metadata_source=metadata_source,
            enricher=enricher
        )

    @staticmethod
    def _resolve_path(path: str) -> Path:
        candidate = Path(path)
        if candidate.is_absolute():
            return candidate
        return PROJECT_ROOT / candidate

    @staticmethod
    def _build_metadata_source(metadata_config: MetadataConfig) -> MetadataSource:
        """Build the metadata client selected in configuration."""
        if metadata_config.source == "overview_api":
            return OverviewApiSource(
                base_url=metadata_config.base_url,
                request_timeout_seconds=metadata_config.request_timeout_seconds
            )
        return GitHubApiSource(
            api_url=metadata_config.github_api_url,
            token=metadata_config.github_token,
            request_timeout_seconds=metadata_config.request_timeout_seconds
        )

    def close(self):
        self.metadata_source.close()
