"""
FastAPI dependency injection for the moderation service.

Settings, pipeline configuration and the service (with its provider
connection pools) are process-wide singletons built on first use.
"""

from functools import lru_cache

from moderation_aggregator.config import PipelineConfig, Settings, settings
from moderation_aggregator.pipeline.aggregator import Aggregator
from moderation_aggregator.pipeline.service import ModerationService
from moderation_aggregator.providers import build_providers


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.

    Returns:
        Settings instance
    """
    return settings


@lru_cache()
def get_pipeline_config() -> PipelineConfig:
    """
    Get the immutable pipeline configuration, frozen from settings once.

    Returns:
        PipelineConfig instance
    """
    return PipelineConfig.from_settings(get_settings())


@lru_cache()
def get_moderation_service() -> ModerationService:
    """
    Get singleton moderation service.

    Builds one adapter per enabled provider. Adapters keep a persistent
    httpx connection pool, so they must be shared across requests.

    Returns:
        ModerationService instance
    """
    config = get_pipeline_config()
    providers = build_providers(config)
    return ModerationService(Aggregator(providers, config), config)
