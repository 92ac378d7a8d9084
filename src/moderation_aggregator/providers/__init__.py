"""
Moderation provider adapters.

Components:
- BaseModerationProvider: Abstract adapter (invoke + normalize, retry, error capture)
- OpenAIModerationClient: OpenAI moderation endpoint
- PerspectiveClient: Google Perspective comment analyzer
- exceptions: ProviderError and status classification
"""

from typing import Optional

import httpx

from moderation_aggregator.config import (
    OPENAI_PROVIDER_ID,
    PERSPECTIVE_PROVIDER_ID,
    PipelineConfig,
)
from moderation_aggregator.providers.base_client import BaseModerationProvider
from moderation_aggregator.providers.exceptions import (
    ProviderError,
    build_error_info,
    classify_status,
    error_message,
)
from moderation_aggregator.providers.openai_client import OpenAIModerationClient
from moderation_aggregator.providers.perspective_client import PerspectiveClient

PROVIDER_CLASSES: dict[str, type[BaseModerationProvider]] = {
    OPENAI_PROVIDER_ID: OpenAIModerationClient,
    PERSPECTIVE_PROVIDER_ID: PerspectiveClient,
}


def build_providers(
    config: PipelineConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> list[BaseModerationProvider]:
    """
    Instantiate an adapter for every enabled provider, in configured order.

    Raises:
        KeyError: If a configured provider has no adapter class
    """
    return [
        PROVIDER_CLASSES[provider_config.provider_id](provider_config, transport=transport)
        for provider_config in config.enabled_providers
    ]


__all__ = [
    "BaseModerationProvider",
    "OpenAIModerationClient",
    "PerspectiveClient",
    "PROVIDER_CLASSES",
    "build_providers",
    "ProviderError",
    "build_error_info",
    "classify_status",
    "error_message",
]
