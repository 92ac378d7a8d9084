"""Integration test fixtures (fake upstream providers and API client).

The moderation providers are replaced by an httpx.MockTransport that routes
on host name, so the full stack (FastAPI app, service, aggregator, adapters)
runs without network access.
"""

from typing import Any, Callable, Dict, Tuple

import httpx
import pytest
from fastapi.testclient import TestClient

from moderation_aggregator.api.dependencies import get_moderation_service
from moderation_aggregator.config import PipelineConfig, Settings
from moderation_aggregator.main import app
from moderation_aggregator.pipeline.aggregator import Aggregator
from moderation_aggregator.pipeline.service import ModerationService
from moderation_aggregator.providers import build_providers


UPSTREAM_HOSTS = {
    "openai.test": "openai",
    "perspective.test": "perspective",
}


@pytest.fixture
def perspective_clean_payload() -> Dict[str, Any]:
    return {
        "attributeScores": {
            attribute: {"summaryScore": {"value": 0.01, "type": "PROBABILITY"}}
            for attribute in (
                "TOXICITY",
                "SEVERE_TOXICITY",
                "IDENTITY_ATTACK",
                "INSULT",
                "PROFANITY",
                "THREAT",
            )
        },
        "languages": ["en"],
    }


@pytest.fixture
def upstream(openai_clean_payload, perspective_clean_payload) -> Dict[str, Tuple[int, Any]]:
    """Canned (status, payload) per provider. Tests overwrite entries as needed.

    Usage:
        def test_something(client, upstream):
            upstream["openai"] = (401, {"error": {"message": "bad key"}})
    """
    return {
        "openai": (200, openai_clean_payload),
        "perspective": (200, perspective_clean_payload),
    }


@pytest.fixture
def upstream_transport(upstream) -> httpx.MockTransport:
    """Transport answering each provider host from the `upstream` table."""
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        status_code, payload = upstream[UPSTREAM_HOSTS[request.url.host]]
        return httpx.Response(status_code, json=payload)

    transport = httpx.MockTransport(handler)
    transport.requests = requests
    return transport


@pytest.fixture
def build_service(upstream_transport) -> Callable[[Settings], ModerationService]:
    """Factory fixture for a ModerationService wired to the fake upstream."""
    def _create(settings: Settings) -> ModerationService:
        config = PipelineConfig.from_settings(settings)
        providers = build_providers(config, transport=upstream_transport)
        return ModerationService(Aggregator(providers, config), config)

    return _create


@pytest.fixture
def moderation_service(build_service, test_settings) -> ModerationService:
    """Both providers enabled: openai fail-closed, perspective fail-open."""
    return build_service(test_settings)


@pytest.fixture
def client(moderation_service):
    """TestClient with the moderation service dependency overridden."""
    app.dependency_overrides[get_moderation_service] = lambda: moderation_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
