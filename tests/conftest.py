"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict

import httpx
import pytest

from moderation_aggregator.config import (
    OPENAI_PROVIDER_ID,
    PERSPECTIVE_PROVIDER_ID,
    PipelineConfig,
    ProviderConfig,
    Settings,
)


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with both providers enabled and no retries.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.MAX_TEXT_LENGTH = 10
    """
    return Settings(
        # === Application ===
        APP_NAME="Moderation Aggregator (Test)",
        DEBUG=False,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",

        # === OpenAI ===
        OPENAI_ENABLED=True,
        OPENAI_API_KEY="sk-test",
        OPENAI_BASE_URL="https://openai.test",

        # === Perspective ===
        PERSPECTIVE_ENABLED=True,
        PERSPECTIVE_API_KEY="perspective-test",
        PERSPECTIVE_BASE_URL="https://perspective.test",

        # === Retry ===
        PROVIDER_MAX_ATTEMPTS=1,
        RETRY_BACKOFF_BASE=0.0,

        PROMETHEUS_ENABLED=False,
    )


@pytest.fixture
def pipeline_config(test_settings: Settings) -> PipelineConfig:
    """Pipeline config: openai fail-closed, perspective fail-open."""
    return PipelineConfig.from_settings(test_settings)


@pytest.fixture
def openai_config(pipeline_config: PipelineConfig) -> ProviderConfig:
    return pipeline_config.get_provider(OPENAI_PROVIDER_ID)


@pytest.fixture
def perspective_config(pipeline_config: PipelineConfig) -> ProviderConfig:
    return pipeline_config.get_provider(PERSPECTIVE_PROVIDER_ID)


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def openai_clean_payload(fixtures_dir: Path) -> Dict[str, Any]:
    with open(fixtures_dir / "openai_moderation_clean.json") as f:
        return json.load(f)


@pytest.fixture
def openai_flagged_payload(fixtures_dir: Path) -> Dict[str, Any]:
    with open(fixtures_dir / "openai_moderation_flagged.json") as f:
        return json.load(f)


@pytest.fixture
def perspective_payload(fixtures_dir: Path) -> Dict[str, Any]:
    with open(fixtures_dir / "perspective_analyze.json") as f:
        return json.load(f)


@pytest.fixture
def json_transport() -> Callable[..., httpx.MockTransport]:
    """Factory fixture for an httpx transport answering every request the same way.

    Usage:
        def test_something(json_transport):
            transport = json_transport(200, {"results": [...]})
            transport.requests  # every httpx.Request received, in order
    """
    def _create(status_code: int = 200, payload: Any = None) -> httpx.MockTransport:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(status_code, json=payload)

        transport = httpx.MockTransport(handler)
        transport.requests = requests
        return transport

    return _create
