"""
Unit tests for API response models.
"""

import pytest
from pydantic import ValidationError

from moderation_aggregator.api.models import (
    HealthResponse,
    ProvidersResponse,
    ServiceInfoResponse,
)


def test_providers_response_model():
    """Test ProvidersResponse accepts descriptor dicts."""
    response = ProvidersResponse(
        models=[{"id": "openai", "name": "OpenAI", "description": "OpenAI moderation"}]
    )

    assert response.models[0].id == "openai"
    assert response.model_dump() == {
        "models": [{"id": "openai", "name": "OpenAI", "description": "OpenAI moderation"}]
    }


def test_providers_response_requires_fields():
    with pytest.raises(ValidationError):
        ProvidersResponse(models=[{"id": "openai"}])


def test_health_response_model():
    """Test HealthResponse model."""
    response = HealthResponse(
        status="healthy",
        timestamp="2026-01-01T12:00:00.000Z",
        service="moderation-aggregator",
        version="0.1.0",
    )

    assert response.status == "healthy"
    assert response.providers == []


def test_service_info_metrics_optional():
    info = ServiceInfoResponse(
        service="Moderation Aggregator",
        version="0.1.0",
        docs="/docs",
        health="/health",
    )

    assert info.metrics is None
