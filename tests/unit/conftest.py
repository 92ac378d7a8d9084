"""Unit test fixtures (mocks and stubs).

Provides fake providers and result builders for testing without network access.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from moderation_aggregator.models.enums import ErrorKind, ProviderStatus
from moderation_aggregator.models.moderation_models import (
    ErrorInfo,
    ProviderDescriptor,
    ProviderResult,
)
from moderation_aggregator.providers.base_client import BaseModerationProvider


@pytest.fixture
def ok_result():
    """Factory fixture for a successful ProviderResult.

    Usage:
        def test_something(ok_result):
            result = ok_result("openai", flagged=True)
    """
    def _create(provider_id: str, flagged: bool = False) -> ProviderResult:
        return ProviderResult(
            provider_id=provider_id,
            status=ProviderStatus.OK,
            flagged=flagged,
            categories={"toxicity": flagged},
            scores={"toxicity": 0.9 if flagged else 0.1},
            model=f"{provider_id}-model",
            latency_ms=12,
        )

    return _create


@pytest.fixture
def failed_result():
    """Factory fixture for a FAILED ProviderResult."""
    def _create(
        provider_id: str,
        kind: ErrorKind = ErrorKind.SERVICE_UNAVAILABLE,
        message: str = "Provider service is temporarily unavailable. Please try again later.",
        status_code: int | None = 503,
    ) -> ProviderResult:
        return ProviderResult.failure(
            provider_id=provider_id,
            error=ErrorInfo(kind=kind, message=message, status_code=status_code),
        )

    return _create


@pytest.fixture
def fake_provider():
    """Factory fixture for a provider whose moderate() returns a fixed result.

    Usage:
        def test_something(fake_provider, ok_result):
            provider = fake_provider(ok_result("openai"))
            provider.moderate.assert_awaited_once()
    """
    def _create(result: ProviderResult) -> MagicMock:
        provider = MagicMock(spec=BaseModerationProvider)
        provider.provider_id = result.provider_id
        provider.moderate = AsyncMock(return_value=result)
        provider.close = AsyncMock()
        provider.describe = MagicMock(
            return_value=ProviderDescriptor(
                id=result.provider_id,
                name=result.provider_id.title(),
                description=f"{result.provider_id} classifier",
            )
        )
        return provider

    return _create
