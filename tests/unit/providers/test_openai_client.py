"""
Unit tests for the OpenAI moderation adapter.

The OpenAI API is faked with httpx.MockTransport.
"""

import json

import httpx
import pytest

from moderation_aggregator.models.enums import ErrorKind, ProviderStatus
from moderation_aggregator.models.provider_models import OpenAIModerationResponse
from moderation_aggregator.providers.openai_client import OpenAIModerationClient


@pytest.mark.asyncio
async def test_clean_response(openai_config, json_transport, openai_clean_payload):
    """Clean text: every native flag false, scores passed through."""
    transport = json_transport(200, openai_clean_payload)

    async with OpenAIModerationClient(openai_config, transport=transport) as client:
        result = await client.moderate("This is a clean message")

    assert result.provider_id == "openai"
    assert result.status == ProviderStatus.OK
    assert result.flagged is False
    assert result.scores["hate"] == pytest.approx(0.00001)
    assert result.scores["self-harm/intent"] == pytest.approx(0.00001)
    assert set(result.categories) == set(result.scores)
    assert not any(result.categories.values())
    assert result.model == "omni-moderation-latest"
    assert result.attempts == 1


@pytest.mark.asyncio
async def test_request_format(openai_config, json_transport, openai_clean_payload):
    transport = json_transport(200, openai_clean_payload)

    async with OpenAIModerationClient(openai_config, transport=transport) as client:
        await client.moderate("hello")

    assert len(transport.requests) == 1
    request = transport.requests[0]
    assert request.method == "POST"
    assert request.url == "https://openai.test/v1/moderations"
    assert request.headers["Authorization"] == "Bearer sk-test"
    assert json.loads(request.content) == {
        "model": "omni-moderation-latest",
        "input": "hello",
    }


@pytest.mark.asyncio
async def test_flagged_response_uses_native_flags(
    openai_config, json_transport, openai_flagged_payload
):
    transport = json_transport(200, openai_flagged_payload)

    async with OpenAIModerationClient(openai_config, transport=transport) as client:
        result = await client.moderate("hateful text")

    assert result.flagged is True
    assert result.categories["hate"] is True
    assert result.categories["violence"] is False
    assert result.scores["hate"] == pytest.approx(0.9)


@pytest.mark.asyncio
async def test_configured_threshold_overrides_native_flag(
    openai_config, json_transport, openai_flagged_payload
):
    """A hate threshold of 0.95 un-flags a 0.9 score OpenAI flagged."""
    config = openai_config.model_copy(update={"thresholds": {"hate": 0.95}})
    transport = json_transport(200, openai_flagged_payload)

    async with OpenAIModerationClient(config, transport=transport) as client:
        result = await client.moderate("borderline text")

    assert result.categories["hate"] is False
    assert result.flagged is False


@pytest.mark.asyncio
async def test_configured_threshold_can_flag(openai_config, json_transport, openai_clean_payload):
    config = openai_config.model_copy(update={"thresholds": {"violence": 0.000001}})
    transport = json_transport(200, openai_clean_payload)

    async with OpenAIModerationClient(config, transport=transport) as client:
        result = await client.moderate("text")

    assert result.categories["violence"] is True
    assert result.flagged is True


def test_normalize_omits_missing_scores(openai_config):
    client = OpenAIModerationClient(openai_config)
    raw = OpenAIModerationResponse.model_validate(
        {
            "results": [
                {
                    "flagged": False,
                    "categories": {"hate": False, "violence": None},
                    "category_scores": {"hate": 0.2, "violence": None},
                }
            ]
        }
    )

    assert client.normalize(raw) == {"hate": 0.2}
    assert client.derive_flags(raw, {"hate": 0.2}) == {"hate": False}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status_code, expected_kind",
    [
        (400, ErrorKind.BAD_REQUEST),
        (401, ErrorKind.UNAUTHORIZED),
        (403, ErrorKind.UNAUTHORIZED),
        (404, ErrorKind.UNKNOWN),
        (429, ErrorKind.RATE_LIMITED),
        (500, ErrorKind.UNKNOWN),
        (502, ErrorKind.SERVICE_UNAVAILABLE),
        (503, ErrorKind.SERVICE_UNAVAILABLE),
    ],
)
async def test_http_errors_become_failed_results(
    openai_config, json_transport, status_code, expected_kind
):
    transport = json_transport(status_code, {"error": {"message": "upstream says no"}})

    async with OpenAIModerationClient(openai_config, transport=transport) as client:
        result = await client.moderate("text")

    assert result.status == ProviderStatus.FAILED
    assert result.flagged is None
    assert result.categories == {}
    assert result.error.kind == expected_kind
    assert result.error.status_code == status_code


@pytest.mark.asyncio
async def test_unauthorized_message(openai_config, json_transport):
    transport = json_transport(401, {"error": {"message": "Incorrect API key provided"}})

    async with OpenAIModerationClient(openai_config, transport=transport) as client:
        result = await client.moderate("text")

    assert result.error.message == (
        "Invalid API key. Please check your OpenAI API key configuration."
    )


@pytest.mark.asyncio
async def test_unknown_error_carries_upstream_detail(openai_config, json_transport):
    transport = json_transport(500, {"error": {"message": "The server had an error"}})

    async with OpenAIModerationClient(openai_config, transport=transport) as client:
        result = await client.moderate("text")

    assert result.error.message == "OpenAI request failed: The server had an error"


@pytest.mark.asyncio
async def test_unexpected_response_shape(openai_config, json_transport):
    transport = json_transport(200, {"results": []})

    async with OpenAIModerationClient(openai_config, transport=transport) as client:
        result = await client.moderate("text")

    assert result.status == ProviderStatus.FAILED
    assert result.error.kind == ErrorKind.UNKNOWN


@pytest.mark.asyncio
async def test_invalid_json_response(openai_config):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"<html>"))

    async with OpenAIModerationClient(openai_config, transport=transport) as client:
        result = await client.moderate("text")

    assert result.status == ProviderStatus.FAILED
    assert result.error.kind == ErrorKind.UNKNOWN


def test_describe(openai_config):
    descriptor = OpenAIModerationClient(openai_config).describe()

    assert descriptor.id == "openai"
    assert descriptor.name == "OpenAI"
    assert descriptor.description
