"""
Verdict formatter: shapes verdicts and pipeline errors into response bodies.

No decision logic lives here. Success payload:

{
    "flagged": true,
    "services": {
        "openai": {
            "results": {"flagged": ..., "categories": {...}, "category_scores": {...}, "status": "ok"},
            "metadata": {"timestamp": ..., "textLength": ..., "model": ..., ...}
        }
    },
    "metadata": {"timestamp": ..., "textLength": ..., "servicesUsed": ["openai", ...]}
}
"""

import traceback
from typing import Any

from fastapi import status

from moderation_aggregator.models.enums import ErrorKind
from moderation_aggregator.models.moderation_models import AggregateVerdict, ProviderResult
from moderation_aggregator.pipeline.exceptions import (
    AllProvidersFailed,
    NoProvidersConfigured,
    PipelineError,
    ProviderFailure,
)
from moderation_aggregator.validation.exceptions import RequestValidationError


ERROR_KIND_STATUS: dict[ErrorKind, int] = {
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorKind.SERVICE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNKNOWN: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def format_provider_result(result: ProviderResult, timestamp: str, text_length: int) -> dict[str, Any]:
    metadata: dict[str, Any] = {
        "timestamp": timestamp,
        "textLength": text_length,
        "model": result.model,
        "status": result.status.value,
        "latencyMs": result.latency_ms,
        "attempts": result.attempts,
    }
    if result.error is not None:
        metadata["error"] = {
            "kind": result.error.kind.value,
            "message": result.error.message,
        }

    return {
        "results": {
            "flagged": result.flagged,
            "categories": dict(result.categories),
            "category_scores": dict(result.scores),
            "status": result.status.value,
        },
        "metadata": metadata,
    }


def format_verdict(verdict: AggregateVerdict) -> dict[str, Any]:
    """Map an AggregateVerdict to the public success payload."""
    meta = verdict.metadata
    return {
        "flagged": verdict.flagged,
        "services": {
            provider_id: format_provider_result(result, meta.timestamp, meta.text_length)
            for provider_id, result in verdict.per_provider.items()
        },
        "metadata": {
            "timestamp": meta.timestamp,
            "textLength": meta.text_length,
            "servicesUsed": list(meta.providers_consulted),
        },
    }


def format_error(exc: Exception, debug: bool = False) -> tuple[int, dict[str, Any]]:
    """
    Map a modeled error to (HTTP status, body).

    Args:
        exc: RequestValidationError or PipelineError
        debug: Include the stack trace in the body

    Raises:
        TypeError: If exc is not one of the modeled error types
    """
    if isinstance(exc, RequestValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
        body: dict[str, Any] = {"error": exc.message, "field": exc.field, **exc.extra}

    elif isinstance(exc, ProviderFailure):
        status_code = ERROR_KIND_STATUS[exc.error.kind]
        if exc.error.kind == ErrorKind.UNKNOWN:
            body = {
                "error": "Failed to process moderation request",
                "message": exc.error.message,
            }
        else:
            body = {"error": exc.error.message}

    elif isinstance(exc, (AllProvidersFailed, NoProvidersConfigured)):
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        body = {
            "error": "Failed to process moderation request",
            "message": exc.message,
        }

    elif isinstance(exc, PipelineError):
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        body = {"error": "Internal server error", "message": exc.message}

    else:
        raise TypeError(f"Unsupported error type: {type(exc).__name__}")

    if debug:
        body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    return status_code, body
