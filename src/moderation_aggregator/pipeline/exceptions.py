"""
Pipeline-level exceptions.

These are the only errors the Aggregator lets out. Each one means no verdict
was produced for the request.
"""

from typing import Any

from moderation_aggregator.models.moderation_models import ErrorInfo


class PipelineError(Exception):
    """Base exception for requests that ended without a verdict."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ProviderFailure(PipelineError):
    """
    A fail-closed provider failed.

    The provider's translated error is surfaced to the caller as-is.
    """

    def __init__(self, provider_id: str, error: ErrorInfo):
        super().__init__(
            error.message,
            details={"provider": provider_id, "kind": error.kind.value},
        )
        self.provider_id = provider_id
        self.error = error


class AllProvidersFailed(PipelineError):
    """
    Every consulted provider failed (all of them fail-open).

    Raised instead of returning an unflagged verdict backed by no evidence.
    """

    def __init__(self, failures: dict[str, ErrorInfo]):
        super().__init__(
            "All moderation providers failed",
            details={pid: info.kind.value for pid, info in failures.items()},
        )
        self.failures = failures


class NoProvidersConfigured(PipelineError):
    """No provider is enabled, so no verdict can ever be produced."""

    def __init__(self):
        super().__init__("No moderation providers are enabled")
