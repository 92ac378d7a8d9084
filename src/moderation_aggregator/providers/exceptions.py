"""
Provider error classification.

Classification is pure and shared by every adapter, so the same upstream
status always maps to the same ErrorKind regardless of provider. The
human-readable message is provider-specific.
"""

from typing import Optional

from moderation_aggregator.models.enums import ErrorKind
from moderation_aggregator.models.moderation_models import ErrorInfo


class ProviderError(Exception):
    """
    Raised inside an adapter when a provider call fails.

    Never escapes the adapter: BaseModerationProvider.moderate() captures it
    into a failed ProviderResult.

    Attributes:
        info: Translated error (kind, message, upstream status)
        attempts: Number of attempts made before giving up
    """

    def __init__(self, info: ErrorInfo, attempts: int = 1):
        super().__init__(info.message)
        self.info = info
        self.attempts = attempts

    @property
    def kind(self) -> ErrorKind:
        return self.info.kind


def classify_status(status_code: int) -> ErrorKind:
    """Map an upstream HTTP status to an ErrorKind."""
    if status_code in (401, 403):
        return ErrorKind.UNAUTHORIZED
    if status_code == 429:
        return ErrorKind.RATE_LIMITED
    if status_code in (502, 503):
        return ErrorKind.SERVICE_UNAVAILABLE
    if status_code == 400:
        return ErrorKind.BAD_REQUEST
    return ErrorKind.UNKNOWN


def error_message(kind: ErrorKind, provider_name: str, detail: Optional[str] = None) -> str:
    """Build the client-facing message for a provider failure."""
    if kind == ErrorKind.UNAUTHORIZED:
        return f"Invalid API key. Please check your {provider_name} API key configuration."
    if kind == ErrorKind.RATE_LIMITED:
        return f"Rate limit exceeded for {provider_name}. Please try again later."
    if kind == ErrorKind.SERVICE_UNAVAILABLE:
        return f"{provider_name} service is temporarily unavailable. Please try again later."
    if kind == ErrorKind.BAD_REQUEST:
        return f"Invalid request format for {provider_name}."
    if detail:
        return f"{provider_name} request failed: {detail}"
    return f"{provider_name} request failed"


def build_error_info(
    kind: ErrorKind,
    provider_name: str,
    status_code: Optional[int] = None,
    detail: Optional[str] = None,
) -> ErrorInfo:
    return ErrorInfo(
        kind=kind,
        message=error_message(kind, provider_name, detail),
        status_code=status_code,
    )
