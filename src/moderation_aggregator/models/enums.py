"""
Enumerations for the moderation data models.
"""

from enum import Enum


class ProviderStatus(str, Enum):
    """
    Outcome of a single provider call.

    DEGRADED is reserved for a provider that answered but reported fewer
    categories than were requested.
    """

    OK = "ok"
    DEGRADED = "degraded"
    FAILED = "failed"


class ErrorKind(str, Enum):
    """Classification of a provider failure, independent of the provider."""

    UNAUTHORIZED = "unauthorized"
    RATE_LIMITED = "rate_limited"
    SERVICE_UNAVAILABLE = "service_unavailable"
    BAD_REQUEST = "bad_request"
    UNKNOWN = "unknown"

    @property
    def is_transient(self) -> bool:
        """Whether a bounded retry may succeed."""
        return self in (ErrorKind.RATE_LIMITED, ErrorKind.SERVICE_UNAVAILABLE)


class ValidationErrorKind(str, Enum):
    """Reason a moderation request was rejected before any provider call."""

    MISSING_FIELD = "missing_field"
    WRONG_TYPE = "wrong_type"
    EMPTY_AFTER_TRIM = "empty_after_trim"
    TOO_LONG = "too_long"
