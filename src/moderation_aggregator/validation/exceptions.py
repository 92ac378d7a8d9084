"""
Request validation exceptions.

Raised before any provider is invoked. The formatter maps them to
400 Bad Request with a field-specific message.
"""

from typing import Any

from moderation_aggregator.models.enums import ValidationErrorKind


class RequestValidationError(Exception):
    """
    Client input rejected by the validator.

    Attributes:
        kind: Which acceptance rule failed
        message: Human-readable error description (returned to the client)
        field: Name of the offending request field
        extra: Additional response fields (e.g. maxLength/currentLength)
    """

    def __init__(
        self,
        kind: ValidationErrorKind,
        message: str,
        field: str = "text",
        extra: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.field = field
        self.extra = extra or {}

    def __str__(self) -> str:
        if self.extra:
            return f"{self.message} | Details: {self.extra}"
        return self.message
