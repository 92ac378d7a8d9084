"""
Moderation request validator.

Rules are applied in order and the first failure wins:
1. `text` present          -> MISSING_FIELD
2. `text` is a string      -> WRONG_TYPE
3. `text` not blank        -> EMPTY_AFTER_TRIM
4. `text` within max length -> TOO_LONG (with maxLength/currentLength)
"""

from collections.abc import Mapping
from typing import Any

import structlog

from moderation_aggregator.models.enums import ValidationErrorKind
from moderation_aggregator.models.moderation_models import ModerationRequest
from moderation_aggregator.validation.exceptions import RequestValidationError

logger = structlog.get_logger(__name__)

DEFAULT_MAX_LENGTH = 32768


def text_length(text: str) -> int:
    """Length in UTF-16 code units, the unit provider limits are expressed in."""
    return len(text.encode("utf-16-le", errors="surrogatepass")) // 2


def validate(body: Any, max_length: int = DEFAULT_MAX_LENGTH) -> ModerationRequest:
    """
    Validate a raw request body and build a ModerationRequest.

    Args:
        body: Decoded JSON body (expected to be a mapping with a `text` key)
        max_length: Maximum accepted text length

    Returns:
        ModerationRequest wrapping the original, untrimmed text

    Raises:
        RequestValidationError: If any acceptance rule fails
    """
    text = body.get("text") if isinstance(body, Mapping) else None

    # An empty string counts as missing, not as blank
    if text is None or text == "":
        raise RequestValidationError(
            ValidationErrorKind.MISSING_FIELD,
            "Text content is required for moderation.",
        )

    if not isinstance(text, str):
        raise RequestValidationError(
            ValidationErrorKind.WRONG_TYPE,
            "Text must be a string.",
        )

    if not text.strip():
        raise RequestValidationError(
            ValidationErrorKind.EMPTY_AFTER_TRIM,
            "Text content cannot be empty.",
        )

    current_length = text_length(text)
    if current_length > max_length:
        raise RequestValidationError(
            ValidationErrorKind.TOO_LONG,
            f"Text content exceeds maximum length of {max_length:,} characters.",
            extra={"maxLength": max_length, "currentLength": current_length},
        )

    logger.debug("Moderation request validated", text_length=current_length)
    return ModerationRequest(text=text)
