"""
Pydantic data models for the Moderation Aggregator.

Includes:
- Enums (ProviderStatus, ErrorKind, ValidationErrorKind)
- Pipeline models (ModerationRequest, ProviderResult, AggregateVerdict, ...)
- Raw provider responses (OpenAIModerationResponse, PerspectiveAnalyzeResponse)
"""

from moderation_aggregator.models.enums import ErrorKind, ProviderStatus, ValidationErrorKind
from moderation_aggregator.models.moderation_models import (
    AggregateVerdict,
    CategoryFlags,
    CategoryScore,
    ErrorInfo,
    ModerationRequest,
    ProviderDescriptor,
    ProviderResult,
    VerdictMetadata,
)
from moderation_aggregator.models.provider_models import (
    OpenAIModerationResponse,
    PerspectiveAnalyzeResponse,
    RawProviderResponse,
)

__all__ = [
    # Enums
    "ErrorKind",
    "ProviderStatus",
    "ValidationErrorKind",
    # Pipeline models
    "AggregateVerdict",
    "CategoryFlags",
    "CategoryScore",
    "ErrorInfo",
    "ModerationRequest",
    "ProviderDescriptor",
    "ProviderResult",
    "VerdictMetadata",
    # Raw provider responses
    "OpenAIModerationResponse",
    "PerspectiveAnalyzeResponse",
    "RawProviderResponse",
]
