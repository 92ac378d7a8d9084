"""
Core data models for the moderation pipeline.

These models are provider-agnostic: every adapter produces a ProviderResult,
and the aggregator combines them into an AggregateVerdict. Raw provider
payloads live in provider_models.py and never leave their adapter.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from moderation_aggregator.models.enums import ErrorKind, ProviderStatus


CategoryScore = dict[str, float]
CategoryFlags = dict[str, bool]


class ModerationRequest(BaseModel):
    """
    A validated moderation request.

    Only constructed by the validator, so `text` is known to be a non-blank
    string within the configured length limit.
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., min_length=1, description="Text to moderate")


class ErrorInfo(BaseModel):
    """Translated provider failure attached to a failed ProviderResult."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind = Field(..., description="Provider-agnostic failure class")
    message: str = Field(..., description="Human-readable error message")
    status_code: Optional[int] = Field(
        default=None,
        description="Upstream HTTP status, None for timeouts and transport errors",
    )


class ProviderResult(BaseModel):
    """
    Normalized result of one provider call.

    `flagged` is None when the provider failed: a failed provider has no
    opinion and must not be read as "not flagged".
    """

    model_config = ConfigDict(frozen=True)

    provider_id: str = Field(..., description="Provider identifier (e.g. 'openai')")
    status: ProviderStatus = Field(..., description="Call outcome")
    flagged: Optional[bool] = Field(default=None)
    categories: CategoryFlags = Field(default_factory=dict)
    scores: CategoryScore = Field(default_factory=dict)
    error: Optional[ErrorInfo] = Field(default=None)
    model: Optional[str] = Field(default=None, description="Upstream model or service name")
    latency_ms: int = Field(default=0, ge=0)
    attempts: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def _check_consistency(self) -> "ProviderResult":
        if self.status == ProviderStatus.FAILED:
            if self.error is None:
                raise ValueError("failed result requires error info")
            if self.flagged is not None:
                raise ValueError("failed result cannot carry a flagged value")
        else:
            if self.flagged is None:
                raise ValueError("successful result requires a flagged value")
            if self.flagged != any(self.categories.values()):
                raise ValueError("flagged must equal OR over categories")
            unknown = set(self.categories) - set(self.scores)
            if unknown:
                raise ValueError(f"flags without scores: {sorted(unknown)}")
        return self

    @property
    def succeeded(self) -> bool:
        return self.status != ProviderStatus.FAILED

    @classmethod
    def failure(
        cls,
        provider_id: str,
        error: ErrorInfo,
        model: Optional[str] = None,
        latency_ms: int = 0,
        attempts: int = 1,
    ) -> "ProviderResult":
        return cls(
            provider_id=provider_id,
            status=ProviderStatus.FAILED,
            error=error,
            model=model,
            latency_ms=latency_ms,
            attempts=attempts,
        )


class VerdictMetadata(BaseModel):
    """Request-level metadata attached to every verdict."""

    model_config = ConfigDict(frozen=True)

    timestamp: str = Field(..., description="ISO-8601 UTC timestamp")
    text_length: int = Field(..., ge=0)
    providers_consulted: list[str] = Field(
        ..., description="Providers invoked for this request, in configured order"
    )


class AggregateVerdict(BaseModel):
    """
    Combined moderation verdict.

    `flagged` is the OR over every provider whose status is not FAILED.
    """

    model_config = ConfigDict(frozen=True)

    flagged: bool
    per_provider: dict[str, ProviderResult]
    metadata: VerdictMetadata


class ProviderDescriptor(BaseModel):
    """Capability discovery entry returned by list_providers()."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
