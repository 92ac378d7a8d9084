"""
API-specific response models for FastAPI endpoints.

The moderation endpoint itself returns the formatter's payload as-is, since
its status code depends on the outcome.
"""

from pydantic import BaseModel, Field

from moderation_aggregator.models.moderation_models import ProviderDescriptor


class ProvidersResponse(BaseModel):
    """Response for the provider discovery endpoint."""

    models: list[ProviderDescriptor] = Field(
        description="Configured moderation providers, in reporting order"
    )


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str = Field(
        description="Service status",
        examples=["healthy"]
    )
    timestamp: str = Field(description="ISO-8601 UTC timestamp")
    service: str = Field(description="Service name")
    version: str = Field(description="Application version")
    providers: list[str] = Field(
        default_factory=list,
        description="Enabled provider identifiers"
    )


class ServiceInfoResponse(BaseModel):
    """Response for the root endpoint."""

    service: str
    version: str
    docs: str
    health: str
    metrics: str | None = None
