"""
Configuration settings for the Moderation Aggregator.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.

`Settings` is the raw environment view. The moderation pipeline never reads it
directly: `PipelineConfig.from_settings()` freezes the parts it needs into an
immutable struct that is built once at startup and passed to the Aggregator
and every provider adapter.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


OPENAI_PROVIDER_ID = "openai"
PERSPECTIVE_PROVIDER_ID = "perspective"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Moderation Aggregator"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False  # Exposes stack traces in error bodies
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"
    CORS_ORIGIN: str = "*"

    # === Input Validation ===
    MAX_TEXT_LENGTH: int = 32768  # UTF-16 code units

    # === OpenAI Moderation ===
    OPENAI_ENABLED: bool = True
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_BASE_URL: str = "https://api.openai.com"
    OPENAI_MODEL: str = "omni-moderation-latest"
    OPENAI_TIMEOUT: float = 10.0  # seconds
    OPENAI_FAIL_OPEN: bool = False  # Mandatory provider
    OPENAI_CATEGORY_THRESHOLDS: dict[str, float] = {}  # Empty: trust native flags

    # === Google Perspective ===
    PERSPECTIVE_ENABLED: bool = False
    PERSPECTIVE_API_KEY: Optional[str] = None
    PERSPECTIVE_BASE_URL: str = "https://commentanalyzer.googleapis.com"
    PERSPECTIVE_TIMEOUT: float = 10.0  # seconds
    PERSPECTIVE_FAIL_OPEN: bool = True  # Supplementary provider
    PERSPECTIVE_ATTRIBUTES: dict[str, float] = {
        "TOXICITY": 0.7,
        "SEVERE_TOXICITY": 0.7,
        "IDENTITY_ATTACK": 0.7,
        "INSULT": 0.7,
        "PROFANITY": 0.7,
        "THREAT": 0.7,
    }
    PERSPECTIVE_LANGUAGES: list[str] = ["en"]

    # === Retry ===
    PROVIDER_MAX_ATTEMPTS: int = 2  # Total attempts for transient failures
    RETRY_BACKOFF_BASE: float = 0.5  # seconds, doubled per attempt

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


class ProviderConfig(BaseModel):
    """Read-only per-provider configuration."""

    model_config = ConfigDict(frozen=True)

    provider_id: str
    enabled: bool = True
    fail_open: bool = False
    api_key: Optional[str] = Field(default=None, repr=False)
    base_url: str
    model: Optional[str] = None
    timeout_s: float = Field(default=10.0, gt=0)
    max_attempts: int = Field(default=1, ge=1)
    backoff_base_s: float = Field(default=0.0, ge=0)
    thresholds: Mapping[str, float] = Field(default_factory=dict, validate_default=True)
    languages: tuple[str, ...] = ()

    @field_validator("thresholds", mode="after")
    @classmethod
    def _freeze_thresholds(cls, value: Mapping[str, float]) -> Mapping[str, float]:
        return MappingProxyType(dict(value))

    @field_serializer("thresholds")
    def _dump_thresholds(self, value: Mapping[str, float]) -> dict[str, float]:
        return dict(value)


class PipelineConfig(BaseModel):
    """
    Immutable configuration for the moderation pipeline.

    Built once at startup. Provider order is significant: it is the order in
    which results are reported and in which fail-closed failures are surfaced.
    """

    model_config = ConfigDict(frozen=True)

    max_text_length: int = Field(default=32768, ge=1)
    providers: tuple[ProviderConfig, ...] = ()
    debug: bool = False

    @property
    def enabled_providers(self) -> tuple[ProviderConfig, ...]:
        return tuple(p for p in self.providers if p.enabled)

    def get_provider(self, provider_id: str) -> ProviderConfig:
        for provider in self.providers:
            if provider.provider_id == provider_id:
                return provider
        raise KeyError(provider_id)

    @classmethod
    def from_settings(cls, settings: Settings) -> "PipelineConfig":
        """Freeze environment settings into the pipeline configuration."""
        openai = ProviderConfig(
            provider_id=OPENAI_PROVIDER_ID,
            enabled=settings.OPENAI_ENABLED and bool(settings.OPENAI_API_KEY),
            fail_open=settings.OPENAI_FAIL_OPEN,
            api_key=settings.OPENAI_API_KEY,
            base_url=settings.OPENAI_BASE_URL,
            model=settings.OPENAI_MODEL,
            timeout_s=settings.OPENAI_TIMEOUT,
            max_attempts=settings.PROVIDER_MAX_ATTEMPTS,
            backoff_base_s=settings.RETRY_BACKOFF_BASE,
            thresholds=dict(settings.OPENAI_CATEGORY_THRESHOLDS),
        )
        perspective = ProviderConfig(
            provider_id=PERSPECTIVE_PROVIDER_ID,
            enabled=settings.PERSPECTIVE_ENABLED and bool(settings.PERSPECTIVE_API_KEY),
            fail_open=settings.PERSPECTIVE_FAIL_OPEN,
            api_key=settings.PERSPECTIVE_API_KEY,
            base_url=settings.PERSPECTIVE_BASE_URL,
            timeout_s=settings.PERSPECTIVE_TIMEOUT,
            max_attempts=settings.PROVIDER_MAX_ATTEMPTS,
            backoff_base_s=settings.RETRY_BACKOFF_BASE,
            # Attribute names are upper-case on the wire, categories lower-case
            thresholds={
                attribute.lower(): threshold
                for attribute, threshold in settings.PERSPECTIVE_ATTRIBUTES.items()
            },
            languages=tuple(settings.PERSPECTIVE_LANGUAGES),
        )
        return cls(
            max_text_length=settings.MAX_TEXT_LENGTH,
            providers=(openai, perspective),
            debug=settings.DEBUG,
        )


# Global settings instance
settings = Settings()
