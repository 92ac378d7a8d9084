"""
FastAPI application entry point for the Moderation Aggregator.

    uvicorn moderation_aggregator.main:app
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from moderation_aggregator.api.dependencies import (
    get_moderation_service,
    get_pipeline_config,
)
from moderation_aggregator.api.error_handlers import EXCEPTION_HANDLERS
from moderation_aggregator.api.middleware import REQUEST_ID_HEADER, RequestTracingMiddleware
from moderation_aggregator.api.models import ServiceInfoResponse
from moderation_aggregator.api.routes import router
from moderation_aggregator.config import Settings, settings
from moderation_aggregator.logging_config import configure_logging

logger = structlog.get_logger(__name__)


def _log_provider_config() -> None:
    config = get_pipeline_config()
    logger.info(
        "Moderation pipeline configured",
        max_text_length=config.max_text_length,
        providers=[
            {
                "id": p.provider_id,
                "enabled": p.enabled,
                "fail_open": p.fail_open,
                "timeout_s": p.timeout_s,
                "max_attempts": p.max_attempts,
            }
            for p in config.providers
        ],
    )
    if not config.enabled_providers:
        logger.error("No moderation provider enabled: every request will fail")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log the effective configuration, close provider pools on shutdown."""
    _log_provider_config()
    yield
    # Only close a service that was actually built (and not overridden in tests)
    if get_moderation_service.cache_info().currsize:
        await get_moderation_service().close()
    logger.info("Provider connections closed")


def cors_origins(value: str) -> list[str]:
    """Split a comma-separated CORS_ORIGIN setting."""
    return [origin.strip() for origin in value.split(",") if origin.strip()]


def create_app(app_settings: Settings) -> FastAPI:
    """Build the FastAPI application from settings."""
    application = FastAPI(
        title=app_settings.APP_NAME,
        description="Multi-provider text moderation with normalized, threshold-based verdicts",
        version=app_settings.APP_VERSION,
        lifespan=lifespan,
    )

    origins = cors_origins(app_settings.CORS_ORIGIN)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentials with a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    # Added last so it wraps CORS and runs first
    application.add_middleware(RequestTracingMiddleware)

    for exc_class, handler in EXCEPTION_HANDLERS.items():
        application.add_exception_handler(exc_class, handler)

    application.include_router(router, tags=["moderation"])

    @application.get("/", response_model=ServiceInfoResponse, include_in_schema=False)
    async def service_info() -> ServiceInfoResponse:
        return ServiceInfoResponse(
            service=app_settings.APP_NAME,
            version=app_settings.APP_VERSION,
            docs=application.docs_url,
            health="/health",
            metrics="/metrics" if app_settings.PROMETHEUS_ENABLED else None,
        )

    if app_settings.PROMETHEUS_ENABLED:
        Instrumentator(excluded_handlers=["/metrics", "/health"]).instrument(application).expose(
            application, include_in_schema=False
        )

    return application


configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "moderation_aggregator.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
