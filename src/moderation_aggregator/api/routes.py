"""
Moderation API routes.

- POST /api/moderation/text: moderate a text payload
- POST /moderate: legacy alias of /api/moderation/text
- GET /api/moderation/models: configured providers
- GET /health: liveness
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from moderation_aggregator.api.dependencies import (
    get_moderation_service,
    get_settings,
)
from moderation_aggregator.api.models import HealthResponse, ProvidersResponse
from moderation_aggregator.config import Settings
from moderation_aggregator.pipeline.aggregator import utc_timestamp
from moderation_aggregator.pipeline.service import ModerationService

router = APIRouter()


@router.post(
    "/api/moderation/text",
    summary="Moderate text",
    description="""
    Consult every enabled moderation provider and return the combined verdict.

    The text is flagged when any provider flags it. Providers configured as
    fail-open may be reported with status "failed" without blocking the verdict.
    """,
    responses={
        200: {"description": "Verdict computed"},
        400: {"description": "Invalid text (missing, wrong type, blank or too long)"},
        401: {"description": "Mandatory provider rejected the API key"},
        429: {"description": "Mandatory provider rate limit exceeded"},
        500: {"description": "No provider produced a result"},
        503: {"description": "Mandatory provider unavailable"},
    },
)
@router.post("/moderate", include_in_schema=False)
async def moderate_text(
    body: Any = Body(default=None),
    service: ModerationService = Depends(get_moderation_service),
) -> JSONResponse:
    """
    Moderate a text payload.

    Args:
        body: JSON body, expected {"text": "..."}
        service: Moderation service (injected)

    Returns:
        JSONResponse with the outcome's status code and payload
    """
    outcome = await service.moderate(body)
    return JSONResponse(status_code=outcome.status_code, content=outcome.payload)


@router.get(
    "/api/moderation/models",
    response_model=ProvidersResponse,
    summary="List moderation providers",
)
async def list_models(
    service: ModerationService = Depends(get_moderation_service),
) -> dict:
    """Return the configured providers. Independent of any moderation request."""
    return service.list_providers()


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Service health check",
)
async def health_check(
    settings: Settings = Depends(get_settings),
    service: ModerationService = Depends(get_moderation_service),
) -> HealthResponse:
    """
    Report liveness and the enabled providers.

    Providers are not called: a health check must not consume provider quota.
    """
    return HealthResponse(
        status="healthy",
        timestamp=utc_timestamp(),
        service="moderation-aggregator",
        version=settings.APP_VERSION,
        providers=[descriptor["id"] for descriptor in service.list_providers()["models"]],
    )
