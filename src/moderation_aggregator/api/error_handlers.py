"""
FastAPI exception handlers for structured error responses.

Modeled moderation errors are already converted into responses by the
service. These handlers cover what happens around it: malformed bodies,
unknown routes and unexpected exceptions. Every body carries an `error`
string; stack traces are included only when DEBUG is enabled.
"""

import logging
import traceback

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from moderation_aggregator.api.dependencies import get_settings

logger = logging.getLogger(__name__)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request bodies FastAPI could not decode (e.g. invalid JSON).

    Maps to 400 Bad Request, in the same shape as moderation validation errors.
    """
    logger.warning(
        "Invalid request body",
        extra={"errors": exc.errors()},
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Request body must be a JSON object with a text field.",
            "field": "text",
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Handle routing and HTTP errors raised by FastAPI/Starlette.

    404 gets the "endpoint does not exist" body, everything else echoes the detail.
    """
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        content = {
            "error": "Not found",
            "message": f"The requested endpoint {request.url.path} does not exist",
        }
    else:
        content = {"error": str(exc.detail)}

    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.

    Maps to 500 Internal Server Error.
    """
    logger.exception(
        "Unexpected error",
        extra={"error_type": type(exc).__name__},
    )

    content = {
        "error": "Internal server error",
        "message": str(exc) or "An unexpected error occurred",
    }
    if get_settings().DEBUG:
        content["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    RequestValidationError: request_validation_error_handler,
    StarletteHTTPException: http_exception_handler,
    Exception: generic_error_handler,
}
