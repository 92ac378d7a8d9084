"""
FastAPI API routes and endpoints.

- routes.py: POST /api/moderation/text (+ legacy /moderate), GET /api/moderation/models, GET /health
- dependencies.py: Dependency injection for settings, pipeline config and service
- models.py: API-specific response models
- middleware.py: Request ID tracing
- error_handlers.py: Exception handlers for structured error responses
"""

from moderation_aggregator.api import dependencies, error_handlers, models
from moderation_aggregator.api.routes import router

__all__ = [
    "router",
    "dependencies",
    "error_handlers",
    "models",
]
