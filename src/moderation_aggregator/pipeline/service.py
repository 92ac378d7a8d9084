"""
Moderation service: the single entry point used by the HTTP layer.

    service = ModerationService(aggregator, config)
    outcome = await service.moderate({"text": "..."})
    outcome.status_code, outcome.payload
"""

from dataclasses import dataclass
from typing import Any, Optional

import structlog

from moderation_aggregator.config import PipelineConfig
from moderation_aggregator.monitoring.metrics import moderation_requests_total
from moderation_aggregator.pipeline.aggregator import Aggregator
from moderation_aggregator.pipeline.exceptions import PipelineError
from moderation_aggregator.pipeline.formatter import format_error, format_verdict
from moderation_aggregator.validation.exceptions import RequestValidationError
from moderation_aggregator.validation.validator import validate


@dataclass(frozen=True)
class ModerationOutcome:
    """HTTP-agnostic result of moderate(): a status code and a JSON body."""

    status_code: int
    payload: dict[str, Any]


class ModerationService:
    """
    Validates, aggregates and formats moderation requests.

    Only RequestValidationError and PipelineError are turned into error
    outcomes here. Anything else is a bug and propagates to the HTTP layer.
    """

    def __init__(
        self,
        aggregator: Aggregator,
        config: PipelineConfig,
        logger: Optional[Any] = None,
    ):
        self.aggregator = aggregator
        self.config = config
        self.logger = logger or structlog.get_logger(__name__)
        self._descriptors = tuple(
            provider.describe().model_dump() for provider in aggregator.providers
        )

    async def moderate(self, body: Any) -> ModerationOutcome:
        """
        Moderate a raw request body.

        Args:
            body: Decoded JSON request body, expected {"text": "..."}

        Returns:
            ModerationOutcome (200 with verdict, or 4xx/5xx with error body)
        """
        try:
            request = validate(body, self.config.max_text_length)
        except RequestValidationError as exc:
            self.logger.info(
                "Moderation request rejected",
                reason=exc.kind.value,
                **exc.extra,
            )
            moderation_requests_total.labels(outcome="invalid").inc()
            return self._error_outcome(exc)

        try:
            verdict = await self.aggregator.aggregate(request)
        except PipelineError as exc:
            self.logger.error(
                "Moderation request failed",
                error_type=type(exc).__name__,
                details=exc.details,
            )
            moderation_requests_total.labels(outcome="error").inc()
            return self._error_outcome(exc)

        moderation_requests_total.labels(outcome="flagged" if verdict.flagged else "clean").inc()
        return ModerationOutcome(status_code=200, payload=format_verdict(verdict))

    def list_providers(self) -> dict[str, list[dict[str, str]]]:
        """Capability discovery: the configured providers, in reporting order."""
        return {"models": [dict(descriptor) for descriptor in self._descriptors]}

    def _error_outcome(self, exc: Exception) -> ModerationOutcome:
        status_code, payload = format_error(exc, debug=self.config.debug)
        return ModerationOutcome(status_code=status_code, payload=payload)

    async def close(self) -> None:
        await self.aggregator.close()
