"""
Aggregator: fans a request out to every enabled provider and merges results.

Policy (applied here and nowhere else):
- A failed fail-closed provider aborts the request with ProviderFailure.
- A failed fail-open provider is recorded as FAILED and skipped.
- Zero successful providers raises AllProvidersFailed.
- The verdict is the OR over successful providers: any single flag wins.
"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

import structlog

from moderation_aggregator.config import PipelineConfig
from moderation_aggregator.models.moderation_models import (
    AggregateVerdict,
    ModerationRequest,
    ProviderResult,
    VerdictMetadata,
)
from moderation_aggregator.pipeline.exceptions import (
    AllProvidersFailed,
    NoProvidersConfigured,
    ProviderFailure,
)
from moderation_aggregator.providers.base_client import BaseModerationProvider
from moderation_aggregator.validation.validator import text_length


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision (e.g. 2026-01-01T12:00:00.000Z)."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Aggregator:
    """
    Runs the configured providers concurrently and computes the verdict.

    Attributes:
        providers: Enabled provider adapters, in reporting order
        config: Immutable pipeline configuration (source of fail-open policy)
    """

    def __init__(
        self,
        providers: Sequence[BaseModerationProvider],
        config: PipelineConfig,
        logger: Optional[Any] = None,
    ):
        self.providers = tuple(providers)
        self.config = config
        self.logger = logger or structlog.get_logger(__name__)
        self._fail_open = {p.provider_id: p.fail_open for p in config.providers}

        self.logger.info(
            "Aggregator initialized",
            providers=[p.provider_id for p in self.providers],
            fail_open=[p.provider_id for p in self.providers if self.is_fail_open(p.provider_id)],
        )

    def is_fail_open(self, provider_id: str) -> bool:
        """Providers missing from the configuration are treated as fail-closed."""
        return self._fail_open.get(provider_id, False)

    async def aggregate(self, request: ModerationRequest) -> AggregateVerdict:
        """
        Moderate an already validated request.

        Args:
            request: Validated moderation request

        Returns:
            AggregateVerdict with per-provider evidence

        Raises:
            NoProvidersConfigured: No provider is enabled
            ProviderFailure: A fail-closed provider failed
            AllProvidersFailed: Every provider failed and all were fail-open
        """
        if not self.providers:
            raise NoProvidersConfigured()

        # Cancelling the caller cancels every outstanding provider call
        results: list[ProviderResult] = await asyncio.gather(
            *(provider.moderate(request.text) for provider in self.providers)
        )

        per_provider: dict[str, ProviderResult] = {}
        for result in results:
            per_provider[result.provider_id] = result
            if result.succeeded:
                continue

            if not self.is_fail_open(result.provider_id):
                self.logger.error(
                    "Fail-closed provider failed, aborting request",
                    provider=result.provider_id,
                    error_kind=result.error.kind.value,
                )
                raise ProviderFailure(result.provider_id, result.error)

            self.logger.warning(
                "Fail-open provider failed, continuing without it",
                provider=result.provider_id,
                error_kind=result.error.kind.value,
            )

        successful = [r for r in results if r.succeeded]
        if not successful:
            raise AllProvidersFailed(
                {r.provider_id: r.error for r in results if r.error is not None}
            )

        flagged = any(r.flagged for r in successful)

        verdict = AggregateVerdict(
            flagged=flagged,
            per_provider=per_provider,
            metadata=VerdictMetadata(
                timestamp=utc_timestamp(),
                text_length=text_length(request.text),
                providers_consulted=[p.provider_id for p in self.providers],
            ),
        )

        self.logger.info(
            "Moderation verdict computed",
            flagged=flagged,
            text_length=verdict.metadata.text_length,
            succeeded=[r.provider_id for r in successful],
            failed=[r.provider_id for r in results if not r.succeeded],
        )
        return verdict

    async def close(self) -> None:
        for provider in self.providers:
            await provider.close()
