"""
Abstract base class for moderation providers.

Defines the contract every classification service adapter implements
(invoke + normalize) and the shared machinery around it: HTTP transport,
error translation, bounded retry and conversion into a ProviderResult.
Swapping or adding a provider does not touch the aggregator.
"""

import asyncio
import time
from abc import ABC, abstractmethod
from typing import Any, Optional, TypeVar

import httpx
import structlog
from pydantic import BaseModel, ValidationError as PydanticValidationError

from moderation_aggregator.config import ProviderConfig
from moderation_aggregator.models.enums import ErrorKind, ProviderStatus
from moderation_aggregator.models.moderation_models import (
    CategoryFlags,
    CategoryScore,
    ProviderDescriptor,
    ProviderResult,
)
from moderation_aggregator.models.provider_models import RawProviderResponse
from moderation_aggregator.monitoring.metrics import (
    provider_errors_total,
    provider_latency_seconds,
    provider_requests_total,
)
from moderation_aggregator.providers.exceptions import ProviderError, build_error_info, classify_status
from moderation_aggregator.thresholds import any_flagged, evaluate


ResponseT = TypeVar("ResponseT", bound=BaseModel)


class BaseModerationProvider(ABC):
    """
    Abstract base class for moderation provider adapters.

    Subclasses implement:
    - invoke(): call the provider and parse its raw response
    - normalize(): map the raw response onto the common category vocabulary
    - health_check(): cheap reachability and credential check

    and may override derive_flags(), result_status() and model_name().

    Responsibilities of the base class:
    - Persistent httpx.AsyncClient (connection pooling)
    - Translating timeouts, transport errors and HTTP statuses into ErrorInfo
    - Bounded retry with exponential backoff for transient failures
    - Never letting a provider failure escape moderate()

    Does NOT decide whether a failure aborts the request: the fail-open /
    fail-closed policy is applied by the Aggregator.
    """

    display_name: str = "Provider"
    description: str = ""

    def __init__(
        self,
        config: ProviderConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        connection_limits: Optional[httpx.Limits] = None,
        logger: Optional[Any] = None,
    ):
        """
        Initialize provider adapter.

        Args:
            config: Read-only provider configuration
            transport: Optional httpx transport (tests inject httpx.MockTransport)
            connection_limits: httpx connection pool limits
            logger: structlog-compatible logger (defaults to a module logger)
        """
        self.config = config
        self._transport = transport
        self._connection_limits = connection_limits or httpx.Limits(
            max_keepalive_connections=10,
            max_connections=20,
            keepalive_expiry=30.0,
        )
        self._client: Optional[httpx.AsyncClient] = None
        self.logger = logger or structlog.get_logger(__name__).bind(
            provider=config.provider_id
        )

        self.logger.info(
            "Initialized moderation provider",
            client_class=self.__class__.__name__,
            base_url=config.base_url,
            timeout=config.timeout_s,
            max_attempts=config.max_attempts,
            fail_open=config.fail_open,
        )

    @property
    def provider_id(self) -> str:
        return self.config.provider_id

    # ------------------------------------------------------------------
    # Provider contract
    # ------------------------------------------------------------------

    @abstractmethod
    async def invoke(self, text: str) -> RawProviderResponse:
        """
        Send the text to the provider and parse its response.

        Raises:
            ProviderError: Any transport, status or parse failure
        """

    @abstractmethod
    def normalize(self, raw: RawProviderResponse) -> CategoryScore:
        """
        Map the provider's native fields onto category scores.

        Categories the provider did not report are omitted, never defaulted.
        """

    def derive_flags(self, raw: RawProviderResponse, scores: CategoryScore) -> CategoryFlags:
        """Flag categories by comparing scores against configured thresholds."""
        return evaluate(scores, self.config.thresholds)

    def result_status(self, raw: RawProviderResponse, scores: CategoryScore) -> ProviderStatus:
        return ProviderStatus.OK

    def model_name(self, raw: Optional[RawProviderResponse] = None) -> Optional[str]:
        return self.config.model

    def describe(self) -> ProviderDescriptor:
        return ProviderDescriptor(
            id=self.provider_id,
            name=self.display_name,
            description=self.description,
        )

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check that the provider is reachable and accepts our credentials.

        Must never send user text and never raise: return False on error.
        Not used by the /health route, which must not consume provider quota.
        """

    async def _probe(self, method: str, path: str, **kwargs: Any) -> bool:
        """Issue a lightweight request and report whether it returned 2xx."""
        try:
            client = await self._get_client()
            response = await client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self.logger.warning(
                "Provider health check failed", status_code=e.response.status_code
            )
            return False
        except httpx.HTTPError as e:
            self.logger.warning("Provider health check failed", error_type=type(e).__name__)
            return False

        self.logger.debug("Provider health check passed")
        return True

    # ------------------------------------------------------------------
    # Pipeline entry point
    # ------------------------------------------------------------------

    async def moderate(self, text: str) -> ProviderResult:
        """
        Classify text and return a normalized result.

        Never raises for provider failures: they come back as a FAILED
        ProviderResult carrying the translated ErrorInfo. Cancellation is
        propagated.
        """
        start_time = time.perf_counter()

        try:
            raw, attempts = await self._invoke_with_retry(text)
            try:
                scores = self.normalize(raw)
                categories = self.derive_flags(raw, scores)
                status = self.result_status(raw, scores)
                result = ProviderResult(
                    provider_id=self.provider_id,
                    status=status,
                    flagged=any_flagged(categories),
                    categories=categories,
                    scores=scores,
                    model=self.model_name(raw),
                    latency_ms=self._elapsed_ms(start_time),
                    attempts=attempts,
                )
            except ProviderError as e:
                e.attempts = attempts
                raise
            except (ValueError, TypeError) as e:
                raise ProviderError(
                    build_error_info(
                        ErrorKind.UNKNOWN, self.display_name, detail="malformed response"
                    ),
                    attempts=attempts,
                ) from e

        except ProviderError as e:
            latency_ms = self._elapsed_ms(start_time)
            self.logger.warning(
                "Provider call failed",
                error_kind=e.kind.value,
                status_code=e.info.status_code,
                attempts=e.attempts,
                latency_ms=latency_ms,
            )
            provider_requests_total.labels(
                provider=self.provider_id, status=ProviderStatus.FAILED.value
            ).inc()
            provider_latency_seconds.labels(provider=self.provider_id).observe(
                latency_ms / 1000.0
            )
            return ProviderResult.failure(
                provider_id=self.provider_id,
                error=e.info,
                model=self.model_name(),
                latency_ms=latency_ms,
                attempts=e.attempts,
            )

        self.logger.info(
            "Provider call succeeded",
            status=result.status.value,
            flagged=result.flagged,
            flagged_categories=[c for c, f in result.categories.items() if f],
            latency_ms=result.latency_ms,
            attempts=result.attempts,
        )
        provider_requests_total.labels(
            provider=self.provider_id, status=result.status.value
        ).inc()
        provider_latency_seconds.labels(provider=self.provider_id).observe(
            result.latency_ms / 1000.0
        )
        return result

    async def _invoke_with_retry(self, text: str) -> tuple[RawProviderResponse, int]:
        """Invoke with a per-attempt deadline, retrying transient failures."""
        max_attempts = self.config.max_attempts

        for attempt in range(1, max_attempts + 1):
            try:
                raw = await asyncio.wait_for(self.invoke(text), timeout=self.config.timeout_s)
                return raw, attempt

            except asyncio.TimeoutError:
                error = ProviderError(
                    build_error_info(ErrorKind.SERVICE_UNAVAILABLE, self.display_name),
                    attempts=attempt,
                )
                self.logger.warning(
                    "Provider request timeout", attempt=attempt, timeout=self.config.timeout_s
                )

            except ProviderError as e:
                e.attempts = attempt
                error = e

            provider_errors_total.labels(provider=self.provider_id, kind=error.kind.value).inc()

            if error.kind.is_transient and attempt < max_attempts:
                backoff = self.config.backoff_base_s * 2 ** (attempt - 1)
                self.logger.info(
                    "Transient provider failure, retrying",
                    error_kind=error.kind.value,
                    attempt=attempt,
                    max_attempts=max_attempts,
                    backoff_s=backoff,
                )
                await asyncio.sleep(backoff)
                continue
            raise error

        # Unreachable while max_attempts >= 1
        raise RuntimeError("Provider retry loop exited without a result")

    # ------------------------------------------------------------------
    # HTTP helpers
    # ------------------------------------------------------------------

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=httpx.Timeout(self.config.timeout_s),
                limits=self._connection_limits,
                transport=self._transport,
            )
            self.logger.debug("Created new httpx AsyncClient")
        return self._client

    async def _post_json(
        self,
        path: str,
        payload: dict[str, Any],
        params: Optional[dict[str, str]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        """
        POST a JSON payload and return the decoded JSON response.

        Raises:
            ProviderError: Timeout, transport error, non-2xx status or invalid JSON
        """
        client = await self._get_client()

        try:
            response = await client.post(path, json=payload, params=params, headers=headers)
            response.raise_for_status()

        except httpx.TimeoutException as e:
            raise ProviderError(
                build_error_info(ErrorKind.SERVICE_UNAVAILABLE, self.display_name)
            ) from e

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            detail = self._upstream_error_detail(e.response)
            # The request URL may carry an API key: log status and upstream detail only
            self.logger.error(
                "Provider HTTP error",
                status_code=status_code,
                upstream_error=detail,
            )
            raise ProviderError(
                build_error_info(
                    classify_status(status_code),
                    self.display_name,
                    status_code=status_code,
                    detail=detail,
                )
            ) from e

        except httpx.TransportError as e:
            self.logger.warning("Provider network error", error_type=type(e).__name__)
            raise ProviderError(
                build_error_info(ErrorKind.SERVICE_UNAVAILABLE, self.display_name)
            ) from e

        except httpx.RequestError as e:
            # Undecodable bodies, redirect loops
            self.logger.error("Provider response unreadable", error_type=type(e).__name__)
            raise ProviderError(
                build_error_info(
                    ErrorKind.UNKNOWN, self.display_name, detail="unreadable response"
                )
            ) from e

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(
                build_error_info(
                    ErrorKind.UNKNOWN, self.display_name, detail="invalid JSON response"
                )
            ) from e

    def _parse(self, model_cls: type[ResponseT], data: Any) -> ResponseT:
        try:
            return model_cls.model_validate(data)
        except PydanticValidationError as e:
            self.logger.error(
                "Unexpected provider response shape", error_count=e.error_count()
            )
            raise ProviderError(
                build_error_info(
                    ErrorKind.UNKNOWN, self.display_name, detail="unexpected response shape"
                )
            ) from e

    @staticmethod
    def _upstream_error_detail(response: httpx.Response) -> Optional[str]:
        """Extract `error.message` from a provider error body, if any."""
        try:
            return response.json()["error"]["message"]
        except (ValueError, KeyError, TypeError):
            return response.text[:200] or None

    @staticmethod
    def _elapsed_ms(start_time: float) -> int:
        return int((time.perf_counter() - start_time) * 1000)

    async def close(self):
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self.logger.debug("Closed provider client connection")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"provider_id={self.provider_id}, "
            f"base_url={self.config.base_url}, "
            f"fail_open={self.config.fail_open})"
        )
