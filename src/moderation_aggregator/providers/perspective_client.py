"""
Google Perspective adapter.

Perspective returns nested per-attribute summary scores and no decisions of
its own, so every flag is produced by threshold evaluation.
"""

from typing import Optional

from moderation_aggregator.models.enums import ErrorKind, ProviderStatus
from moderation_aggregator.models.moderation_models import CategoryScore
from moderation_aggregator.models.provider_models import PerspectiveAnalyzeResponse
from moderation_aggregator.providers.base_client import BaseModerationProvider
from moderation_aggregator.providers.exceptions import ProviderError, build_error_info


HEALTH_CHECK_COMMENT = "health check"


class PerspectiveClient(BaseModerationProvider):
    """
    Perspective-specific toxicity adapter.

    API Endpoint:
    - POST /v1alpha1/comments:analyze?key=...

    Requested attributes are the configured threshold categories, upper-cased
    on the wire (TOXICITY, INSULT, ...) and lower-cased in results.
    """

    display_name = "Google Perspective"
    description = "Google Perspective toxicity analysis (toxicity, insult, profanity, threat, ...)"

    @property
    def requested_attributes(self) -> list[str]:
        return [category.upper() for category in self.config.thresholds]

    async def invoke(self, text: str) -> PerspectiveAnalyzeResponse:
        """
        POST /v1alpha1/comments:analyze

        Request:
        {
            "comment": {"text": "..."},
            "requestedAttributes": {"TOXICITY": {}, "INSULT": {}},
            "languages": ["en"]
        }
        """
        payload = {
            "comment": {"text": text},
            "requestedAttributes": {attribute: {} for attribute in self.requested_attributes},
        }
        # Perspective auto-detects the language when none is given
        if self.config.languages:
            payload["languages"] = list(self.config.languages)

        self.logger.debug(
            "Sending analyze request to Perspective",
            attributes=self.requested_attributes,
        )

        data = await self._post_json(
            "/v1alpha1/comments:analyze",
            payload,
            params={"key": self.config.api_key or ""},
        )
        return self._parse(PerspectiveAnalyzeResponse, data)

    def normalize(self, raw: PerspectiveAnalyzeResponse) -> CategoryScore:
        scores: CategoryScore = {}
        for attribute in self.requested_attributes:
            entry = raw.attributeScores.get(attribute)
            if entry is None or entry.summaryScore is None or entry.summaryScore.value is None:
                continue
            scores[attribute.lower()] = float(entry.summaryScore.value)

        if not scores:
            raise ProviderError(
                build_error_info(
                    ErrorKind.UNKNOWN,
                    self.display_name,
                    detail="no attribute scores returned",
                )
            )
        return scores

    def result_status(self, raw: PerspectiveAnalyzeResponse, scores: CategoryScore) -> ProviderStatus:
        if len(scores) < len(self.requested_attributes):
            self.logger.warning(
                "Perspective omitted requested attributes",
                missing=sorted(
                    a.lower() for a in self.requested_attributes if a.lower() not in scores
                ),
            )
            return ProviderStatus.DEGRADED
        return ProviderStatus.OK

    def model_name(self, raw: Optional[PerspectiveAnalyzeResponse] = None) -> Optional[str]:
        return "perspective-comment-analyzer"

    async def health_check(self) -> bool:
        """
        Analyze a fixed probe comment for a single attribute.

        Perspective exposes no read-only endpoint, so this is the cheapest call
        that exercises the key. doNotStore keeps the probe out of Google's logs.
        """
        payload = {
            "comment": {"text": HEALTH_CHECK_COMMENT},
            "requestedAttributes": {"TOXICITY": {}},
            "doNotStore": True,
        }
        return await self._probe(
            "POST",
            "/v1alpha1/comments:analyze",
            json=payload,
            params={"key": self.config.api_key or ""},
        )
