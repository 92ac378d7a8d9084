"""
OpenAI moderation adapter.

Calls the OpenAI moderation endpoint with httpx. The response already carries
a boolean flag and a score for every category, so normalization is a
pass-through of `category_scores`.
"""

from typing import Optional

from moderation_aggregator.models.moderation_models import CategoryFlags, CategoryScore
from moderation_aggregator.models.provider_models import OpenAIModerationResponse
from moderation_aggregator.providers.base_client import BaseModerationProvider
from moderation_aggregator.thresholds import evaluate


class OpenAIModerationClient(BaseModerationProvider):
    """
    OpenAI-specific moderation adapter.

    API Endpoint:
    - POST /v1/moderations with {"model": ..., "input": ...}

    Flags come from OpenAI's own per-category decisions. A threshold
    configured for a category overrides OpenAI's decision for that category.
    """

    display_name = "OpenAI"
    description = "OpenAI moderation model (harassment, hate, self-harm, sexual, violence, ...)"

    async def invoke(self, text: str) -> OpenAIModerationResponse:
        """
        POST /v1/moderations

        Request:
        {"model": "omni-moderation-latest", "input": "..."}

        Response:
        {
            "id": "modr-...",
            "model": "omni-moderation-latest",
            "results": [{"flagged": false, "categories": {...}, "category_scores": {...}}]
        }
        """
        self.logger.debug("Sending moderation request to OpenAI", model=self.config.model)

        data = await self._post_json(
            "/v1/moderations",
            {"model": self.config.model, "input": text},
            headers={"Authorization": f"Bearer {self.config.api_key}"},
        )
        return self._parse(OpenAIModerationResponse, data)

    def normalize(self, raw: OpenAIModerationResponse) -> CategoryScore:
        result = raw.results[0]
        return {
            category: float(score)
            for category, score in result.category_scores.items()
            if score is not None
        }

    def derive_flags(self, raw: OpenAIModerationResponse, scores: CategoryScore) -> CategoryFlags:
        native = raw.results[0].categories
        flags = {
            category: bool(native[category])
            for category in scores
            if native.get(category) is not None
        }
        flags.update(evaluate(scores, self.config.thresholds))
        return flags

    def model_name(self, raw: Optional[OpenAIModerationResponse] = None) -> Optional[str]:
        if raw is not None and raw.model:
            return raw.model
        return self.config.model

    async def health_check(self) -> bool:
        """GET /v1/models/{model}: validates the key without moderating anything."""
        return await self._probe(
            "GET",
            f"/v1/models/{self.config.model}",
            headers={"Authorization": f"Bearer {self.config.api_key}"},
        )
