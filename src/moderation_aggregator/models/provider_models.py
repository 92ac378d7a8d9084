"""
Raw response models for each classification provider.

`RawProviderResponse` is a tagged union: each adapter parses its own variant
and is the only place that inspects it. Unknown fields are ignored so that
upstream additions do not break parsing.
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class OpenAIModerationResult(BaseModel):
    """One entry of the OpenAI `results` array."""

    model_config = ConfigDict(extra="ignore")

    flagged: bool
    categories: dict[str, Optional[bool]] = Field(default_factory=dict)
    category_scores: dict[str, Optional[float]] = Field(default_factory=dict)


class OpenAIModerationResponse(BaseModel):
    """
    Response of POST /v1/moderations.

    {
        "id": "modr-...",
        "model": "omni-moderation-latest",
        "results": [{"flagged": false, "categories": {...}, "category_scores": {...}}]
    }
    """

    model_config = ConfigDict(extra="ignore")

    provider: Literal["openai"] = "openai"
    id: Optional[str] = None
    model: Optional[str] = None
    results: list[OpenAIModerationResult] = Field(..., min_length=1)


class PerspectiveSummaryScore(BaseModel):
    model_config = ConfigDict(extra="ignore")

    value: Optional[float] = None
    type: Optional[str] = None


class PerspectiveAttributeScore(BaseModel):
    model_config = ConfigDict(extra="ignore")

    summaryScore: Optional[PerspectiveSummaryScore] = None


class PerspectiveAnalyzeResponse(BaseModel):
    """
    Response of POST /v1alpha1/comments:analyze.

    {
        "attributeScores": {
            "TOXICITY": {"summaryScore": {"value": 0.02, "type": "PROBABILITY"}, ...}
        },
        "languages": ["en"]
    }
    """

    model_config = ConfigDict(extra="ignore")

    provider: Literal["perspective"] = "perspective"
    attributeScores: dict[str, PerspectiveAttributeScore] = Field(default_factory=dict)
    languages: list[str] = Field(default_factory=list)


RawProviderResponse = Union[OpenAIModerationResponse, PerspectiveAnalyzeResponse]
