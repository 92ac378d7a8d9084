"""
Moderation Aggregator.

Accepts a text payload and returns a moderation verdict by consulting one or
more external content-classification providers:
- OpenAI moderation (mandatory, fail-closed by default)
- Google Perspective (supplementary, fail-open by default)

Provider scores are normalized into a common category vocabulary, compared
against configurable thresholds and combined with a cautious OR.

Architecture: FastAPI entry point + concurrent httpx provider adapters + aggregator
"""

__version__ = "0.1.0"
