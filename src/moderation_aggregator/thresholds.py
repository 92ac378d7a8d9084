"""
Threshold evaluation: turns provider scores into category flags.

Thresholds are process-wide configuration. A category is flagged only when
its score is strictly greater than its threshold; categories without a
configured threshold are informational and left out of the flags.
"""

from collections.abc import Mapping

from moderation_aggregator.models.moderation_models import CategoryFlags, CategoryScore


def evaluate(scores: CategoryScore, thresholds: Mapping[str, float]) -> CategoryFlags:
    """
    Compare each score against its category threshold.

    Args:
        scores: Normalized category scores from one provider
        thresholds: Category name -> threshold

    Returns:
        Flags for categories present in both mappings, in score order
    """
    return {
        category: score > thresholds[category]
        for category, score in scores.items()
        if category in thresholds
    }


def any_flagged(flags: CategoryFlags) -> bool:
    return any(flags.values())
