"""
Unit tests for threshold evaluation.
"""

from moderation_aggregator.thresholds import any_flagged, evaluate


def test_score_above_threshold_is_flagged():
    assert evaluate({"toxicity": 0.71}, {"toxicity": 0.7}) == {"toxicity": True}


def test_score_equal_to_threshold_is_not_flagged():
    assert evaluate({"toxicity": 0.7}, {"toxicity": 0.7}) == {"toxicity": False}


def test_score_below_threshold_is_not_flagged():
    assert evaluate({"toxicity": 0.2}, {"toxicity": 0.7}) == {"toxicity": False}


def test_category_without_threshold_is_excluded():
    flags = evaluate({"toxicity": 0.9, "flirtation": 0.99}, {"toxicity": 0.7})

    assert flags == {"toxicity": True}
    assert "flirtation" not in flags


def test_threshold_without_score_is_excluded():
    """Categories the provider did not report are not judged."""
    flags = evaluate({"toxicity": 0.1}, {"toxicity": 0.7, "threat": 0.5})

    assert flags == {"toxicity": False}


def test_empty_inputs():
    assert evaluate({}, {"toxicity": 0.7}) == {}
    assert evaluate({"toxicity": 0.9}, {}) == {}


def test_per_category_thresholds():
    flags = evaluate(
        {"toxicity": 0.5, "threat": 0.5},
        {"toxicity": 0.4, "threat": 0.6},
    )

    assert flags == {"toxicity": True, "threat": False}


def test_any_flagged():
    assert any_flagged({"a": False, "b": True}) is True
    assert any_flagged({"a": False}) is False
    assert any_flagged({}) is False
