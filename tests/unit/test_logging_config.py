"""
Unit tests for structured logging processors.
"""

from moderation_aggregator.logging_config import (
    REDACTED,
    add_app_context,
    build_processors,
    scrub_sensitive_fields,
)


def test_text_and_keys_are_scrubbed():
    event = {"event": "Request", "text": "secret words", "api_key": "sk-1", "text_length": 12}

    scrubbed = scrub_sensitive_fields(None, "info", event)

    assert scrubbed["text"] == REDACTED
    assert scrubbed["api_key"] == REDACTED
    assert scrubbed["text_length"] == 12
    assert scrubbed["event"] == "Request"


def test_app_context():
    assert add_app_context(None, "info", {})["app"] == "moderation-aggregator"


def test_exception_formatting_only_in_production():
    assert len(build_processors(is_production=True)) == len(build_processors(False)) + 1
