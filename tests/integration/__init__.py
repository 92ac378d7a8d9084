"""
Integration tests for the Moderation Aggregator.

Exercise the full HTTP stack (routing, middleware, service, aggregator and
provider adapters) against fake upstream providers.
"""
