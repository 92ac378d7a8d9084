"""Monitoring and metrics instrumentation for the Moderation Aggregator.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from moderation_aggregator.monitoring.metrics import (
    moderation_requests_total,
    provider_errors_total,
    provider_latency_seconds,
    provider_requests_total,
)

__all__ = [
    "moderation_requests_total",
    "provider_errors_total",
    "provider_latency_seconds",
    "provider_requests_total",
]
