"""Custom Prometheus metrics for the Moderation Aggregator.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules should be configured for:
- provider_errors_total (upstream outages, expired credentials)
- moderation_requests_total{outcome="error"} (requests answered without a verdict)
"""

from prometheus_client import Counter, Histogram

# === Provider Metrics ===

provider_requests_total = Counter(
    "provider_requests_total",
    "Total provider calls by provider and final status",
    ["provider", "status"],
)
"""
Provider calls counter.

Labels:
- provider: openai, perspective
- status: ok, degraded, failed
"""

provider_errors_total = Counter(
    "provider_errors_total",
    "Total provider failures by provider and error kind",
    ["provider", "kind"],
)
"""
Provider failures counter, one increment per failed attempt.

Labels:
- provider: openai, perspective
- kind: unauthorized, rate_limited, service_unavailable, bad_request, unknown

Alert thresholds:
- CRITICAL: any kind="unauthorized" (credentials revoked or expired)
- WARN: rate_limited or service_unavailable > 5% of provider calls
"""

provider_latency_seconds = Histogram(
    "provider_latency_seconds",
    "Provider call latency in seconds, including retries",
    ["provider"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

# === Verdict Metrics ===

moderation_requests_total = Counter(
    "moderation_requests_total",
    "Total moderation requests by outcome",
    ["outcome"],
)
"""
Moderation requests counter.

Labels:
- outcome: flagged, clean, invalid (rejected by validator), error (no verdict)
"""
