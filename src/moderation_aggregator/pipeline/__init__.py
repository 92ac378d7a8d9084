"""
Moderation pipeline.

- aggregator.py: Concurrent fan-out to providers, fail-open/fail-closed policy, OR verdict
- formatter.py: Verdict and error response shaping
- service.py: moderate() / list_providers() entry points
- exceptions.py: PipelineError hierarchy
"""

from .aggregator import Aggregator
from .exceptions import (
    AllProvidersFailed,
    NoProvidersConfigured,
    PipelineError,
    ProviderFailure,
)
from .formatter import format_error, format_verdict
from .service import ModerationOutcome, ModerationService

__all__ = [
    "Aggregator",
    "ModerationOutcome",
    "ModerationService",
    "format_error",
    "format_verdict",
    "AllProvidersFailed",
    "NoProvidersConfigured",
    "PipelineError",
    "ProviderFailure",
]
