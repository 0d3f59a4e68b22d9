"""Resilience patterns module."""

from tradefeed.core.patterns.concurrency import gather_all
from tradefeed.core.patterns.retry import (
    LinearBackoffRetry,
    RetryConfig,
    RetryState,
    with_retry,
)

__all__ = [
    "gather_all",
    "LinearBackoffRetry",
    "RetryConfig",
    "RetryState",
    "with_retry",
]
