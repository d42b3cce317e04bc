"""
Resilience Patterns

Retry with exponential backoff for transient transport failures.
"""

from src.common.resilience.retry import RetryConfig, retry_with_backoff

__all__ = [
    "retry_with_backoff",
    "RetryConfig",
]
