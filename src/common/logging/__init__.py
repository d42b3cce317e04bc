"""
Common Logging Utilities

Stderr logging with API token redaction.
"""

from src.common.logging.sanitizer import (
    SanitizingFilter,
    configure_sanitized_logging,
    redact,
)

__all__ = [
    "SanitizingFilter",
    "configure_sanitized_logging",
    "redact",
]
