"""
Log Sanitization

Redacts Productive API tokens and other credentials from log output.
httpx logs request headers at DEBUG, so the CLI's --verbose mode would
otherwise print the X-Auth-Token.
"""

from __future__ import annotations

import logging
import re
import sys
from collections.abc import Iterable
from re import Pattern
from typing import Any

REDACTION_PLACEHOLDER = "[REDACTED]"

# name -> pattern; a match is replaced by "<name>=[REDACTED]"
SENSITIVE_PATTERNS: dict[str, Pattern[str]] = {
    "X_AUTH_TOKEN": re.compile(
        r"X-Auth-Token['\"]?\s*[=:]\s*['\"]?[\w\-]{8,}['\"]?", re.IGNORECASE
    ),
    "API_TOKEN": re.compile(
        r"api[_-]?token['\"]?\s*[=:]\s*['\"]?[\w\-]{8,}['\"]?", re.IGNORECASE
    ),
    "SECRET": re.compile(
        r"(secret|password|passwd|pwd)\s*[=:]\s*['\"]?[^\s'\"]{8,}['\"]?", re.IGNORECASE
    ),
    # resolver cache URL with credentials
    "REDIS_URL": re.compile(r"rediss?://[^:@/\s]*:[^@\s]+@", re.IGNORECASE),
    "BEARER": re.compile(r"Bearer\s+[\w\-.]+", re.IGNORECASE),
}

# Loggers that are chatty at INFO; kept at WARNING unless DEBUG is requested
NOISY_LOGGERS = ("httpx", "httpcore", "mcp")

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def redact(
    text: str,
    patterns: Iterable[tuple[str, Pattern[str]]] | None = None,
    placeholder: str = REDACTION_PLACEHOLDER,
) -> str:
    """Replace every credential-looking substring of `text`."""
    for name, pattern in patterns if patterns is not None else SENSITIVE_PATTERNS.items():
        text = pattern.sub(f"{name}={placeholder}", text)
    return text


class SanitizingFilter(logging.Filter):
    """
    Logging filter that redacts credentials in place. Never drops a record.

    Attach it to handlers: filters on a logger only see records logged
    directly on that logger, not ones propagated from its children.
    """

    def __init__(
        self,
        name: str = "",
        additional_patterns: list[tuple[str, Pattern[str]]] | None = None,
        redaction_placeholder: str = REDACTION_PLACEHOLDER,
    ):
        super().__init__(name)
        self._patterns = list(SENSITIVE_PATTERNS.items()) + list(additional_patterns or [])
        self._placeholder = redaction_placeholder

    def filter(self, record: logging.LogRecord) -> bool:
        if record.msg:
            record.msg = self._redact(str(record.msg))

        if isinstance(record.args, dict):
            record.args = {key: self._redact_arg(value) for key, value in record.args.items()}
        elif isinstance(record.args, tuple):
            record.args = tuple(self._redact_arg(arg) for arg in record.args)

        return True

    def _redact(self, text: str) -> str:
        return redact(text, self._patterns, self._placeholder)

    def _redact_arg(self, value: Any) -> Any:
        return self._redact(value) if isinstance(value, str) else value


class _SanitizedStderrHandler(logging.StreamHandler):
    """Marker type so repeated configuration replaces rather than stacks handlers."""


def configure_sanitized_logging(
    level: int | str = logging.WARNING,
    format_string: str | None = None,
    additional_patterns: list[tuple[str, Pattern[str]]] | None = None,
) -> logging.Handler:
    """
    Route root logging to stderr through a SanitizingFilter.

    stdout is reserved for command output and for the stdio MCP transport.
    Calling this again replaces the handler installed by the previous call.

    Args:
        level: Logging level (int or name such as "INFO"); unknown names mean WARNING
        format_string: Log format string (DEFAULT_FORMAT if not specified)
        additional_patterns: Extra (name, pattern) pairs to redact

    Returns:
        The installed handler
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger()
    for existing in [h for h in root.handlers if isinstance(h, _SanitizedStderrHandler)]:
        root.removeHandler(existing)

    handler = _SanitizedStderrHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    handler.addFilter(SanitizingFilter(additional_patterns=additional_patterns))
    root.addHandler(handler)
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level if level <= logging.DEBUG else logging.WARNING)

    return handler
