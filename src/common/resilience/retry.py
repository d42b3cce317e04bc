"""
Retry for Idempotent API Calls

Transport failures and gateway or unavailable responses (502-504) are
retried with exponential backoff. A Retry-After header, when present,
replaces the computed delay.
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

import httpx

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRANSPORT_ERRORS: tuple[type[Exception], ...] = (
    httpx.ConnectError,
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)

RETRY_STATUSES = frozenset({502, 503, 504})


@dataclass(frozen=True)
class RetryConfig:
    """Retry schedule. `max_attempts` counts the first call."""

    max_attempts: int = 3
    base_delay: float = 0.5
    max_delay: float = 5.0
    backoff_factor: float = 2.0
    jitter: bool = True
    retry_on: tuple[type[Exception], ...] = TRANSPORT_ERRORS
    retry_statuses: frozenset[int] = RETRY_STATUSES
    max_retry_after: float = 30.0


def compute_delay(config: RetryConfig, attempt: int) -> float:
    """Backoff delay before the retry following `attempt` (1-based)."""
    delay = min(config.base_delay * config.backoff_factor ** (attempt - 1), config.max_delay)
    if config.jitter:
        delay *= 0.5 + random.random()
    return delay


def retry_after_seconds(response: httpx.Response, limit: float) -> float | None:
    """Delay requested by a Retry-After header (seconds form), capped at `limit`."""
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        seconds = float(value)
    except ValueError:
        return None  # HTTP-date form is not used by Productive
    return min(max(seconds, 0.0), limit)


async def retry_with_backoff(
    func: Callable[..., Awaitable[T]],
    *args,
    config: RetryConfig | None = None,
    on_retry: Callable[[int, object, float], None] | None = None,
    **kwargs,
) -> T:
    """
    Call an async function, retrying transient failures.

    Exceptions in ``config.retry_on`` are retried and the last one is
    re-raised unchanged. If the function returns an httpx.Response whose
    status is in ``config.retry_statuses`` it is retried too; the final
    response is returned as-is so the caller can report it.

    Args:
        func: Async function to call
        *args: Positional arguments for func
        config: Retry schedule (RetryConfig() if omitted)
        on_retry: Optional callback(attempt, error_or_response, delay) before each sleep
        **kwargs: Keyword arguments for func

    Example:
        response = await retry_with_backoff(client.get, "/projects", config=RetryConfig())
    """
    config = config or RetryConfig()
    attempts = max(1, config.max_attempts)

    for attempt in range(1, attempts + 1):
        last = attempt == attempts
        try:
            result = await func(*args, **kwargs)
        except config.retry_on as e:
            if last:
                logger.warning(f"Giving up after {attempt} attempts: {e!r}")
                raise
            delay = compute_delay(config, attempt)
            logger.info(f"Attempt {attempt}/{attempts} failed ({e!r}), retrying in {delay:.2f}s")
            reason: object = e
        else:
            if not (
                isinstance(result, httpx.Response)
                and result.status_code in config.retry_statuses
                and not last
            ):
                return result
            delay = retry_after_seconds(result, config.max_retry_after)
            if delay is None:
                delay = compute_delay(config, attempt)
            logger.info(
                f"Attempt {attempt}/{attempts} got HTTP {result.status_code}, "
                f"retrying in {delay:.2f}s"
            )
            reason = result

        if on_retry:
            on_retry(attempt, reason, delay)
        await asyncio.sleep(delay)

    raise AssertionError("unreachable")
