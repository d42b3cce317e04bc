"""
Tests for retry with backoff.
"""

import httpx
import pytest

from src.common.resilience import RetryConfig, retry_with_backoff
from src.common.resilience.retry import compute_delay, retry_after_seconds


class TestRetryWithBackoff:
    """Tests for retry_with_backoff."""

    async def test_succeeds_on_first_try(self):
        """Should return immediately if first call succeeds."""
        call_count = 0

        async def success():
            nonlocal call_count
            call_count += 1
            return "success"

        result = await retry_with_backoff(success)
        assert result == "success"
        assert call_count == 1

    async def test_retries_transport_errors(self):
        """Should retry connect errors until the call succeeds."""
        call_count = 0

        async def fail_then_succeed():
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise httpx.ConnectError("Connection refused")
            return "success"

        config = RetryConfig(max_attempts=3, base_delay=0.01)
        result = await retry_with_backoff(fail_then_succeed, config=config)
        assert result == "success"
        assert call_count == 3

    async def test_raises_after_max_attempts(self):
        """Should re-raise the last error once attempts are exhausted."""
        call_count = 0

        async def always_time_out():
            nonlocal call_count
            call_count += 1
            raise httpx.ReadTimeout("timed out")

        config = RetryConfig(max_attempts=2, base_delay=0.01)
        with pytest.raises(httpx.ReadTimeout):
            await retry_with_backoff(always_time_out, config=config)

        assert call_count == 2

    async def test_no_retry_for_non_retryable(self):
        """Should not retry exceptions outside retry_on."""
        call_count = 0

        async def raise_value_error():
            nonlocal call_count
            call_count += 1
            raise ValueError("Not retryable")

        with pytest.raises(ValueError):
            await retry_with_backoff(raise_value_error, config=RetryConfig(max_attempts=3))

        assert call_count == 1

    async def test_on_retry_callback(self):
        """Should call on_retry once per retry with the attempt number."""
        retries = []

        async def fail_twice():
            if len(retries) < 2:
                raise httpx.ConnectError("Connection refused")
            return "success"

        def on_retry(attempt, error, delay):
            retries.append(attempt)

        config = RetryConfig(max_attempts=3, base_delay=0.01)
        result = await retry_with_backoff(fail_twice, config=config, on_retry=on_retry)
        assert result == "success"
        assert retries == [1, 2]

    async def test_passes_arguments_through(self):
        """Positional and keyword arguments reach the wrapped function."""

        async def echo(a, b=None):
            return (a, b)

        assert await retry_with_backoff(echo, 1, b=2) == (1, 2)


class TestComputeDelay:
    """Tests for the backoff schedule."""

    def test_exponential_without_jitter(self):
        config = RetryConfig(base_delay=0.5, max_delay=10.0, jitter=False)

        assert compute_delay(config, 1) == 0.5
        assert compute_delay(config, 2) == 1.0
        assert compute_delay(config, 3) == 2.0

    def test_capped_at_max_delay(self):
        config = RetryConfig(base_delay=1.0, max_delay=3.0, jitter=False)

        assert compute_delay(config, 10) == 3.0

    def test_jitter_stays_within_bounds(self):
        config = RetryConfig(base_delay=1.0, max_delay=10.0, jitter=True)

        for _ in range(20):
            assert 0.5 <= compute_delay(config, 1) <= 1.5


class TestRetryableResponses:
    """Tests for retrying gateway and unavailable responses."""

    async def test_retries_until_success(self):
        responses = [httpx.Response(503), httpx.Response(200)]

        async def send():
            return responses.pop(0)

        config = RetryConfig(max_attempts=3, base_delay=0.01)
        result = await retry_with_backoff(send, config=config)

        assert result.status_code == 200

    async def test_returns_last_response_when_exhausted(self):
        calls = 0

        async def send():
            nonlocal calls
            calls += 1
            return httpx.Response(503, headers={"Retry-After": "0"})

        result = await retry_with_backoff(send, config=RetryConfig(max_attempts=2))

        assert result.status_code == 503
        assert calls == 2

    async def test_client_errors_not_retried(self):
        calls = 0

        async def send():
            nonlocal calls
            calls += 1
            return httpx.Response(404)

        result = await retry_with_backoff(send, config=RetryConfig(max_attempts=3))

        assert result.status_code == 404
        assert calls == 1

    async def test_retry_after_used_as_delay(self):
        delays = []
        responses = [httpx.Response(503, headers={"Retry-After": "0"}), httpx.Response(200)]

        async def send():
            return responses.pop(0)

        await retry_with_backoff(
            send,
            config=RetryConfig(base_delay=5.0),
            on_retry=lambda attempt, reason, delay: delays.append(delay),
        )

        assert delays == [0.0]


class TestRetryAfterSeconds:
    def test_parses_and_caps(self):
        assert retry_after_seconds(httpx.Response(503, headers={"Retry-After": "2"}), 30) == 2.0
        assert retry_after_seconds(httpx.Response(503, headers={"Retry-After": "120"}), 30) == 30

    def test_missing_or_date_form(self):
        assert retry_after_seconds(httpx.Response(503), 30) is None
        date = "Wed, 21 Oct 2026 07:28:00 GMT"
        assert retry_after_seconds(httpx.Response(503, headers={"Retry-After": date}), 30) is None
