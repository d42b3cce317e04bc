"""Tests for the telemetry setup module."""

from __future__ import annotations

import pytest

from src.common.telemetry import setup
from src.common.telemetry.setup import (
    TelemetryConfig,
    get_tracer,
    init_telemetry,
    is_telemetry_enabled,
)


class TestTelemetryConfig:
    def test_default_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("OTEL_EXPORTER_OTLP_ENDPOINT", raising=False)
        config = TelemetryConfig()

        assert config.service_name == "productive-cli"
        assert config.otlp_endpoint == "http://localhost:4317"

    def test_endpoint_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://collector:4317")

        assert TelemetryConfig().otlp_endpoint == "http://collector:4317"


class TestTelemetryToggle:
    @pytest.mark.parametrize("value", ["false", "0", "no", "OFF"])
    def test_disabled_values(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.setenv("PRODUCTIVE_TELEMETRY_ENABLED", value)
        assert is_telemetry_enabled() is False

    def test_enabled_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PRODUCTIVE_TELEMETRY_ENABLED", raising=False)
        assert is_telemetry_enabled() is True

    def test_init_is_noop_when_disabled(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PRODUCTIVE_TELEMETRY_ENABLED", "false")
        monkeypatch.setattr(setup, "_telemetry_initialized", False)
        monkeypatch.setattr(setup, "_tracer_provider", None)

        assert init_telemetry(service_name="test") is False


class TestGetTracer:
    def test_spans_work_without_provider(self) -> None:
        tracer = get_tracer("tests")
        with tracer.start_as_current_span("unit") as span:
            span.set_attribute("key", "value")
