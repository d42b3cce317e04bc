"""
Telemetry Module.

Thin wrapper around OpenTelemetry tracing. Spans are no-ops until
init_telemetry() installs an SDK tracer provider.

Usage:
    from src.common.telemetry import get_tracer

    tracer = get_tracer(__name__)
    with tracer.start_as_current_span("productive.api.request") as span:
        span.set_attribute("http.method", "GET")
"""

from src.common.telemetry.setup import (
    TelemetryConfig,
    get_tracer,
    init_telemetry,
    is_telemetry_enabled,
    shutdown_telemetry,
)

__all__ = [
    "TelemetryConfig",
    "get_tracer",
    "init_telemetry",
    "is_telemetry_enabled",
    "shutdown_telemetry",
]
