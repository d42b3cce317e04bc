"""
OpenTelemetry Setup and Configuration.

The API package is always installed and hands out no-op tracers until a
provider is configured. The SDK and OTLP exporter come from the optional
``telemetry`` extra and are only imported by init_telemetry().
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any

from opentelemetry import trace

logger = logging.getLogger(__name__)

_telemetry_initialized = False
_tracer_provider: Any = None


@dataclass
class TelemetryConfig:
    """Configuration for telemetry setup."""

    service_name: str = "productive-cli"
    service_version: str = "0.1.0"
    environment: str = field(
        default_factory=lambda: os.getenv("PRODUCTIVE_ENV", "development")
    )
    otlp_endpoint: str = field(
        default_factory=lambda: os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4317")
    )
    otlp_insecure: bool = True


def is_telemetry_enabled() -> bool:
    """Whether telemetry may be initialised (PRODUCTIVE_TELEMETRY_ENABLED)."""
    value = os.getenv("PRODUCTIVE_TELEMETRY_ENABLED", "true").lower()
    return value not in ("false", "0", "no", "off")


def init_telemetry(
    service_name: str | None = None,
    otlp_endpoint: str | None = None,
    config: TelemetryConfig | None = None,
) -> bool:
    """
    Install an SDK tracer provider exporting spans over OTLP.

    Call once at application startup.

    Returns:
        True if a provider was installed, False if telemetry is disabled
    """
    global _telemetry_initialized, _tracer_provider

    if _telemetry_initialized:
        logger.debug("Telemetry already initialized")
        return _tracer_provider is not None

    _telemetry_initialized = True

    if not is_telemetry_enabled():
        logger.info("Telemetry disabled via PRODUCTIVE_TELEMETRY_ENABLED")
        return False

    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
        from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import BatchSpanProcessor
    except ImportError:
        logger.debug("OpenTelemetry SDK not installed, telemetry disabled")
        return False

    config = config or TelemetryConfig()
    if service_name:
        config.service_name = service_name
    if otlp_endpoint:
        config.otlp_endpoint = otlp_endpoint

    resource = Resource.create(
        {
            SERVICE_NAME: config.service_name,
            SERVICE_VERSION: config.service_version,
            "deployment.environment": config.environment,
        }
    )
    _tracer_provider = TracerProvider(resource=resource)
    _tracer_provider.add_span_processor(
        BatchSpanProcessor(
            OTLPSpanExporter(endpoint=config.otlp_endpoint, insecure=config.otlp_insecure)
        )
    )
    trace.set_tracer_provider(_tracer_provider)
    logger.info(f"Tracing initialized, exporting to {config.otlp_endpoint}")
    return True


def shutdown_telemetry() -> None:
    """Flush pending spans and shut the provider down."""
    global _tracer_provider, _telemetry_initialized

    if _tracer_provider is None:
        return

    _tracer_provider.force_flush(timeout_millis=5000)
    _tracer_provider.shutdown()
    logger.debug("Tracer provider shut down")
    _tracer_provider = None
    _telemetry_initialized = False


def get_tracer(name: str = "productive") -> trace.Tracer:
    """
    Get a tracer for creating spans.

    Args:
        name: Tracer name (typically module or component name)
    """
    return trace.get_tracer(name)
