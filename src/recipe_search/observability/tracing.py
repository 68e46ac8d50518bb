"""OpenTelemetry tracing configuration.

This module provides:
- Tracer provider setup with OTLP or console export
- Span helpers used by the search pipeline
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from recipe_search.core.config import get_settings
from recipe_search.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_search.core.config import Settings

logger = get_logger(__name__)


def setup_tracing(settings: Settings | None = None) -> TracerProvider | None:
    """Configure OpenTelemetry tracing.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        The installed tracer provider, or None when tracing is disabled.
    """
    if settings is None:
        settings = get_settings()

    if not settings.observability.tracing.enabled:
        logger.info("Tracing disabled")
        return None

    logger.info("Setting up OpenTelemetry tracing")

    resource = Resource.create(
        {
            "service.name": settings.app.name.lower().replace(" ", "-"),
            "service.version": settings.app.version,
            "deployment.environment": settings.APP_ENV,
        }
    )

    provider = TracerProvider(resource=resource)

    if settings.observability.tracing.otlp_endpoint:
        otlp_exporter = OTLPSpanExporter(
            endpoint=settings.observability.tracing.otlp_endpoint,
            insecure=True,
        )
        provider.add_span_processor(BatchSpanProcessor(otlp_exporter))
        logger.info(
            "OTLP trace exporter configured",
            endpoint=settings.observability.tracing.otlp_endpoint,
        )
    elif settings.is_development:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
        logger.info("Console trace exporter configured (development mode)")

    trace.set_tracer_provider(provider)
    logger.info("OpenTelemetry tracing configured")
    return provider


def shutdown_tracing() -> None:
    """Shutdown tracing and flush pending spans."""
    provider = trace.get_tracer_provider()
    if isinstance(provider, TracerProvider):
        provider.shutdown()
        logger.info("Tracing shutdown complete")


def get_tracer(name: str) -> trace.Tracer:
    """Get a tracer instance for manual span creation.

    Args:
        name: Tracer name (typically __name__).

    Returns:
        OpenTelemetry Tracer instance.
    """
    return trace.get_tracer(name)


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Add attributes to the current span if it is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(key, value)


__all__ = [
    "add_span_attributes",
    "get_tracer",
    "setup_tracing",
    "shutdown_tracing",
]
