"""Observability components: logging and tracing."""

from recipe_search.observability.logging import (
    bind_context,
    clear_context,
    get_context,
    get_logger,
    logger,
    setup_logging,
    setup_logging_from_settings,
    unbind_context,
)
from recipe_search.observability.tracing import (
    add_span_attributes,
    get_tracer,
    setup_tracing,
    shutdown_tracing,
)


__all__ = [
    "add_span_attributes",
    "bind_context",
    "clear_context",
    "get_context",
    "get_logger",
    "get_tracer",
    "logger",
    "setup_logging",
    "setup_logging_from_settings",
    "setup_tracing",
    "shutdown_tracing",
    "unbind_context",
]
