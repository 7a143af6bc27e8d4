"""
Observability package.

Logging setup, correlation ids, request middleware, Langfuse tracing and the
prompt registry.
"""

from ideation.observability.correlation import get_correlation_id, set_correlation_id
from ideation.observability.langfuse_tracer import LangfuseTracer, get_tracing_callbacks
from ideation.observability.logger import configure_logging, get_logger

__all__ = [
    "LangfuseTracer",
    "configure_logging",
    "get_correlation_id",
    "get_logger",
    "get_tracing_callbacks",
    "set_correlation_id",
]
