"""
Monitoring and observability for ContentPilot.

Provides Prometheus metrics for the generation pipeline and the structlog
configuration shared by the API and CLI entry points.

Usage:
    from contentpilot.monitoring import configure_logging, track_generation

    configure_logging(get_settings())

    with track_generation("generate", "blog") as ctx:
        ...
        ctx["status"] = "success"
"""

from contentpilot.monitoring.log_config import configure_logging
from contentpilot.monitoring.metrics import (
    GENERATION_REQUESTS_TOTAL,
    GENERATION_DURATION,
    TEMPLATE_FALLBACK_TOTAL,
    PARSE_FAILURES_TOTAL,
    UPSTREAM_REQUESTS_TOTAL,
    UPSTREAM_LATENCY,
    API_REQUEST_DURATION,
    API_REQUEST_TOTAL,
    track_generation,
    track_upstream_call,
    track_api_request,
    record_template_fallback,
    record_parse_failure,
    get_metrics_app,
)

__all__ = [
    "configure_logging",
    "GENERATION_REQUESTS_TOTAL",
    "GENERATION_DURATION",
    "TEMPLATE_FALLBACK_TOTAL",
    "PARSE_FAILURES_TOTAL",
    "UPSTREAM_REQUESTS_TOTAL",
    "UPSTREAM_LATENCY",
    "API_REQUEST_DURATION",
    "API_REQUEST_TOTAL",
    "track_generation",
    "track_upstream_call",
    "track_api_request",
    "record_template_fallback",
    "record_parse_failure",
    "get_metrics_app",
]
