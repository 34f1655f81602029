"""
Prometheus metrics for ContentPilot observability.

Provides standardized metrics for the generation pipeline and the API layer.
Labels never carry topic text or model output.

Usage:
    from contentpilot.monitoring.metrics import track_generation

    with track_generation("generate", "video") as ctx:
        result = await generator.generate(request)
        ctx["status"] = "success"

    # Or manually
    TEMPLATE_FALLBACK_TOTAL.inc()
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import (
    Counter,
    Histogram,
    generate_latest,
    CONTENT_TYPE_LATEST,
)
from starlette.applications import Starlette
from starlette.responses import Response
from starlette.routing import Route


# =============================================================================
# Metric Definitions
# =============================================================================

# Generation pipeline metrics
GENERATION_REQUESTS_TOTAL = Counter(
    "contentpilot_generation_requests_total",
    "Total number of generation requests",
    ["request_type", "content_type", "status"],
)

GENERATION_DURATION = Histogram(
    "contentpilot_generation_duration_seconds",
    "End-to-end duration of a generation request in seconds",
    ["request_type"],
    buckets=[0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0, 60.0, 120.0],
)

TEMPLATE_FALLBACK_TOTAL = Counter(
    "contentpilot_template_fallback_total",
    "Generate requests whose content type fell back to the video template",
)

PARSE_FAILURES_TOTAL = Counter(
    "contentpilot_parse_failures_total",
    "Model responses that did not contain extractable JSON",
)

# Upstream gateway metrics
UPSTREAM_REQUESTS_TOTAL = Counter(
    "contentpilot_upstream_requests_total",
    "Total AI gateway calls by outcome",
    ["outcome"],
)

UPSTREAM_LATENCY = Histogram(
    "contentpilot_upstream_latency_seconds",
    "Latency of AI gateway calls",
    ["outcome"],
    buckets=[0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0, 60.0],
)

# API request metrics
API_REQUEST_DURATION = Histogram(
    "contentpilot_api_request_duration_seconds",
    "Duration of API requests in seconds",
    ["method", "endpoint", "status_code"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

API_REQUEST_TOTAL = Counter(
    "contentpilot_api_request_total",
    "Total number of API requests",
    ["method", "endpoint", "status_code"],
)


# =============================================================================
# Tracking Context Managers
# =============================================================================


@contextmanager
def track_generation(
    request_type: str,
    content_type: str,
) -> Generator[dict, None, None]:
    """
    Context manager to track a generation request.

    The caller sets ctx["status"] to the outcome label; an exception that
    escapes the block is recorded under its class name.

    Usage:
        with track_generation("repurpose", "video") as ctx:
            ...
            ctx["status"] = "success"
    """
    start_time = time.perf_counter()
    context = {"status": "error"}
    try:
        yield context
    except Exception as e:
        context["status"] = type(e).__name__
        raise
    finally:
        duration = time.perf_counter() - start_time
        GENERATION_DURATION.labels(request_type=request_type).observe(duration)
        GENERATION_REQUESTS_TOTAL.labels(
            request_type=request_type,
            content_type=content_type,
            status=context["status"],
        ).inc()


@contextmanager
def track_upstream_call() -> Generator[dict, None, None]:
    """
    Context manager to track an AI gateway call.

    Usage:
        with track_upstream_call() as ctx:
            response = await client.post(...)
            ctx["outcome"] = str(response.status_code)
    """
    start_time = time.perf_counter()
    context = {"outcome": "error"}
    try:
        yield context
    finally:
        duration = time.perf_counter() - start_time
        outcome = context["outcome"]
        UPSTREAM_LATENCY.labels(outcome=outcome).observe(duration)
        UPSTREAM_REQUESTS_TOTAL.labels(outcome=outcome).inc()


@contextmanager
def track_api_request(
    method: str,
    endpoint: str,
) -> Generator[dict, None, None]:
    """
    Context manager to track API request duration and status.

    Usage:
        with track_api_request("GET", "/api/health") as ctx:
            response = await call_endpoint()
            ctx["status_code"] = response.status_code
    """
    start_time = time.perf_counter()
    context = {"status_code": "500"}  # Default to error
    try:
        yield context
    finally:
        duration = time.perf_counter() - start_time
        status_code = str(context.get("status_code", "500"))
        API_REQUEST_DURATION.labels(
            method=method,
            endpoint=endpoint,
            status_code=status_code,
        ).observe(duration)
        API_REQUEST_TOTAL.labels(
            method=method,
            endpoint=endpoint,
            status_code=status_code,
        ).inc()


def record_template_fallback() -> None:
    """Count a generate request that used the default template."""
    TEMPLATE_FALLBACK_TOTAL.inc()


def record_parse_failure() -> None:
    """Count a model response that could not be parsed."""
    PARSE_FAILURES_TOTAL.inc()


# =============================================================================
# Metrics Endpoint
# =============================================================================


async def metrics_endpoint(request) -> Response:
    """Prometheus metrics endpoint handler."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )


def get_metrics_app() -> Starlette:
    """
    Get a Starlette app for serving metrics.

    Mount this at /metrics in your main app:
        from contentpilot.monitoring.metrics import get_metrics_app
        app.mount("/metrics", get_metrics_app())
    """
    return Starlette(
        routes=[
            Route("/", metrics_endpoint),
        ]
    )
