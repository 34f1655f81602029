"""ContentPilot API - Main FastAPI Application.

This module provides the main FastAPI application for the ContentPilot service.
It includes:
- Permissive CORS headers on every response for the browser client
- API versioning (/api/v1)
- Health check and Prometheus metrics endpoints
- The generate-content endpoint
- Exception handlers that always answer with a JSON error body

Usage:
    # Run with uvicorn
    uvicorn contentpilot.api.main:app --reload

    # Or run directly
    python -m contentpilot.api.main
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

import structlog
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from contentpilot import __version__
from contentpilot.api.dependencies import close_dependencies
from contentpilot.api.models import ErrorResponse, ValidationErrorDetail, ValidationErrorResponse
from contentpilot.api.routes.generate import router as generate_router
from contentpilot.api.routes.health import router as health_router, set_server_start_time
from contentpilot.config.settings import get_settings
from contentpilot.core.exceptions import ContentPilotError
from contentpilot.monitoring.log_config import configure_logging
from contentpilot.monitoring.metrics import get_metrics_app, track_api_request

logger = structlog.get_logger(__name__)

# API metadata for OpenAPI documentation
API_TITLE = "ContentPilot API"
API_DESCRIPTION = """
## AI Content Generation for Creators

ContentPilot turns a topic into ready-to-post educational content and adapts
a script for every platform.

### Features

- **Generate**: Video scripts, blog posts, carousels, threads, LinkedIn posts and newsletters
- **Repurpose**: One script adapted for YouTube, Shorts, TikTok, Instagram and LinkedIn

### Getting Started

1. **Generate a script**: `POST /api/v1/generate-content` with `{"topic": "...", "type": "generate"}`
2. **Repurpose it**: send the script back with `{"topic": "<script>", "type": "repurpose"}`
"""


# =============================================================================
# CORS
# =============================================================================


def cors_headers() -> dict[str, str]:
    """Fixed CORS headers attached to every response."""
    settings = get_settings()
    return {
        "Access-Control-Allow-Origin": ", ".join(settings.cors_allowed_origins),
        "Access-Control-Allow-Headers": ", ".join(settings.cors_allowed_headers),
    }


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """
    Add the permissive CORS headers to every response.

    Preflight requests are not intercepted. The OPTIONS route answers them
    with an empty 200 whatever headers they ask for.
    """

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.update(cors_headers())
        return response


# =============================================================================
# Request Metrics Middleware
# =============================================================================


class RequestMetricsMiddleware(BaseHTTPMiddleware):
    """Record duration and status of every API request."""

    async def dispatch(self, request: Request, call_next):
        with track_api_request(request.method, request.url.path) as ctx:
            response = await call_next(request)
            ctx["status_code"] = response.status_code
        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events:
    - Startup: Configure logging, record start time
    - Shutdown: Close the AI gateway client
    """
    settings = get_settings()
    configure_logging(settings)

    logger.info(
        "application_starting",
        environment=settings.app_env,
        version=__version__,
        model=settings.ai_model,
        gateway_configured=settings.has_gateway_credentials,
    )
    set_server_start_time()

    yield

    logger.info("application_stopping")
    await close_dependencies()
    logger.info("application_stopped")


# Create FastAPI application
app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=[
        {
            "name": "Health",
            "description": "System health and status endpoints",
        },
        {
            "name": "Generation",
            "description": "Generate content for a topic or repurpose a script for each platform",
        },
    ],
)

app.add_middleware(CORSHeadersMiddleware)
app.add_middleware(RequestMetricsMiddleware)


# =============================================================================
# Exception Handlers
# =============================================================================


def _error_response(status_code: int, error: str, detail: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


@app.exception_handler(ContentPilotError)
async def contentpilot_exception_handler(
    request: Request, exc: ContentPilotError
) -> JSONResponse:
    """Render a pipeline error as {"error": ...} with its mapped status."""
    log = logger.warning if exc.http_status < 500 or exc.http_status == 504 else logger.error
    log(
        "request_failed",
        path=request.url.path,
        error_type=type(exc).__name__,
        status_code=exc.http_status,
        details=exc.details,
    )
    return _error_response(exc.http_status, exc.public_message)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors with detailed response."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        errors.append(ValidationErrorDetail(
            field=field,
            message=error["msg"],
            value=error.get("input"),
        ))

    response = ValidationErrorResponse(
        errors=errors,
        timestamp=datetime.now(timezone.utc),
    )

    return JSONResponse(
        status_code=422,
        content=response.model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def generic_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
    )

    # Rendered outside the middleware stack, so CORS headers are added here
    response = _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred",
        detail=str(exc) if get_settings().debug else None,
    )
    response.headers.update(cors_headers())
    return response


# =============================================================================
# Root Endpoints
# =============================================================================


@app.get("/", include_in_schema=False)
async def root() -> dict:
    """Root endpoint - points at documentation and the API."""
    return {
        "name": API_TITLE,
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "api": "/api/v1",
    }


# =============================================================================
# Include Routers
# =============================================================================

# Health endpoints at root level
app.include_router(health_router)

api_v1_router = APIRouter(prefix="/api/v1")
api_v1_router.include_router(generate_router)

app.include_router(api_v1_router)

app.mount("/metrics", get_metrics_app())


# =============================================================================
# Development Server
# =============================================================================


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "contentpilot.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )
