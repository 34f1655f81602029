"""
ContentPilot FastAPI Application.

This module contains the REST API for ContentPilot:

- main: FastAPI application entry point and configuration
- routes/: API endpoint definitions
- models: Pydantic request/response models
- dependencies: FastAPI dependency injection providers

API Structure:
- /health - Health check and readiness probes
- /metrics - Prometheus metrics
- /api/v1/generate-content - Generate or repurpose content

Example:
    from contentpilot.api.main import app

    # Run with: uvicorn contentpilot.api.main:app --reload
"""

from contentpilot.api.main import app

__all__ = ["app"]
