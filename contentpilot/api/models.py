"""Pydantic models for API requests and responses.

This module defines the request/response schemas for the ContentPilot API.
Generation responses are the model's JSON passed through unchanged, so they
have no response model here.
"""

from datetime import datetime, timezone
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from contentpilot.generation.prompts import RequestType


# =============================================================================
# Generation Models
# =============================================================================


class GenerateContentRequest(BaseModel):
    """Request body for the generate-content endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    topic: str = Field(
        default="",
        description="Topic to write about, or the original script when repurposing",
        json_schema_extra={"example": "AI resume tips"},
    )
    request_type: RequestType = Field(
        ...,
        alias="type",
        description="generate a new piece, or repurpose a script for each platform",
    )
    content_type: Optional[str] = Field(
        None,
        alias="contentType",
        max_length=50,
        description="video, blog, carousel, thread, linkedin or newsletter (generate only)",
        json_schema_extra={"example": "blog"},
    )


# =============================================================================
# Health Check Models
# =============================================================================


class HealthStatus(BaseModel):
    """Individual component health status."""

    status: Literal["healthy", "unhealthy", "degraded"] = Field(
        ..., description="Component status"
    )
    message: Optional[str] = Field(None, description="Additional status message")


class HealthCheckResponse(BaseModel):
    """Response model for health check endpoint."""

    status: Literal["healthy", "unhealthy", "degraded"] = Field(
        ..., description="Overall system status"
    )
    version: str = Field(..., description="API version")
    timestamp: datetime = Field(..., description="Check timestamp")
    services: dict[str, HealthStatus] = Field(
        default_factory=dict,
        description="Individual component statuses",
    )
    uptime_seconds: Optional[float] = Field(None, description="Server uptime in seconds")


# =============================================================================
# Error Models
# =============================================================================


class ErrorResponse(BaseModel):
    """Error body returned by every failing endpoint."""

    error: str = Field(..., description="Human-readable error message")
    detail: Optional[str] = Field(None, description="Additional error details (debug only)")


class ValidationErrorDetail(BaseModel):
    """Details for validation errors."""

    field: str = Field(..., description="Field that failed validation")
    message: str = Field(..., description="Validation error message")
    value: Optional[Any] = Field(None, description="Invalid value provided")


class ValidationErrorResponse(BaseModel):
    """Response for request body validation errors."""

    error: str = Field(default="Request validation failed", description="Error message")
    errors: list[ValidationErrorDetail] = Field(..., description="List of validation errors")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Error timestamp",
    )
