"""
Core exception hierarchy for ContentPilot.

Provides standardized exception types for the generation pipeline. Each type
carries the HTTP status and the user-facing message the API boundary returns,
so route handlers never build error bodies by hand.

RetryableError / PermanentError classify failures for callers that bring
their own retry policy. The service itself never retries.
"""

from typing import Any, Optional


# =============================================================================
# Base Exceptions
# =============================================================================


class ContentPilotError(Exception):
    """Base exception for all ContentPilot errors."""

    http_status: int = 500

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    @property
    def public_message(self) -> str:
        """Message safe to return in an error response body."""
        return self.message

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class RetryableError(ContentPilotError):
    """
    Transient errors that may succeed if the caller tries again later.

    Examples: Upstream rate limits, upstream timeouts.
    """

    pass


class PermanentError(ContentPilotError):
    """
    Errors that won't be fixed by retrying.

    Examples: Empty topic, missing credentials, unparseable model output.
    """

    pass


# =============================================================================
# Request / Configuration Errors
# =============================================================================


class ValidationError(PermanentError):
    """Raised when a generation request is rejected before dispatch."""

    http_status = 400

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        details = {"field": field} if field else None
        super().__init__(message, details)


class ConfigError(PermanentError):
    """Raised when configuration is invalid or missing."""

    http_status = 500

    def __init__(self, message: str, config_key: Optional[str] = None):
        self.config_key = config_key
        details = {"config_key": config_key} if config_key else None
        super().__init__(message, details)


# =============================================================================
# Upstream (AI Gateway) Errors
# =============================================================================


class UpstreamError(ContentPilotError):
    """Raised when the AI gateway answers with a non-success status."""

    http_status = 500

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.status_code = status_code
        merged = dict(details or {})
        if status_code is not None:
            merged["status_code"] = status_code
        super().__init__(message, merged)


class RateLimitedError(UpstreamError, RetryableError):
    """Raised when the AI gateway returns 429."""

    http_status = 429

    def __init__(self, details: Optional[dict[str, Any]] = None):
        super().__init__(
            "Rate limit exceeded. Please try again in a moment.",
            status_code=429,
            details=details,
        )


class QuotaExceededError(UpstreamError, PermanentError):
    """Raised when the AI gateway returns 402 (credits depleted)."""

    http_status = 402

    def __init__(self, details: Optional[dict[str, Any]] = None):
        super().__init__(
            "AI credits depleted. Please add credits to continue.",
            status_code=402,
            details=details,
        )


class UpstreamTimeoutError(UpstreamError, RetryableError):
    """Raised when the AI gateway does not answer within the configured bound."""

    http_status = 504

    def __init__(self, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"AI gateway did not respond within {timeout_seconds:g}s",
            details={"timeout_seconds": timeout_seconds},
        )


# =============================================================================
# Response Errors
# =============================================================================


class ParseError(PermanentError):
    """Raised when no well-formed JSON value can be extracted from model output."""

    http_status = 500

    def __init__(
        self,
        message: str,
        raw_length: int = 0,
        candidate_length: int = 0,
    ):
        self.raw_length = raw_length
        self.candidate_length = candidate_length
        super().__init__(
            message,
            {"raw_length": raw_length, "candidate_length": candidate_length},
        )
