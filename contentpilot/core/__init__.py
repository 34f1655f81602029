"""
Core infrastructure modules for ContentPilot.

Provides common utilities used across the application:
- exceptions: Standardized exception hierarchy with HTTP status mapping
"""

from contentpilot.core.exceptions import (
    ContentPilotError,
    RetryableError,
    PermanentError,
    ValidationError,
    ConfigError,
    UpstreamError,
    RateLimitedError,
    QuotaExceededError,
    UpstreamTimeoutError,
    ParseError,
)

__all__ = [
    "ContentPilotError",
    "RetryableError",
    "PermanentError",
    "ValidationError",
    "ConfigError",
    "UpstreamError",
    "RateLimitedError",
    "QuotaExceededError",
    "UpstreamTimeoutError",
    "ParseError",
]
